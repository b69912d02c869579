from typing import Optional
from urllib.parse import quote

import requests

from ..core.config import settings
from ..core.logging import logger

AVATAR_BASE_URL = "https://ui-avatars.com/api/"


def avatar_url(name: str, background: Optional[str] = None) -> str:
    """Generated placeholder avatar for volunteers without a hosted photo."""
    background = background or settings.avatar_background
    return (
        f"{AVATAR_BASE_URL}?name={quote(name, safe='')}"
        f"&background={background}&color=fff&size=200&bold=true&format=png"
    )


class ImageHost:
    def __init__(self, upload_url: Optional[str] = None, upload_preset: Optional[str] = None,
                 timeout: Optional[float] = None):
        self.upload_url = upload_url if upload_url is not None else settings.image_upload_url
        self.upload_preset = upload_preset if upload_preset is not None else settings.image_upload_preset
        self.timeout = timeout if timeout is not None else settings.request_timeout

    def upload(self, image: Optional[str]) -> Optional[str]:
        """Host a photo and return its URL, or None when it cannot be hosted."""
        if not image:
            return None
        if image.startswith(("http://", "https://")):
            return image

        if not self.upload_url:
            logger.warning("Image upload URL not configured, skipping photo upload")
            return None

        data = {"file": image}
        if self.upload_preset:
            data["upload_preset"] = self.upload_preset

        try:
            response = requests.post(self.upload_url, data=data, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(f"Photo upload failed: {e}")
            return None

        url = (body.get("secure_url") or body.get("url")) if isinstance(body, dict) else None
        if not url:
            logger.warning("Photo upload response carried no URL")
            return None

        logger.info(f"Photo uploaded: {url}")
        return url


# Global instance
image_host = ImageHost()
