"""Volunteer record schema shared by the remote client, the cache and the seed generator."""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from ..core.logging import logger

_DATETIME = TypeAdapter(datetime)


class VolunteerRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id", min_length=1)
    sequence_number: Optional[int] = Field(default=None, alias="uniqueId")
    name: str = Field(min_length=1)
    membership_code: str = Field(default="", alias="aakNo")
    mobile_number: str = Field(default="", alias="mobileNo")
    address: str = ""
    image_url: str = Field(default="", alias="imageUrl")
    join_date: Optional[datetime] = Field(default=None, alias="joinDate")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("mobile_number", "membership_code", "address", "image_url", mode="before")
    @classmethod
    def text_or_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("join_date", "created_at", mode="before")
    @classmethod
    def datetime_or_none(cls, value: Any) -> Optional[datetime]:
        if value is None or value == "":
            return None
        try:
            return _DATETIME.validate_python(value)
        except ValidationError:
            logger.warning(f"Ignoring unparseable timestamp {value!r}")
            return None

    @field_validator("sequence_number", mode="before")
    @classmethod
    def int_or_none(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable sequence number {value!r}")
            return None

    def to_wire(self) -> Dict[str, Any]:
        """Serialize with the remote service's field names."""
        return self.model_dump(by_alias=True, mode="json")


class VolunteerPayload(BaseModel):
    """Fields submitted when registering a new volunteer."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    membership_code: str = Field(alias="aakNo")
    mobile_number: str = Field(alias="mobileNo")
    address: str = ""
    image: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def normalize_record(raw: Any) -> Optional[VolunteerRecord]:
    """Coerce a record from any source into a VolunteerRecord.

    Accepts already-built records, dicts keyed by the wire names (``_id``) or
    by plain ``id``. Returns None for entries that have no id or no name.
    """
    if isinstance(raw, VolunteerRecord):
        return raw
    if not isinstance(raw, dict):
        logger.warning(f"Discarding volunteer entry of type {type(raw).__name__}")
        return None

    data = dict(raw)
    if not data.get("_id") and data.get("id"):
        data["_id"] = data.pop("id")
    if data.get("_id") is not None:
        data["_id"] = str(data["_id"]).strip()
    if isinstance(data.get("name"), str):
        data["name"] = data["name"].strip()

    try:
        return VolunteerRecord.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Discarding malformed volunteer entry {data.get('_id')!r}: {e.error_count()} error(s)")
        return None


def normalize_records(raw_items: Optional[Iterable[Any]]) -> List[VolunteerRecord]:
    """Normalize a sequence of entries, dropping rejected ones and keeping order."""
    if not raw_items:
        return []

    records = []
    for item in raw_items:
        record = normalize_record(item)
        if record is not None:
            records.append(record)
    return records
