"""
Quick walk through the gallery endpoints of a running server.

Use:
    uvicorn app.main:app --port 8000
    BASE_URL=http://localhost:8000 python scripts/smoke_gallery.py
"""

import os

import requests

BASE_URL = os.environ.get("BASE_URL", "http://localhost:8000")


def call(method: str, path: str, **kwargs):
    resp = requests.request(method, f"{BASE_URL}/gallery{path}", timeout=10, **kwargs)
    print(f"{method} {path} -> {resp.status_code}")
    return resp


def main() -> None:
    view = call("GET", "").json()
    print(f"Loaded {view['total']} volunteers (source: {view['source']})")

    created = call(
        "POST",
        "/volunteers",
        json={
            "name": "Smoke Test",
            "aakNo": "AAK9999",
            "mobileNo": "9000000000",
            "address": "Pune, Maharashtra",
        },
    ).json()
    volunteer_id = created["volunteer"]["_id"]
    print(f"Created {volunteer_id} via {created['source']}")

    call("PUT", "/search", json={"term": "smoke"})
    call("POST", f"/volunteers/{volunteer_id}/delete-request")
    deleted = call("POST", "/delete/confirm").json()
    print(f"Deleted: removed={deleted['removed']} remote_ok={deleted['remote_ok']}")
    call("DELETE", "/filters")


if __name__ == "__main__":
    main()
