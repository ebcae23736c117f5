#!/usr/bin/env python
"""Post sample events to a running LoRaWAN Events service."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

import httpx


DEVICE_SAMPLE = {
    "scope": "device",
    "events": [
        {
            "name": "as.up.data.forward",
            "time": "2020-04-27T13:37:27.053523283Z",
            "identifiers": [
                {
                    "device_ids": {
                        "device_id": "sample-dev",
                        "application_ids": {"application_id": "sample-app"},
                        "dev_eui": "0004A30B001C1E48",
                        "dev_addr": "2700000B",
                    }
                }
            ],
            "data": {
                "@type": "type.googleapis.com/ttn.lorawan.v3.ApplicationUp",
                "uplink_message": {
                    "f_port": 1,
                    "frm_payload": "AQ==",
                    "decoded_payload": {"temperature": 22.3},
                },
            },
        }
    ],
}

GATEWAY_SAMPLE = {
    "scope": "gateway",
    "events": [
        {
            "name": "gs.gateway.connect",
            "time": "2019-04-15T09:20:39.435488Z",
            "identifiers": [{"gateway_ids": {"gateway_id": "sample-gtw"}}],
        }
    ],
}

SAMPLES = {"device": DEVICE_SAMPLE, "gateway": GATEWAY_SAMPLE}


def post_file(file_path: str, scope: str, api_key: Optional[str], url: str) -> None:
    """Post the events of a JSON file (array or single object)."""
    path = Path(file_path)
    if not path.exists():
        print(f"ERROR: File not found: {file_path}", file=sys.stderr)
        sys.exit(1)

    try:
        with path.open("r", encoding="utf-8") as f:
            events = json.load(f)
    except json.JSONDecodeError as e:
        print(f"ERROR: Invalid JSON in file: {e}", file=sys.stderr)
        sys.exit(1)

    if isinstance(events, dict):
        events = [events]
    _post_payload({"scope": scope, "events": events}, api_key, url)


def _post_payload(payload: dict, api_key: Optional[str], url: str) -> None:
    headers = {"Content-Type": "application/json"}
    if api_key:
        headers["X-API-Key"] = api_key
    try:
        response = httpx.post(f"{url}/v1/events/render", headers=headers, json=payload, timeout=5.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        error_detail = (
            e.response.json()
            if e.response.headers.get("content-type", "").startswith("application/json")
            else e.response.text
        )
        print(f"ERROR: HTTP {e.response.status_code}: {error_detail}", file=sys.stderr)
        sys.exit(1)
    except httpx.RequestError as e:
        print(f"ERROR: Request failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(response.json(), indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Post sample events to the LoRaWAN Events API")
    parser.add_argument("--file", help="Path to a JSON file with events")
    parser.add_argument("--sample", choices=sorted(SAMPLES), help="Bundled sample to post")
    parser.add_argument("--scope", default="device", help="Scope for --file (default: device)")
    parser.add_argument("--key", help="API key (X-API-Key header), if the service requires one")
    parser.add_argument("--url", default="http://localhost:8000", help="Base URL (default: http://localhost:8000)")

    args = parser.parse_args()

    if bool(args.file) == bool(args.sample):
        print("ERROR: Provide exactly one of --file or --sample", file=sys.stderr)
        sys.exit(1)

    if args.file:
        post_file(args.file, args.scope, args.key, args.url)
    else:
        _post_payload(SAMPLES[args.sample], args.key, args.url)


if __name__ == "__main__":
    main()
