#!/usr/bin/env python
"""Start the service under uvicorn and render one event of each scope."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import time

import httpx

BASE_PORT = int(os.environ.get("SMOKE_PORT", "8070"))
BASE_URL = f"http://127.0.0.1:{BASE_PORT}"
API_KEY = os.environ.get("SMOKE_API_KEY", "smoke-test-key")

CHECKS = [
    (
        "device",
        {
            "name": "ns.up.data.receive",
            "identifiers": [{"device_ids": {"device_id": "smoke-dev", "dev_addr": "2700000B"}}],
            "data": {
                "@type": "type.googleapis.com/ttn.lorawan.v3.UplinkMessage",
                "payload": {"mac_payload": {"f_port": 1, "frm_payload": "AQ=="}},
            },
        },
        "device_uplink",
    ),
    ("gateway", {"name": "gs.gateway.connect"}, "gateway_connection"),
    ("application", {"name": "application.create"}, "crud"),
    (
        "organization",
        {
            "name": "organization.update",
            "data": {"@type": "type.googleapis.com/ttn.lorawan.v3.ErrorDetails", "code": 9},
        },
        "crud",
    ),
]


def wait_for_ready(url: str, timeout: float = 15.0) -> None:
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            response = httpx.get(url, timeout=2.0)
            if response.status_code == 200:
                return
        except httpx.HTTPError:
            pass
        time.sleep(0.5)
    raise RuntimeError(f"Service not ready after {timeout} seconds")


def main() -> None:
    env = os.environ.copy()
    env["EVENTS_API_KEY"] = API_KEY

    proc = subprocess.Popen(
        [sys.executable, "-m", "uvicorn", "lorawan_events.main:app", "--port", str(BASE_PORT)],
        env=env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )

    try:
        wait_for_ready(f"{BASE_URL}/health")
        with httpx.Client(base_url=BASE_URL) as client:
            for scope, event, category in CHECKS:
                response = client.post(
                    "/v1/events/render",
                    headers={"X-API-Key": API_KEY},
                    json={"scope": scope, "events": [event]},
                    timeout=5.0,
                )
                response.raise_for_status()
                rendered = response.json()[0]
                if rendered["category"] != category:
                    raise RuntimeError(
                        f"Smoke test failed: {scope} event rendered as {rendered['category']}"
                    )

        print("SMOKE OK")
    finally:
        proc.send_signal(signal.SIGTERM)
        try:
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.kill()


if __name__ == "__main__":
    main()
