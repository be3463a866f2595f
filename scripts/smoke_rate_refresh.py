import json
import os
import sys
import tempfile
from pathlib import Path

from fastapi.testclient import TestClient

from pos_pricing.core.config import Settings
from pos_pricing.main import create_app

"""Smoke script against the live rate provider.

Sequence:
 1. Read the cached rate on an empty database (sentinel).
 2. Refresh from the configured provider (RATE_PROVIDER, default dolarvzla).
 3. Price a product and convert an amount at the fetched rate.
 4. Override the rate manually and read it back.

NOTE: needs network access; a 502 on step 2 means the provider is unreachable.
"""


def run():
    with tempfile.TemporaryDirectory() as d:
        settings = Settings(data_dir=Path(d))
        settings.init_post_load()
        client = TestClient(create_app(settings_override=settings))
        out = {"initial": client.get("/rates/current").json()}

        refreshed = client.post("/rates/refresh")
        out["refresh"] = {"status": refreshed.status_code, "body": refreshed.json()}

        out["quote"] = client.post(
            "/pricing/quote", json={"cost_foreign": 10, "profit_setting": 30}
        ).json()
        out["convert"] = client.post("/pricing/convert", json={"amount": 1}).json()

        client.put("/rates/manual", json={"rate": 99.99})
        out["after_manual"] = client.get("/rates/current").json()

        print(json.dumps(out, indent=2, default=str))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
