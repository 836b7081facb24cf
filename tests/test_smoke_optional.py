import os

import httpx
import pytest

SERVICE_URL = os.getenv("IMGSWAP_SERVICE_URL", "http://127.0.0.1:7600")


@pytest.fixture()
def live_service() -> httpx.Client:
    client = httpx.Client(base_url=SERVICE_URL, timeout=1.5)
    try:
        client.get("/health").raise_for_status()
    except httpx.HTTPError:
        client.close()
        pytest.skip(f"no imgswap service at {SERVICE_URL}")
    yield client
    client.close()


def test_live_service_reports_sources(live_service: httpx.Client) -> None:
    data = live_service.get("/v1/sources").json()
    assert set(data) >= {"possible_sources", "allowed_sources", "is_foreign_allowed"}
    for domain in data["possible_sources"]:
        if not domain.startswith("www."):
            assert f"www.{domain}" in data["possible_sources"]
