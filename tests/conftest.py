import pytest
from fastapi.testclient import TestClient

from payqr.api import app
from payqr.config import settings
from payqr.schemas import TLV, EmvcoConfig, TLVContainer


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers():
    return {"X-API-Key": settings.api_key}


@pytest.fixture
def paynow_config():
    return EmvcoConfig(
        poi_method="11",
        common={"53": "702", "54": "12.50", "58": "SG", "59": "EXAMPLE SHOP", "60": "SINGAPORE"},
        schemes=[
            TLVContainer(
                id=26,
                label="PayNow",
                scheme_key="paynow",
                tags=[
                    TLV(id="00", value="SG.PAYNOW"),
                    TLV(id="01", value="2"),
                    TLV(id="02", value="201403121W"),
                    TLV(id="03", value="1"),
                ],
            )
        ],
    )
