"""Starter configurations for common QR setups."""
from __future__ import annotations

from typing import Callable

from .schemas import TLV, EmvcoConfig, QrOptions, TLVContainer, UpiConfig
from .services.errors import err_unknown_preset


def _blank() -> EmvcoConfig:
    return EmvcoConfig(poi_method="11", qr=QrOptions())


def _paynow() -> EmvcoConfig:
    return EmvcoConfig(
        poi_method="11",
        common={"53": "702", "58": "SG", "59": "EXAMPLE SHOP", "60": "SINGAPORE"},
        schemes=[
            TLVContainer(
                id=26,
                label="PayNow",
                scheme_key="paynow",
                tags=[TLV(id="00", value="A000000677010112"), TLV(id="01", value="UEN12345678")],
            )
        ],
        qr=QrOptions(),
    )


def _duitnow() -> EmvcoConfig:
    return EmvcoConfig(
        poi_method="11",
        common={"53": "458", "58": "MY", "59": "EXAMPLE SHOP", "60": "KUALA LUMPUR"},
        # AID left blank for the merchant to fill in.
        schemes=[TLVContainer(id=26, label="DuitNow", tags=[TLV(id="00", value="")])],
        qr=QrOptions(),
    )


EMVCO_PRESETS: dict[str, Callable[[], EmvcoConfig]] = {
    "blank": _blank,
    "paynow": _paynow,
    "duitnow": _duitnow,
}


def emvco_preset(name: str) -> EmvcoConfig:
    try:
        factory = EMVCO_PRESETS[name]
    except KeyError:
        raise err_unknown_preset(name) from None
    return factory()


def upi_preset() -> UpiConfig:
    return UpiConfig(pa="merchant@upi", pn="Example Store", am="10.00", cu="INR", tn="", tr="", qr=QrOptions())
