"""Decoding and checksum verification of existing EMV payloads."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..crc import crc16_ccitt
from ..payload import split_crc
from ..tlv import byte_length, parse_tlv
from .errors import err_bad_payload

logger = logging.getLogger("payqr.inspector")

TEMPLATE_TAGS = frozenset({f"{i:02d}" for i in range(26, 52)} | {"62", "64"})


@dataclass(slots=True)
class DecodedTag:
    tag: str
    value: str
    children: list[DecodedTag] = field(default_factory=list)

    @property
    def length(self) -> int:
        return byte_length(self.value)


@dataclass(slots=True)
class InspectionResult:
    crc: str
    expected_crc: str
    items: list[DecodedTag]

    @property
    def crc_valid(self) -> bool:
        return self.crc == self.expected_crc


def _decode(payload: str, nested: bool) -> list[DecodedTag]:
    decoded = []
    for item in parse_tlv(payload):
        children = _decode(item.value, nested=False) if nested and item.tag in TEMPLATE_TAGS else []
        decoded.append(DecodedTag(tag=item.tag, value=item.value, children=children))
    return decoded


def inspect_payload(payload: str) -> InspectionResult:
    """Decode ``payload`` into tags and check its CRC16 trailer."""

    payload = payload.strip()
    try:
        items = _decode(payload, nested=True)
    except ValueError as exc:
        raise err_bad_payload(f"Malformed TLV payload: {exc}") from exc

    if not items or items[-1].tag != "63" or items[-1].length != 4:
        raise err_bad_payload("Payload does not end with a CRC (tag 63)")

    body, crc = split_crc(payload)
    result = InspectionResult(crc=crc, expected_crc=crc16_ccitt(body), items=items)
    if not result.crc_valid:
        logger.warning("crc mismatch", extra={"crc": result.crc, "expected_crc": result.expected_crc})
    return result
