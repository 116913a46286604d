"""EMVCo merchant presented QR payload assembler."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from .crc import crc16_ccitt
from .schemas import TLV, EmvcoConfig
from .tlv import TLVItem, encode_container, encode_items, encode_tag

PAYLOAD_FORMAT_INDICATOR = "01"
CRC_TAG_HEADER = "6304"


@dataclass(frozen=True)
class EncodedPayload:
    payload: str
    crc: str


def coerce_config(config: EmvcoConfig | Mapping[str, Any]) -> EmvcoConfig:
    """Accept JSON-deserialised mappings alongside model instances."""

    if isinstance(config, EmvcoConfig):
        return config
    return EmvcoConfig.model_validate(config)


def _items(tags: Iterable[TLV]) -> list[TLVItem]:
    return [TLVItem(tag=tag.id, value=tag.value) for tag in tags]


def encode_common(common: Mapping[str, str | None]) -> str:
    """Top level merchant fields, ordered by tag id."""

    return encode_items(TLVItem(tag=key, value=common[key] or "") for key in sorted(common))


def encode_body(config: EmvcoConfig) -> str:
    """Everything up to, but excluding, the tag 63 header."""

    parts = [
        encode_tag("00", PAYLOAD_FORMAT_INDICATOR),
        encode_tag("01", config.poi_method),
        encode_common(config.common),
    ]
    for container in config.schemes:
        parts.append(encode_container(str(container.id), _items(container.tags)))
    parts.append(encode_container("62", _items(config.additional_data_62)))
    return "".join(parts)


def encode_payload(config: EmvcoConfig | Mapping[str, Any]) -> EncodedPayload:
    """Assemble the payload and compute its CRC16-CCITT trailer."""

    partial = f"{encode_body(coerce_config(config))}{CRC_TAG_HEADER}"
    crc = crc16_ccitt(partial)
    return EncodedPayload(payload=f"{partial}{crc}", crc=crc)


def build_payload(config: EmvcoConfig | Mapping[str, Any]) -> str:
    return encode_payload(config).payload


def split_crc(payload: str) -> tuple[str, str]:
    """Split a payload into the CRC input and the embedded checksum."""

    return payload[:-4], payload[-4:]


def verify_crc(payload: str) -> bool:
    """Recompute the checksum over all but the last 4 characters."""

    if len(payload) < 8 or payload[-8:-4] != CRC_TAG_HEADER:
        return False
    body, crc = split_crc(payload)
    return crc16_ccitt(body) == crc
