"""Utility helpers to build and parse EMV-style TLV payloads.

Length fields count UTF-8 bytes, not characters.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


def byte_length(value: str) -> int:
    return len(value.encode("utf-8"))


def length_field(value: str) -> str:
    """Two digit, zero padded UTF-8 byte length of ``value``.

    Values longer than 99 bytes yield a 3 digit field; callers are expected
    to keep single values within 99 bytes.
    """

    return f"{byte_length(value):02d}"


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        return f"{self.tag}{length_field(self.value)}{self.value}"


def encode_tag(tag: str, value: str) -> str:
    return TLVItem(tag=tag, value=value).serialize()


def build_tlv(items: Iterable[TLVItem]) -> str:
    """Serialize iterable of TLV items into EMV string."""

    return "".join(item.serialize() for item in items)


def encode_items(items: Iterable[TLVItem]) -> str:
    """Serialize items after trimming values, dropping the empty ones."""

    kept = (TLVItem(tag=item.tag, value=(item.value or "").strip()) for item in items)
    return build_tlv(item for item in kept if item.value)


def encode_container(tag: str, items: Iterable[TLVItem]) -> str:
    """Wrap the encoded inner items in ``tag``; empty bodies emit nothing."""

    inner = encode_items(items)
    if not inner:
        return ""
    return encode_tag(tag, inner)


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    raw = payload.encode("utf-8")
    idx = 0
    total = len(raw)
    while idx + 4 <= total:
        tag = raw[idx : idx + 2].decode("ascii")
        length_raw = raw[idx + 2 : idx + 4]
        if not length_raw.isdigit():
            raise ValueError(f"Invalid TLV length field for tag {tag!r}")
        length = int(length_raw)
        value_start = idx + 4
        value_end = value_start + length
        if value_end > total:
            raise ValueError("Invalid TLV length exceeds payload")
        try:
            value = raw[value_start:value_end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"TLV value for tag {tag!r} splits a UTF-8 character") from exc
        yield TLVItem(tag=tag, value=value)
        idx = value_end
    if idx != total:
        raise ValueError("Dangling TLV data detected")
