"""Catalog of predefined SGQR merchant account schemes."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Final, Mapping

from .schemas import TLV


@dataclass(frozen=True)
class SubTagOption:
    value: str
    label: str


@dataclass(frozen=True)
class SubTagDef:
    id: str
    name: str
    description: str | None = None
    required: bool = False
    const_value: str | None = None
    options: tuple[SubTagOption, ...] = ()

    def default_value(self) -> str:
        if self.const_value is not None:
            return self.const_value
        if self.options:
            return self.options[0].value
        return ""


@dataclass(frozen=True)
class SchemeDef:
    key: str
    label: str
    sub_tags: tuple[SubTagDef, ...]

    def sub_tag(self, tag_id: str) -> SubTagDef | None:
        for sub in self.sub_tags:
            if sub.id == tag_id:
                return sub
        return None

    def default_tags(self) -> list[TLV]:
        """Every sub-tag in canonical order, prefilled with its default."""

        return [TLV(id=sub.id, value=sub.default_value()) for sub in self.sub_tags]

    def required_ids(self) -> tuple[str, ...]:
        return tuple(sub.id for sub in self.sub_tags if sub.required)


PAYNOW: Final = SchemeDef(
    key="paynow",
    label="PayNow",
    sub_tags=(
        SubTagDef(id="00", name="Scheme identifier", const_value="SG.PAYNOW", required=True),
        SubTagDef(
            id="01",
            name="Proxy type",
            required=True,
            # Option values are not sequential; kept as published in the catalog.
            options=(
                SubTagOption(value="0", label="0: Mobile number (P2P)"),
                SubTagOption(value="2", label="1: UEN"),
                SubTagOption(value="3", label="2: VPA"),
            ),
        ),
        SubTagDef(id="02", name="Proxy value", required=True),
        SubTagDef(
            id="03",
            name="Editable txn amount indicator",
            options=(
                SubTagOption(value="0", label="0: Non-editable"),
                SubTagOption(value="1", label="1: can be edited"),
            ),
        ),
        SubTagDef(id="04", name="QR expiry date", description="YYYYMMDDHHmmss"),
        SubTagDef(id="05", name="Merchant reference number"),
    ),
)

FAVE: Final = SchemeDef(
    key="fave",
    label="Fave",
    sub_tags=(
        SubTagDef(id="00", name="Scheme identifier", const_value="com.myfave", required=True),
        SubTagDef(id="01", name="Payload", required=True),
    ),
)

SGQR_SCHEMES: Final[tuple[SchemeDef, ...]] = (PAYNOW, FAVE)

_BY_KEY: Final[Mapping[str, SchemeDef]] = MappingProxyType({scheme.key: scheme for scheme in SGQR_SCHEMES})


def lookup_scheme(key: str | None) -> SchemeDef | None:
    """Return the registry entry for ``key`` or None for custom schemes."""

    if not key:
        return None
    return _BY_KEY.get(key)


def is_removable(scheme_key: str | None, tag_id: str) -> bool:
    """Sub-tag 00 and required sub-tags stay on registry-bound schemes."""

    if not scheme_key:
        return True
    if tag_id == "00":
        return False
    scheme = lookup_scheme(scheme_key)
    if scheme is None:
        return True
    sub = scheme.sub_tag(tag_id)
    return not (sub and sub.required)
