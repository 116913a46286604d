"""Pydantic schemas for payment configurations and API contracts."""
from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

SCHEME_ID_MIN = 26
SCHEME_ID_MAX = 51


def clamp_scheme_id(value: Any) -> int:
    """Clamp a merchant account information tag into 26..51."""

    try:
        number = int(value)
    except (TypeError, ValueError):
        return SCHEME_ID_MIN
    return min(SCHEME_ID_MAX, max(SCHEME_ID_MIN, number))


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class TLV(_CamelModel):
    id: str
    value: str = ""

    @field_validator("value", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class TLVContainer(_CamelModel):
    id: int = SCHEME_ID_MIN
    label: str = ""
    scheme_key: str | None = Field(default=None, alias="schemeKey")
    tags: list[TLV] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _clamp_id(cls, value: Any) -> int:
        return clamp_scheme_id(value)


class QrOptions(_CamelModel):
    ecc: Literal["L", "M", "Q", "H"] = "M"
    module_size: int = Field(default=8, alias="moduleSize")
    color: str = "#000000"
    bg_color: str = Field(default="#FFFFFF", alias="bgColor")


class EmvcoConfig(_CamelModel):
    """Root aggregate of an EMVCo merchant presented QR configuration."""

    poi_method: str = Field(alias="poiMethod")
    common: dict[str, str | None] = Field(default_factory=dict)
    additional_data_62: list[TLV] = Field(default_factory=list, alias="additionalData62")
    schemes: list[TLVContainer] = Field(default_factory=list)
    qr: QrOptions | None = None


class UpiConfig(_CamelModel):
    pa: str
    pn: str | None = None
    am: str | None = None
    cu: str | None = None
    tn: str | None = None
    tr: str | None = None
    qr: QrOptions | None = None


class ValidationIssueOut(BaseModel):
    level: Literal["error", "warn"]
    message: str


class GeneratePayloadResponse(BaseModel):
    payload: str
    crc: str
    issues: list[ValidationIssueOut] = Field(default_factory=list)


class ValidateResponse(BaseModel):
    valid: bool
    issues: list[ValidationIssueOut]


class InspectRequest(BaseModel):
    payload: str = Field(min_length=8, description="Full EMV payload including tag 63")


class InspectedTag(BaseModel):
    tag: str
    length: int
    value: str
    children: list[InspectedTag] = Field(default_factory=list)


class InspectResponse(BaseModel):
    crc: str
    expected_crc: str
    crc_valid: bool
    items: list[InspectedTag]


class UpiUriResponse(BaseModel):
    uri: str


class SubTagOptionOut(BaseModel):
    value: str
    label: str


class SubTagOut(BaseModel):
    id: str
    name: str
    description: str | None = None
    required: bool = False
    const_value: str | None = None
    options: list[SubTagOptionOut] = Field(default_factory=list)


class SchemeOut(BaseModel):
    key: str
    label: str
    sub_tags: list[SubTagOut]
