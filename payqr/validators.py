"""Cross-field validation rules for EMVCo configurations.

Rules inspect the configuration object, never the serialized payload, and
only report issues; deciding whether an ``error`` blocks payload generation
is left to the caller.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Literal, Mapping

from pydantic import ValidationError

from . import messages
from .payload import coerce_config
from .schemas import TLV, EmvcoConfig, TLVContainer
from .schemes import PAYNOW, lookup_scheme
from .tlv import TLVItem, byte_length, encode_items

MAX_VALUE_BYTES = 99

_TWO_DIGITS = re.compile(r"[0-9]{2}")
_CURRENCY = re.compile(r"[0-9]{3}")
_COUNTRY = re.compile(r"[A-Z]{2}")
_AMOUNT = re.compile(r"(?:0|[1-9][0-9]*)(?:\.[0-9]{1,2})?")


@dataclass(frozen=True)
class ValidationIssue:
    level: Literal["error", "warn"]
    message: str


def is_two_digits(value: str) -> bool:
    return _TWO_DIGITS.fullmatch(value) is not None


def is_currency_numeric3(value: str) -> bool:
    return _CURRENCY.fullmatch(value) is not None


def is_country_alpha2(value: str) -> bool:
    return _COUNTRY.fullmatch(value) is not None


def is_amount(value: str) -> bool:
    return _AMOUNT.fullmatch(value) is not None


def parse_amount(value: str | None) -> Decimal | None:
    """Locale independent amount parsing; None when blank or not finite."""

    text = (value or "").strip()
    if not text or "_" in text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def has_usable_amount(value: str | None) -> bool:
    number = parse_amount(value)
    return number is not None and number != 0


def has_errors(issues: Iterable[ValidationIssue]) -> bool:
    return any(issue.level == "error" for issue in issues)


def _error(message: str) -> ValidationIssue:
    return ValidationIssue(level="error", message=message)


def _warn(message: str) -> ValidationIssue:
    return ValidationIssue(level="warn", message=message)


def _container_label(container: TLVContainer) -> str:
    return f"{container.label or 'Scheme'} ({container.id})"


def _check_fields(config: EmvcoConfig) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    if config.poi_method not in ("11", "12"):
        issues.append(_error(messages.POI_METHOD_INVALID))

    common = config.common
    currency = common.get("53")
    if currency and not is_currency_numeric3(currency):
        issues.append(_error(messages.CURRENCY_INVALID))
    amount = common.get("54")
    if amount and not is_amount(amount):
        issues.append(_error(messages.AMOUNT_INVALID))
    country = common.get("58")
    if country and not is_country_alpha2(country):
        issues.append(_error(messages.COUNTRY_INVALID))

    if config.poi_method == "12":
        number = parse_amount(amount)
        if number is None or number <= 0:
            issues.append(_warn(messages.AMOUNT_REQUIRED_FOR_DYNAMIC))
    return issues


def _check_tags(where: str, tags: Iterable[tuple[str, str | None]]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for tag_id, value in tags:
        if not is_two_digits(tag_id):
            issues.append(_error(messages.TAG_ID_INVALID.format(where=where, tag=tag_id)))
        length = byte_length((value or "").strip())
        if length > MAX_VALUE_BYTES:
            issues.append(_error(messages.VALUE_TOO_LONG.format(where=where, tag=tag_id, length=length)))
    return issues


def _check_template(where: str, tag_id: str, tags: list[TLV]) -> list[ValidationIssue]:
    issues = _check_tags(where, ((tag.id, tag.value) for tag in tags))
    length = byte_length(encode_items(TLVItem(tag=tag.id, value=tag.value) for tag in tags))
    if length > MAX_VALUE_BYTES:
        issues.append(_error(messages.VALUE_TOO_LONG.format(where=where, tag=tag_id, length=length)))
    return issues


def _check_lengths(config: EmvcoConfig) -> list[ValidationIssue]:
    issues = _check_tags("Common", config.common.items())
    for container in config.schemes:
        issues.extend(_check_template(_container_label(container), str(container.id), container.tags))
    issues.extend(_check_template("Additional data (62)", "62", config.additional_data_62))
    return issues


def _check_container(container: TLVContainer) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    present = {tag.id for tag in container.tags}
    label = container.label or "Scheme"
    if "00" not in present:
        issues.append(_warn(messages.SCHEME_IDENTIFIER_MISSING.format(label=label, tag=container.id)))
    scheme = lookup_scheme(container.scheme_key)
    if scheme is None:
        return issues
    for sub in scheme.sub_tags:
        if sub.required and sub.id != "00" and sub.id not in present:
            issues.append(
                _warn(
                    messages.SCHEME_REQUIRED_SUBTAG_MISSING.format(
                        label=label, tag=container.id, sub_tag=sub.id, name=sub.name
                    )
                )
            )
    return issues


def _check_paynow(config: EmvcoConfig, container: TLVContainer) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    proxy_type = next((tag.value for tag in container.tags if tag.id == "01"), "")
    amount = config.common.get("54")
    for tag in container.tags:
        if tag.id == "02":
            if proxy_type == "0" and tag.value and not tag.value.startswith("+"):
                issues.append(_error(messages.PAYNOW_02_MUST_START_PLUS_WHEN_MOBILE))
        elif tag.id == "03":
            if config.poi_method == "12":
                if tag.value != "0":
                    issues.append(_error(messages.PAYNOW_03_MUST_BE_ZERO_WHEN_DYNAMIC))
            elif not has_usable_amount(amount) and tag.value == "0":
                issues.append(_error(messages.PAYNOW_03_CANNOT_BE_ZERO_WHEN_NO_AMOUNT))
    return issues


def _shape_issues(exc: ValidationError) -> list[ValidationIssue]:
    """Report fields the model rejected as error issues, one per field."""

    issues: list[ValidationIssue] = []
    for error in exc.errors():
        loc = error["loc"]
        if loc and loc[0] in ("poiMethod", "poi_method"):
            issue = _error(messages.POI_METHOD_INVALID)
        else:
            where = ".".join(str(part) for part in loc) or "config"
            issue = _error(messages.CONFIG_FIELD_INVALID.format(field=where, problem=error["msg"]))
        if issue not in issues:
            issues.append(issue)
    return issues


def validate_emvco(config: EmvcoConfig | Mapping[str, Any] | None) -> list[ValidationIssue]:
    """Run every rule against ``config`` and return the accumulated issues."""

    if config is None:
        return [_error(messages.MISSING_CONFIG)]
    try:
        cfg = coerce_config(config)
    except ValidationError as exc:
        return _shape_issues(exc)

    issues = _check_fields(cfg)
    issues.extend(_check_lengths(cfg))
    for container in cfg.schemes:
        issues.extend(_check_container(container))
        if container.scheme_key == PAYNOW.key:
            issues.extend(_check_paynow(cfg, container))
    return issues
