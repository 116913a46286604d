"""Editing operations over EMVCo configurations.

Every operation returns a new configuration and leaves its input untouched.
"""
from __future__ import annotations

from typing import TypeVar

from ..schemas import SCHEME_ID_MIN, TLV, EmvcoConfig, TLVContainer, clamp_scheme_id
from ..schemes import is_removable, lookup_scheme
from .errors import err_locked, err_not_found, err_scheme_in_use, err_unknown_scheme

T = TypeVar("T")


def next_sequential_id(schemes: list[TLVContainer]) -> int:
    if not schemes:
        return SCHEME_ID_MIN
    return clamp_scheme_id(max(scheme.id for scheme in schemes) + 1)


def next_sub_tag_id(tags: list[TLV]) -> str:
    if not tags:
        return "00"
    highest = -1
    for tag in tags:
        try:
            highest = max(highest, int(tag.id))
        except ValueError:
            highest = max(highest, 0)
    return f"{min(99, max(0, highest + 1)):02d}"


def _move(items: list[T], src: int, dst: int) -> list[T]:
    moved = list(items)
    item = moved.pop(src)
    moved.insert(dst, item)
    return moved


def _check_index(items: list, index: int, what: str) -> None:
    if not 0 <= index < len(items):
        raise err_not_found(f"{what} index {index} out of range")


def _copy(config: EmvcoConfig) -> EmvcoConfig:
    return config.model_copy(deep=True)


def used_scheme_keys(config: EmvcoConfig) -> set[str]:
    return {scheme.scheme_key for scheme in config.schemes if scheme.scheme_key}


def add_predefined_scheme(config: EmvcoConfig, key: str) -> EmvcoConfig:
    scheme = lookup_scheme(key)
    if scheme is None:
        raise err_unknown_scheme(key)
    if key in used_scheme_keys(config):
        raise err_scheme_in_use(key)
    updated = _copy(config)
    updated.schemes.append(
        TLVContainer(
            id=next_sequential_id(updated.schemes),
            label=scheme.label,
            scheme_key=scheme.key,
            tags=scheme.default_tags(),
        )
    )
    return updated


def add_custom_scheme(config: EmvcoConfig, label: str = "Custom") -> EmvcoConfig:
    updated = _copy(config)
    updated.schemes.append(
        TLVContainer(id=next_sequential_id(updated.schemes), label=label, tags=[TLV(id="00", value="")])
    )
    return updated


def update_scheme(
    config: EmvcoConfig,
    index: int,
    *,
    id: int | str | None = None,
    label: str | None = None,
) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    updated = _copy(config)
    container = updated.schemes[index]
    if container.scheme_key and (id is not None or label is not None):
        raise err_locked(f"Tag and label of {container.label} are fixed")
    if id is not None:
        container.id = clamp_scheme_id(id)
    if label is not None:
        container.label = label
    return updated


def remove_scheme(config: EmvcoConfig, index: int) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    updated = _copy(config)
    del updated.schemes[index]
    return updated


def move_scheme(config: EmvcoConfig, src: int, dst: int) -> EmvcoConfig:
    _check_index(config.schemes, src, "Scheme")
    _check_index(config.schemes, dst, "Scheme")
    updated = _copy(config)
    updated.schemes = _move(updated.schemes, src, dst)
    return updated


def add_scheme_tag(config: EmvcoConfig, index: int) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    updated = _copy(config)
    container = updated.schemes[index]
    tag_id = next_sub_tag_id(container.tags)
    scheme = lookup_scheme(container.scheme_key)
    sub = scheme.sub_tag(tag_id) if scheme else None
    container.tags.append(TLV(id=tag_id, value=sub.default_value() if sub else ""))
    return updated


def update_scheme_tag(config: EmvcoConfig, index: int, tag_index: int, value: str) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    _check_index(config.schemes[index].tags, tag_index, "Sub-tag")
    updated = _copy(config)
    container = updated.schemes[index]
    tag = container.tags[tag_index]
    scheme = lookup_scheme(container.scheme_key)
    sub = scheme.sub_tag(tag.id) if scheme else None
    if sub and sub.const_value is not None:
        raise err_locked(f"Sub-tag {tag.id} of {container.label} is fixed to {sub.const_value}")
    tag.value = value
    return updated


def remove_scheme_tag(config: EmvcoConfig, index: int, tag_index: int) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    _check_index(config.schemes[index].tags, tag_index, "Sub-tag")
    updated = _copy(config)
    container = updated.schemes[index]
    tag = container.tags[tag_index]
    if not is_removable(container.scheme_key, tag.id):
        raise err_locked(f"Sub-tag {tag.id} of {container.label} is required")
    del container.tags[tag_index]
    return updated


def move_scheme_tag(config: EmvcoConfig, index: int, src: int, dst: int) -> EmvcoConfig:
    _check_index(config.schemes, index, "Scheme")
    tags = config.schemes[index].tags
    _check_index(tags, src, "Sub-tag")
    _check_index(tags, dst, "Sub-tag")
    updated = _copy(config)
    container = updated.schemes[index]
    container.tags = _move(container.tags, src, dst)
    return updated


def add_tag62(config: EmvcoConfig, tag: TLV | None = None) -> EmvcoConfig:
    updated = _copy(config)
    updated.additional_data_62.append(tag.model_copy() if tag else TLV(id="01", value=""))
    return updated


def update_tag62(config: EmvcoConfig, index: int, *, id: str | None = None, value: str | None = None) -> EmvcoConfig:
    _check_index(config.additional_data_62, index, "Tag 62 entry")
    updated = _copy(config)
    entry = updated.additional_data_62[index]
    if id is not None:
        entry.id = id
    if value is not None:
        entry.value = value
    return updated


def remove_tag62(config: EmvcoConfig, index: int) -> EmvcoConfig:
    _check_index(config.additional_data_62, index, "Tag 62 entry")
    updated = _copy(config)
    del updated.additional_data_62[index]
    return updated


def move_tag62(config: EmvcoConfig, src: int, dst: int) -> EmvcoConfig:
    _check_index(config.additional_data_62, src, "Tag 62 entry")
    _check_index(config.additional_data_62, dst, "Tag 62 entry")
    updated = _copy(config)
    updated.additional_data_62 = _move(updated.additional_data_62, src, dst)
    return updated
