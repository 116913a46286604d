"""Shared service error definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class ServiceError(Exception):
    code: str
    message: str
    status_code: int = 400
    details: dict[str, Any] | None = None

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


def err_bad_payload(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_BAD_PAYLOAD", message=message or "Invalid request payload", status_code=400)


def err_validation_failed(issues: list[dict[str, str]], message: str | None = None) -> ServiceError:
    return ServiceError(
        code="ERR_VALIDATION_FAILED",
        message=message or "Configuration has blocking validation errors",
        status_code=422,
        details={"issues": issues},
    )


def err_unknown_scheme(key: str) -> ServiceError:
    return ServiceError(code="ERR_UNKNOWN_SCHEME", message=f"Unknown scheme: {key}", status_code=404)


def err_unknown_preset(name: str) -> ServiceError:
    return ServiceError(code="ERR_UNKNOWN_PRESET", message=f"Unknown preset: {name}", status_code=404)


def err_scheme_in_use(key: str) -> ServiceError:
    return ServiceError(code="ERR_SCHEME_IN_USE", message=f"Scheme already added: {key}", status_code=409)


def err_locked(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_LOCKED", message=message or "Field is fixed by the scheme definition", status_code=409)


def err_not_found(message: str | None = None) -> ServiceError:
    return ServiceError(code="ERR_NOT_FOUND", message=message or "Item not found", status_code=404)
