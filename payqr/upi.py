"""UPI ``upi://pay`` deep link builder."""
from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import urlencode

from .schemas import UpiConfig

UPI_PREFIX = "upi://pay?"
UPI_PARAM_ORDER = ("pa", "pn", "am", "cu", "tn", "tr")


def build_upi_uri(config: UpiConfig | Mapping[str, Any]) -> str:
    """Flat query string in fixed order; blank optional fields are skipped."""

    cfg = config if isinstance(config, UpiConfig) else UpiConfig.model_validate(config)
    params = [("pa", cfg.pa)]
    for key in UPI_PARAM_ORDER[1:]:
        value = getattr(cfg, key)
        if value:
            params.append((key, value))
    return f"{UPI_PREFIX}{urlencode(params)}"
