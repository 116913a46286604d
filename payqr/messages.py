"""User facing validation messages."""
from __future__ import annotations

from typing import Final

MISSING_CONFIG: Final = "Missing config"
CONFIG_FIELD_INVALID: Final = "{field}: {problem}"
POI_METHOD_INVALID: Final = "poiMethod must be 11 or 12"
CURRENCY_INVALID: Final = "Currency (53) must be 3-digit numeric"
AMOUNT_INVALID: Final = "Amount (54) must be a non-negative decimal with at most 2 decimals"
COUNTRY_INVALID: Final = "Country (58) must be 2-letter A-Z"

AMOUNT_REQUIRED_FOR_DYNAMIC: Final = "Amount must be greater than 0 for dynamic QR codes."
PAYNOW_03_MUST_BE_ZERO_WHEN_DYNAMIC: Final = "Amount field should not be editable for dynamic QR codes."
PAYNOW_03_CANNOT_BE_ZERO_WHEN_NO_AMOUNT: Final = "Amount field should be editable if it is empty or zero."
PAYNOW_02_MUST_START_PLUS_WHEN_MOBILE: Final = "When Proxy type is mobile number, the value must start with +."

SCHEME_IDENTIFIER_MISSING: Final = "{label} ({tag}): scheme identifier (sub-tag 00) is required."
SCHEME_REQUIRED_SUBTAG_MISSING: Final = "{label} ({tag}): required sub-tag {sub_tag} ({name}) is missing."
TAG_ID_INVALID: Final = "{where}: tag id {tag!r} must be two digits"
VALUE_TOO_LONG: Final = "{where}: tag {tag} value is {length} bytes, the maximum is 99"
