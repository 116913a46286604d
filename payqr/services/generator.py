"""Payload generation services."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import settings
from ..monitoring import record_payload_generated, record_validation_issues
from ..payload import EncodedPayload, encode_payload
from ..schemas import EmvcoConfig, UpiConfig
from ..upi import build_upi_uri
from ..validators import ValidationIssue, has_errors, validate_emvco
from .errors import err_bad_payload, err_validation_failed

logger = logging.getLogger("payqr.generator")


@dataclass(slots=True)
class GenerateResult:
    encoded: EncodedPayload
    issues: list[ValidationIssue] = field(default_factory=list)


class PayloadGenerator:
    def __init__(self, block_on_errors: bool | None = None):
        self.block_on_errors = settings.block_on_errors if block_on_errors is None else block_on_errors

    def generate_emvco(self, config: EmvcoConfig) -> GenerateResult:
        issues = validate_emvco(config)
        record_validation_issues(issues)
        if self.block_on_errors and has_errors(issues):
            logger.info(
                "payload blocked by validation",
                extra={"errors": sum(1 for issue in issues if issue.level == "error")},
            )
            raise err_validation_failed([{"level": issue.level, "message": issue.message} for issue in issues])

        encoded = encode_payload(config)
        record_payload_generated("emvco")
        logger.info(
            "emvco payload generated",
            extra={"schemes": len(config.schemes), "payload_length": len(encoded.payload), "crc": encoded.crc},
        )
        return GenerateResult(encoded=encoded, issues=issues)

    def generate_upi(self, config: UpiConfig) -> str:
        if not config.pa.strip():
            raise err_bad_payload("Payee address (pa) is required")
        uri = build_upi_uri(config)
        record_payload_generated("upi")
        logger.info("upi uri generated", extra={"uri_length": len(uri)})
        return uri
