"""FastAPI application for payqr."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response

from .config import settings
from .logging_conf import configure_logging
from .middleware import RequestContextMiddleware
from .monitoring import metrics_payload, record_service_error, record_validation_issues
from .presets import emvco_preset, upi_preset
from .schemas import (
    EmvcoConfig,
    GeneratePayloadResponse,
    InspectedTag,
    InspectRequest,
    InspectResponse,
    SchemeOut,
    SubTagOptionOut,
    SubTagOut,
    UpiConfig,
    UpiUriResponse,
    ValidateResponse,
    ValidationIssueOut,
)
from .schemes import SGQR_SCHEMES, SchemeDef, lookup_scheme
from .services.editor import add_predefined_scheme
from .services.errors import ServiceError, err_unknown_scheme
from .services.generator import PayloadGenerator
from .services.inspector import DecodedTag, inspect_payload
from .validators import ValidationIssue, has_errors, validate_emvco

app = FastAPI(title="payqr", version="0.1.0")
app.add_middleware(RequestContextMiddleware)

logger = logging.getLogger("payqr.api")


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning(
            "api key is using the default value",
            extra={"config_key": "api_key"},
        )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.warning(
        "service error",
        extra={
            "code": exc.code,
            "path": route_path,
            "method": request.method,
            "request_id": getattr(request.state, "request_id", None),
        },
    )
    record_service_error(exc.code, route_path)
    content = {"code": exc.code, "message": exc.message}
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.exception(
        "unhandled exception",
        extra={"path": route_path, "method": request.method, "request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


def _issues_out(issues: list[ValidationIssue]) -> list[ValidationIssueOut]:
    return [ValidationIssueOut(level=issue.level, message=issue.message) for issue in issues]


def _scheme_out(scheme: SchemeDef) -> SchemeOut:
    return SchemeOut(
        key=scheme.key,
        label=scheme.label,
        sub_tags=[
            SubTagOut(
                id=sub.id,
                name=sub.name,
                description=sub.description,
                required=sub.required,
                const_value=sub.const_value,
                options=[SubTagOptionOut(value=opt.value, label=opt.label) for opt in sub.options],
            )
            for sub in scheme.sub_tags
        ],
    )


def _tag_out(tag: DecodedTag) -> InspectedTag:
    return InspectedTag(tag=tag.tag, length=tag.length, value=tag.value, children=[_tag_out(child) for child in tag.children])


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/emvco/payload", response_model=GeneratePayloadResponse, tags=["emvco"], dependencies=[Depends(require_api_key)])
async def generate_emvco_payload(config: EmvcoConfig) -> GeneratePayloadResponse:
    result = PayloadGenerator().generate_emvco(config)
    return GeneratePayloadResponse(
        payload=result.encoded.payload,
        crc=result.encoded.crc,
        issues=_issues_out(result.issues),
    )


@app.post("/v1/emvco/validate", response_model=ValidateResponse, tags=["emvco"], dependencies=[Depends(require_api_key)])
async def validate_emvco_config(config: EmvcoConfig) -> ValidateResponse:
    issues = validate_emvco(config)
    record_validation_issues(issues)
    return ValidateResponse(valid=not has_errors(issues), issues=_issues_out(issues))


@app.post("/v1/emvco/inspect", response_model=InspectResponse, tags=["emvco"], dependencies=[Depends(require_api_key)])
async def inspect_emvco_payload(payload: InspectRequest) -> InspectResponse:
    result = inspect_payload(payload.payload)
    return InspectResponse(
        crc=result.crc,
        expected_crc=result.expected_crc,
        crc_valid=result.crc_valid,
        items=[_tag_out(item) for item in result.items],
    )


@app.post(
    "/v1/emvco/schemes/{key}",
    response_model=EmvcoConfig,
    response_model_by_alias=True,
    tags=["emvco"],
    dependencies=[Depends(require_api_key)],
)
async def add_scheme(key: str, config: EmvcoConfig) -> EmvcoConfig:
    return add_predefined_scheme(config, key)


@app.get("/v1/schemes", response_model=list[SchemeOut], tags=["schemes"], dependencies=[Depends(require_api_key)])
async def list_schemes() -> list[SchemeOut]:
    return [_scheme_out(scheme) for scheme in SGQR_SCHEMES]


@app.get("/v1/schemes/{key}", response_model=SchemeOut, tags=["schemes"], dependencies=[Depends(require_api_key)])
async def get_scheme(key: str) -> SchemeOut:
    scheme = lookup_scheme(key)
    if scheme is None:
        raise err_unknown_scheme(key)
    return _scheme_out(scheme)


@app.get(
    "/v1/presets/emvco/{name}",
    response_model=EmvcoConfig,
    response_model_by_alias=True,
    tags=["presets"],
    dependencies=[Depends(require_api_key)],
)
async def get_emvco_preset(name: str) -> EmvcoConfig:
    return emvco_preset(name)


@app.get(
    "/v1/presets/upi",
    response_model=UpiConfig,
    response_model_by_alias=True,
    tags=["presets"],
    dependencies=[Depends(require_api_key)],
)
async def get_upi_preset() -> UpiConfig:
    return upi_preset()


@app.post("/v1/upi/uri", response_model=UpiUriResponse, tags=["upi"], dependencies=[Depends(require_api_key)])
async def generate_upi_uri(config: UpiConfig) -> UpiUriResponse:
    return UpiUriResponse(uri=PayloadGenerator().generate_upi(config))
