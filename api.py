"""
api.py

WHAT THIS FILE IS FOR
---------------------
This module defines the FastAPI application entrypoint for the
keycase conversion API.

It is responsible for:
- Creating the FastAPI app instance (title/version/description)
- Registering middleware for:
    - Correlation ID propagation (X-Correlation-Id)
    - API version validation (X-API-Version)
- Defining standard error responses using a consistent schema:
    {code, message, subErrors, timestamp, correlationId}
- Registering exception handlers for:
    - RequestValidationError (400 VALIDATION_FAILED)
    - InvalidTargetCaseError (400 INVALID_FIELD_VALUE on targetCase)
    - NestingDepthExceededError (400 INVALID_FIELD_VALUE on data)
- Exposing HTTP endpoints:
    - GET /health and /healthz
    - GET /api/v1/cases
    - POST /api/v1/case-conversions
    - POST /api/v1/key-conversions

REQUEST/RESPONSE CONTRACT RULES
-------------------------------
- Request payloads accept both camelCase and snake_case field names
  (handled by the Pydantic input schemas).
- Response envelopes are camelCase: {status, data, correlationId, metadata}
- The converted payload under data.result is returned exactly as
  convert_keys() produced it; the envelope conversion never touches it.

DESIGN INTENT
-------------
This file contains ONLY the HTTP layer:
- routing
- middleware
- exception handling
- response formatting / normalization

Conversion rules live in keycase/casing/*.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from keycase.casing.case_converters import TargetCase, resolve_case_converter, resolve_target_case, supported_cases
from keycase.casing.errors import InvalidTargetCaseError, NestingDepthExceededError
from keycase.casing.key_transformer import convert_keys, find_key_collisions
from keycase.utils.settings import get_settings
from schemas.input_schema import CaseConversionRequest, KeyConversionRequest
from schemas.output_schema import CaseConversionResult, ConversionEnvelope, KeyConversionResult

logger = structlog.get_logger(__name__)

settings = get_settings()

app = FastAPI(
    title="keycase",
    version="1.0.0",
    description="Convert strings and JSON object keys between camel, snake, kebab and pascal case.",
)

CORRELATION_HEADER = "X-Correlation-Id"
API_VERSION_HEADER = "X-API-Version"
SUPPORTED_API_VERSIONS = {"1"}

# Envelope fields whose contents are already in their final shape
_VERBATIM_ENVELOPE_KEYS = {"result", "key_collisions"}


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def _get_or_create_correlation_id(request: Request) -> str:
    incoming = request.headers.get(CORRELATION_HEADER)
    return incoming.strip() if incoming else f"corr_{uuid.uuid4().hex}"


def _get_api_version(request: Request) -> str:
    v = getattr(request.state, "api_version", None)
    return str(v) if v else request.headers.get(API_VERSION_HEADER, "1").strip() or "1"


def _correlation_id(request: Request) -> str:
    return getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")


def _std_error(
    *,
    code: str,
    message: str,
    correlation_id: str,
    http_status: int,
    api_version: str = "1",
    sub_errors: Optional[list[dict[str, Any]]] = None,
) -> JSONResponse:
    payload = {
        "code": code,
        "message": message,
        "subErrors": sub_errors or [],
        "timestamp": int(time.time()),
        "correlationId": correlation_id,
    }
    headers = {
        CORRELATION_HEADER: correlation_id,
        API_VERSION_HEADER: api_version,
    }
    return JSONResponse(status_code=http_status, content=payload, headers=headers)


def _envelope_response(envelope: ConversionEnvelope) -> JSONResponse:
    payload_dict = convert_keys(
        envelope.model_dump(),
        TargetCase.CAMEL,
        preserve_container_keys=_VERBATIM_ENVELOPE_KEYS,
    )
    return JSONResponse(status_code=200, content=payload_dict)


def _resolve_request_case(target_case: Optional[str]) -> TargetCase:
    return resolve_target_case(target_case if target_case is not None else settings.default_target_case)


# -------------------------------------------------------------------
# Middleware
# -------------------------------------------------------------------
@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = getattr(request.state, "correlation_id", None) or _get_or_create_correlation_id(request)
    request.state.correlation_id = correlation_id
    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


@app.middleware("http")
async def api_version_middleware(request: Request, call_next):
    # registered last, so it runs before correlation_id_middleware
    correlation_id = getattr(request.state, "correlation_id", None) or _get_or_create_correlation_id(request)
    request.state.correlation_id = correlation_id
    version = request.headers.get(API_VERSION_HEADER, "1").strip() or "1"

    if version not in SUPPORTED_API_VERSIONS:
        return _std_error(
            code="INVALID_FIELD_VALUE",
            message="Invalid API version",
            correlation_id=correlation_id,
            http_status=400,
            sub_errors=[
                {
                    "field": API_VERSION_HEADER,
                    "errors": [{"code": "isIn", "message": "Supported versions: 1"}],
                }
            ],
        )

    request.state.api_version = version
    response = await call_next(request)
    response.headers[API_VERSION_HEADER] = version
    return response


# -------------------------------------------------------------------
# Exception handlers
# -------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    correlation_id = _correlation_id(request)

    sub_errors: list[dict[str, Any]] = []
    for err in exc.errors():
        field = ".".join(str(x) for x in err.get("loc", []) if x != "body") or "body"
        sub_errors.append(
            {
                "field": field,
                "errors": [{"code": err.get("type"), "message": err.get("msg")}],
            }
        )

    logger.info(
        "request_validation_failed",
        correlation_id=correlation_id,
        error_count=len(sub_errors),
    )

    return _std_error(
        code="VALIDATION_FAILED",
        message="Validation failed",
        correlation_id=correlation_id,
        http_status=400,
        api_version=_get_api_version(request),
        sub_errors=sub_errors,
    )


@app.exception_handler(InvalidTargetCaseError)
async def invalid_target_case_handler(request: Request, exc: InvalidTargetCaseError):
    correlation_id = _correlation_id(request)

    logger.info(
        "invalid_target_case",
        correlation_id=correlation_id,
        target_case=str(exc.target_case),
    )

    return _std_error(
        code="INVALID_FIELD_VALUE",
        message=str(exc),
        correlation_id=correlation_id,
        http_status=400,
        api_version=_get_api_version(request),
        sub_errors=[
            {
                "field": "targetCase",
                "errors": [{"code": "isIn", "message": f"Supported cases: {', '.join(exc.valid_cases)}"}],
            }
        ],
    )


@app.exception_handler(NestingDepthExceededError)
async def nesting_depth_handler(request: Request, exc: NestingDepthExceededError):
    correlation_id = _correlation_id(request)

    logger.warning(
        "key_conversion_depth_exceeded",
        correlation_id=correlation_id,
        max_depth=exc.max_depth,
    )

    return _std_error(
        code="INVALID_FIELD_VALUE",
        message=str(exc),
        correlation_id=correlation_id,
        http_status=400,
        api_version=_get_api_version(request),
        sub_errors=[
            {
                "field": "data",
                "errors": [{"code": "maxDepth", "message": f"Maximum nesting depth: {exc.max_depth}"}],
            }
        ],
    )


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------
@app.get("/healthz")
@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": settings.service_name,
        "environment": settings.environment,
    }


@app.get("/api/v1/cases")
async def list_cases():
    return {"cases": supported_cases(), "defaultCase": settings.default_target_case}


@app.post("/api/v1/case-conversions", response_model=ConversionEnvelope)
async def convert_case(payload: CaseConversionRequest, request: Request) -> JSONResponse:
    correlation_id = _correlation_id(request)

    target_case = _resolve_request_case(payload.target_case)
    converted = resolve_case_converter(target_case)(payload.value)

    envelope = ConversionEnvelope(
        correlation_id=correlation_id,
        data=CaseConversionResult(
            value=payload.value,
            converted=converted,
            target_case=target_case.value,
        ),
    )
    return _envelope_response(envelope)


@app.post("/api/v1/key-conversions", response_model=ConversionEnvelope)
async def convert_payload_keys(payload: KeyConversionRequest, request: Request) -> JSONResponse:
    correlation_id = _correlation_id(request)

    # ---------------------------------------------------------------
    # 1) Resolve options (request overrides + configured defaults)
    # ---------------------------------------------------------------
    target_case = _resolve_request_case(payload.target_case)
    preserve = set(settings.preserve_container_keys) | set(payload.preserve_container_keys or [])

    # ---------------------------------------------------------------
    # 2) Convert (input is untrusted: always depth-guarded)
    # ---------------------------------------------------------------
    result = convert_keys(
        payload.data,
        target_case,
        preserve_container_keys=preserve,
        max_depth=settings.max_nesting_depth,
    )

    # ---------------------------------------------------------------
    # 3) Optional collision audit
    # ---------------------------------------------------------------
    metadata: Optional[dict[str, Any]] = None
    if settings.enable_debug_metadata:
        collisions = find_key_collisions(payload.data, target_case, preserve_container_keys=preserve)
        metadata = {"key_collisions": collisions}
        if collisions:
            logger.warning(
                "key_conversion_collisions",
                correlation_id=correlation_id,
                target_case=target_case.value,
                paths=sorted(collisions),
            )

    logger.info(
        "key_conversion_completed",
        correlation_id=correlation_id,
        target_case=target_case.value,
        preserved=sorted(preserve),
    )

    envelope = ConversionEnvelope(
        correlation_id=correlation_id,
        data=KeyConversionResult(target_case=target_case.value, result=result),
        metadata=metadata,
    )
    return _envelope_response(envelope)
