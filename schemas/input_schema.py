# -------------------------------------------------------------------
# schemas/input_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the **public request schemas** for the
# keycase conversion API.
#
# KEY DESIGN DECISION
# -------------------
# Request bodies accept **both camelCase and snake_case** field names.
#
# Example (both valid):
#   - snake_case: target_case, preserve_container_keys
#   - camelCase:  targetCase, preserveContainerKeys
#
# This is implemented via:
#   - alias=camelCase on each field
#   - populate_by_name=True in model_config
#
# target_case is deliberately a plain string, not an enum: unknown
# identifiers must reach convert_keys() so the API reports them the same
# way the library does (InvalidTargetCaseError -> INVALID_FIELD_VALUE).
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT:
# - Convert anything
# - Apply defaults from settings
# - Handle API routing or HTTP concerns
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class KeyConversionRequest(BaseModel):
    """
    Request payload for recursive key conversion.

    Supports both snake_case and camelCase JSON field names.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "data": {
                    "user_name": "ada",
                    "address": {"zip_code": "10115"},
                    "tags": [{"tag_id": 1}],
                },
                "targetCase": "camel",
            }
        },
    )

    data: Any = Field(
        ...,
        description="Any JSON value. Object keys are converted at every depth.",
    )

    target_case: Optional[str] = Field(
        None,
        alias="targetCase",
        description="One of camel, snake, kebab, pascal. Defaults to the service setting.",
    )

    preserve_container_keys: Optional[List[str]] = Field(
        None,
        alias="preserveContainerKeys",
        description="Keys whose values are returned verbatim (merged with configured keys).",
    )


class CaseConversionRequest(BaseModel):
    """Request payload for converting a single string."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"value": "hello_world", "targetCase": "pascal"}},
    )

    value: str = Field(..., description="String to convert")

    target_case: Optional[str] = Field(
        None,
        alias="targetCase",
        description="One of camel, snake, kebab, pascal. Defaults to the service setting.",
    )
