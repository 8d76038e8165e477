# -------------------------------------------------------------------
# schemas/output_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the **internal response schemas** used by the
# keycase conversion API.
#
# NAMING CONVENTION (IMPORTANT)
# -----------------------------
# All fields in this file use **snake_case** by design.
#
# At the API boundary (in api.py), envelopes are converted to
# **camelCase JSON** using convert_keys(..., "camel"), with the
# caller's converted payload (`result`) preserved verbatim.
#
# DO NOT rename fields here to camelCase.
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT:
# - Perform JSON key conversion
# - Contain HTTP or FastAPI logic
# - Handle error responses
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel


class KeyConversionResult(BaseModel):
    """
    Outcome of a recursive key conversion.

    `result` is returned to clients exactly as produced by convert_keys().
    """

    target_case: str
    result: Any = None


class CaseConversionResult(BaseModel):
    value: str
    converted: str
    target_case: str


class ConversionEnvelope(BaseModel):
    """
    Standard response envelope.

    NOTE:
    - This schema is INTERNAL and uses snake_case.
    - Keys are converted to camelCase at the API boundary.
    """

    model_config = {"extra": "forbid"}

    #   HTTP < 400  -> status = "success"
    #   HTTP >= 400 -> status = "error"
    status: Literal["success", "error"] = "success"

    data: Optional[Union[KeyConversionResult, CaseConversionResult]] = None

    # Always injected by middleware / api.py
    correlation_id: Optional[str] = None

    # Debug-only metadata (e.g. detected key collisions)
    metadata: Optional[Dict[str, Any]] = None
