"""
keycase/utils/settings.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single source of truth* for runtime configuration
of the keycase conversion API.

It is responsible for:
- Defining all supported configuration fields (via Pydantic BaseSettings)
- Loading default values from parameters/parameters.yaml
- Overriding defaults with environment variables (KEYCASE_*)
- Validating that the default target case is a supported identifier
- Exposing a cached, fully-validated Settings object to the application

LOAD & PRECEDENCE MODEL
-----------------------
Configuration is loaded in the following order (last wins):

1) YAML defaults from:
       parameters/parameters.yaml
2) Environment variables:
       KEYCASE_*

WHAT THIS FILE IS NOT FOR
-------------------------
This module is NOT responsible for:
- Key or string conversion
- Request handling
- Response formatting

The casing package itself never reads settings; callers pass options
explicitly.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Set

import structlog
import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from keycase.casing.case_converters import supported_cases

logger = structlog.get_logger(__name__)

PARAMETERS_PATH = Path(__file__).resolve().parents[2] / "parameters" / "parameters.yaml"


class Settings(BaseSettings):
    """
    Runtime settings for the keycase conversion API.

    Load order / precedence:
        1) YAML defaults (parameters/parameters.yaml)
        2) Environment variables (KEYCASE_*), overriding YAML
    """

    model_config = SettingsConfigDict(
        env_prefix="KEYCASE_",
        extra="ignore",
    )

    # Service metadata
    service_name: str = "keycase"
    environment: str = "local"

    # Used when a request omits targetCase
    default_target_case: str = "camel"

    # Key conversion behavior
    preserve_container_keys: Set[str] = Field(
        default_factory=set,
        description=(
            "Container keys whose values are copied verbatim (inner keys not converted). "
            "Merged with any keys supplied per request."
        ),
    )

    max_nesting_depth: int = Field(
        default=64,
        ge=1,
        le=512,
        description="Maximum container nesting accepted by /api/v1/key-conversions.",
    )

    # Feature flags
    enable_debug_metadata: bool = Field(
        default=False,
        description="If true, key-conversion responses include detected key collisions.",
    )


@lru_cache(maxsize=1)
def _load_yaml_parameters() -> Dict[str, Any]:
    """
    Load base configuration from parameters/parameters.yaml.

    Cached to avoid repeated disk I/O.
    """
    if not PARAMETERS_PATH.exists():
        logger.warning("parameters_yaml_missing", expected=str(PARAMETERS_PATH))
        return {}

    try:
        with PARAMETERS_PATH.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            logger.warning(
                "parameters_yaml_not_dict",
                path=str(PARAMETERS_PATH),
                type=type(data).__name__,
            )
            return {}
        logger.info("parameters_yaml_loaded", path=str(PARAMETERS_PATH))
        return data
    except Exception as exc:  # noqa: BLE001
        logger.error("parameters_yaml_load_error", path=str(PARAMETERS_PATH), error=str(exc))
        return {}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Construct and return the final validated Settings object.

    Cached (singleton per process). Any code needing configuration should
    call this function, not instantiate Settings() directly.
    """
    # 1) YAML defaults
    yaml_data = _load_yaml_parameters()

    # 2) env overrides (partial)
    try:
        env_settings = Settings()
        env_data = env_settings.model_dump(exclude_unset=True)
        logger.info("settings_loaded_env_only_partial", fields=list(env_data.keys()))
    except ValidationError as exc:
        logger.warning("settings_env_validation_error", errors=exc.errors())
        env_data = {}

    # 3) merge + validate
    merged: Dict[str, Any] = {**yaml_data, **env_data}
    settings = Settings.model_validate(merged)

    # 4) fail fast on an unusable default case
    valid = supported_cases()
    if settings.default_target_case not in valid:
        logger.error(
            "settings_invalid_default_target_case",
            default_target_case=settings.default_target_case,
            valid=valid,
        )
        raise RuntimeError(
            f"Invalid default_target_case: {settings.default_target_case!r}. "
            f"Must be one of {', '.join(valid)}. "
            "Set it via KEYCASE_DEFAULT_TARGET_CASE "
            f"or in {PARAMETERS_PATH}."
        )

    logger.info(
        "settings_loaded",
        environment=settings.environment,
        service_name=settings.service_name,
        default_target_case=settings.default_target_case,
        preserve_container_keys=sorted(settings.preserve_container_keys),
        max_nesting_depth=settings.max_nesting_depth,
        enable_debug_metadata=settings.enable_debug_metadata,
    )

    return settings
