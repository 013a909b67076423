#!/usr/bin/env python3
"""
Construction options for the Chia test ledger
"""
import logging
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

DEFAULT_IMAGE_NAME = "ghcr.io/hyperledger/chia-all-in-one"
DEFAULT_IMAGE_VERSION = "v1.0.0"
DEFAULT_ENV_VARS = ("",)
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_HEALTH_CHECK_INTERVAL = 1.0

# Level names accepted on top of the stdlib ones
LOG_LEVEL_ALIASES = {
    "TRACE": logging.DEBUG,
    "WARN": logging.WARNING,
    "SILENT": logging.CRITICAL + 10,
}


def resolve_log_level(level: Union[int, str]) -> int:
    """Turn a level name or number into a stdlib logging level"""
    if isinstance(level, bool):
        raise ValueError(f"invalid log level: {level!r}")
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name in LOG_LEVEL_ALIASES:
        return LOG_LEVEL_ALIASES[name]
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"invalid log level: {level!r}")
    return resolved


class ChiaTestLedgerOptions(BaseModel):
    """
    Validated configuration of a ChiaTestLedger.

    Fields left out fall back to the fixed defaults above. The image tag is
    checked for emptiness so an accidental blank version pin fails at
    construction instead of pulling an unexpected image.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    image_name: StrictStr = Field(default=DEFAULT_IMAGE_NAME, min_length=1)
    image_version: StrictStr = Field(default=DEFAULT_IMAGE_VERSION, min_length=1)
    env_vars: List[StrictStr] = Field(default_factory=lambda: list(DEFAULT_ENV_VARS))
    emit_container_logs: StrictBool = True
    log_level: Union[int, str] = DEFAULT_LOG_LEVEL
    health_check_interval: float = Field(default=DEFAULT_HEALTH_CHECK_INTERVAL, gt=0)
    health_check_timeout: Optional[float] = Field(default=None, gt=0)

    @field_validator("image_name", "image_version", mode="before")
    @classmethod
    def _strip_image_fields(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value):
        resolve_log_level(value)
        return value
