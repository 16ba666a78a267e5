"""Configuration helpers for the Greenhouse API clients."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

HARVEST_URL = "https://harvest.greenhouse.io/v1"
JOB_BOARD_URL = "https://api.greenhouse.io/v1"

API_TOKEN_ENV = "GREENHOUSE_API_TOKEN"
ORGANIZATION_ENV = "GREENHOUSE_ORGANIZATION"

_FALSY = {"0", "false", "no", "off"}


@dataclass(slots=True)
class GreenhouseConfig:
    """Runtime configuration shared by :class:`HarvestClient` and :class:`JobBoard`."""

    api_token: str | None = None
    organization: str | None = None
    symbolize_keys: bool = True
    raise_errors: bool = True
    timeout: float | None = None
    harvest_url: str = HARVEST_URL
    job_board_url: str = JOB_BOARD_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GreenhouseConfig":
        """Create a configuration object from environment variables."""

        env = os.environ if environ is None else environ
        api_token = env.get(API_TOKEN_ENV)
        organization = env.get(ORGANIZATION_ENV)
        symbolize_raw = env.get("GREENHOUSE_SYMBOLIZE_KEYS")
        timeout_raw = env.get("GREENHOUSE_TIMEOUT")
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as exc:
            raise ValueError(f"GREENHOUSE_TIMEOUT must be a number, got {timeout_raw!r}") from exc

        return cls(
            api_token=api_token.strip() if api_token else None,
            organization=organization.strip() if organization else None,
            symbolize_keys=(
                symbolize_raw.strip().lower() not in _FALSY if symbolize_raw else True
            ),
            timeout=timeout,
            harvest_url=env.get("GREENHOUSE_HARVEST_URL", HARVEST_URL).rstrip("/"),
            job_board_url=env.get("GREENHOUSE_JOB_BOARD_URL", JOB_BOARD_URL).rstrip("/"),
        )


def resolve_api_token(
    explicit: str | None,
    config: GreenhouseConfig,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Pick the token from the argument, then the config, then the environment."""
    if explicit:
        return explicit
    if config.api_token:
        return config.api_token
    env = os.environ if environ is None else environ
    return env.get(API_TOKEN_ENV) or None


def resolve_organization(
    explicit: str | None,
    config: GreenhouseConfig,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    if explicit:
        return explicit
    if config.organization:
        return config.organization
    env = os.environ if environ is None else environ
    return env.get(ORGANIZATION_ENV) or None
