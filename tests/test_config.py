"""Tests for GreenhouseConfig and credential resolution."""

from __future__ import annotations

import pytest

from greenhouse_io.config import (
    HARVEST_URL,
    JOB_BOARD_URL,
    GreenhouseConfig,
    resolve_api_token,
    resolve_organization,
)


def test_defaults() -> None:
    config = GreenhouseConfig()
    assert config.api_token is None
    assert config.symbolize_keys is True
    assert config.raise_errors is True
    assert config.timeout is None
    assert config.harvest_url == HARVEST_URL


def test_from_env_reads_and_normalises_values() -> None:
    config = GreenhouseConfig.from_env(
        {
            "GREENHOUSE_API_TOKEN": " secret ",
            "GREENHOUSE_ORGANIZATION": "acme ",
            "GREENHOUSE_SYMBOLIZE_KEYS": "false",
            "GREENHOUSE_TIMEOUT": "12.5",
            "GREENHOUSE_HARVEST_URL": "https://harvest.example.test/v1/",
        }
    )
    assert config.api_token == "secret"
    assert config.organization == "acme"
    assert config.symbolize_keys is False
    assert config.timeout == 12.5
    assert config.harvest_url == "https://harvest.example.test/v1"


def test_from_env_rejects_bad_timeout() -> None:
    with pytest.raises(ValueError):
        GreenhouseConfig.from_env({"GREENHOUSE_TIMEOUT": "soon"})


def test_resolve_api_token_prefers_explicit_then_config_then_env() -> None:
    env = {"GREENHOUSE_API_TOKEN": "from-env"}
    assert resolve_api_token("explicit", GreenhouseConfig(api_token="cfg"), env) == "explicit"
    assert resolve_api_token(None, GreenhouseConfig(api_token="cfg"), env) == "cfg"
    assert resolve_api_token(None, GreenhouseConfig(), env) == "from-env"
    assert resolve_api_token(None, GreenhouseConfig(), {}) is None


def test_resolve_organization_falls_back_to_env() -> None:
    env = {"GREENHOUSE_ORGANIZATION": "acme"}
    assert resolve_organization(None, GreenhouseConfig(), env) == "acme"
    assert resolve_organization("other", GreenhouseConfig(organization="cfg"), env) == "other"


def test_from_env_job_board_url_override() -> None:
    config = GreenhouseConfig.from_env({"GREENHOUSE_JOB_BOARD_URL": "https://boards.example.test/v1/"})
    assert config.job_board_url == "https://boards.example.test/v1"
    assert GreenhouseConfig.from_env({}).job_board_url == JOB_BOARD_URL
