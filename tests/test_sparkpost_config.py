"""SparkPostConfig validation, coercion and loading from layered config."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from courier.adapters.sparkpost.config import (
    DEFAULT_BASE_URL,
    SparkPostConfig,
    load_sparkpost_config_from_dict,
)


@pytest.mark.os_agnostic
def test_defaults_target_the_us_endpoint() -> None:
    config = SparkPostConfig()

    assert config.api_key is None
    assert config.base_url == DEFAULT_BASE_URL
    assert config.api_version == 1
    assert config.timeout == 30.0
    assert config.recipients == []
    assert config.transmissions_url == "https://api.sparkpost.com/api/v1/transmissions"


@pytest.mark.os_agnostic
def test_transmissions_url_uses_base_and_version() -> None:
    config = SparkPostConfig(base_url="https://api.eu.sparkpost.com/", api_version=2)

    assert config.transmissions_url == "https://api.eu.sparkpost.com/api/v2/transmissions"


@pytest.mark.os_agnostic
@pytest.mark.parametrize("field", ["api_key", "from_address", "from_name", "template_id"])
def test_blank_strings_mean_not_configured(field: str) -> None:
    config = SparkPostConfig.model_validate({field: "   "})

    assert getattr(config, field) is None


@pytest.mark.os_agnostic
def test_numeric_template_id_becomes_string() -> None:
    assert SparkPostConfig.model_validate({"template_id": 123}).template_id == "123"


@pytest.mark.os_agnostic
def test_single_recipient_string_becomes_list() -> None:
    assert SparkPostConfig.model_validate({"recipients": "ops@example.com"}).recipients == ["ops@example.com"]


@pytest.mark.os_agnostic
@pytest.mark.parametrize(
    "data",
    [
        {"timeout": 0},
        {"timeout": -1.5},
        {"api_version": 0},
        {"base_url": "api.sparkpost.com"},
    ],
)
def test_invalid_values_are_rejected(data: dict[str, Any]) -> None:
    with pytest.raises(ValidationError):
        SparkPostConfig.model_validate(data)


@pytest.mark.os_agnostic
def test_config_is_frozen() -> None:
    config = SparkPostConfig()

    with pytest.raises(ValidationError):
        config.timeout = 5.0  # type: ignore[misc]


@pytest.mark.os_agnostic
def test_repr_redacts_api_key() -> None:
    text = repr(SparkPostConfig(api_key="super-secret"))

    assert "super-secret" not in text
    assert "api_key='[REDACTED]'" in text


@pytest.mark.os_agnostic
def test_repr_shows_missing_api_key_as_none() -> None:
    assert "api_key=None" in repr(SparkPostConfig())


@pytest.mark.os_agnostic
def test_loader_reads_sparkpost_section() -> None:
    config = load_sparkpost_config_from_dict(
        {
            "sparkpost": {
                "api_key": "k",
                "from_address": "noreply@example.com",
                "recipients": ["a@example.com", "b@example.com"],
            },
            "lib_log_rich": {"environment": "test"},
        }
    )

    assert config.api_key == "k"
    assert config.from_address == "noreply@example.com"
    assert config.recipients == ["a@example.com", "b@example.com"]


@pytest.mark.os_agnostic
def test_loader_without_section_returns_defaults() -> None:
    assert load_sparkpost_config_from_dict({}) == SparkPostConfig()


@pytest.mark.os_agnostic
def test_loader_rejects_non_mapping_section() -> None:
    with pytest.raises(ValidationError):
        load_sparkpost_config_from_dict({"sparkpost": "invalid"})


@pytest.mark.os_agnostic
def test_loader_does_not_modify_input() -> None:
    data = {"sparkpost": {"api_key": "", "base_url": "https://api.eu.sparkpost.com/"}}

    load_sparkpost_config_from_dict(data)

    assert data == {"sparkpost": {"api_key": "", "base_url": "https://api.eu.sparkpost.com/"}}
