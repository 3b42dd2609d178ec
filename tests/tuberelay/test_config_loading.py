"""Tests for config models and file/env/CLI precedence."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from TubeRelay.config import PROVIDER_ORDER, TubeRelayConfig, load_config


def test_defaults():
    config = load_config(environ={})

    assert config.http.timeout_s == 60.0
    assert config.http.headers()["Accept"] == "application/json, text/plain, */*"
    assert config.retry.max_attempts == 3
    assert config.retry.backoff_step_s == 1.0
    assert config.providers.enabled_names() == PROVIDER_ORDER
    assert config.search.max_results == 5


def test_yaml_file_loaded(tmp_path):
    path = tmp_path / "tuberelay.yaml"
    path.write_text(
        "http:\n  timeout_s: 15\nproviders:\n  okatsu:\n    enabled: false\n    endpoint: https://o.test/api\n",
        encoding="utf-8",
    )

    config = load_config(str(path), environ={})

    assert config.http.timeout_s == 15
    assert config.providers.okatsu.endpoint == "https://o.test/api"
    assert config.providers.enabled_names() == ("eliteprotech", "yupra")


def test_json_file_loaded(tmp_path):
    path = tmp_path / "tuberelay.json"
    path.write_text(json.dumps({"retry": {"max_attempts": 5}}), encoding="utf-8")

    assert load_config(str(path), environ={}).retry.max_attempts == 5


def test_env_overrides_file_and_cli_overrides_env(tmp_path):
    path = tmp_path / "tuberelay.yaml"
    path.write_text("retry:\n  max_attempts: 2\n  backoff_step_s: 0.5\n", encoding="utf-8")
    environ = {
        "TUBERELAY_RETRY__MAX_ATTEMPTS": "4",
        "TUBERELAY_PROVIDERS__YUPRA__ENABLED": "false",
        "TUBERELAY_MESSAGES__CAPTION_FOOTER": "> via bot",
        "OTHER_VARIABLE": "ignored",
    }

    config = load_config(
        str(path),
        environ=environ,
        cli_overrides={"retry": {"max_attempts": 6}},
    )

    assert config.retry.max_attempts == 6
    assert config.retry.backoff_step_s == 0.5
    assert config.providers.yupra.enabled is False
    assert config.messages.caption_footer == "> via bot"


def test_config_path_variable_is_not_a_setting():
    config = load_config(environ={"TUBERELAY_CONFIG": "/etc/tuberelay.yaml"})
    assert config == TubeRelayConfig()


def test_unknown_key_rejected():
    with pytest.raises(ValidationError):
        load_config(environ={"TUBERELAY_HTTP__PROXY": "http://proxy"})


@pytest.mark.parametrize(
    "payload",
    [
        {"retry": {"max_attempts": 0}},
        {"retry": {"backoff_step_s": -1}},
        {"http": {"timeout_s": 0}},
        {"providers": {"yupra": {"endpoint": "ftp://y.test"}}},
        {"search": {"max_results": 0}},
    ],
)
def test_invalid_values_rejected(payload):
    with pytest.raises(ValidationError):
        TubeRelayConfig.model_validate(payload)


def test_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_config(str(tmp_path / "absent.yaml"), environ={})


def test_unsupported_format(tmp_path):
    path = tmp_path / "tuberelay.toml"
    path.write_text("[http]\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(str(path), environ={})


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("http: [unclosed\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(str(path), environ={})


def test_config_hash_is_stable():
    assert TubeRelayConfig().config_hash() == TubeRelayConfig().config_hash()
    changed = TubeRelayConfig.model_validate({"retry": {"max_attempts": 4}})
    assert changed.config_hash() != TubeRelayConfig().config_hash()


def test_disable_provider_by_env_keeps_default_endpoint():
    config = load_config(environ={"TUBERELAY_PROVIDERS__YUPRA__ENABLED": "false"})

    assert config.providers.yupra.enabled is False
    assert config.providers.yupra.endpoint == "https://api.yupra.my.id/api/downloader/ytmp4"
    assert config.providers.enabled_names() == ("eliteprotech", "okatsu")


def test_disable_provider_by_yaml_keeps_default_endpoint(tmp_path):
    path = tmp_path / "tuberelay.yaml"
    path.write_text("providers:\n  okatsu:\n    enabled: false\n", encoding="utf-8")

    config = load_config(str(path), environ={})

    assert config.providers.okatsu.enabled is False
    assert config.providers.okatsu.endpoint == "https://okatsu-rolezapiiz.vercel.app/downloader/ytmp4"
    assert config.providers.eliteprotech.endpoint == "https://eliteprotech-apis.zone.id/ytdown"


def test_endpoint_override_alone_keeps_provider_enabled():
    config = load_config(environ={"TUBERELAY_PROVIDERS__ELITEPROTECH__ENDPOINT": "https://mirror.test/ytdown"})

    assert config.providers.eliteprotech.endpoint == "https://mirror.test/ytdown"
    assert config.providers.eliteprotech.enabled is True
