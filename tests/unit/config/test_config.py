"""Configuration resolution, precedence, validation and redaction."""

import json

import pytest

from resume_intake.config import (
    FrozenConfig,
    resolve_config,
    resolve_config_with_sources,
)
from resume_intake.config.introspection import get_config_info, main
from resume_intake.exceptions import ConfigurationError


@pytest.mark.unit
def test_defaults_without_any_source():
    resolved = resolve_config_with_sources()

    assert resolved.config == FrozenConfig()
    assert set(resolved.origin.values()) == {"default"}
    assert not resolved.config.has_credential


@pytest.mark.unit
def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "env-key")
    monkeypatch.setenv("GEMINI_MAX_CONCURRENCY", "8")
    monkeypatch.setenv("GEMINI_REQUEST_TIMEOUT_SECONDS", "2.5")

    resolved = resolve_config_with_sources()

    assert resolved.config.api_key == "env-key"
    assert resolved.config.max_concurrency == 8
    assert resolved.config.request_timeout_seconds == 2.5
    assert resolved.origin["api_key"] == "env"
    assert resolved.origin["model"] == "default"


@pytest.mark.unit
def test_programmatic_beats_environment(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "env-model")

    resolved = resolve_config_with_sources({"model": "code-model", "unknown": 1})

    assert resolved.config.model == "code-model"
    assert resolved.origin["model"] == "programmatic"


@pytest.mark.unit
def test_env_file_sits_beneath_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=file-key\nGEMINI_MODEL=file-model\nOTHER=x\n")
    monkeypatch.setenv("GEMINI_MODEL", "env-model")

    resolved = resolve_config_with_sources(use_env_file=env_file)

    assert resolved.config.api_key == "file-key"
    assert resolved.origin["api_key"] == "env_file"
    assert resolved.config.model == "env-model"


@pytest.mark.unit
def test_missing_env_file_is_an_error(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        resolve_config(use_env_file=tmp_path / "absent.env")


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"max_concurrency": 0},
        {"request_timeout_seconds": -1},
        {"max_corpus_chars": "lots"},
        {"model": ""},
    ],
)
def test_invalid_values_raise_configuration_error(overrides):
    with pytest.raises(ConfigurationError):
        resolve_config(overrides)


@pytest.mark.unit
@pytest.mark.parametrize("key", ["", "   "])
def test_blank_api_key_means_no_credential(monkeypatch, key):
    monkeypatch.setenv("GEMINI_API_KEY", key)

    assert resolve_config().api_key is None


@pytest.mark.unit
def test_api_key_never_appears_in_repr():
    config = FrozenConfig(api_key="super-secret")

    assert "super-secret" not in repr(config)
    assert "super-secret" not in str(config)
    assert config.redacted()["api_key"] == "[REDACTED]"


@pytest.mark.unit
def test_with_overrides_ignores_unknown_fields():
    config = FrozenConfig().with_overrides(model="m", nonsense=True)

    assert config.model == "m"


@pytest.mark.unit
def test_audit_lists_origin_per_field(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")

    audit = resolve_config_with_sources().audit()

    assert "api_key: env:[REDACTED]" in audit
    assert "model: default:gemini-1.5-flash" in audit


@pytest.mark.unit
def test_config_info_warns_without_key():
    info = get_config_info()

    assert info["status"] == "valid"
    assert info["warnings"]


@pytest.mark.unit
def test_config_info_reports_invalid(monkeypatch):
    monkeypatch.setenv("GEMINI_MAX_CONCURRENCY", "zero")

    info = get_config_info()

    assert info["status"] == "invalid"
    assert info["config"] is None


@pytest.mark.unit
def test_introspection_main_json(monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_API_KEY", "secret-value")

    assert main(["--json"]) == 0

    out = capsys.readouterr().out
    assert "secret-value" not in out
    assert json.loads(out)["sources"]["api_key"] == "env"


@pytest.mark.unit
def test_introspection_main_invalid(monkeypatch, capsys):
    monkeypatch.setenv("GEMINI_MAX_FILE_BYTES", "-5")

    assert main([]) == 1
    assert "Configuration error" in capsys.readouterr().err
