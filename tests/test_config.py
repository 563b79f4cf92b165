from __future__ import annotations

from pathlib import Path

import pytest

from logentries_hook import config


def write_yaml(path: Path, body: str) -> None:
    path.write_text(body.strip(), encoding="utf-8")


def test_load_settings_reads_token_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    settings = config.load_settings()
    assert settings.token == "token-env"
    assert settings.host == "data.logentries.com"
    assert settings.port == 10000
    assert settings.level == "INFO"
    assert settings.json_output is False


def test_load_settings_reads_yaml(tmp_path: Path) -> None:
    yaml_path = tmp_path / "logentries.yaml"
    write_yaml(
        yaml_path,
        """
logentries:
  token: token-yaml
  host: 127.0.0.1
  port: 5140
  level: debug
  json_output: true
""",
    )
    settings = config.load_settings(str(yaml_path))
    assert settings == config.HookSettings(
        token="token-yaml", host="127.0.0.1", port=5140, level="DEBUG", json_output=True
    )


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    yaml_path = tmp_path / "logentries.yaml"
    write_yaml(yaml_path, "logentries:\n  token: token-yaml\n  port: 5140")
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    monkeypatch.setenv("LOGENTRIES_PORT", "6000")
    settings = config.load_settings(str(yaml_path))
    assert settings.token == "token-env"
    assert settings.port == 6000


def test_missing_token_raises() -> None:
    with pytest.raises(ValueError, match="LOGENTRIES_TOKEN"):
        config.load_settings()


def test_invalid_port_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    monkeypatch.setenv("LOGENTRIES_PORT", "not-a-port")
    with pytest.raises(ValueError, match="port"):
        config.load_settings()


def test_non_mapping_section_raises(tmp_path: Path) -> None:
    yaml_path = tmp_path / "logentries.yaml"
    write_yaml(yaml_path, "logentries:\n  - token")
    with pytest.raises(ValueError):
        config.load_settings(str(yaml_path))


def test_env_file_is_loaded_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("# comment\nLOGENTRIES_TOKEN='token-file'\n", encoding="utf-8")
    monkeypatch.setattr(config, "_ENV_LOADED", False)
    config._load_env_file(str(env_path))
    assert config.load_settings().token == "token-file"


@pytest.mark.parametrize("port", ["70000", "-1"])
def test_out_of_range_port_raises(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    monkeypatch.setenv("LOGENTRIES_PORT", port)
    with pytest.raises(ValueError, match="between 0 and 65535"):
        config.load_settings()


def test_unknown_level_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    monkeypatch.setenv("LOGENTRIES_LOG_LEVEL", "LOUD")
    with pytest.raises(ValueError, match="LOUD"):
        config.load_settings()


def test_panic_level_is_accepted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOGENTRIES_TOKEN", "token-env")
    monkeypatch.setenv("LOGENTRIES_LOG_LEVEL", "panic")
    assert config.load_settings().level == "PANIC"
