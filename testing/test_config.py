from relay_web.backend.config import DEFAULT_CACHE_FILE, DEFAULT_CONFIG_FILE, RelaySettings


def test_from_env_defaults(monkeypatch):
    for name in ("RELAY_CONFIG_FILE", "RELAY_CACHE_FILE", "RELAY_LOG_DIR", "RELAY_LOG_CONSOLE", "RELAY_CACHE_EXPIRY_MS"):
        monkeypatch.delenv(name, raising=False)

    settings = RelaySettings.from_env()

    assert settings.config_file == DEFAULT_CONFIG_FILE
    assert settings.cache_file == DEFAULT_CACHE_FILE
    assert settings.log_console is True
    assert settings.cache_expiry_ms == 3_600_000


def test_from_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RELAY_CONFIG_FILE", str(tmp_path / "c.json"))
    monkeypatch.setenv("RELAY_CACHE_FILE", str(tmp_path / "v.json"))
    monkeypatch.setenv("RELAY_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("RELAY_LOG_CONSOLE", "off")
    monkeypatch.setenv("RELAY_CACHE_EXPIRY_MS", "1000")

    settings = RelaySettings.from_env()

    assert settings.config_file == str(tmp_path / "c.json")
    assert settings.cache_file == str(tmp_path / "v.json")
    assert settings.log_dir == str(tmp_path / "logs")
    assert settings.log_console is False
    assert settings.cache_expiry_ms == 1000


def test_non_integer_expiry_falls_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("RELAY_CACHE_EXPIRY_MS", "an hour")

    with caplog.at_level("WARNING"):
        settings = RelaySettings.from_env()

    assert settings.cache_expiry_ms == 3_600_000
    assert "RELAY_CACHE_EXPIRY_MS" in caplog.text
