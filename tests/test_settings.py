from tripsplit import settings


def test_defaults(monkeypatch):
    for name in (
        "TRIPSPLIT_BASE_CURRENCY",
        "TRIPSPLIT_SPLIT_TOLERANCE",
        "TRIPSPLIT_LOG_LEVEL",
        "TRIPSPLIT_LOG_JSON",
        "TRIPSPLIT_REQUEST_LOG",
        "TRIPSPLIT_MODULES_PATH",
    ):
        monkeypatch.delenv(name, raising=False)

    assert settings.base_currency() == "BRL"
    assert settings.split_tolerance() == 0.01
    assert settings.log_level() == "INFO"
    assert settings.log_json() is True
    assert settings.request_log_enabled() is True
    assert settings.modules_path() == settings.ROOT_DIR / "modules"


def test_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TRIPSPLIT_BASE_CURRENCY", " usd ")
    monkeypatch.setenv("TRIPSPLIT_SPLIT_TOLERANCE", "0.5")
    monkeypatch.setenv("TRIPSPLIT_REQUEST_LOG", "off")
    monkeypatch.setenv("TRIPSPLIT_MODULES_PATH", str(tmp_path))

    assert settings.base_currency() == "USD"
    assert settings.split_tolerance() == 0.5
    assert settings.request_log_enabled() is False
    assert settings.modules_path() == tmp_path


def test_bad_tolerance_falls_back(monkeypatch):
    monkeypatch.setenv("TRIPSPLIT_SPLIT_TOLERANCE", "lots")
    assert settings.split_tolerance() == 0.01

    monkeypatch.setenv("TRIPSPLIT_SPLIT_TOLERANCE", "-1")
    assert settings.split_tolerance() == 0.01
