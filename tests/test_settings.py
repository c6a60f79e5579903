import pytest

import settings as settings_module
from settings import Settings, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # keep a developer's .env out of these tests
    monkeypatch.setattr(settings_module, "load_dotenv", lambda: False)
    for name in ("NAME", "TRANSPORT", "HOST", "PORT", "LOG_LEVEL"):
        monkeypatch.delenv(f"FINANCE_CALCULATOR_{name}", raising=False)


def test_defaults():
    assert load_settings() == Settings()
    assert Settings().name == "Finance Calculator"
    assert Settings().transport == "stdio"


def test_from_environment(monkeypatch):
    monkeypatch.setenv("FINANCE_CALCULATOR_NAME", "TVM")
    monkeypatch.setenv("FINANCE_CALCULATOR_TRANSPORT", "HTTP")
    monkeypatch.setenv("FINANCE_CALCULATOR_PORT", "9001")
    monkeypatch.setenv("FINANCE_CALCULATOR_LOG_LEVEL", "debug")

    loaded = load_settings()

    assert loaded.name == "TVM"
    assert loaded.transport == "http"
    assert loaded.port == 9001
    assert loaded.log_level == "DEBUG"


def test_invalid_transport(monkeypatch):
    monkeypatch.setenv("FINANCE_CALCULATOR_TRANSPORT", "carrier-pigeon")
    with pytest.raises(ValueError, match="Invalid transport"):
        load_settings()


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("FINANCE_CALCULATOR_PORT", "eighty")
    with pytest.raises(ValueError, match="Invalid port"):
        load_settings()
