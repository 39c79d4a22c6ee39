"""
Tests for environment-driven settings.
"""

from medchat.config import CompletionConfig, Settings


def test_defaults(monkeypatch):
    for name in ("AZURE_OPENAI_HOST", "AZURE_OPENAI_KEY", "RISK_CONDITIONS", "ALLOWED_ORIGINS", "MODEL_TIMEOUT", "API_HOST", "API_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings()
    assert settings.RISK_CONDITIONS == ["Hypertension", "Diabetes", "Depression"]
    assert settings.ALLOWED_ORIGINS == ["*"]
    assert settings.MODEL_TIMEOUT == 60.0
    assert settings.API_HOST == "0.0.0.0"
    assert settings.API_PORT == 8000


def test_overrides(monkeypatch):
    monkeypatch.setenv("AZURE_OPENAI_HOST", "https://example.test/chat ")
    monkeypatch.setenv("AZURE_OPENAI_KEY", "k")
    monkeypatch.setenv("RISK_CONDITIONS", "Asthma, ,COPD")
    monkeypatch.setenv("MODEL_TIMEOUT", "12.5")
    monkeypatch.setenv("MODEL_MAX_TOKENS", "256")
    monkeypatch.setenv("API_PORT", "9100")

    settings = Settings()
    assert settings.RISK_CONDITIONS == ["Asthma", "COPD"]
    assert settings.API_PORT == 9100
    assert settings.completion_config() == CompletionConfig(
        endpoint="https://example.test/chat",
        api_key="k",
        api_key_header="api-key",
        timeout=12.5,
        max_tokens=256,
    )
