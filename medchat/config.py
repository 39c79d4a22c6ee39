import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class CompletionConfig:
    """Connection settings handed to ModelClient at construction."""
    endpoint: str
    api_key: str
    api_key_header: str = "api-key"
    timeout: float = 60.0
    max_tokens: int = 512


class Settings:
    """
    Process settings read once from the environment (and .env).

    Only the app wiring touches this object; the model client receives a
    CompletionConfig instead of reading globals.
    """

    def __init__(self):
        self.AZURE_OPENAI_HOST = os.getenv("AZURE_OPENAI_HOST", "").strip()
        self.AZURE_OPENAI_KEY = os.getenv("AZURE_OPENAI_KEY", "").strip()
        self.MODEL_API_KEY_HEADER = os.getenv("MODEL_API_KEY_HEADER", "api-key").strip()
        self.MODEL_TIMEOUT = float(os.getenv("MODEL_TIMEOUT", "60"))
        self.MODEL_MAX_TOKENS = int(os.getenv("MODEL_MAX_TOKENS", "512"))
        self.RISK_CONDITIONS = _csv_env("RISK_CONDITIONS", "Hypertension,Diabetes,Depression")
        self.ALLOWED_ORIGINS = _csv_env("ALLOWED_ORIGINS", "*")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        self.API_HOST = os.getenv("API_HOST", "0.0.0.0").strip()
        self.API_PORT = int(os.getenv("API_PORT", "8000"))
        self.MEDCHAT_API_URL = os.getenv("MEDCHAT_API_URL", "http://localhost:8000").rstrip("/")

    def completion_config(self) -> CompletionConfig:
        return CompletionConfig(
            endpoint=self.AZURE_OPENAI_HOST,
            api_key=self.AZURE_OPENAI_KEY,
            api_key_header=self.MODEL_API_KEY_HEADER,
            timeout=self.MODEL_TIMEOUT,
            max_tokens=self.MODEL_MAX_TOKENS,
        )


settings = Settings()
