# iproas/core/config.py
# -----------------------------------------------------------------------------
# Global settings (pydantic-settings v2)
# - reads .env and OS environment variables into a Settings object
# - typed defaults for the calculator, logging and the chat proxy
# -----------------------------------------------------------------------------
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # base
    APP_NAME: str = "IP-ROAS Calculator"
    ENV: str = "dev"

    # logging
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    # chat assistant (OpenAI-compatible chat completions, Groq by default)
    GROQ_API_KEY: str | None = None
    GROQ_API_URL: str = "https://api.groq.com/openai/v1/chat/completions"
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    CHAT_TEMPERATURE: float = 0.7
    CHAT_MAX_TOKENS: int = 1024

    # sensitivity charts
    SENSITIVITY_POINTS: int = 50

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore"  # ignore unrelated keys in .env
    )


settings = Settings()
