from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    APP_NAME: str = "Measurebot API"
    PORT: int = 3000
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"

    # Slack
    SLACK_SIGNING_SECRET: str = ""
    SLACK_BOT_TOKEN: str = ""
    SLACK_EVENTS_PATH: str = "/slack/events"

    # LLM providers
    LLM_PROVIDER: str = "openai"  # or "ollama"
    OPENAI_API_KEY: str = ""
    OPENAI_API_URL: str = "https://api.openai.com/v1/chat/completions"
    OPENAI_MODEL: str = "gpt-4"
    OLLAMA_HOST: str = "http://ollama:11434"
    OLLAMA_MODEL: str = "gemma:2b"
    LLM_TIMEOUT: float = 120

    # DB
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_DATABASE: str = "postgres"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DATABASE_URL: str | None = None

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def database_url(self):
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return URL.create(
            "postgresql+asyncpg",
            username=self.DB_USER,
            password=self.DB_PASSWORD or None,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_DATABASE,
        )

    @property
    def slack_enabled(self) -> bool:
        return bool(self.SLACK_BOT_TOKEN and self.SLACK_SIGNING_SECRET)

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
