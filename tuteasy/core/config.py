from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    TUTEASY_API_URL: str = "http://localhost:5000/api"
    TUTEASY_API_TOKEN: str | None = None
    TUTEASY_API_TIMEOUT_SECONDS: float = 10.0

    DEFAULT_LESSON_DURATION_MINUTES: int = 60
    BOOKING_HORIZON_DAYS: int | None = None
    CURRENCY_SYMBOL: str = "£"

    MOCK_SLOT_DELAY_SECONDS: float = 0.0

    @property
    def uses_mock_collaborators(self) -> bool:
        return not self.TUTEASY_API_TOKEN or self.ENV.lower() in {"dev", "local"}


settings = Settings()
