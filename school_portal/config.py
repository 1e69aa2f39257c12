from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./portal.db"
    REDIS_URL: str = "redis://localhost:6379/0"
    STORE_BACKEND: str = "sql"  # sql | redis | memory
    SECRET_KEY: str = "dev-secret-portal"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_MINUTES: int = 480
    LOG_LEVEL: str = "INFO"
    RATE_LIMIT_PER_MINUTE: int = 10

    # интервалы опроса хранилища, секунды
    CHAT_POLL_SECONDS: float = 2.0
    ATTENDANCE_POLL_SECONDS: float = 3.0
    METRICS_POLL_SECONDS: float = 5.0

    GOOGLE_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
