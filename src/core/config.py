"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Required env vars (no defaults):
        POSTGRES_USER, POSTGRES_PASSWORD, POSTGRES_HOST, POSTGRES_DB

    Optional env vars:
        POSTGRES_PORT (5432), LOG_LEVEL (INFO), chunking and search tuning
        values listed below.
    """

    PROJECT_NAME: str = "Pulse One"

    # Database
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_HOST: str
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str

    # Chunking (characters). Empirical tuning values, not derived limits.
    CHUNK_SIZE: int = 1000
    CHUNK_OVERLAP: int = 200
    SHORT_DOCUMENT_THRESHOLD: int = 500
    MIN_PARAGRAPH_LENGTH: int = 20
    MIN_SECTION_LENGTH: int = 50

    # Chunk post-processing
    MIN_CHUNK_LENGTH: int = 30
    REPETITIVE_MIN_UNIQUE_CHARS: int = 10
    REPETITIVE_MIN_LENGTH: int = 100
    MAX_URL_RATIO: float = 0.5

    # Search
    DEFAULT_MAX_RESULTS: int = 5
    CONTEXT_MAX_SOURCES: int = 3

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def DATABASE_URL(self) -> str:
        """Async PostgreSQL connection string using asyncpg driver."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()  # type: ignore[call-arg]
