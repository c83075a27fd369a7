"""
Application settings loaded from environment variables.

Settings are read once at startup (after `load_dotenv()` has populated the
environment from `.env`) and validated with pydantic-settings. Anything
missing or malformed is reported in one go through `ConfigurationError`.
"""
from typing import List, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

from starter.exceptions import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True, extra="ignore")

    # --- Database ---
    # Required: the server refuses to start without them

    DB_NAME: str = Field(..., description="Database name (file path for SQLite)")
    DB_USER: str = Field(..., description="Database user")
    DB_PASSWORD: str = Field(..., description="Database password, may be empty")
    DB_HOST: str = Field(..., description="Database host")
    DB_PORT: int = Field(..., ge=1, le=65535, description="Database port")

    DB_DIALECT: str = Field(
        default="postgresql",
        description="SQLAlchemy drivername, e.g. postgresql, postgresql+psycopg, sqlite",
    )
    DB_SYNC: bool = Field(
        default=False,
        description="Create missing tables while verifying the connection",
    )

    # --- Server ---

    HOST: str = Field(default="0.0.0.0", description="Host to bind the listener to")
    PORT: int = Field(default=3000, ge=1, le=65535, description="Port to bind the listener to")

    ENVIRONMENT: Literal["development", "test", "production"] = "development"
    DEBUG: bool = False

    @property
    def database_url(self) -> URL:
        """SQLAlchemy URL assembled from the DB_* parts"""
        if self.DB_DIALECT.startswith("sqlite"):
            return URL.create(self.DB_DIALECT, database=self.DB_NAME)
        return URL.create(
            self.DB_DIALECT,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
        )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


def load_settings(**overrides) -> Settings:
    """
    Build the settings record, failing fast on missing or invalid variables.

    Keyword overrides take precedence over the environment (handy for tests
    and scripts).
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        missing: List[str] = []
        invalid: List[str] = []
        for error in e.errors():
            name = str(error["loc"][0]) if error["loc"] else "<settings>"
            if error["type"] == "missing":
                missing.append(name)
            else:
                invalid.append(name)
        raise ConfigurationError(missing=missing, invalid=invalid) from e
