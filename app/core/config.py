from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL
from typing import Optional, List
import os

class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Clinic Appointment Scheduler"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    TESTING: bool = os.getenv("TESTING", "0").lower() in ("1", "true", "t", "yes", "y")
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = int(os.getenv("PORT", "3000"))

    # Database - a single URI (hosted deployments) wins over the DB_* parts
    DATABASE_URL: Optional[str] = None
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: Optional[str] = None
    DB_DATABASE: str = "appointments"
    TEST_DATABASE_URL: str = os.getenv(
        "TEST_DATABASE_URL",
        "sqlite:///./test.db"
    )

    # Tables are normally managed outside this service
    AUTO_CREATE_TABLES: bool = False
    SEED_DEFAULTS: bool = True

    # CORS
    ALLOWED_ORIGINS: List[str] = ["*"]

    @property
    def get_database_url(self) -> str:
        """Return the database URL for the current environment."""
        if self.TESTING:
            return self.TEST_DATABASE_URL
        if self.DATABASE_URL:
            return normalize_database_url(self.DATABASE_URL)
        return URL.create(
            "mysql+pymysql",
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_DATABASE,
        ).render_as_string(hide_password=False)

    class Config:
        env_file = ".env"
        case_sensitive = True


def normalize_database_url(url: str) -> str:
    """Map bare provider schemes onto the drivers SQLAlchemy should use."""
    if url.startswith("mysql://"):
        return "mysql+pymysql://" + url[len("mysql://"):]
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url

# Create settings instance
settings = Settings()
