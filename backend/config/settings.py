from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path

# Get absolute path to backend directory (config/settings.py -> backend/)
_backend_dir = Path(__file__).parent.parent
_env_local = _backend_dir / '.env.local'
_env_file = _backend_dir / '.env'


class Settings(BaseSettings):
    """Application settings"""

    # Database Configuration
    DATABASE_URL: str  # Internal job store connection string (required)
    TEST_DATABASE_URL: str = ""  # PostgreSQL connection string for integration tests - Optional

    # External job source
    EXTERNAL_JOBS_URL: str = "http://localhost:8081"
    EXTERNAL_JOBS_TIMEOUT: float = 10.0  # seconds, per request
    DEFAULT_COUNTRY: str = "Argentina"  # Used when the search carries no countries

    # Internal job store pagination
    INTERNAL_PAGE_SIZE: int = 20

    # CORS - Will be parsed from environment variable string
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    LOG_LEVEL: str = "INFO"

    class Config:
        # Prioritize .env.local for local development, fallback to .env
        # Use absolute paths to avoid working directory issues
        env_file = str(_env_local) if _env_local.exists() else str(_env_file)
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from environment file

    def get_allowed_origins(self) -> List[str]:
        """Parse and return CORS origins as a list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()  # type: ignore[call-arg]  # Pydantic loads from .env
