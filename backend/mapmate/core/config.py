from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Storage mode: "mongodb" or "local"
    STORAGE_MODE: str = "mongodb"

    # MongoDB Configuration (only needed if STORAGE_MODE=mongodb)
    MONGO_URI: str = ""
    MONGO_DB_NAME: str = "mapmate_db"

    # Local JSON storage (only used if STORAGE_MODE=local)
    LOCAL_DATA_DIR: str = "data"

    LOGGER: int = 20

    # LLM Provider Selection
    LLM_PROVIDER: str = "openai"  # Options: openai, groq, mistral
    LLM_BASE_URL: Optional[str] = None
    OPENAI_API_KEY: str = ""
    OPENAI_MODEL: str = "gpt-3.5-turbo"

    # Google Maps
    GOOGLE_MAPS_API_KEY: str = ""
    MAPS_BASE_URL: str = "https://maps.googleapis.com"

    # Search radii in meters, one per endpoint
    PAGE_SEARCH_RADIUS_M: int = 5000
    GRID_POINT_RADIUS_M: int = 1000
    BUSINESS_SEARCH_RADIUS_M: int = 16093  # 10 miles

    # Aggregation limits
    MAX_PAGES: int = 3
    PAGE_DELAY_SECONDS: float = 2.0
    GRID_RESULT_CAP: int = 100
    HTTP_TIMEOUT_SECONDS: float = 20.0

    # Auth tokens
    JWT_SECRET: str = ""
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60

    # Web
    PORT: int = 3004
    CORS_ORIGINS: List[str] = ["*"]
    STATIC_DIR: Optional[str] = None

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def missing_secrets(self) -> list[str]:
        """Names of the required secrets that are not configured."""
        required = ["OPENAI_API_KEY", "GOOGLE_MAPS_API_KEY", "JWT_SECRET"]
        if self.STORAGE_MODE == "mongodb":
            required.append("MONGO_URI")
        return [name for name in required if not getattr(self, name)]

settings = Settings()
