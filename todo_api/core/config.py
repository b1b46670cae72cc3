from pydantic_settings import BaseSettings
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    # Database settings (no default: the service refuses to start without one)
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False

    # JWT settings
    SECRET_KEY: str = "your-super-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30

    # Server settings
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGIN: str = "*"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Project settings
    PROJECT_NAME: str = "Todo Planner API"
    API_V1_STR: str = "/api/v1"

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGIN.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        # Variables in .env that aren't defined here are ignored
        extra = "ignore"


settings = Settings()
