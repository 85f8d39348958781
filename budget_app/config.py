from dotenv import load_dotenv
from pydantic import BaseModel
from typing import List
import os

# Load .env automatically
load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseModel):
    environment: str = os.getenv("ENVIRONMENT", "development")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./budget_app.db")
    sql_echo: bool = os.getenv("SQL_ECHO", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    cors_origins: List[str] = _split_origins(
        os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173")
    )
    default_buffer_goal_weeks: float = float(os.getenv("DEFAULT_BUFFER_GOAL_WEEKS", "4"))


# Global settings instance
settings = Settings()
