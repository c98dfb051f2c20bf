import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()  # Load environment variables from .env file


class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DB_POOL_SIZE: int = 1  # small fixed pool, the app runs behind a serverless-style host
    DB_MAX_OVERFLOW: int = 0

    # Generative AI
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY")
    GEMINI_MODEL: str = "gemini-2.0-flash-001"
    AI_MAX_INPUT_TOKENS: int = 8000

    # Tokens issued by the external auth provider
    ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: Optional[str] = os.getenv("JWT_SECRET_KEY")  # should be kept secret
    JWT_AUDIENCE: Optional[str] = "authenticated"

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]


settings = Settings()
