# core/config.py

from typing import Literal, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Loads application settings from .env file."""
    mongo_uri: Optional[str] = None
    mongo_user: Optional[str] = None
    mongo_password: Optional[str] = None
    mongo_host: str = "localhost"
    mongo_port: int = 27017
    mongo_db_name: str = "kisan_advisor_db"

    # Profile storage
    storage_backend: Literal["mongo", "memory"] = "mongo"
    storage_key_prefix: str = "sk_user_"

    # AI collaborator
    openai_api_key: Optional[str] = None
    chat_model: str = "gpt-4o-mini"
    reasoning_model: str = "gpt-4o"

    weather_api_url: str = "https://api.open-meteo.com/v1/forecast"

    @property
    def final_mongo_uri(self) -> str:
        """Constructs safe MongoDB URI from components (preferred) or returns the provided one."""
        if self.mongo_user and self.mongo_password:
            import urllib.parse
            user = urllib.parse.quote_plus(self.mongo_user)
            password = urllib.parse.quote_plus(self.mongo_password)
            return f"mongodb+srv://{user}:{password}@{self.mongo_host}/"

        if self.mongo_uri:
            return self.mongo_uri

        return f"mongodb://{self.mongo_host}:{self.mongo_port}/"

    class Config:
        env_file = ".env"

# Create a single, reusable instance of the settings
settings = Settings()
