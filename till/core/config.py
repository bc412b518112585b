from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:5000/api"
    API_TOKEN: Optional[str] = None
    # remote backend can be slow on cold start
    HTTP_TIMEOUT: float = 60.0

    PAGE_SIZE: int = 6
    CURRENCY_SYMBOL: str = "R"

    CASHIER_ID: str = ""
    CASHIER_NAME: str = ""

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
