from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    jwt_secret_key: str = Field(..., alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(15, alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # Used when an exercise does not define its own sub-account code length
    default_subaccount_code_length: int = Field(10, alias="DEFAULT_SUBACCOUNT_CODE_LENGTH")
    max_subaccount_suffix: int = Field(999, alias="MAX_SUBACCOUNT_SUFFIX")
    allocation_max_retries: int = Field(3, alias="ALLOCATION_MAX_RETRIES")

    search_result_limit: int = Field(20, alias="SEARCH_RESULT_LIMIT")
    search_code_match_limit: int = Field(15, alias="SEARCH_CODE_MATCH_LIMIT")

    default_tax_code: Optional[str] = Field(None, alias="DEFAULT_TAX_CODE")

    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_format: str = Field("console", alias="LOG_FORMAT")  # console | json
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
