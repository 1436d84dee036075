from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator, Field
from typing import List, Union


class Settings(BaseSettings):
    """Application settings, read from the environment and .env"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra fields from environment
    )

    # Application
    app_name: str = Field(default="CubeSim API", alias="APP_NAME")
    app_version: str = Field(default="0.2.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    port: int = Field(default=8000, alias="PORT")

    # CORS
    allowed_origins: Union[str, List[str]] = Field(default="", alias="ALLOWED_ORIGINS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if v is None or v == "":
            return []
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    # Cube engine limits
    scramble_length: int = Field(default=20, alias="SCRAMBLE_LENGTH")
    max_scramble_length: int = Field(default=100, alias="MAX_SCRAMBLE_LENGTH")
    max_moves_per_request: int = Field(default=1000, alias="MAX_MOVES_PER_REQUEST")

    # Solver calls are bounded here; the engine itself never times out
    solver_timeout_seconds: float = Field(default=10.0, alias="SOLVER_TIMEOUT_SECONDS")


# Create settings instance
settings = Settings()
