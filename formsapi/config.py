from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    ENV_STATE: Optional[str] = None

    """Loads the dotenv file."""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class GlobalConfig(BaseConfig):
    DATABASE_URL: str = "sqlite:///./forms.db"
    DB_FORCE_ROLL_BACK: bool = False
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:3001"]
    # Analytics lookup keys, first present key wins
    ANALYTICS_GENDER_KEYS: List[str] = ["gender", "Gender"]
    ANALYTICS_AGE_KEYS: List[str] = ["age", "Age"]
    # Reject schemas with malformed validation patterns at save time
    STRICT_FIELD_PATTERNS: bool = False
    MAX_FORM_FIELDS: int = 20
    # Requests per client address, in slowapi/limits notation; empty disables
    RATE_LIMIT: str = "100/15minutes"
    RATE_LIMIT_STORAGE_URI: str = "memory://"


class DevConfig(GlobalConfig):
    LOG_LEVEL: str = "DEBUG"
    model_config = SettingsConfigDict(env_prefix="DEV_")


class ProdConfig(GlobalConfig):
    model_config = SettingsConfigDict(env_prefix="PROD_")


class TestConfig(GlobalConfig):
    DATABASE_URL: str = "sqlite:///./test.db"
    DB_FORCE_ROLL_BACK: bool = True
    RATE_LIMIT: str = "50/minute"
    model_config = SettingsConfigDict(env_prefix="TEST_")


@lru_cache()
def get_config(env_state: str):
    """Instantiate config based on the environment."""
    configs = {"dev": DevConfig, "prod": ProdConfig, "test": TestConfig}
    return configs[env_state]()


env_state = BaseConfig().ENV_STATE or "dev"
config = get_config(env_state)
