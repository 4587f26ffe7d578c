"""Settings loaded from environment variables and dotenv files."""

import logging

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Configuration for cfb-loyalty.

    Values are read from environment variables (case-insensitive) and
    optionally from ``.env`` and ``key.env`` in the working directory.
    ``key.env`` wins over ``.env``; real environment variables win over both.
    """

    cfbd_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("cfbd_api_key", "api_key"),
    )
    cfbd_api_base: str = "https://api.collegefootballdata.com"
    cfbd_timeout: float = 30.0

    host: str = "127.0.0.1"
    port: int = 3000

    model_config = {
        "env_file": (".env", "key.env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def has_api_key(self) -> bool:
        return bool(self.cfbd_api_key.strip())


settings = Settings()
