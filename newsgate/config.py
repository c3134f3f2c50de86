import logging

from pydantic_settings import BaseSettings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class GatewaySettings(BaseSettings):
    NEWS_SOURCE_URL: str = "http://news-source:8083"
    COMMENT_STORE_URL: str = "http://comment-store:8081"
    MODERATOR_URL: str = "http://moderator:8082"

    # Deadlines (seconds)
    REQUEST_TIMEOUT: float = 30.0
    DOWNSTREAM_TIMEOUT: float = 10.0

    # Pagination / input limits
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    MAX_SEARCH_LENGTH: int = 100

    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


class CommentStoreSettings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./comments.db"
    DEBUG: bool = False

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


class ModeratorSettings(BaseSettings):
    BANNED_TERMS: list[str] = ["qwerty", "йцукен", "zxvbnm"]
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


class NewsSourceSettings(BaseSettings):
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


def configure_logging(level: str) -> None:
    """Install a root handler once; later calls only adjust the level."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
