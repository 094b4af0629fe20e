"""
Configuration management for the Amazon product scraper.
Handles environment variables and scraper settings.
"""
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Scraper configuration loaded from environment variables."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console

    # Request settings
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36",
    )
    DEFAULT_DOMAIN: str = os.getenv("DEFAULT_DOMAIN", "amazon.com")

    # Review pagination
    REVIEW_PAGE_DELAY: float = float(os.getenv("REVIEW_PAGE_DELAY", "2.0"))
    MAX_REVIEW_PAGES: int = int(os.getenv("MAX_REVIEW_PAGES", "10"))
    REVIEWS_PER_PAGE: int = int(os.getenv("REVIEWS_PER_PAGE", "10"))

    # Extra env file read by the CLI (shared with the fabric tool)
    FABRIC_ENV_FILE: str = os.getenv(
        "FABRIC_ENV_FILE",
        str(Path.home() / ".config" / "fabric" / ".env"),
    )

    @classmethod
    def env_files(cls) -> List[Path]:
        """Return the extra env files that exist on this machine."""
        candidates = [Path(cls.FABRIC_ENV_FILE)]
        return [path for path in candidates if path.is_file()]


config = Config()
