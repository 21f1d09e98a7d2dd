"""
Configuration for AFL Scraper.
"""
from dataclasses import dataclass
import os

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Immutable settings from environment."""

    user_agent: str = os.getenv('USER_AGENT', 'aflscraper/1.0')
    req_timeout_ms: int = int(os.getenv('REQ_TIMEOUT_MS', '30000'))
    sleep_between_ms: int = int(os.getenv('SLEEP_BETWEEN_MS', '500'))
    exports_dir: str = os.getenv('EXPORTS_DIR', 'data/exports')


settings = Settings()
