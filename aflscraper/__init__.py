"""
AFL Scraper - statistics tables from AFL Tables match and season pages.

- Season pages (/seas/YYYY.html) expand to match pages, all rounds or one round
- Match pages yield one row per player per statistics table
- Output: row dicts, CSV export, HTTP API
"""

__version__ = '1.0.0'

from aflscraper.adapters import Adapter, AdapterRegistry, find_adapter, registry
from aflscraper.expand import ExpansionError, RoundNotFoundError, YearDetectionError
from aflscraper.fetcher import FetchError, Fetcher, HttpStatusError, RequestTimeoutError
from aflscraper.models import ScrapeRequest, ScrapeResult
from aflscraper.parsers import parse_match_stats, parse_page, parse_player_details
from aflscraper.scraper import ScrapeFailed, SeasonScraper, scrape, scrape_match

__all__ = [
    'Adapter',
    'AdapterRegistry',
    'ExpansionError',
    'FetchError',
    'Fetcher',
    'HttpStatusError',
    'RequestTimeoutError',
    'RoundNotFoundError',
    'ScrapeFailed',
    'ScrapeRequest',
    'ScrapeResult',
    'SeasonScraper',
    'YearDetectionError',
    'find_adapter',
    'parse_match_stats',
    'parse_page',
    'parse_player_details',
    'registry',
    'scrape',
    'scrape_match',
]
