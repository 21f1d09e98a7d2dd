"""
AFL Scraper - match and season scraping.

A season scrape expands the season page into match URLs, then scrapes each
match in turn with a pause between requests. A failing match is logged and
skipped; a failing expansion aborts the whole season.
"""
import logging
import time
from typing import Callable, Optional, Union

from aflscraper.adapters import AdapterRegistry, registry as default_registry
from aflscraper.config import settings
from aflscraper.expand import RoundNotFoundError, YearDetectionError, extract_year
from aflscraper.fetcher import Fetcher
from aflscraper.logs import LogCallback, ScrapeLog, log_event
from aflscraper.models import (
    LogEvent,
    MatchOutcome,
    Row,
    ScrapeMetadata,
    ScrapeRequest,
    ScrapeResult,
    Scraped,
    SeasonScrape,
    Skipped,
)

logger = logging.getLogger('aflscraper')


class ScrapeFailed(Exception):
    """A scrape request failed. Carries the log up to the failure."""

    def __init__(self, error: Exception, logs: list[LogEvent]):
        super().__init__(str(error))
        self.error = error
        self.logs = logs


def expand_season(
    season_url: str,
    fetcher,
    round_number: Optional[int] = None,
    registry: AdapterRegistry = default_registry,
) -> list[str]:
    """Expand a season URL into match URLs using the matching adapter."""
    adapter = registry.resolve(season_url)
    return adapter.expand_url(season_url, fetcher, round_number)


def scrape_match(url: str, fetcher, registry: AdapterRegistry = default_registry) -> list[Row]:
    """Fetch and parse one match page. Errors propagate to the caller."""
    html = fetcher.get(url)
    adapter = registry.resolve(url)
    return adapter.parse_page(html, url)


class SeasonScraper:
    """
    Sequential season scraper.

    Args:
        fetcher: Object with get(url) -> str (a Fetcher is created if omitted)
        sleep_between_ms: Pause between consecutive match requests
        log: ScrapeLog or (message, type) callback for progress messages
        registry: Adapter registry used for expansion and parsing
        sleep: Sleep function, seconds
    """

    def __init__(
        self,
        fetcher=None,
        sleep_between_ms: int = settings.sleep_between_ms,
        log: Union[ScrapeLog, LogCallback, None] = None,
        registry: AdapterRegistry = default_registry,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or Fetcher()
        self.sleep_between_ms = sleep_between_ms
        self.log = log if isinstance(log, ScrapeLog) else ScrapeLog(log)
        self.registry = registry
        self._sleep = sleep

    def run(self, season_url: str, round_number: Optional[int] = None) -> SeasonScrape:
        """
        Scrape every match of a season (or of one round).

        Returns:
            SeasonScrape with rows in match order and one outcome per match

        Raises:
            ExpansionError, FetchError: season page could not be expanded
        """
        try:
            return self._run(season_url, round_number)
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

    def _run(self, season_url: str, round_number: Optional[int]) -> SeasonScrape:
        self.log(f'Fetching season page: {season_url}')
        try:
            match_urls = expand_season(season_url, self.fetcher, round_number, self.registry)
        except Exception as e:
            self.log(f'Fatal error scraping season: {e}', 'error')
            raise

        result = SeasonScrape()
        if not match_urls:
            self.log('No match URLs found in season page', 'warning')
            return result

        total = len(match_urls)
        self.log(f'Found {total} match URLs to scrape')

        for i, match_url in enumerate(match_urls, start=1):
            if i > 1:
                self._sleep(self.sleep_between_ms / 1000)

            self.log(f'[{i}/{total}] Scraping: {match_url}')
            outcome = self._scrape_one(i, match_url)
            result.outcomes.append(outcome)
            if isinstance(outcome, Scraped):
                result.rows.extend(outcome.rows)

        self.log(
            f'Season scraping complete: {result.success_count}/{total} matches successful, '
            f'{len(result.rows)} total rows',
            'success',
        )
        log_event(
            event='season_done',
            url=season_url,
            round=round_number,
            matches=total,
            ok=result.success_count,
            rows=len(result.rows),
        )
        return result

    def _scrape_one(self, index: int, match_url: str) -> MatchOutcome:
        try:
            rows = scrape_match(match_url, self.fetcher, self.registry)
        except Exception as e:  # noqa: BLE001
            logger.debug(f'Match {match_url} failed', exc_info=True)
            self.log(f'Error processing match {index}: {e}', 'error')
            return Skipped(match_url, str(e))

        if not rows:
            self.log(f'No data extracted from match {index}', 'warning')
            return Skipped(match_url, 'no rows')

        self.log(f'Successfully scraped {len(rows)} rows from match {index}', 'success')
        return Scraped(match_url, rows)


def scrape(
    request: ScrapeRequest,
    log: Optional[LogCallback] = None,
    fetcher=None,
    sleep_between_ms: int = settings.sleep_between_ms,
    registry: AdapterRegistry = default_registry,
    sleep: Callable[[float], None] = time.sleep,
) -> ScrapeResult:
    """
    Run one scrape request.

    Args:
        request: What to scrape
        log: Optional (message, type) callback, called for every log entry
        fetcher: Object with get(url) -> str (a Fetcher is created if omitted)
        sleep_between_ms: Pause between match requests of a season
        registry: Adapter registry
        sleep: Sleep function, seconds

    Returns:
        ScrapeResult with rows, metadata and the full log

    Raises:
        ScrapeFailed: wraps the underlying error with the log so far
    """
    scrape_log = ScrapeLog(log)
    scrape_log(f'Starting scrape: {request.type} - {request.url}')

    owns_fetcher = fetcher is None
    fetcher = fetcher or Fetcher()
    meta: dict = {}

    try:
        if request.type == 'match':
            scrape_log(f'Parsing match data from {request.url}...')
            rows = scrape_match(request.url, fetcher, registry)
            meta['match_count'] = 1
            scrape_log(f'Successfully scraped {len(rows)} rows', 'success')
        else:
            round_number = request.round_number
            suffix = f' (Round {round_number})' if round_number is not None else ''
            scrape_log(f'Expanding season to match URLs{suffix}...')
            season = SeasonScraper(
                fetcher,
                sleep_between_ms=sleep_between_ms,
                log=scrape_log,
                registry=registry,
                sleep=sleep,
            ).run(request.url, round_number)
            rows = season.rows
            meta.update(
                year=extract_year(request.url),
                round_number=round_number,
                match_count=season.total,
                success_count=season.success_count,
            )
            scrape_log(f'Successfully scraped {len(rows)} rows from season', 'success')
    except Exception as e:
        scrape_log(f'Error scraping {request.type}: {e}', 'error')
        if isinstance(e, YearDetectionError):
            scrape_log('Tip: Season URL should match pattern: /seas/YYYY.html', 'info')
        elif isinstance(e, RoundNotFoundError):
            scrape_log('Tip: Check if the round number exists in the season page', 'info')
        raise ScrapeFailed(e, scrape_log.events) from e
    finally:
        if owns_fetcher:
            fetcher.close()

    metadata = ScrapeMetadata(url=request.url, type=request.type, row_count=len(rows), **meta)
    return ScrapeResult(rows=rows, metadata=metadata, logs=scrape_log.events)
