"""
Season page expansion: turn a season URL into the match URLs it lists.

Season URL pattern: .../seas/{year}.html
Match URL pattern:  .../stats/games/{year}/{id}.html
"""
import enum
import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup

SEASON_YEAR_RE = re.compile(r'/seas/(\d{4})\.html$')
MATCH_LINK_LABEL = 'Match stats'


class ExpansionError(Exception):
    """Season page could not be expanded into match URLs."""
    pass


class YearDetectionError(ExpansionError):
    """Season URL does not end in /seas/{year}.html."""

    def __init__(self, url: str):
        super().__init__(f'Cannot detect year from {url}')
        self.url = url


class RoundNotFoundError(ExpansionError):
    """Round anchor missing, or present with no match links after it."""

    def __init__(self, round_number: int, url: str):
        super().__init__(f'Round {round_number} not found in {url}')
        self.round_number = round_number
        self.url = url


class _Scan(enum.Enum):
    BEFORE_ANCHOR = 'before-anchor'
    COLLECTING = 'collecting'
    DONE = 'done'


def extract_year(url: str) -> str | None:
    """Return the 4-digit season year from a season URL, or None."""
    match = SEASON_YEAR_RE.search(url)
    return match.group(1) if match else None


def _append_unique(links: list[str], seen: set[str], url: str) -> None:
    if url not in seen:
        seen.add(url)
        links.append(url)


def collect_all_match_links(html: str, season_url: str, year: str) -> list[str]:
    """Every match link for the season, deduplicated, in document order."""
    soup = BeautifulSoup(html, 'lxml')
    pattern = re.compile(rf'/stats/games/{re.escape(year)}/[A-Za-z0-9]+\.html$')
    links: list[str] = []
    seen: set[str] = set()

    for a in soup.find_all('a', href=True):
        href = a['href']
        if pattern.search(href):
            _append_unique(links, seen, urljoin(season_url, href))

    return links


def collect_round_match_links(html: str, season_url: str, round_number: int) -> list[str]:
    """
    Match links for one round.

    The round starts at the first <a name="{round_number}"> and ends before the
    next anchor with a different name. Only links labelled "Match stats" count.

    Raises:
        RoundNotFoundError: no anchor for the round
    """
    soup = BeautifulSoup(html, 'lxml')
    name = str(round_number)

    if soup.find('a', attrs={'name': name}) is None:
        raise RoundNotFoundError(round_number, season_url)

    links: list[str] = []
    seen: set[str] = set()
    state = _Scan.BEFORE_ANCHOR

    for a in soup.find_all('a'):
        anchor_name = a.get('name')

        if state is _Scan.BEFORE_ANCHOR:
            if anchor_name == name:
                state = _Scan.COLLECTING
            continue

        if anchor_name and anchor_name != name:
            state = _Scan.DONE
            break

        href = a.get('href')
        if href and '/stats/games/' in href and a.get_text().strip() == MATCH_LINK_LABEL:
            _append_unique(links, seen, urljoin(season_url, href))

    return links


def expand_season_page(season_url: str, fetcher, round_number: int | None = None) -> list[str]:
    """
    Fetch a season page and expand it into match URLs.

    Args:
        season_url: URL ending in /seas/{year}.html
        fetcher: Object with get(url) -> str
        round_number: Restrict to one round (None for all rounds)

    Returns:
        Absolute match URLs in document order

    Raises:
        YearDetectionError: URL has no season year (checked before fetching)
        RoundNotFoundError: round anchor missing or empty
    """
    year = extract_year(season_url)
    if not year:
        raise YearDetectionError(season_url)

    html = fetcher.get(season_url)

    if round_number is not None:
        urls = collect_round_match_links(html, season_url, round_number)
        if not urls:
            raise RoundNotFoundError(round_number, season_url)
        return urls

    return collect_all_match_links(html, season_url, year)
