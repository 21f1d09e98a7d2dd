"""
HTML table parsers for AFL Tables match pages.

Statistics tables are <table class="sortable"> whose <thead> has a banner cell
(th[colspan]) such as "Richmond Match Statistics", followed by a row of column
headers. Each <tbody> row is one player.
"""
import re
from dataclasses import dataclass
from typing import Any, Iterable

from bs4 import BeautifulSoup

from aflscraper.models import Row

AGGREGATE_MARKER = 'Totals'
IDENTITY_COLUMNS = ('#', 'Player', 'Team', 'SourceURL')

# Leading numeric literal, so "24y 100d" reads as 24
_NUMBER_PREFIX_RE = re.compile(r'\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?')
_INT_RE = re.compile(r'^[-+]?\d+$')


@dataclass(frozen=True)
class TableSchema:
    """Banner marker identifying a table kind, and the row marker for non-player rows."""

    marker: str
    non_player_marker: str


MATCH_STATISTICS = TableSchema('Match Statistics', 'Opposition')
PLAYER_DETAILS = TableSchema('Player Details', 'Coach')
TABLE_SCHEMAS = (MATCH_STATISTICS, PLAYER_DETAILS)


def _clean_cell(text: str) -> str:
    return text.strip().replace('\xa0', '')


def _to_number(value: Any) -> Any:
    """Convert a string starting with a number to int/float; anything else is returned unchanged."""
    if not isinstance(value, str) or value == '':
        return value
    match = _NUMBER_PREFIX_RE.match(value)
    if match is None:
        return value
    literal = match.group(0).strip()
    if _INT_RE.match(literal):
        return int(literal)
    return float(literal)


def coerce_numeric(rows: list[Row]) -> list[Row]:
    """
    Convert numeric-looking cells in place.

    Numeric columns are taken from the first row's keys, minus the identity
    columns, and applied to every row. Safe to call more than once.
    """
    if not rows:
        return rows

    numeric_columns = [col for col in rows[0] if col not in IDENTITY_COLUMNS]
    for row in rows:
        for col in numeric_columns:
            if col in row:
                row[col] = _to_number(row[col])
    return rows


def _parse_table(table, url: str, schemas: Iterable[TableSchema]) -> list[Row]:
    header_cell = table.select_one('thead th[colspan]')
    if header_cell is None:
        return []

    header_text = header_cell.get_text().strip()
    schema = next((s for s in schemas if s.marker in header_text), None)
    if schema is None:
        return []

    team = header_text.split(schema.marker)[0].strip()

    header_rows = table.select('thead tr')
    if len(header_rows) < 2:
        return []
    columns = [th.get_text().strip() for th in header_rows[1].find_all('th')]

    rows: list[Row] = []
    for tr in table.select('tbody tr'):
        text = tr.get_text()
        if AGGREGATE_MARKER in text or schema.non_player_marker in text:
            continue

        cells = [_clean_cell(td.get_text()) for td in tr.find_all('td')]
        if cells:
            cells[0] = re.sub(r'\D', '', cells[0])

        # Rows that don't line up with the header are dropped
        if len(cells) != len(columns):
            continue

        row: Row = dict(zip(columns, cells))
        row['Team'] = team
        row['SourceURL'] = url
        rows.append(row)

    return rows


def parse_page(html: str, url: str, schemas: Iterable[TableSchema] = TABLE_SCHEMAS) -> list[Row]:
    """
    Parse every statistics table on a page.

    Args:
        html: Page markup
        url: Source URL, copied into each row as SourceURL
        schemas: Table kinds to accept

    Returns:
        Rows in table order then row order, numeric columns converted
    """
    soup = BeautifulSoup(html, 'lxml')
    schemas = tuple(schemas)
    results: list[Row] = []

    for table in soup.select('table.sortable'):
        results.extend(_parse_table(table, url, schemas))

    return coerce_numeric(results)


def parse_match_stats(html: str, url: str) -> list[Row]:
    """Player-level rows from "Match Statistics" tables."""
    return parse_page(html, url, schemas=(MATCH_STATISTICS,))


def parse_player_details(html: str, url: str) -> list[Row]:
    """Age, career games and similar rows from "Player Details" tables."""
    return parse_page(html, url, schemas=(PLAYER_DETAILS,))
