"""
Models for AFL Scraper requests, results and logs.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

LogType = Literal['info', 'success', 'warning', 'error']
ScrapeType = Literal['match', 'season']

Row = dict[str, Any]


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class LogEvent(BaseModel):
    """One progress message emitted while scraping."""

    model_config = ConfigDict(frozen=True)

    timestamp: str = Field(default_factory=utc_now_iso)
    type: LogType = 'info'
    message: str


class ScrapeRequest(BaseModel):
    """Validated scrape request."""

    model_config = ConfigDict(populate_by_name=True)

    url: str
    type: ScrapeType
    round_number: int | None = Field(default=None, alias='roundNumber', gt=0)

    @field_validator('url')
    @classmethod
    def url_nonempty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('URL is required')
        return v.strip()

    @field_validator('round_number', mode='before')
    @classmethod
    def blank_round_is_none(cls, v):
        # Blank or zero means all rounds
        if isinstance(v, str):
            v = v.strip()
        if v is None or v in ('', '0', 0):
            return None
        return v


class ScrapeMetadata(BaseModel):
    """Describes what a scrape request produced."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    type: ScrapeType
    timestamp: str = Field(default_factory=utc_now_iso)
    row_count: int = 0
    year: str | None = None
    round_number: int | None = None
    match_count: int | None = None
    success_count: int | None = None


class ScrapeResult(BaseModel):
    """Rows plus metadata and the log of one request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    rows: list[Row]
    metadata: ScrapeMetadata
    logs: list[LogEvent] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Response body for the scrape endpoint."""
        return {
            'success': True,
            'data': self.rows,
            'metadata': self.metadata.model_dump(by_alias=True, exclude_none=True),
            'count': len(self.rows),
            'logs': [e.model_dump() for e in self.logs],
        }


@dataclass(frozen=True)
class Scraped:
    """A match that produced rows."""

    url: str
    rows: list[Row]


@dataclass(frozen=True)
class Skipped:
    """A match that was attempted but contributed nothing."""

    url: str
    reason: str


MatchOutcome = Union[Scraped, Skipped]


@dataclass
class SeasonScrape:
    """Aggregated result of one season scrape."""

    rows: list[Row] = field(default_factory=list)
    outcomes: list[MatchOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Scraped))
