"""
Shared fixtures: canned AFL Tables pages and a fake fetcher.
"""
import pytest

from aflscraper.fetcher import FetchError

SEASON_URL = 'https://afltables.com/afl/seas/2024.html'
GAMES = 'https://afltables.com/afl/stats/games/2024'

SEASON_HTML = """
<html><body>
<table>
  <tr><td><a name="1"></a><b>Round: 1</b></td></tr>
  <tr><td><a href="../stats/games/2024/031420240307.html">Match stats</a></td></tr>
  <tr><td><a href="../teams/richmond_idx.html">Richmond</a></td></tr>
</table>
<table>
  <tr><td><a name="2"></a><b>Round: 2</b></td></tr>
  <tr><td><a href="../stats/games/2024/0A1.html">Match stats</a></td></tr>
  <tr><td><a href="../stats/games/2024/0A2.html">Match stats</a>
          <a href="../stats/games/2024/0A2.html">Richmond v Carlton</a></td></tr>
  <tr><td><a href="../stats/games/2024/0A3.html">Match stats</a></td></tr>
</table>
<table>
  <tr><td><a name="3"></a><b>Round: 3</b></td></tr>
  <tr><td><a href="../stats/games/2024/0B1.html">Match stats</a></td></tr>
</table>
<table>
  <tr><td><a name="4"></a><b>Round: 4</b></td></tr>
  <tr><td><a href="../teams/carlton_idx.html">Carlton</a></td></tr>
</table>
<table>
  <tr><td><a name="5"></a><b>Round: 5</b></td></tr>
  <tr><td><a href="../stats/games/2024/0C1.html">Match stats</a></td></tr>
  <tr><td><a href="../stats/games/2023/0Z9.html">Match stats</a></td></tr>
</table>
</body></html>
"""


def match_stats_table(team: str, players: list[tuple]) -> str:
    """A "Match Statistics" table with # / Player / Kicks / Handballs columns."""
    body = ''.join(
        '<tr>' + ''.join(f'<td>{cell}</td>' for cell in player) + '</tr>'
        for player in players
    )
    return f"""
<table class="sortable">
  <thead>
    <tr><th colspan="4">{team} Match Statistics [Season][Game by Game]</th></tr>
    <tr><th>#</th><th>Player</th><th>Kicks</th><th>Handballs</th></tr>
  </thead>
  <tbody>
    {body}
    <tr><td></td><td>Opposition</td><td>180</td><td>150</td></tr>
    <tr><td colspan="2">Totals</td><td>190</td><td>160</td></tr>
  </tbody>
</table>
"""


def player_details_table(team: str) -> str:
    return f"""
<table class="sortable">
  <thead>
    <tr><th colspan="4">{team} Player Details</th></tr>
    <tr><th>#</th><th>Player</th><th>Age</th><th>Games</th></tr>
  </thead>
  <tbody>
    <tr><td>23</td><td>J. Smith</td><td>24y 100d</td><td>87</td></tr>
    <tr><td>7</td><td>B. Jones</td><td>30y 2d</td><td>210</td></tr>
    <tr><td></td><td>Coach: A. Coach</td><td></td><td></td></tr>
    <tr><td colspan="3">Totals</td><td>297</td></tr>
  </tbody>
</table>
"""


def match_html(home: str = 'Richmond', away: str = 'Carlton') -> str:
    """A match page with two statistics tables of two players each."""
    return (
        '<html><body>'
        + match_stats_table(home, [('23', 'J. Smith', '5', '3'), ('7', 'B. Jones', '12', '8')])
        + match_stats_table(away, [('1', 'C. Brown', '9', '4'), ('2', 'D. White', '', '6')])
        + '</body></html>'
    )


class FakeFetcher:
    """Serves canned pages; unknown URLs fail like a transport error."""

    def __init__(self, pages: dict[str, str]):
        self.pages = pages
        self.calls: list[str] = []

    def get(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise FetchError(f'Failed to fetch {url}: connection refused', url=url)
        return self.pages[url]


@pytest.fixture
def season_fetcher():
    """Season page plus every match page of round 2."""
    return FakeFetcher({
        SEASON_URL: SEASON_HTML,
        f'{GAMES}/0A1.html': match_html('Richmond', 'Carlton'),
        f'{GAMES}/0A2.html': match_html('Geelong', 'Sydney'),
        f'{GAMES}/0A3.html': match_html('Essendon', 'Collingwood'),
    })
