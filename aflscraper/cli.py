"""
CLI entrypoints for AFL Scraper.

Usage:
    python -m aflscraper.cli match https://afltables.com/afl/stats/games/2024/031420240307.html
    python -m aflscraper.cli season https://afltables.com/afl/seas/2024.html --round 2
"""
import argparse
import logging
import sys

from aflscraper.export import to_csv
from aflscraper.models import ScrapeRequest
from aflscraper.scraper import ScrapeFailed, scrape

logger = logging.getLogger('aflscraper')


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def run(request: ScrapeRequest, out: str | None = None, sleep_between_ms: int | None = None) -> int:
    """
    Run a scrape and export the rows to CSV.

    Returns:
        Number of rows scraped
    """
    kwargs = {}
    if sleep_between_ms is not None:
        kwargs['sleep_between_ms'] = sleep_between_ms

    try:
        result = scrape(request, **kwargs)
    except ScrapeFailed as e:
        logger.error(f'Scrape failed: {e}')
        return 0

    if not result.rows:
        logger.error(f'No rows scraped from {request.url}')
        return 0

    name = request.type
    if result.metadata.year:
        name = f'season_{result.metadata.year}'
        if result.metadata.round_number is not None:
            name += f'_round_{result.metadata.round_number}'
    path = to_csv(result.rows, out, name=name)
    logger.info(f'Exported {len(result.rows)} rows to {path}')
    return len(result.rows)


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog='aflscraper',
        description='AFL Tables statistics scraper',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    match_parser = subparsers.add_parser('match', help='Scrape a single match page')
    match_parser.add_argument('url', help='Match page URL')
    match_parser.add_argument('--out', help='CSV output path')

    season_parser = subparsers.add_parser('season', help='Scrape every match of a season')
    season_parser.add_argument('url', help='Season page URL (.../seas/YYYY.html)')
    season_parser.add_argument('--round', type=int, dest='round_number', help='Only this round')
    season_parser.add_argument('--sleep', type=int, dest='sleep_ms', help='Pause between matches (ms)')
    season_parser.add_argument('--out', help='CSV output path')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'match':
        request = ScrapeRequest(url=args.url, type='match')
        count = run(request, out=args.out)
    else:
        request = ScrapeRequest(url=args.url, type='season', round_number=args.round_number)
        count = run(request, out=args.out, sleep_between_ms=args.sleep_ms)

    print(f'Scraped {args.command} {args.url}: {count} rows')
    sys.exit(0 if count > 0 else 1)


if __name__ == '__main__':
    main()
