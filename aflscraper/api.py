"""
HTTP API for AFL Scraper.

POST /api/scrape  {"url": ..., "type": "match" | "season", "roundNumber": 2}

Usage:
    uvicorn aflscraper.api:app --host 0.0.0.0 --port 8000
"""
import logging
from datetime import datetime, timezone

from fastapi import Body, FastAPI
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from aflscraper import __version__
from aflscraper.models import LogEvent, ScrapeRequest
from aflscraper.scraper import ScrapeFailed, scrape

logger = logging.getLogger('aflscraper')

app = FastAPI(title='aflscraper', version=__version__)
START = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def _bad_request(error: str, message: str | None = None) -> JSONResponse:
    event = LogEvent(type='error', message=message or error)
    return JSONResponse(status_code=400, content={'error': error, 'logs': [event.model_dump()]})


@app.get('/')
def root():
    return {'service': 'aflscraper', 'status': 'ok', 'start': START}


@app.get('/health')
def health():
    return {'ok': True}


@app.post('/api/scrape')
def scrape_endpoint(payload: dict = Body(...)):
    if not payload.get('url'):
        return _bad_request('URL is required')
    if payload.get('type') not in ('match', 'season'):
        return _bad_request(
            'Invalid type. Use "match" or "season"',
            f"Invalid type: {payload.get('type')}",
        )

    try:
        request = ScrapeRequest.model_validate(payload)
    except ValidationError as e:
        return _bad_request('Invalid request', str(e))

    try:
        result = scrape(request)
    except ScrapeFailed as e:
        logger.error(f'Scraping error: {e}')
        return JSONResponse(
            status_code=500,
            content={
                'error': 'Scraping failed',
                'message': str(e),
                'errorType': type(e.error).__name__,
                'logs': [event.model_dump() for event in e.logs],
            },
        )

    return result.to_payload()
