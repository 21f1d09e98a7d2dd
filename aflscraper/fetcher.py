"""
HTTP fetcher for AFL Scraper.

One GET per call, bounded by a total deadline. Retry policy lives with the caller.
"""
import socket
import threading
import time

import httpx

from aflscraper.config import settings
from aflscraper.logs import log_event


ACCEPT_HTML = 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'


class FetchError(Exception):
    """Transport-level fetch failure."""

    def __init__(self, message: str, url: str | None = None, cause: Exception | None = None):
        super().__init__(message)
        self.url = url
        self.cause = cause


class HttpStatusError(FetchError):
    """Response arrived with a non-success status."""

    def __init__(self, status_code: int, reason: str, url: str | None = None):
        super().__init__(f'HTTP {status_code}: {reason}', url=url)
        self.status_code = status_code
        self.reason = reason


class RequestTimeoutError(FetchError, TimeoutError):
    """No response within the configured timeout."""

    def __init__(self, timeout_ms: int, url: str | None = None):
        super().__init__(f'Request timeout after {timeout_ms}ms', url=url)
        self.timeout_ms = timeout_ms


class _Deadline:
    """
    Total deadline for one request.

    When the timer fires, the connection's socket is shut down so a blocked
    read returns at once. The socket is picked up from httpx trace events.
    """

    def __init__(self, seconds: float):
        self.expires_at = time.monotonic() + seconds
        self.fired = False
        self._sock = None
        self._timer = threading.Timer(seconds, self._fire)
        self._timer.daemon = True
        self._timer.start()

    @property
    def passed(self) -> bool:
        return self.fired or time.monotonic() >= self.expires_at

    def trace(self, event_name: str, info: dict) -> None:
        if event_name in ('connection.connect_tcp.complete', 'connection.start_tls.complete'):
            stream = info.get('return_value')
            if stream is not None:
                self._sock = stream.get_extra_info('socket')
                if self.fired:
                    self._shutdown()

    def _fire(self) -> None:
        self.fired = True
        self._shutdown()

    def _shutdown(self) -> None:
        sock = self._sock
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass  # already closed

    def cancel(self) -> None:
        self._timer.cancel()


class Fetcher:
    """
    Fetch raw page text over HTTP.

    The timeout is a deadline for the whole request: connecting, headers and
    body. With a client passed in, the body deadline is checked between chunks.

    Args:
        timeout_ms: Deadline for a single request, in milliseconds
        user_agent: Client identifier sent with every request
        client: Optional pre-built httpx.Client (tests pass one with a mock transport)
    """

    def __init__(
        self,
        timeout_ms: int = settings.req_timeout_ms,
        user_agent: str = settings.user_agent,
        client: httpx.Client | None = None,
    ):
        self.timeout_ms = timeout_ms
        self._owns_client = client is None
        # No keep-alive: every request opens its own connection for the deadline to cut
        self.client = client or httpx.Client(
            follow_redirects=True,
            limits=httpx.Limits(max_keepalive_connections=0),
        )
        self.headers = {
            'User-Agent': user_agent,
            'Accept': ACCEPT_HTML,
        }

    def get(self, url: str) -> str:
        """Fetch URL and return the response body as text."""
        start = time.monotonic()
        deadline = _Deadline(self.timeout_ms / 1000)
        try:
            with self.client.stream(
                'GET',
                url,
                headers=self.headers,
                timeout=self.timeout_ms / 1000,
                extensions={'trace': deadline.trace},
            ) as response:
                elapsed_ms = int((time.monotonic() - start) * 1000)
                log_event(event='fetch', url=url, status=response.status_code, ms=elapsed_ms)

                if not response.is_success:
                    raise HttpStatusError(
                        response.status_code,
                        response.reason_phrase or 'No response',
                        url=url,
                    )
                return self._read_text(response, deadline, url)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(self.timeout_ms, url=url) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            if deadline.passed:
                raise RequestTimeoutError(self.timeout_ms, url=url) from e
            raise FetchError(f'Failed to fetch {url}: {e}', url=url, cause=e) from e
        finally:
            deadline.cancel()

    def _read_text(self, response: httpx.Response, deadline: _Deadline, url: str) -> str:
        chunks = []
        for chunk in response.iter_bytes():
            if deadline.passed:
                raise RequestTimeoutError(self.timeout_ms, url=url)
            chunks.append(chunk)
        return b''.join(chunks).decode(response.encoding or 'utf-8', errors='replace')

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> 'Fetcher':
        return self

    def __exit__(self, *exc) -> None:
        self.close()
