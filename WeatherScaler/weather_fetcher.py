"""HTTP fetcher for the weather provider endpoint."""
import logging
import threading
import time
from typing import Optional

import requests
from requests.adapters import HTTPAdapter

from weather_scaler_base import FetchFailed, ReadFailed

logger = logging.getLogger(__name__)

# larger reads block until the chunk is full, outliving the deadline
READ_CHUNK_SIZE = 1

_default_client: Optional[requests.Session] = None
_default_client_lock = threading.Lock()


def create_http_client(pool_maxsize: int = 10) -> requests.Session:
    """Create a pooled session that can be shared by concurrent scalers."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_maxsize, pool_maxsize=pool_maxsize)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def default_http_client() -> requests.Session:
    """Return the process-wide session, creating it on first use."""
    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = create_http_client()
        return _default_client


class WeatherFetcher:
    """
    Issues one GET per call against a resolved weather URL.

    The timeout is applied to every request since requests.Session has no
    session-wide timeout. requests only bounds each socket operation with it,
    so fetch() also keeps a deadline for the whole exchange and gives up on
    a body that is still arriving when the deadline passes.
    """

    def __init__(self, session: requests.Session, url: str, timeout: float):
        """
        Initialize the fetcher.

        Args:
            session: Shared HTTP session
            url: Fully resolved provider URL (contains the API key)
            timeout: Request timeout in seconds
        """
        self.session = session
        self.url = url
        self.timeout = timeout

    def fetch(self) -> bytes:
        """
        Fetch the raw response body. No retries.

        Returns:
            bytes: Response body, whatever the status code

        Raises:
            FetchFailed: If the request could not be made
            ReadFailed: If the body could not be read before the deadline
        """
        deadline = time.monotonic() + self.timeout
        try:
            response = self.session.get(self.url, timeout=self.timeout, stream=True)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error getting weather data: {type(e).__name__}")
            raise FetchFailed(f"Error getting weather data: {e}") from e

        with response:
            logger.debug(f"Weather API response status: {response.status_code}")
            if not response.ok:
                logger.warning(f"Weather API returned HTTP {response.status_code}")
            body = bytearray()
            try:
                for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
                    body.extend(chunk)
                    if time.monotonic() > deadline:
                        logger.error(f"Weather response not read within {self.timeout}s")
                        raise ReadFailed(
                            f"Error reading weather response body: "
                            f"not complete within {self.timeout}s"
                        )
            except requests.exceptions.RequestException as e:
                logger.error(f"Error reading weather response body: {type(e).__name__}")
                raise ReadFailed(f"Error reading weather response body: {e}") from e
            return bytes(body)
