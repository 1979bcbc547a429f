"""
HTTP lookups of single bins, one non-blocking task per bin id
"""
import asyncio
import time
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

import httpx
import structlog

logger = structlog.get_logger(__name__)

SuccessHandler = Callable[[str, str], None]
FailureHandler = Callable[["FetchResult"], None]


class FetchResult:
    def __init__(
        self,
        bin_id: str,
        url: str,
        status_code: int,
        content: bytes = b'',
        headers: Dict[str, str] = None,
        fetch_time: float = 0.0,
        error: str = None,
        encoding: str = None
    ):
        """Initialize a FetchResult with HTTP response data and metadata."""
        self.bin_id = bin_id
        self.url = url
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.fetch_time = fetch_time
        self.error = error
        self.encoding = encoding
        self.timestamp = datetime.now(timezone.utc)

    @property
    def success(self) -> bool:
        """Only a 200 counts as a found bin."""
        return self.error is None and self.status_code == 200

    @property
    def text(self) -> str:
        """Decode the response content to text using detected or fallback encoding."""
        if not self.content:
            return ""
        encoding = self.encoding or 'utf-8'
        try:
            return self.content.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return self.content.decode('utf-8', errors='replace')

    @property
    def size(self) -> int:
        return len(self.content)


class BinFetcher:
    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        max_connections: Optional[int] = None,
        user_agent: Optional[str] = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        """Initialize the bin fetcher.

        Args:
            base_url: Prefix every bin id is appended to.
            timeout: Seconds before a request is abandoned, None waits forever.
            max_connections: Cap on simultaneous connections, None for no cap.
            user_agent: Overrides the httpx default User-Agent when set.
            transport: Custom httpx transport, mainly for tests.
        """
        self.base_url = base_url
        self.timeout = timeout

        headers = {}
        if user_agent:
            headers['User-Agent'] = user_agent

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers=headers,
            limits=httpx.Limits(max_connections=max_connections, max_keepalive_connections=None),
            transport=transport
        )

    def bin_url(self, bin_id: str) -> str:
        return self.base_url + bin_id

    async def fetch(self, bin_id: str) -> FetchResult:
        """GET a single bin. Transport problems come back as a failed FetchResult."""
        url = self.bin_url(bin_id)
        start_time = time.time()

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            error = f"Timeout after {self.timeout}s: {e}"
        except httpx.HTTPError as e:
            error = f"{type(e).__name__}: {e}"
        else:
            return FetchResult(
                bin_id=bin_id,
                url=url,
                status_code=response.status_code,
                content=response.content,
                headers=dict(response.headers),
                fetch_time=time.time() - start_time,
                encoding=response.encoding
            )

        logger.debug("bin_fetch_error", bin=bin_id, url=url, error=error)
        return FetchResult(
            bin_id=bin_id,
            url=url,
            status_code=0,
            fetch_time=time.time() - start_time,
            error=error
        )

    def lookup(
        self,
        bin_id: str,
        on_success: SuccessHandler,
        on_failure: Optional[FailureHandler] = None
    ) -> asyncio.Task:
        """Schedule a fetch of ``bin_id`` and return without waiting for it.

        Must be called from a running event loop. The returned task resolves
        to the FetchResult once a handler has run.
        """
        return asyncio.create_task(
            self._lookup(bin_id, on_success, on_failure),
            name=f"lookup:{bin_id}"
        )

    async def _lookup(
        self,
        bin_id: str,
        on_success: SuccessHandler,
        on_failure: Optional[FailureHandler]
    ) -> FetchResult:
        result = await self.fetch(bin_id)
        if result.success:
            on_success(bin_id, result.text)
        elif on_failure is not None:
            on_failure(result)
        return result

    async def close(self):
        await self._client.aclose()
