"""
Sweeps every candidate bin id and collects the ones that answer 200
"""

import asyncio
from typing import List

import structlog

from .enumerator import ALPHABET, candidates, count_candidates
from .fetcher import BinFetcher, FetchResult
from .results import ResultsDocument

logger = structlog.get_logger(__name__)

FAILURE_POLICIES = ("ignore", "log")


class Sweeper:
    """Fires one lookup per candidate and appends each hit to the results document"""

    def __init__(
        self,
        fetcher: BinFetcher,
        results: ResultsDocument,
        alphabet: str = ALPHABET,
        length: int = 3,
        on_failure: str = "ignore"
    ):
        if on_failure not in FAILURE_POLICIES:
            raise ValueError(f"Unknown failure policy {on_failure!r}, expected one of {FAILURE_POLICIES}")
        if not isinstance(length, int) or isinstance(length, bool):
            raise ValueError(f"Candidate length must be an integer, got {length!r}")
        if length < 1:
            raise ValueError(f"Candidate length must be at least 1, got {length}")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError(f"Alphabet has repeated characters: {alphabet!r}")

        self.fetcher = fetcher
        self.results = results
        self.alphabet = alphabet
        self.length = length
        self.on_failure = on_failure

    def sweep(self) -> List[asyncio.Task]:
        """Issue every lookup without waiting on any of them.

        Runs to completion before the event loop gets control back, so
        requests go out in candidate order while responses land in whatever
        order the network delivers them.
        """
        return [
            self.fetcher.lookup(bin_id, self._on_success, self._on_failure)
            for bin_id in candidates(self.alphabet, self.length)
        ]

    async def run(self):
        """Run one full sweep and wait for every request to settle."""
        logger.info("sweep_started",
                    base_url=self.fetcher.base_url,
                    candidates=count_candidates(self.alphabet, self.length),
                    on_failure=self.on_failure)

        tasks = self.sweep()
        if tasks:
            await asyncio.gather(*tasks)

        logger.info("sweep_finished", found=len(self.results))

    def _on_success(self, bin_id: str, contents: str):
        self.results.output_result(bin_id, contents)
        logger.info("bin_found", bin=bin_id, size=len(contents))

    def _on_failure(self, result: FetchResult):
        if self.on_failure == "log":
            logger.warning("bin_lookup_failed",
                           bin=result.bin_id,
                           url=result.url,
                           status_code=result.status_code,
                           error=result.error)
