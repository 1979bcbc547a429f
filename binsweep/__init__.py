from .enumerator import ALPHABET, candidates, count_candidates
from .fetcher import BinFetcher, FetchResult
from .results import ResultsDocument
from .worker import Sweeper

__all__ = [
    "ALPHABET",
    "BinFetcher",
    "FetchResult",
    "ResultsDocument",
    "Sweeper",
    "candidates",
    "count_candidates",
]
