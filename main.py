"""
Entrypoint: load config, init logging, build the sweeper, run one sweep
"""

import asyncio
import logging
import sys

import structlog
from dotenv import load_dotenv

from binsweep.config import Config
from binsweep.enumerator import ALPHABET
from binsweep.fetcher import BinFetcher
from binsweep.results import ResultsDocument
from binsweep.worker import Sweeper

logger = structlog.get_logger(__name__)


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, str(level).upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def main():
    """Initialize dependencies and run the sweep"""
    # Load environment variables from .env file
    load_dotenv()

    config = Config()
    setup_logging(config.logging.get('level', 'INFO'))

    template = config.output.get('template')
    results = ResultsDocument.from_file(template) if template else ResultsDocument()

    fetcher = BinFetcher(
        base_url=config.sweep.get('base_url', 'http://api.myjson.com/bins/'),
        timeout=config.fetcher.get('timeout'),
        max_connections=config.fetcher.get('max_connections'),
        user_agent=config.fetcher.get('user_agent'),
    )

    try:
        # Create sweeper with dependency injection
        sweeper = Sweeper(
            fetcher=fetcher,
            results=results,
            alphabet=str(config.sweep.get('alphabet', ALPHABET)),
            length=config.sweep.get('length', 3),
            on_failure=config.fetcher.get('on_failure', 'ignore'),
        )
        await sweeper.run()
    finally:
        await fetcher.close()

    results.save(config.output.get('path', 'results.html'))


def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("sweep_interrupted")
        sys.exit(0)
    except Exception as e:
        logger.error("fatal_error", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    run()
