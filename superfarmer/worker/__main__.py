"""Entry point: `python -m superfarmer.worker`."""

import asyncio
import logging

from superfarmer.core.log import configure_logging
from superfarmer.worker.consumer import run


def main() -> None:
    configure_logging()
    logging.getLogger(__name__).info("Starting report worker")
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Report worker stopped")


if __name__ == "__main__":
    main()
