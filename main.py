#!/usr/bin/env python3
"""Video Catalog - HTTP API over a SQLite video catalog."""

import argparse
import asyncio
import logging
import signal

import uvicorn

from config import load_config, Config
from data.video_store import VideoStore
from web.app import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("video_catalog")


class VideoCatalog:
    """Main orchestrator - owns the store and runs FastAPI under uvicorn."""

    def __init__(self, config: Config):
        self.config = config
        self.video_store = None
        self.server = None

    def setup(self) -> None:
        """Initialize the store and the web app."""
        db = self.config.database
        self.video_store = VideoStore(
            db_path=db.path,
            pool_size=db.pool_size,
            pool_timeout=db.pool_timeout,
        )
        logger.info("Database initialized at %s (pool size %d)", db.path, db.pool_size)

        app = create_app(self.video_store, self.config.web, self.config.catalog)
        server_config = uvicorn.Config(
            app,
            host=self.config.web.host,
            port=self.config.web.port,
            log_level="info",
        )
        self.server = uvicorn.Server(server_config)
        logger.info("Web app initialized")

    async def run(self) -> None:
        """Start serving."""
        self.setup()
        categories = self.video_store.get_categories()
        logger.info(
            "Video Catalog started on %s:%s - %d categories",
            self.config.web.host, self.config.web.port, len(categories),
        )
        try:
            await self.server.serve()
        except asyncio.CancelledError:
            logger.info("Server cancelled")
        finally:
            self.stop()

    def request_stop(self) -> None:
        if self.server:
            self.server.should_exit = True

    def stop(self) -> None:
        """Release the store."""
        if self.video_store:
            self.video_store.close()
            self.video_store = None
        logger.info("Video Catalog stopped")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Video Catalog")
    parser.add_argument("-c", "--config", help="Path to config file", default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    config = load_config(args.config)
    app = VideoCatalog(config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, app.request_stop)
        except NotImplementedError:
            signal.signal(sig, lambda s, f: app.request_stop())

    await app.run()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
