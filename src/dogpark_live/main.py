"""Main entry point for the dog park live backend."""

import asyncio
import logging
import sys

from dogpark_live.adapters import (
    AppConfig,
    InMemoryDogRepository,
    InMemoryParkRepository,
    JwtTokenVerifier,
)
from dogpark_live.adapters.config import SeedDataLoader
from dogpark_live.bootstrap import build_web_adapter

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    logging.getLogger().setLevel(config.log_level)

    if config.jwt_secret == "your-secret-key":
        logger.warning("JWT_SECRET is not set, using the development default")

    parks = InMemoryParkRepository()
    dogs = InMemoryDogRepository()

    if config.seed_file:
        try:
            seed = SeedDataLoader.load(config.seed_file)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Invalid seed file: {e}")
            sys.exit(1)
        await seed.apply(parks, dogs)

    token_verifier = JwtTokenVerifier(config.jwt_secret, algorithm=config.jwt_algorithm)
    web_adapter = build_web_adapter(config, parks, dogs, token_verifier)

    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        await web_adapter.stop()


def cli() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
