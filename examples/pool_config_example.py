# examples/pool_config_example.py
"""
Example demonstrating how to build a connection pool configuration.

This script shows how to:
1. Build a configuration in code with the fluent builder.
2. Load the same settings from a TOML file and the environment.
3. Review a configuration for settings that are legal but suspicious.
4. Handle a rejected value.

To run this example:
- Ensure you have dbpool installed (`pip install .` from the project root).
- Optionally set `DBPOOL_POOL__MAX_SIZE=20` to see environment overrides.
"""

import logging
from datetime import timedelta

from dbpool import (
    ConnectionPoolConfiguration,
    InvalidConfigurationError,
    load_pool_settings,
    validate_pool_configuration,
)

# Configure logging for better visibility (optional)
logging.basicConfig(level=logging.DEBUG, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


class DemoConnectionFactory:
    """Stand-in for a driver's connection factory."""

    def create(self):
        raise RuntimeError("This example never opens connections")

    @property
    def metadata(self):
        return {"name": "demo", "version": "0"}


def main():
    factory = DemoConnectionFactory()

    # 1. Build in code
    config = (
        ConnectionPoolConfiguration.builder(factory)
        .initial_size(2)
        .max_size(20)
        .max_acquire_time(timedelta(seconds=5))
        .validation_query("SELECT 1")
        .customizer(lambda pool_builder: logger.info(f"Customizing {pool_builder!r}"))
        .build()
    )
    logger.info(f"Built configuration: {config}")

    # 2. Load from environment (and optionally a TOML file with a [pool] table)
    settings = load_pool_settings()
    from_settings = settings.to_configuration(factory)
    logger.info(f"Configuration from settings: {from_settings}")

    # 3. Review
    review = validate_pool_configuration(from_settings)
    print(review.format_report())

    # 4. Rejected values fail at the setter
    try:
        ConnectionPoolConfiguration.builder(factory).max_size(0)
    except InvalidConfigurationError as e:
        logger.error(f"Rejected {e.field}={e.value!r}: {e}")


if __name__ == "__main__":
    main()
