#!/usr/bin/env python3
"""
Example script showing how to use the Eureka discovery client

This script demonstrates:
1. Registering the configured service instances
2. Discovering an instance of another application
3. Handling registry and token errors
"""

import logging
import sys

from eureka_discovery import (
    EmptyInstanceList,
    EurekaClientError,
    RegistryClient,
    UnexpectedStatus,
    load_settings,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def main(target_app: str) -> int:
    settings = load_settings()

    with RegistryClient.from_settings(settings) as client:
        try:
            client.register_all()
        except EurekaClientError as e:
            logger.error(f"Failed to register instances: {e}")
            return 1

        try:
            address = client.discover(target_app)
        except EmptyInstanceList:
            logger.warning(f"No instances of {target_app} are registered yet")
            return 1
        except UnexpectedStatus as e:
            logger.error(f"Registry refused lookup of {target_app}: {e.status_code} {e.body}")
            return 1
        except EurekaClientError as e:
            logger.error(f"Lookup of {target_app} failed: {e}")
            return 1

        logger.info(f"Calling {target_app} at http://{address}")
        return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: example_usage.py <app-name>")
        sys.exit(2)
    sys.exit(main(sys.argv[1]))
