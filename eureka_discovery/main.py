import sys
from typing import Mapping, Optional

from eureka_discovery.client import RegistryClient
from eureka_discovery.config import (
    LOG_LEVEL,
    LOG_FORMAT_TYPE,
    LOG_ENABLE_CONSOLE,
    LOG_ENABLE_FILE,
    LOG_FILE_PATH,
    load_settings,
)
from eureka_discovery.errors import EurekaClientError
from eureka_discovery.logger_config import EurekaLogger

logger = EurekaLogger.get_logger(__name__)


def run(
    environ: Optional[Mapping[str, str]] = None,
    registry_client: Optional[RegistryClient] = None,
) -> int:
    """Register every configured instance; returns a process exit code"""
    if registry_client is None:
        try:
            settings = load_settings(environ)
        except ValueError as e:
            logger.error(f"Invalid configuration: {e}")
            return 1
        registry_client = RegistryClient.from_settings(settings)

    with registry_client:
        try:
            registry_client.register_all()
        except EurekaClientError as e:
            logger.error(f"Registration failed: {e}", extra={"error_type": type(e).__name__})
            return 1

    logger.info("All service instances registered")
    return 0


def main():
    """Main entry point for the registration command"""
    EurekaLogger.setup_logging(
        level=LOG_LEVEL,
        format_type=LOG_FORMAT_TYPE,
        enable_console=LOG_ENABLE_CONSOLE,
        enable_file=LOG_ENABLE_FILE,
        log_file_path=LOG_FILE_PATH,
    )
    sys.exit(run())


if __name__ == "__main__":
    main()
