import json
import os
from typing import Mapping, Optional

from eureka_discovery.types import EurekaSettings

# Registry Configuration
EUREKA_REGISTRY_URL = os.getenv("EUREKA_REGISTRY_URL", "http://localhost:8761")
EUREKA_TOKEN_URL = os.getenv("EUREKA_TOKEN_URL", "http://localhost:8080/oauth/token")

# OAuth2 client credentials
EUREKA_CLIENT_NAME = os.getenv("EUREKA_CLIENT_NAME", "eureka-client")
EUREKA_CLIENT_SECRET = os.getenv("EUREKA_CLIENT_SECRET", "eureka-client-secret-change-me")

# Instances registered by the entrypoint, as a JSON list of
# {"name", "instance_index", "ip_address", "port"} objects
EUREKA_SERVICE_INSTANCES = os.getenv("EUREKA_SERVICE_INSTANCES", "[]")

# HTTP transport
EUREKA_HTTP_TIMEOUT_SECONDS = float(os.getenv("EUREKA_HTTP_TIMEOUT_SECONDS", "10"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv(
    "LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
LOG_FORMAT_TYPE = os.getenv("LOG_FORMAT_TYPE", "structured")  # "structured" or "simple"
LOG_ENABLE_CONSOLE = os.getenv("LOG_ENABLE_CONSOLE", "true").lower() == "true"
LOG_ENABLE_FILE = os.getenv("LOG_ENABLE_FILE", "false").lower() == "true"
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "/var/log/eureka-discovery.log")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> EurekaSettings:
    """
    Build validated settings from environment variables.

    Values missing from `environ` fall back to the module-level defaults
    above. Raises ValueError when EUREKA_SERVICE_INSTANCES is not valid
    JSON and pydantic.ValidationError on malformed values.
    """
    env = os.environ if environ is None else environ
    instances = json.loads(
        env.get("EUREKA_SERVICE_INSTANCES", EUREKA_SERVICE_INSTANCES)
    )
    return EurekaSettings(
        registry_url=env.get("EUREKA_REGISTRY_URL", EUREKA_REGISTRY_URL),
        token_url=env.get("EUREKA_TOKEN_URL", EUREKA_TOKEN_URL),
        client_name=env.get("EUREKA_CLIENT_NAME", EUREKA_CLIENT_NAME),
        client_secret=env.get("EUREKA_CLIENT_SECRET", EUREKA_CLIENT_SECRET),
        service_instances=instances,
        http_timeout_seconds=env.get(
            "EUREKA_HTTP_TIMEOUT_SECONDS", EUREKA_HTTP_TIMEOUT_SECONDS
        ),
    )
