# Eureka Discovery Package
# Main exports for easy importing

from eureka_discovery.client import RegistryClient
from eureka_discovery.token_client import TokenClient
from eureka_discovery.http_utils import join_url
from eureka_discovery.types import (
    ServiceInstance,
    Token,
    RegisteredInstancePayload,
    DiscoveryResponse,
    DiscoveredInstance,
    EurekaSettings,
)
from eureka_discovery.errors import (
    EurekaClientError,
    TransportError,
    UnexpectedStatus,
    AuthServerError,
    DecodeError,
    EncodeError,
    InvalidBaseURL,
    EmptyInstanceList,
)
from eureka_discovery.config import load_settings

__all__ = [
    # Clients
    "RegistryClient",
    "TokenClient",
    "join_url",
    # Types and models
    "ServiceInstance",
    "Token",
    "RegisteredInstancePayload",
    "DiscoveryResponse",
    "DiscoveredInstance",
    "EurekaSettings",
    "load_settings",
    # Errors
    "EurekaClientError",
    "TransportError",
    "UnexpectedStatus",
    "AuthServerError",
    "DecodeError",
    "EncodeError",
    "InvalidBaseURL",
    "EmptyInstanceList",
]
