import logging
import random
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from eureka_discovery.constants import (
    ACCEPT_HEADER,
    AUTHORIZATION_HEADER,
    BEARER_PREFIX,
    CONTENT_TYPE_HEADER,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    EUREKA_APPS_ROUTE,
    HTTP_NO_CONTENT,
    HTTP_OK,
    JSON_CONTENT_TYPE,
    LOG_REGISTER_ALL_FINISHED,
    LOG_REGISTER_ALL_STARTED,
)
from eureka_discovery.errors import (
    DecodeError,
    EmptyInstanceList,
    EncodeError,
    UnexpectedStatus,
)
from eureka_discovery.http_utils import join_url, send_request
from eureka_discovery.logger_config import (
    log_instance_discovery,
    log_instance_registration,
    log_unexpected_status,
)
from eureka_discovery.token_client import TokenClient
from eureka_discovery.types import (
    DiscoveredInstance,
    DiscoveryResponse,
    EurekaSettings,
    RegisteredInstancePayload,
    ServiceInstance,
)

logger = logging.getLogger(__name__)


class RegistryClient:
    """Registers instances with, and looks instances up in, a Eureka registry"""

    def __init__(
        self,
        registry_url: str,
        token_client: TokenClient,
        http_client: Optional[httpx.Client] = None,
        service_instances: Optional[Iterable[ServiceInstance]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.registry_url = registry_url
        self.token_client = token_client
        self.service_instances: List[ServiceInstance] = list(service_instances or [])
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=DEFAULT_HTTP_TIMEOUT_SECONDS
        )
        self._random = rng or random.Random()

    @classmethod
    def from_settings(
        cls, settings: EurekaSettings, rng: Optional[random.Random] = None
    ) -> "RegistryClient":
        """Build a registry client and its token client around one HTTP client"""
        http_client = httpx.Client(timeout=settings.http_timeout_seconds)
        token_client = TokenClient(
            settings.token_url,
            settings.client_name,
            settings.client_secret,
            http_client=http_client,
        )
        client = cls(
            settings.registry_url,
            token_client,
            http_client=http_client,
            service_instances=settings.service_instances,
            rng=rng,
        )
        client._owns_http_client = True
        return client

    def _auth_headers(self) -> Dict[str, str]:
        token = self.token_client.get_token()
        return {AUTHORIZATION_HEADER: f"{BEARER_PREFIX}{token}"}

    def _app_url(self, app_name: str) -> str:
        # The name is a single path segment, so "/", "?" and "#" are escaped too
        route = EUREKA_APPS_ROUTE.format(quote(app_name, safe=""))
        return join_url(self.registry_url, route)

    def register(self, service_instance: ServiceInstance) -> None:
        """
        Register one instance with the registry.

        The registry answers 204 on success; any other status raises
        UnexpectedStatus with the code and body.
        """
        headers = self._auth_headers()

        try:
            body = RegisteredInstancePayload.from_service_instance(
                service_instance
            ).to_json()
        except (ValueError, TypeError) as e:
            raise EncodeError(f"marshal registration payload: {e}") from e

        url = self._app_url(service_instance.name)
        headers[CONTENT_TYPE_HEADER] = JSON_CONTENT_TYPE

        response = send_request(
            self._http_client, "POST", url, content=body, headers=headers
        )

        if response.status_code != HTTP_NO_CONTENT:
            log_unexpected_status(
                logger, service_instance.name, "registration", response.status_code
            )
            raise UnexpectedStatus(response.status_code, response.text, url)

        log_instance_registration(
            logger,
            service_instance.name,
            service_instance.host_name,
            service_instance.ip_address,
            service_instance.port,
        )

    def register_all(
        self, service_instances: Optional[Iterable[ServiceInstance]] = None
    ) -> None:
        """
        Register instances one after another, in order.

        Defaults to the instances the client was configured with. The first
        failure propagates; later instances are not attempted and earlier
        registrations are left in place.
        """
        instances = list(
            self.service_instances if service_instances is None else service_instances
        )
        logger.info(LOG_REGISTER_ALL_STARTED.format(len(instances)))

        for service_instance in instances:
            self.register(service_instance)

        logger.info(LOG_REGISTER_ALL_FINISHED.format(len(instances)))

    def list_instances(self, app_name: str) -> List[DiscoveredInstance]:
        """Fetch every instance the registry currently holds for an application"""
        headers = self._auth_headers()
        headers[ACCEPT_HEADER] = JSON_CONTENT_TYPE
        url = self._app_url(app_name)

        response = send_request(self._http_client, "GET", url, headers=headers)

        if response.status_code != HTTP_OK:
            log_unexpected_status(logger, app_name, "discovery", response.status_code)
            raise UnexpectedStatus(response.status_code, response.text, url)

        try:
            registry_response = DiscoveryResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"unmarshal registry response for {app_name}: {e}") from e

        return registry_response.application.instances

    def discover(self, app_name: str) -> str:
        """
        Pick one registered instance of an application at random.

        Returns:
            "ip:port" of the chosen instance

        Raises:
            EmptyInstanceList: the registry reports no instances
        """
        instances = self.list_instances(app_name)
        if not instances:
            raise EmptyInstanceList(app_name)

        instance = instances[self._random.randrange(len(instances))]
        log_instance_discovery(logger, app_name, len(instances), instance.address)
        return instance.address

    def close(self):
        """Close the HTTP client if this instance created it"""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info):
        self.close()
