import math
from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eureka_discovery.constants import (
    DATA_CENTER_INFO_CLASS,
    DATA_CENTER_NAME,
    DEFAULT_HTTP_TIMEOUT_SECONDS,
    HOST_NAME_FORMAT,
    INSTANCE_STATUS_UP,
    PORT_ENABLED,
)


@dataclass(frozen=True)
class ServiceInstance:
    name: str
    instance_index: int
    ip_address: str
    port: int

    @property
    def host_name(self) -> str:
        return HOST_NAME_FORMAT.format(self.name, self.instance_index, self.port)


class Token(BaseModel):
    access_token: str


# Registration payload. Eureka mirrors its XML schema in JSON, so attributes
# appear as "@name" keys and element text as "$".
class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PortInfo(_WireModel):
    value: str = Field(..., alias="$")
    enabled: str = Field(default=PORT_ENABLED, alias="@enabled")


class DataCenterInfo(_WireModel):
    class_name: str = Field(default=DATA_CENTER_INFO_CLASS, alias="@class")
    name: str = DATA_CENTER_NAME


class InstanceInfo(_WireModel):
    host_name: str = Field(..., alias="hostName")
    app: str
    ip_addr: str = Field(..., alias="ipAddr")
    status: str = INSTANCE_STATUS_UP
    port: PortInfo
    data_center_info: DataCenterInfo = Field(
        default_factory=DataCenterInfo, alias="dataCenterInfo"
    )


class RegisteredInstancePayload(_WireModel):
    instance: InstanceInfo

    @classmethod
    def from_service_instance(
        cls, service_instance: ServiceInstance
    ) -> "RegisteredInstancePayload":
        return cls(
            instance=InstanceInfo(
                host_name=service_instance.host_name,
                app=service_instance.name,
                ip_addr=service_instance.ip_address,
                port=PortInfo(value=str(service_instance.port)),
            )
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


# Discovery response
class DiscoveredPort(_WireModel):
    value: int = Field(..., alias="$")

    @field_validator("value", mode="before")
    @classmethod
    def validate_numeric_port(cls, v: Any) -> int:
        """Accept JSON numbers, truncating floats, and reject anything else"""
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"port value must be a number, got {v!r}")
        if isinstance(v, float) and not math.isfinite(v):
            raise ValueError(f"port value must be finite, got {v!r}")
        return int(v)


class DiscoveredInstance(_WireModel):
    ip_addr: str = Field(..., alias="ipAddr")
    app: str = ""
    port: DiscoveredPort

    @property
    def address(self) -> str:
        return f"{self.ip_addr}:{self.port.value}"


class Application(_WireModel):
    name: Optional[str] = None
    instances: List[DiscoveredInstance] = Field(default_factory=list, alias="instance")

    @field_validator("instances", mode="before")
    @classmethod
    def normalize_instances(cls, v: Any) -> Any:
        """Eureka renders a single instance as an object instead of a list"""
        if v is None:
            return []
        if isinstance(v, dict):
            return [v]
        return v


class DiscoveryResponse(_WireModel):
    application: Application


# Configuration
class EurekaSettings(BaseModel):
    registry_url: str = Field(..., min_length=1)
    token_url: str = Field(..., min_length=1)
    client_name: str
    client_secret: str
    service_instances: List[ServiceInstance] = Field(default_factory=list)
    http_timeout_seconds: float = Field(default=DEFAULT_HTTP_TIMEOUT_SECONDS, gt=0)
