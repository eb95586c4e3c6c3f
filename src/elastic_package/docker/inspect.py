"""Typed descriptions decoded from ``docker inspect`` output.

Decoding is total: unknown fields are ignored and missing optional fields
take defaults. A shape mismatch raises DecodeError carrying the stderr text of
the inspection command.
"""

import re
from datetime import datetime

import pydantic
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from elastic_package.errors import DecodeError

# Docker reports nanoseconds; datetime holds microseconds
_NANOSECONDS = re.compile(r"(\.\d{6})\d+")


class _InspectModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class HealthLogEntry(_InspectModel):
    """One health check execution."""

    start: datetime | None = Field(default=None, alias="Start")
    exit_code: int = Field(default=0, alias="ExitCode")
    output: str = Field(default="", alias="Output")

    @field_validator("start", mode="before")
    @classmethod
    def _trim_nanoseconds(cls, value):
        if isinstance(value, str):
            return _NANOSECONDS.sub(r"\1", value)
        return value


class ContainerHealth(_InspectModel):
    status: str = Field(default="", alias="Status")
    log: list[HealthLogEntry] = Field(default_factory=list, alias="Log")

    @field_validator("log", mode="before")
    @classmethod
    def _null_log(cls, value):
        return [] if value is None else value


class ContainerState(_InspectModel):
    status: str = Field(default="", alias="Status")
    exit_code: int = Field(default=0, alias="ExitCode")
    health: ContainerHealth | None = Field(default=None, alias="Health")


class ContainerDescription(_InspectModel):
    """Container identity and lifecycle state."""

    id: str = Field(default="", alias="Id")
    state: ContainerState = Field(default_factory=ContainerState, alias="State")

    def __str__(self) -> str:
        return self.model_dump_json(by_alias=True)


class NetworkContainer(_InspectModel):
    name: str = Field(default="", alias="Name")


class NetworkDescription(_InspectModel):
    """Docker network and the containers currently attached to it."""

    name: str = Field(default="", alias="Name")
    id: str = Field(default="", alias="Id")
    containers: dict[str, NetworkContainer] = Field(default_factory=dict, alias="Containers")

    @field_validator("containers", mode="before")
    @classmethod
    def _null_containers(cls, value):
        return {} if value is None else value

    def container_names(self) -> dict[str, str]:
        """Map container id to container name."""
        return {container_id: c.name for container_id, c in self.containers.items()}


_containers_adapter = TypeAdapter(list[ContainerDescription])
_networks_adapter = TypeAdapter(list[NetworkDescription])


def decode_containers(raw: bytes | str, stderr: str = "") -> list[ContainerDescription]:
    """Decode ``docker inspect <ids...>`` output.

    Raises:
        DecodeError: Output is not a JSON array of container objects
    """
    try:
        return _containers_adapter.validate_json(raw)
    except pydantic.ValidationError as e:
        raise DecodeError(f"can't unmarshal container inspect: {e}", stderr) from e


def decode_networks(raw: bytes | str, stderr: str = "") -> list[NetworkDescription]:
    """Decode ``docker network inspect <net>`` output.

    Raises:
        DecodeError: Output is not a JSON array of network objects
    """
    try:
        return _networks_adapter.validate_json(raw)
    except pydantic.ValidationError as e:
        raise DecodeError(f"can't unmarshal network inspect: {e}", stderr) from e
