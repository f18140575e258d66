"""
Schema models for the stack configuration.

Validates allow-lists, the task specification and the load balancer routing
before any resource is declared. Invalid values raise pydantic.ValidationError.

Dependencies: pydantic
"""

import ipaddress

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class AccessList(_FrozenModel):
    """Source CIDRs allowed to reach a set of TCP ports."""

    cidrs: tuple[str, ...] = Field(..., min_length=1, description="IPv4 source ranges")
    ports: tuple[int, ...] = Field(..., min_length=1, description="TCP ports to open")

    @field_validator("cidrs")
    @classmethod
    def _validate_cidrs(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for cidr in value:
            try:
                ipaddress.IPv4Network(cidr)
            except ValueError as exc:
                raise ValueError(f"invalid IPv4 CIDR '{cidr}': {exc}") from exc
        if len(set(value)) != len(value):
            raise ValueError("duplicate CIDRs in access list")
        return value

    @field_validator("ports")
    @classmethod
    def _validate_ports(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        for port in value:
            if not 1 <= port <= 65535:
                raise ValueError(f"port {port} is out of range 1-65535")
        if len(set(value)) != len(value):
            raise ValueError("duplicate ports in access list")
        return value


class CapacitySpec(_FrozenModel):
    """Auto-scaling group capacity bounds."""

    min_size: int = Field(..., ge=0)
    max_size: int = Field(..., ge=1)
    desired_capacity: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "CapacitySpec":
        if not self.min_size <= self.desired_capacity <= self.max_size:
            raise ValueError(
                f"capacity bounds must satisfy min <= desired <= max, got "
                f"{self.min_size}/{self.desired_capacity}/{self.max_size}"
            )
        return self


class PortMapping(_FrozenModel):
    container_port: int = Field(..., ge=1, le=65535)
    host_port: int = Field(..., ge=1, le=65535)
    protocol: str = "tcp"


class MountPoint(_FrozenModel):
    source_volume: str
    container_path: str
    read_only: bool = False


class ContainerSpec(_FrozenModel):
    """One container definition in the task."""

    name: str = Field(..., min_length=1)
    image: str = Field(..., min_length=1)
    memory_mib: int = Field(..., ge=4)
    cpu: int = Field(..., ge=0)
    environment: dict[str, str] = Field(default_factory=dict)
    secrets: dict[str, str] = Field(
        default_factory=dict,
        description="Environment variable name -> key in the database credentials secret",
    )
    port_mappings: tuple[PortMapping, ...] = ()
    mount_points: tuple[MountPoint, ...] = ()
    command: tuple[str, ...] | None = None
    log_stream_prefix: str = Field(..., min_length=1)
    essential: bool = True

    @model_validator(mode="after")
    def _check_env_overlap(self) -> "ContainerSpec":
        overlap = set(self.environment) & set(self.secrets)
        if overlap:
            raise ValueError(
                f"container '{self.name}' defines {sorted(overlap)} as both "
                "environment and secret"
            )
        return self


class TaskSpec(_FrozenModel):
    """Ordered container set sharing one task definition."""

    family: str = Field(..., min_length=1)
    containers: tuple[ContainerSpec, ...] = Field(..., min_length=1)
    volumes: tuple[str, ...] = ()

    @model_validator(mode="after")
    def _check_task(self) -> "TaskSpec":
        names = [c.name for c in self.containers]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate container names: {names}")

        seen: dict[int, str] = {}
        for container in self.containers:
            for mapping in container.port_mappings:
                owner = seen.get(mapping.host_port)
                if owner is not None:
                    raise ValueError(
                        f"host port {mapping.host_port} is mapped by both "
                        f"'{owner}' and '{container.name}'"
                    )
                seen[mapping.host_port] = container.name

        for container in self.containers:
            for mount in container.mount_points:
                if mount.source_volume not in self.volumes:
                    raise ValueError(
                        f"container '{container.name}' mounts undeclared volume "
                        f"'{mount.source_volume}'"
                    )
        return self

    def host_ports(self) -> list[int]:
        """All host ports mapped by the task, in declaration order."""
        return [m.host_port for c in self.containers for m in c.port_mappings]


class HealthCheckSpec(_FrozenModel):
    path: str = "/"
    interval: int = Field(30, ge=5, le=300)


class TargetGroupSpec(_FrozenModel):
    """HTTP target group fed by the auto-scaling group."""

    name: str = Field(..., min_length=1, pattern=r"^[a-z0-9-]+$")
    port: int = Field(..., ge=1, le=65535)
    health_check: HealthCheckSpec = HealthCheckSpec()


class ListenerRuleSpec(_FrozenModel):
    """Host-header match forwarding to a target group."""

    priority: int = Field(..., ge=1, le=50000)
    host_headers: tuple[str, ...] = Field(..., min_length=1)
    target_group: str


class RoutingSpec(_FrozenModel):
    """Listener, target groups and priority-ranked rules."""

    listener_port: int = Field(80, ge=1, le=65535)
    default_target_group: str
    target_groups: tuple[TargetGroupSpec, ...] = Field(..., min_length=1)
    rules: tuple[ListenerRuleSpec, ...] = ()

    @model_validator(mode="after")
    def _check_routing(self) -> "RoutingSpec":
        names = [tg.name for tg in self.target_groups]
        if len(set(names)) != len(names):
            raise ValueError(f"duplicate target group names: {names}")
        if self.default_target_group not in names:
            raise ValueError(
                f"default target group '{self.default_target_group}' is not declared"
            )

        priorities = [rule.priority for rule in self.rules]
        if len(set(priorities)) != len(priorities):
            raise ValueError(f"listener rule priorities must be unique, got {priorities}")

        for rule in self.rules:
            if rule.target_group not in names:
                raise ValueError(
                    f"listener rule {rule.priority} forwards to undeclared "
                    f"target group '{rule.target_group}'"
                )
        return self

    def target_group(self, name: str) -> TargetGroupSpec:
        """Look up a declared target group by name."""
        for tg in self.target_groups:
            if tg.name == name:
                return tg
        raise KeyError(name)
