"""
Stack configuration loader.

Loads and validates configuration from Pulumi stack config files. Every key
is optional except `environment`; unset keys fall back to the defaults in
`lamp_iac.configs.constants`. Capacity keys are `min_size`, `max_size` and
`desired_capacity`.
"""

from dataclasses import dataclass

import pulumi

from lamp_iac.configs import constants
from lamp_iac.configs.base import StackConfig
from lamp_iac.configs.defaults import default_routing_spec, default_task_spec
from lamp_iac.configs.schemas import AccessList, CapacitySpec, RoutingSpec, TaskSpec


def _get_list(config: pulumi.Config, key: str, default: list) -> tuple:
    # An explicit empty list is kept so validation can reject it
    value = config.get_object(key)
    return tuple(default if value is None else value)


def _access_list(
    config: pulumi.Config,
    prefix: str,
    default_cidrs: list[str],
    default_ports: list[int],
) -> AccessList:
    return AccessList(
        cidrs=_get_list(config, f"{prefix}_allowed_cidrs", default_cidrs),
        ports=_get_list(config, f"{prefix}_allowed_ports", default_ports),
    )


def get_config() -> StackConfig:
    """
    Load stack configuration from Pulumi stack config.

    `task` and `routing` may be given as whole objects; otherwise the
    default LAMP specifications are used, with `image_tags` and
    `app_host_header` applied.

    Returns:
        StackConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
        pydantic.ValidationError: If a value breaks a configuration invariant
    """
    config = pulumi.Config()

    task_override = config.get_object("task")
    if task_override:
        task = TaskSpec.model_validate(task_override)
    else:
        task = default_task_spec(
            family=config.get("task_family") or "lamp",
            image_tags=config.get_object("image_tags"),
        )

    routing_override = config.get_object("routing")
    if routing_override:
        routing = RoutingSpec.model_validate(routing_override)
    else:
        routing = default_routing_spec(
            app_host_header=config.get("app_host_header") or constants.APP_HOST_HEADER,
        )

    # get_int returns None when unset; 0 is a valid min_size
    capacity_values = {}
    for key, default in constants.CAPACITY.items():
        value = config.get_int(key)
        capacity_values[key] = default if value is None else value
    capacity = CapacitySpec(**capacity_values)

    environment = config.require("environment")

    return StackConfig(
        environment=environment,
        project=config.get("project") or constants.PROJECT_NAME,
        vpc_id=config.get("vpc_id") or constants.EXISTING_VPC_ID,
        public_subnet_ids=_get_list(config, "public_subnet_ids", []),
        private_subnet_ids=_get_list(config, "private_subnet_ids", []),
        instance_role_arn=config.get("instance_role_arn") or constants.EXISTING_INSTANCE_ROLE_ARN,
        hosted_zone_id=config.get("hosted_zone_id") or constants.EXISTING_HOSTED_ZONE_ID,
        zone_name=config.get("zone_name") or constants.EXISTING_ZONE_NAME,
        record_name=config.get("record_name") or constants.WILDCARD_RECORD_NAME,
        instance_type=config.get("instance_type") or constants.INSTANCE_TYPE,
        capacity=capacity,
        edge_access=_access_list(
            config, "edge", constants.EDGE_ALLOWED_CIDRS, constants.EDGE_ALLOWED_PORTS
        ),
        cluster_access=_access_list(
            config, "cluster", constants.CLUSTER_ALLOWED_CIDRS, constants.CLUSTER_ALLOWED_PORTS
        ),
        task=task,
        routing=routing,
        listener_open=config.get_bool("listener_open") or False,
        db_secret_name=config.get("db_secret_name"),
    )


def default_config(environment: str = "dev") -> StackConfig:
    """Build a StackConfig from the defaults alone, without Pulumi config."""
    return StackConfig(
        environment=environment,
        project=constants.PROJECT_NAME,
        vpc_id=constants.EXISTING_VPC_ID,
        public_subnet_ids=(),
        private_subnet_ids=(),
        instance_role_arn=constants.EXISTING_INSTANCE_ROLE_ARN,
        hosted_zone_id=constants.EXISTING_HOSTED_ZONE_ID,
        zone_name=constants.EXISTING_ZONE_NAME,
        record_name=constants.WILDCARD_RECORD_NAME,
        instance_type=constants.INSTANCE_TYPE,
        capacity=CapacitySpec(**constants.CAPACITY),
        edge_access=AccessList(
            cidrs=tuple(constants.EDGE_ALLOWED_CIDRS),
            ports=tuple(constants.EDGE_ALLOWED_PORTS),
        ),
        cluster_access=AccessList(
            cidrs=tuple(constants.CLUSTER_ALLOWED_CIDRS),
            ports=tuple(constants.CLUSTER_ALLOWED_PORTS),
        ),
        task=default_task_spec(),
        routing=default_routing_spec(),
        listener_open=False,
        db_secret_name=None,
    )


@dataclass(frozen=True)
class DatabaseCredentials:
    """Database passwords read from Pulumi secret config."""
    root_password: pulumi.Output[str]
    user_password: pulumi.Output[str]


def get_db_credentials() -> DatabaseCredentials:
    """
    Load database passwords from Pulumi secret config.

    Set them with `pulumi config set --secret db_root_password ...` and
    `pulumi config set --secret db_user_password ...`.

    Raises:
        pulumi.ConfigMissingError: If either password is not set
    """
    config = pulumi.Config()
    return DatabaseCredentials(
        root_password=config.require_secret("db_root_password"),
        user_password=config.require_secret("db_user_password"),
    )
