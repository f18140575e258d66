"""
Tests for stack configuration loading and validation.

Validates:
1. Defaults reproduce the fixed allow-lists, sizing, images and routing
2. Schema validators reject invariant violations
3. get_config reads overrides from Pulumi stack config
"""

import pulumi
import pytest
from pydantic import ValidationError

from lamp_iac.configs.defaults import default_routing_spec, default_task_spec
from lamp_iac.configs.schemas import (
    AccessList,
    CapacitySpec,
    ContainerSpec,
    ListenerRuleSpec,
    MountPoint,
    PortMapping,
    RoutingSpec,
    TargetGroupSpec,
    TaskSpec,
)

from pulumi_mocks import RecordingMocks


def _container(name: str, host_port: int, **kwargs) -> ContainerSpec:
    return ContainerSpec(
        name=name,
        image=f"example/{name}:1",
        memory_mib=128,
        cpu=64,
        port_mappings=(PortMapping(container_port=80, host_port=host_port),),
        log_stream_prefix=name,
        **kwargs,
    )


class TestDefaults:
    """Default configuration values."""

    def test_default_config_values(self, stack_config):
        assert stack_config.vpc_id == "vpc-02b5eb5d25b928589"
        assert stack_config.instance_role_name == "ecsInstanceRole"
        assert stack_config.hosted_zone_id == "Z0961844B43SYO7C4Q38"
        assert stack_config.instance_type == "t2.small"
        assert (
            stack_config.capacity.min_size,
            stack_config.capacity.max_size,
            stack_config.capacity.desired_capacity,
        ) == (1, 3, 1)
        assert stack_config.edge_access.cidrs == ("122.210.238.201/32", "113.37.225.8/32")
        assert stack_config.edge_access.ports == (80, 443)
        assert stack_config.cluster_access.cidrs == ("10.0.0.0/20", "10.0.16.0/20")
        assert stack_config.cluster_access.ports == (8888, 80, 8080)
        assert stack_config.listener_open is False

    def test_default_task_has_no_plain_passwords(self):
        task = default_task_spec()
        for container in task.containers:
            assert not any("PASSWORD" in key for key in container.environment)

    def test_default_task_secrets(self):
        secrets = {c.name: sorted(c.secrets) for c in default_task_spec().containers}
        assert secrets == {
            "mysql-container": ["MYSQL_PASSWORD", "MYSQL_ROOT_PASSWORD"],
            "phpmyadmin-container": ["MYSQL_ROOT_PASSWORD"],
            "php-apache-container": ["DB_PASSWORD"],
        }

    def test_php_startup_command(self):
        php = default_task_spec().containers[2]
        assert php.command == (
            "/bin/sh",
            "-c",
            'echo "<?php phpinfo(); ?>" > /var/www/html/index.php && apache2-foreground',
        )

    def test_image_tag_override(self):
        task = default_task_spec(image_tags={"phpmyadmin": "5.2.1"})
        assert task.containers[1].image == "public.ecr.aws/docker/library/phpmyadmin:5.2.1"
        assert task.containers[0].image.endswith("mysql:9.2.0")

    def test_default_routing(self):
        routing = default_routing_spec()
        assert routing.listener_port == 80
        assert routing.target_group(routing.default_target_group).port == 8888
        assert [(r.priority, r.host_headers, routing.target_group(r.target_group).port)
                for r in routing.rules] == [(1, ("test.lamp.sano.ss-sre-admin.net",), 8080)]

    def test_target_group_lookup(self):
        routing = default_routing_spec()
        assert routing.target_group("app").port == 8080
        with pytest.raises(KeyError):
            routing.target_group("missing")


class TestSchemaValidation:
    """Invariants enforced by the schema models."""

    def test_colliding_host_ports_rejected(self):
        with pytest.raises(ValidationError, match="host port 8080"):
            TaskSpec(family="t", containers=(_container("a", 8080), _container("b", 8080)))

    def test_duplicate_container_names_rejected(self):
        with pytest.raises(ValidationError, match="duplicate container names"):
            TaskSpec(family="t", containers=(_container("a", 8080), _container("a", 8081)))

    def test_undeclared_volume_rejected(self):
        container = _container(
            "web", 8080,
            mount_points=(MountPoint(source_volume="missing", container_path="/data"),),
        )
        with pytest.raises(ValidationError, match="undeclared volume"):
            TaskSpec(family="t", containers=(container,))

    def test_env_and_secret_overlap_rejected(self):
        with pytest.raises(ValidationError, match="both environment and secret"):
            _container("a", 8080, environment={"DB_PASSWORD": "x"}, secrets={"DB_PASSWORD": "k"})

    def test_duplicate_priorities_rejected(self):
        with pytest.raises(ValidationError, match="priorities must be unique"):
            RoutingSpec(
                default_target_group="app",
                target_groups=(TargetGroupSpec(name="app", port=8080),),
                rules=(
                    ListenerRuleSpec(priority=1, host_headers=("a.example.com",), target_group="app"),
                    ListenerRuleSpec(priority=1, host_headers=("b.example.com",), target_group="app"),
                ),
            )

    def test_dangling_target_group_rejected(self):
        with pytest.raises(ValidationError, match="undeclared target group"):
            RoutingSpec(
                default_target_group="app",
                target_groups=(TargetGroupSpec(name="app", port=8080),),
                rules=(
                    ListenerRuleSpec(priority=1, host_headers=("a.example.com",), target_group="admin"),
                ),
            )

    def test_missing_default_target_group_rejected(self):
        with pytest.raises(ValidationError, match="default target group"):
            RoutingSpec(
                default_target_group="admin",
                target_groups=(TargetGroupSpec(name="app", port=8080),),
            )

    @pytest.mark.parametrize("cidr", ["10.0.0.0/33", "not-a-cidr", "10.0.0.1/20"])
    def test_invalid_cidr_rejected(self, cidr):
        with pytest.raises(ValidationError, match="invalid IPv4 CIDR"):
            AccessList(cidrs=(cidr,), ports=(80,))

    def test_out_of_range_port_rejected(self):
        with pytest.raises(ValidationError, match="out of range"):
            AccessList(cidrs=("10.0.0.0/20",), ports=(70000,))

    def test_inverted_capacity_rejected(self):
        with pytest.raises(ValidationError, match="min <= desired <= max"):
            CapacitySpec(min_size=2, max_size=3, desired_capacity=1)

    def test_priority_range(self):
        with pytest.raises(ValidationError):
            ListenerRuleSpec(priority=0, host_headers=("a.example.com",), target_group="app")


class TestGetConfig:
    """Loading from Pulumi stack config."""

    @pytest.fixture(autouse=True)
    def pulumi_runtime(self):
        pulumi.runtime.set_mocks(RecordingMocks(), project="lamp-stack", stack="test", preview=False)
        yield
        pulumi.runtime.set_all_config({})

    def test_missing_environment_raises(self):
        from lamp_iac.configs.environment import get_config

        pulumi.runtime.set_all_config({})
        with pytest.raises(pulumi.ConfigMissingError):
            get_config()

    def test_defaults_when_unset(self):
        from lamp_iac.configs.environment import default_config, get_config

        pulumi.runtime.set_all_config({"lamp-stack:environment": "dev"})
        assert get_config() == default_config("dev")

    def test_overrides(self):
        from lamp_iac.configs.environment import get_config

        pulumi.runtime.set_all_config({
            "lamp-stack:environment": "staging",
            "lamp-stack:min_size": "0",
            "lamp-stack:edge_allowed_cidrs": '["198.51.100.7/32"]',
            "lamp-stack:app_host_header": "app.example.com",
            "lamp-stack:listener_open": "true",
        })
        config = get_config()

        assert config.environment == "staging"
        assert config.capacity.min_size == 0
        assert config.edge_access.cidrs == ("198.51.100.7/32",)
        assert config.edge_access.ports == (80, 443)
        assert config.routing.rules[0].host_headers == ("app.example.com",)
        assert config.listener_open is True

    def test_invalid_override_raises_validation_error(self):
        from lamp_iac.configs.environment import get_config

        pulumi.runtime.set_all_config({
            "lamp-stack:environment": "dev",
            "lamp-stack:min_size": "4",
        })
        with pytest.raises(ValidationError):
            get_config()

    def test_empty_allow_list_override_rejected(self):
        from lamp_iac.configs.environment import get_config

        pulumi.runtime.set_all_config({
            "lamp-stack:environment": "dev",
            "lamp-stack:edge_allowed_cidrs": "[]",
        })
        with pytest.raises(ValidationError):
            get_config()

    def test_missing_db_passwords_raise(self):
        from lamp_iac.configs.environment import get_db_credentials

        pulumi.runtime.set_all_config({})
        with pytest.raises(pulumi.ConfigMissingError):
            get_db_credentials()

    def test_missing_user_password_raises(self):
        from lamp_iac.configs.environment import get_db_credentials

        pulumi.runtime.set_all_config({"lamp-stack:db_root_password": "root-pw"})
        with pytest.raises(pulumi.ConfigMissingError):
            get_db_credentials()

    @pulumi.runtime.test
    def test_db_passwords_are_secret_outputs(self):
        from lamp_iac.configs.environment import get_db_credentials

        pulumi.runtime.set_all_config({
            "lamp-stack:db_root_password": "root-pw",
            "lamp-stack:db_user_password": "user-pw",
        })
        credentials = get_db_credentials()

        async def check():
            assert await credentials.root_password.is_secret()
            assert await credentials.user_password.is_secret()
            assert await credentials.root_password.future() == "root-pw"
            assert await credentials.user_password.future() == "user-pw"

        return check()
