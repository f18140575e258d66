"""
Task Definition Component for the LAMP containers.

One EC2 task definition (bridge networking) holds the three containers:
- mysql-container: database, host port 3306
- phpmyadmin-container: admin UI, container 80 -> host 8888
- php-apache-container: web application, container 80 -> host 8080, with the
  shared `html-data` volume mounted read-write at the document root

Containers write to one CloudWatch log group, each under its own stream prefix.
Passwords are injected from Secrets Manager through `secrets`, never through
`environment`.
"""

import json
from dataclasses import dataclass
from typing import Any

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.constants import LOG_RETENTION_DAYS
from lamp_iac.configs.schemas import ContainerSpec, TaskSpec
from lamp_iac.utils.tags import create_tags


def secret_value_from(secret_arn: str, key: str) -> str:
    """ECS valueFrom reference to one JSON key of a Secrets Manager secret."""
    return f"{secret_arn}:{key}::"


def render_container_definition(
    container: ContainerSpec,
    log_group_name: str,
    region: str,
    secret_arn: str,
) -> dict[str, Any]:
    """Render one container as an ECS container definition dict."""
    definition: dict[str, Any] = {
        "name": container.name,
        "image": container.image,
        "cpu": container.cpu,
        "memory": container.memory_mib,
        "essential": container.essential,
        "environment": [
            {"name": key, "value": value}
            for key, value in container.environment.items()
        ],
        "secrets": [
            {"name": key, "valueFrom": secret_value_from(secret_arn, secret_key)}
            for key, secret_key in container.secrets.items()
        ],
        "portMappings": [
            {
                "containerPort": mapping.container_port,
                "hostPort": mapping.host_port,
                "protocol": mapping.protocol,
            }
            for mapping in container.port_mappings
        ],
        "mountPoints": [
            {
                "sourceVolume": mount.source_volume,
                "containerPath": mount.container_path,
                "readOnly": mount.read_only,
            }
            for mount in container.mount_points
        ],
        "logConfiguration": {
            "logDriver": "awslogs",
            "options": {
                "awslogs-group": log_group_name,
                "awslogs-region": region,
                "awslogs-stream-prefix": container.log_stream_prefix,
            },
        },
    }
    if container.command is not None:
        definition["command"] = list(container.command)
    return definition


def render_container_definitions(
    task: TaskSpec,
    log_group_name: str,
    region: str,
    secret_arn: str,
) -> list[dict[str, Any]]:
    """
    Render the task's containers in declaration order.

    Args:
        task: Validated task specification
        log_group_name: CloudWatch log group for the awslogs driver
        region: AWS region of the log group
        secret_arn: ARN of the database credentials secret

    Returns:
        List of ECS container definition dicts
    """
    return [
        render_container_definition(container, log_group_name, region, secret_arn)
        for container in task.containers
    ]


@dataclass
class TaskDefinitionOutputs:
    """Output values from task definition component."""
    task_definition_arn: pulumi.Output[str]
    log_group_name: pulumi.Output[str]


class TaskDefinitionComponent(pulumi.ComponentResource):
    """
    EC2 task definition with the LAMP container set.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        task: TaskSpec,
        execution_role_arn: pulumi.Input[str],
        db_secret_arn: pulumi.Input[str],
        aws_region: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:TaskDefinition", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # CloudWatch Log Group
        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=f"/ecs/{name}",
            retention_in_days=LOG_RETENTION_DAYS,
            tags=create_tags(environment, f"{name}-logs"),
            opts=child_opts,
        )

        container_definitions = pulumi.Output.all(
            self.log_group.name, db_secret_arn
        ).apply(
            lambda args: json.dumps(
                render_container_definitions(task, args[0], aws_region, args[1])
            )
        )

        self.task_definition = aws.ecs.TaskDefinition(
            f"{name}-task",
            family=task.family,
            network_mode="bridge",
            requires_compatibilities=["EC2"],
            execution_role_arn=execution_role_arn,
            volumes=[
                aws.ecs.TaskDefinitionVolumeArgs(name=volume)
                for volume in task.volumes
            ],
            container_definitions=container_definitions,
            tags=create_tags(environment, f"{name}-task"),
            opts=child_opts,
        )

        self.register_outputs({
            "task_definition_arn": self.task_definition.arn,
            "log_group_name": self.log_group.name,
        })

    def get_outputs(self) -> TaskDefinitionOutputs:
        """Get task definition output values."""
        return TaskDefinitionOutputs(
            task_definition_arn=self.task_definition.arn,
            log_group_name=self.log_group.name,
        )
