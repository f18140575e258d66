"""
ECS Service Component.

Keeps one copy of the LAMP task running on the cluster's capacity provider.
The load balancer reaches the containers through the instances' host ports
(the ASG is registered with the target groups), so the service itself carries
no load balancer block.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.utils.tags import create_tags


@dataclass
class EcsServiceOutputs:
    """Output values from ECS service component."""
    service_name: pulumi.Output[str]


class EcsServiceComponent(pulumi.ComponentResource):
    """
    ECS service binding the task definition to the cluster.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        cluster_arn: pulumi.Input[str],
        task_definition_arn: pulumi.Input[str],
        capacity_provider_name: pulumi.Input[str],
        desired_count: int = 1,
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:EcsService", name, None, opts)

        self.service = aws.ecs.Service(
            f"{name}-service",
            cluster=cluster_arn,
            task_definition=task_definition_arn,
            desired_count=desired_count,
            capacity_provider_strategies=[
                aws.ecs.ServiceCapacityProviderStrategyArgs(
                    capacity_provider=capacity_provider_name,
                    weight=1,
                ),
            ],
            tags=create_tags(environment, f"{name}-service"),
            opts=pulumi.ResourceOptions(
                parent=self,
                depends_on=depends_on or [],
            ),
        )

        self.register_outputs({
            "service_name": self.service.name,
        })

    def get_outputs(self) -> EcsServiceOutputs:
        """Get ECS service output values."""
        return EcsServiceOutputs(
            service_name=self.service.name,
        )
