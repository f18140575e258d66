"""
ECS Cluster Component backed by an EC2 Auto Scaling Group.

The compute chain:
1. Cluster: logical grouping the service schedules onto.
2. Launch Template: ECS-optimized Amazon Linux 2023 AMI (resolved from the
   public SSM parameter), instance profile for the existing instance role,
   cluster security group, user data joining the instance to the cluster.
3. Auto Scaling Group: lives in the private subnets, min/max/desired from config.
4. Capacity Provider: lets the cluster ask the ASG for instances on demand
   (managed scaling). Associated with the cluster as its default strategy.

Scaling and health-driven replacement run in AWS's own control loops.
"""

import base64
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.constants import ECS_AMI_PARAMETER
from lamp_iac.configs.schemas import CapacitySpec
from lamp_iac.utils.tags import create_tags


def render_user_data(cluster_name: str) -> str:
    """Base64 user data registering the instance with the cluster."""
    script = f"""#!/bin/bash
echo ECS_CLUSTER={cluster_name} >> /etc/ecs/ecs.config
"""
    return base64.b64encode(script.encode()).decode()


@dataclass
class EcsClusterOutputs:
    """Output values from ECS cluster component."""
    cluster_arn: pulumi.Output[str]
    cluster_name: pulumi.Output[str]
    asg_name: pulumi.Output[str]
    capacity_provider_name: pulumi.Output[str]


class EcsClusterComponent(pulumi.ComponentResource):
    """
    ECS cluster with an auto-scaling EC2 capacity provider.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        instance_type: str,
        capacity: CapacitySpec,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        instance_profile_arn: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:EcsCluster", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            tags=create_tags(environment, f"{name}-cluster"),
            opts=child_opts,
        )

        ami_id = aws.ssm.get_parameter(name=ECS_AMI_PARAMETER).value

        self.launch_template = aws.ec2.LaunchTemplate(
            f"{name}-launch-template",
            image_id=ami_id,
            instance_type=instance_type,
            iam_instance_profile=aws.ec2.LaunchTemplateIamInstanceProfileArgs(
                arn=instance_profile_arn,
            ),
            vpc_security_group_ids=[security_group_id],
            user_data=self.cluster.name.apply(render_user_data),
            metadata_options=aws.ec2.LaunchTemplateMetadataOptionsArgs(
                http_tokens="required",  # IMDSv2
                http_endpoint="enabled",
            ),
            tags=create_tags(environment, f"{name}-launch-template"),
            opts=child_opts,
        )

        self.asg = aws.autoscaling.Group(
            f"{name}-asg",
            vpc_zone_identifiers=subnet_ids,
            min_size=capacity.min_size,
            max_size=capacity.max_size,
            desired_capacity=capacity.desired_capacity,
            launch_template=aws.autoscaling.GroupLaunchTemplateArgs(
                id=self.launch_template.id,
                version="$Latest",
            ),
            tags=[
                aws.autoscaling.GroupTagArgs(
                    key="Name",
                    value=f"{name}-instance",
                    propagate_at_launch=True,
                ),
                aws.autoscaling.GroupTagArgs(
                    key="AmazonECSManaged",
                    value="true",
                    propagate_at_launch=True,
                ),
            ],
            opts=child_opts,
        )

        self.capacity_provider = aws.ecs.CapacityProvider(
            f"{name}-capacity-provider",
            auto_scaling_group_provider=aws.ecs.CapacityProviderAutoScalingGroupProviderArgs(
                auto_scaling_group_arn=self.asg.arn,
                managed_scaling=aws.ecs.CapacityProviderAutoScalingGroupProviderManagedScalingArgs(
                    status="ENABLED",
                    target_capacity=100,
                ),
                managed_termination_protection="DISABLED",
            ),
            tags=create_tags(environment, f"{name}-capacity-provider"),
            opts=child_opts,
        )

        self.cluster_capacity_providers = aws.ecs.ClusterCapacityProviders(
            f"{name}-cluster-capacity-providers",
            cluster_name=self.cluster.name,
            capacity_providers=[self.capacity_provider.name],
            default_capacity_provider_strategies=[
                aws.ecs.ClusterCapacityProvidersDefaultCapacityProviderStrategyArgs(
                    capacity_provider=self.capacity_provider.name,
                    weight=1,
                ),
            ],
            opts=child_opts,
        )

        self.register_outputs({
            "cluster_arn": self.cluster.arn,
            "cluster_name": self.cluster.name,
            "asg_name": self.asg.name,
            "capacity_provider_name": self.capacity_provider.name,
        })

    def get_outputs(self) -> EcsClusterOutputs:
        """Get ECS cluster output values."""
        return EcsClusterOutputs(
            cluster_arn=self.cluster.arn,
            cluster_name=self.cluster.name,
            asg_name=self.asg.name,
            capacity_provider_name=self.capacity_provider.name,
        )
