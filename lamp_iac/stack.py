"""
Stack assembly for the LAMP infrastructure.

Instantiates all component resources in dependency order:
1. Existing VPC lookup -> Security Groups
2. Secrets Manager -> IAM (instance profile, task execution role)
3. ECS cluster + ASG + capacity provider -> Task definition
4. ALB (target groups, ASG attachments, listener, rules)
5. ECS service (after listener and capacity provider association)
6. Wildcard DNS record
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.base import StackConfig
from lamp_iac.configs.environment import DatabaseCredentials
from lamp_iac.utils.naming import ResourceNamer

# Networking
from lamp_iac.components.networking.existing_vpc import lookup_existing_vpc
from lamp_iac.components.networking.security_groups import SecurityGroupsComponent

# Security
from lamp_iac.components.security.iam_roles import IamRolesComponent
from lamp_iac.components.security.secrets_manager import SecretsManagerComponent

# Compute
from lamp_iac.components.compute.ecs_cluster import EcsClusterComponent
from lamp_iac.components.compute.task_definition import TaskDefinitionComponent
from lamp_iac.components.compute.ecs_service import EcsServiceComponent

# Load balancing
from lamp_iac.components.load_balancing.alb import AlbComponent

# Edge
from lamp_iac.components.edge.dns_record import DnsRecordComponent


@dataclass
class StackOutputs:
    """Values the program exports or hands to tooling."""
    load_balancer_dns: pulumi.Output[str]
    record_fqdn: pulumi.Output[str]
    cluster_name: pulumi.Output[str]
    service_name: pulumi.Output[str]


def build_stack(config: StackConfig, credentials: DatabaseCredentials) -> StackOutputs:
    """
    Declare every resource of the LAMP stack.

    Args:
        config: Validated stack configuration
        credentials: Database passwords (Pulumi secrets)

    Returns:
        StackOutputs with the load balancer DNS name and supporting values
    """
    namer = ResourceNamer(project=config.project, environment=config.environment)
    base_name = namer.name("")

    aws_region = aws.get_region().region

    # --- Layer 1: Networking (existing VPC) ---
    network = lookup_existing_vpc(
        vpc_id=config.vpc_id,
        public_subnet_ids=config.public_subnet_ids,
        private_subnet_ids=config.private_subnet_ids,
    )
    pulumi.log.info(
        f"Using VPC {network.vpc_id} ({network.vpc_cidr}): "
        f"{len(network.public_subnet_ids)} public, "
        f"{len(network.private_subnet_ids)} private subnets"
    )

    security_groups = SecurityGroupsComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=network.vpc_id,
        edge_access=config.edge_access,
        cluster_access=config.cluster_access,
        listener_port=config.routing.listener_port,
        listener_open=config.listener_open,
    )
    sg_outputs = security_groups.get_outputs()

    # --- Layer 2: Secrets and IAM ---
    secrets = SecretsManagerComponent(
        name=base_name,
        environment=config.environment,
        secret_name=config.db_secret_name or namer.secret_name("db-credentials"),
        root_password=credentials.root_password,
        user_password=credentials.user_password,
    )
    secret_outputs = secrets.get_outputs()

    iam_roles = IamRolesComponent(
        name=base_name,
        environment=config.environment,
        instance_role_name=config.instance_role_name,
        db_secret_arn=secret_outputs.db_credentials_arn,
    )
    iam_outputs = iam_roles.get_outputs()

    # --- Layer 3: Compute ---
    ecs_cluster = EcsClusterComponent(
        name=base_name,
        environment=config.environment,
        instance_type=config.instance_type,
        capacity=config.capacity,
        subnet_ids=network.private_subnet_ids,
        security_group_id=sg_outputs.cluster_sg_id,
        instance_profile_arn=iam_outputs.instance_profile_arn,
    )
    cluster_outputs = ecs_cluster.get_outputs()

    task_definition = TaskDefinitionComponent(
        name=namer.name(config.task.family),
        environment=config.environment,
        task=config.task,
        execution_role_arn=iam_outputs.task_execution_role_arn,
        db_secret_arn=secret_outputs.db_credentials_arn,
        aws_region=aws_region,
    )
    task_outputs = task_definition.get_outputs()

    # --- Layer 4: Load balancing ---
    alb = AlbComponent(
        name=base_name,
        environment=config.environment,
        namer=namer,
        vpc_id=network.vpc_id,
        subnet_ids=network.public_subnet_ids,
        security_group_id=sg_outputs.edge_sg_id,
        asg_name=cluster_outputs.asg_name,
        routing=config.routing,
    )
    alb_outputs = alb.get_outputs()

    # --- Layer 5: Service ---
    ecs_service = EcsServiceComponent(
        name=base_name,
        environment=config.environment,
        cluster_arn=cluster_outputs.cluster_arn,
        task_definition_arn=task_outputs.task_definition_arn,
        capacity_provider_name=cluster_outputs.capacity_provider_name,
        depends_on=[ecs_cluster.cluster_capacity_providers, alb.listener],
    )

    # --- Layer 6: DNS ---
    dns_record = DnsRecordComponent(
        name=base_name,
        hosted_zone_id=config.hosted_zone_id,
        zone_name=config.zone_name,
        record_name=config.record_name,
        alb_dns_name=alb_outputs.alb_dns_name,
        alb_zone_id=alb_outputs.alb_zone_id,
    )

    return StackOutputs(
        load_balancer_dns=alb_outputs.alb_dns_name,
        record_fqdn=dns_record.get_outputs().fqdn,
        cluster_name=cluster_outputs.cluster_name,
        service_name=ecs_service.get_outputs().service_name,
    )
