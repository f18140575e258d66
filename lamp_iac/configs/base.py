"""
Base configuration dataclass for stack settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass

from lamp_iac.configs.schemas import AccessList, CapacitySpec, RoutingSpec, TaskSpec


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration for the LAMP deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        project: Project identifier used for resource names and tags
        vpc_id: Existing VPC to deploy into
        public_subnet_ids: Explicit ALB subnets (looked up when empty)
        private_subnet_ids: Explicit instance subnets (looked up when empty)
        instance_role_arn: Existing IAM role for ECS container instances
        hosted_zone_id: Existing Route 53 hosted zone ID
        zone_name: Root domain of the hosted zone
        record_name: Wildcard record pointing at the load balancer
        instance_type: EC2 instance type for the compute pool
        capacity: Auto-scaling group capacity bounds
        edge_access: Sources allowed to reach the load balancer
        cluster_access: Sources allowed to reach the container instances
        task: Container task specification
        routing: Listener, target groups and listener rules
        listener_open: Open the listener port to 0.0.0.0/0 on the edge group
        db_secret_name: Secrets Manager name override for database credentials
    """
    environment: str
    project: str
    vpc_id: str
    public_subnet_ids: tuple[str, ...]
    private_subnet_ids: tuple[str, ...]
    instance_role_arn: str
    hosted_zone_id: str
    zone_name: str
    record_name: str
    instance_type: str
    capacity: CapacitySpec
    edge_access: AccessList
    cluster_access: AccessList
    task: TaskSpec
    routing: RoutingSpec
    listener_open: bool
    db_secret_name: str | None

    @property
    def instance_role_name(self) -> str:
        """Role name from the instance role ARN (last path segment)."""
        return self.instance_role_arn.rsplit("/", 1)[-1]
