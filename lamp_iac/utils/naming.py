"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

from dataclasses import dataclass

from lamp_iac.configs.constants import LB_NAME_MAX_LENGTH


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'cluster', 'edge-sg')

        Returns:
            Formatted resource name
        """
        if not resource:
            return f"{self.project}-{self.environment}"
        return f"{self.project}-{self.environment}-{resource}"

    def lb_name(self, resource: str) -> str:
        """
        Generate a load balancer or target group name.

        AWS caps these names at 32 characters and rejects a trailing hyphen.

        Args:
            resource: Resource identifier (e.g., 'alb', 'tg-app')

        Returns:
            Name of at most 32 characters
        """
        return self.name(resource)[:LB_NAME_MAX_LENGTH].rstrip("-")

    def secret_name(self, name: str) -> str:
        """
        Generate a Secrets Manager secret name.

        Args:
            name: Secret identifier

        Returns:
            Secret name with environment prefix
        """
        return f"{self.project}/{self.environment}/{name}"
