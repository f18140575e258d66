"""
Pulumi component resources for the LAMP stack infrastructure.

Each submodule provides reusable ComponentResource classes:
- networking: existing VPC lookup, security groups
- security: instance profile, task execution role, Secrets Manager
- compute: ECS cluster with EC2 capacity provider, task definition, service
- load_balancing: Application Load Balancer and routing rules
- edge: Route 53 wildcard record
"""
