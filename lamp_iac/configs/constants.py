"""
Infrastructure constants for the LAMP stack.

Contains the default identifiers, allow-lists, container images and
load balancer settings. Every value can be overridden from Pulumi stack config.
"""

from typing import Final

PROJECT_NAME: Final[str] = "lamp-stack"

# Existing resources (referenced, never created)
EXISTING_VPC_ID: Final[str] = "vpc-02b5eb5d25b928589"
EXISTING_INSTANCE_ROLE_ARN: Final[str] = "arn:aws:iam::735125878431:role/ecsInstanceRole"
EXISTING_HOSTED_ZONE_ID: Final[str] = "Z0961844B43SYO7C4Q38"
EXISTING_ZONE_NAME: Final[str] = "sano.ss-sre-admin.net"

WILDCARD_RECORD_NAME: Final[str] = "*.lamp.sano.ss-sre-admin.net"

# Edge (ALB) allow-list
EDGE_ALLOWED_CIDRS: Final[list[str]] = [
    "122.210.238.201/32",
    "113.37.225.8/32",
]
EDGE_ALLOWED_PORTS: Final[list[int]] = [80, 443]
EDGE_PORT_LABELS: Final[dict[int, str]] = {80: "HTTP", 443: "HTTPS"}

# Cluster (ECS instances) allow-list
CLUSTER_ALLOWED_CIDRS: Final[list[str]] = [
    "10.0.0.0/20",
    "10.0.16.0/20",
]
CLUSTER_ALLOWED_PORTS: Final[list[int]] = [8888, 80, 8080]

# Compute pool
INSTANCE_TYPE: Final[str] = "t2.small"
CAPACITY: Final[dict[str, int]] = {
    "min_size": 1,
    "max_size": 3,
    "desired_capacity": 1,
}

# Public SSM parameter holding the ECS-optimized Amazon Linux 2023 AMI
ECS_AMI_PARAMETER: Final[str] = (
    "/aws/service/ecs/optimized-ami/amazon-linux-2023/recommended/image_id"
)

# Container images
IMAGE_REGISTRY: Final[str] = "public.ecr.aws/docker/library"
IMAGE_TAGS: Final[dict[str, str]] = {
    "mysql": "9.2.0",
    "phpmyadmin": "latest",
    "php": "8.2.27-apache",
}

# Database settings shared by the containers
DATABASE: Final[dict[str, str]] = {
    "name": "lampdb",
    "user": "lampuser",
    "host": "mysql-container",
    "port": "3306",
}

# Named task volume mounted into the web application
HTML_VOLUME: Final[str] = "html-data"
HTML_DOCUMENT_ROOT: Final[str] = "/var/www/html"

PHP_STARTUP_COMMAND: Final[list[str]] = [
    "/bin/sh",
    "-c",
    'echo "<?php phpinfo(); ?>" > /var/www/html/index.php && apache2-foreground',
]

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "https": 443,
    "mysql": 3306,
    "dbadmin": 8888,
    "app": 8080,
}

# Load balancer routing
LISTENER_PORT: Final[int] = 80
DEFAULT_TARGET_GROUP: Final[str] = "dbadmin"
APP_HOST_HEADER: Final[str] = "test.lamp.sano.ss-sre-admin.net"
HEALTH_CHECK: Final[dict[str, str | int]] = {
    "path": "/",
    "interval": 30,
}

# CloudWatch
LOG_RETENTION_DAYS: Final[int] = 30

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": PROJECT_NAME,
    "ManagedBy": "pulumi",
}

# AWS limit on ALB and target group names
LB_NAME_MAX_LENGTH: Final[int] = 32
