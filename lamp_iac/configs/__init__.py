"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from lamp_iac.configs.base import StackConfig
from lamp_iac.configs.environment import (
    DatabaseCredentials,
    default_config,
    get_config,
    get_db_credentials,
)
from lamp_iac.configs.constants import (
    DEFAULT_TAGS,
    EDGE_ALLOWED_CIDRS,
    CLUSTER_ALLOWED_CIDRS,
    PORTS,
)

__all__ = [
    "StackConfig",
    "get_config",
    "default_config",
    "DatabaseCredentials",
    "get_db_credentials",
    "DEFAULT_TAGS",
    "EDGE_ALLOWED_CIDRS",
    "CLUSTER_ALLOWED_CIDRS",
    "PORTS",
]
