"""
Networking components for the existing VPC.

Components:
- lookup_existing_vpc: Resolves the VPC and its public/private subnets
- SecurityGroupsComponent: Edge and cluster security groups with allow-lists
"""

from lamp_iac.components.networking.existing_vpc import NetworkOutputs, lookup_existing_vpc
from lamp_iac.components.networking.security_groups import (
    IngressRule,
    SecurityGroupOutputs,
    SecurityGroupsComponent,
    build_ingress_rules,
)

__all__ = [
    "NetworkOutputs",
    "lookup_existing_vpc",
    "IngressRule",
    "SecurityGroupOutputs",
    "SecurityGroupsComponent",
    "build_ingress_rules",
]
