"""
Security components for IAM and secrets management.

Components:
- IamRolesComponent: Instance profile for the existing role, task execution role
- SecretsManagerComponent: Database credentials secret
"""

from lamp_iac.components.security.iam_roles import IamRolesComponent, IamRoleOutputs
from lamp_iac.components.security.secrets_manager import SecretsManagerComponent, SecretsOutputs

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
    "SecretsManagerComponent",
    "SecretsOutputs",
]
