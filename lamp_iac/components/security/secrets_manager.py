"""
Secrets Manager component for database credentials.

The MySQL root and application-user passwords come from Pulumi secret config
(`db_root_password`, `db_user_password`) and are stored in one JSON secret.
Containers read individual keys through ECS `secrets` (valueFrom
`<secret-arn>:<json-key>::`), so no password appears in the task definition.
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.defaults import ROOT_PASSWORD_KEY, USER_PASSWORD_KEY
from lamp_iac.utils.tags import create_tags


@dataclass
class SecretsOutputs:
    """Output values from Secrets Manager component."""
    db_credentials_arn: pulumi.Output[str]


class SecretsManagerComponent(pulumi.ComponentResource):
    """
    Secrets Manager component holding the database credentials.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        secret_name: str,
        root_password: pulumi.Input[str],
        user_password: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:SecretsManager", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.db_credentials = aws.secretsmanager.Secret(
            f"{name}-db-credentials",
            name=secret_name,
            description="MySQL credentials for the LAMP task",
            recovery_window_in_days=0,  # Immediate deletion (dev only)
            tags=create_tags(environment, f"{name}-db-credentials"),
            opts=child_opts,
        )

        secret_string = pulumi.Output.secret(
            pulumi.Output.all(root_password, user_password).apply(
                lambda args: json.dumps({
                    ROOT_PASSWORD_KEY: args[0],
                    USER_PASSWORD_KEY: args[1],
                })
            )
        )

        aws.secretsmanager.SecretVersion(
            f"{name}-db-credentials-version",
            secret_id=self.db_credentials.id,
            secret_string=secret_string,
            opts=child_opts,
        )

        self.register_outputs({
            "db_credentials_arn": self.db_credentials.arn,
        })

    def get_outputs(self) -> SecretsOutputs:
        """Get secret output values."""
        return SecretsOutputs(
            db_credentials_arn=self.db_credentials.arn,
        )
