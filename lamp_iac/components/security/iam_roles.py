"""
IAM component for the ECS compute pool and tasks.

Creates:
- Instance profile wrapping the EXISTING ECS instance role (the role itself is
  only referenced by name, never created or modified)
- Task execution role used by the ECS agent to pull images, write container
  logs and read the database credentials secret
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.utils.tags import create_tags

TASK_EXECUTION_POLICY_ARN = (
    "arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
)


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    instance_profile_arn: pulumi.Output[str]
    task_execution_role_arn: pulumi.Output[str]


class IamRolesComponent(pulumi.ComponentResource):
    """
    Instance profile for the existing role plus the task execution role.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        instance_role_name: str,
        db_secret_arn: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # Instance profile for the existing ECS instance role
        self.instance_profile = aws.iam.InstanceProfile(
            f"{name}-instance-profile",
            role=instance_role_name,
            tags=create_tags(environment, f"{name}-instance-profile"),
            opts=child_opts,
        )

        ecs_tasks_assume_policy = json.dumps({
            "Version": "2012-10-17",
            "Statement": [{
                "Effect": "Allow",
                "Principal": {"Service": "ecs-tasks.amazonaws.com"},
                "Action": "sts:AssumeRole",
            }],
        })

        # Task execution role
        self.task_execution_role = aws.iam.Role(
            f"{name}-task-execution-role",
            assume_role_policy=ecs_tasks_assume_policy,
            tags=create_tags(environment, f"{name}-task-execution-role"),
            opts=child_opts,
        )

        aws.iam.RolePolicyAttachment(
            f"{name}-task-execution-policy",
            role=self.task_execution_role.name,
            policy_arn=TASK_EXECUTION_POLICY_ARN,
            opts=child_opts,
        )

        # Read access to the database credentials only
        aws.iam.RolePolicy(
            f"{name}-task-secrets-policy",
            role=self.task_execution_role.id,
            policy=pulumi.Output.from_input(db_secret_arn).apply(
                lambda arn: json.dumps({
                    "Version": "2012-10-17",
                    "Statement": [{
                        "Effect": "Allow",
                        "Action": ["secretsmanager:GetSecretValue"],
                        "Resource": [arn],
                    }],
                })
            ),
            opts=child_opts,
        )

        self.register_outputs({
            "instance_profile_arn": self.instance_profile.arn,
            "task_execution_role_arn": self.task_execution_role.arn,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM output values."""
        return IamRoleOutputs(
            instance_profile_arn=self.instance_profile.arn,
            task_execution_role_arn=self.task_execution_role.arn,
        )
