"""
Pulumi mocks that record every declared resource and invoke.

`render_stack` runs `build_stack` against the mock monitor and returns the
recorder, so tests can assert on the rendered resource graph without AWS.
"""

from dataclasses import dataclass
from typing import Any

import pulumi

from lamp_iac.configs.base import StackConfig
from lamp_iac.configs.environment import DatabaseCredentials
from lamp_iac.stack import build_stack

MOCK_REGION = "ap-northeast-1"
MOCK_VPC_CIDR = "10.0.0.0/16"
MOCK_PUBLIC_SUBNETS = ["subnet-public-a", "subnet-public-c"]
MOCK_PRIVATE_SUBNETS = ["subnet-private-a", "subnet-private-c"]
MOCK_AMI_ID = "ami-0ecs2023mock"
ROOT_PASSWORD = "mock-root-password"
USER_PASSWORD = "mock-user-password"


@dataclass
class RecordedResource:
    """A resource registered with the mock monitor."""
    typ: str
    name: str
    inputs: dict[str, Any]
    outputs: dict[str, Any]


class RecordingMocks(pulumi.runtime.Mocks):
    """Mocks that keep every registration and invoke for later assertions."""

    def __init__(self) -> None:
        self.resources: list[RecordedResource] = []
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = dict(args.inputs)
        outputs.setdefault("name", args.name)
        outputs["arn"] = f"arn:aws:mock:{MOCK_REGION}:000000000000:{args.typ}/{args.name}"

        if args.typ == "aws:lb/loadBalancer:LoadBalancer":
            outputs["dnsName"] = f"{args.name}-123456.{MOCK_REGION}.elb.amazonaws.com"
            outputs["zoneId"] = "Z14GRHDCWA56QT"
        elif args.typ == "aws:route53/record:Record":
            outputs["fqdn"] = args.inputs.get("name", args.name)

        self.resources.append(
            RecordedResource(args.typ, args.name, dict(args.inputs), outputs)
        )
        return [f"{args.name}-id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append((args.token, dict(args.args)))

        if args.token == "aws:ec2/getVpc:getVpc":
            return {"id": args.args.get("id"), "cidrBlock": MOCK_VPC_CIDR}
        if args.token == "aws:ec2/getSubnets:getSubnets":
            public = any(
                f.get("name") == "map-public-ip-on-launch" and f.get("values") == ["true"]
                for f in args.args.get("filters", [])
            )
            ids = MOCK_PUBLIC_SUBNETS if public else MOCK_PRIVATE_SUBNETS
            return {"id": MOCK_REGION, "ids": ids}
        if args.token == "aws:ssm/getParameter:getParameter":
            return {"id": args.args.get("name"), "name": args.args.get("name"), "value": MOCK_AMI_ID}
        if args.token == "aws:index/getRegion:getRegion":
            return {"id": MOCK_REGION, "region": MOCK_REGION}
        return {}

    # Query helpers

    def of_type(self, typ: str) -> list[RecordedResource]:
        """All recorded resources of one type token."""
        return [r for r in self.resources if r.typ == typ]

    def one(self, typ: str) -> RecordedResource:
        """The single recorded resource of a type token."""
        found = self.of_type(typ)
        assert len(found) == 1, f"expected one {typ}, found {len(found)}"
        return found[0]

    def calls_to(self, token: str) -> list[dict[str, Any]]:
        """Arguments of every invoke of a function token."""
        return [call_args for call_token, call_args in self.calls if call_token == token]


def render_stack(config: StackConfig) -> RecordingMocks:
    """
    Run build_stack under fresh mocks and return the recorded graph.

    Args:
        config: Stack configuration to render

    Returns:
        RecordingMocks holding every resource and invoke
    """
    mocks = RecordingMocks()
    pulumi.runtime.set_mocks(mocks, project="lamp-stack", stack="test", preview=False)

    @pulumi.runtime.test
    def program():
        credentials = DatabaseCredentials(
            root_password=pulumi.Output.secret(ROOT_PASSWORD),
            user_password=pulumi.Output.secret(USER_PASSWORD),
        )
        outputs = build_stack(config, credentials)
        return outputs.load_balancer_dns

    program()
    return mocks
