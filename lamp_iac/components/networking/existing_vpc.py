"""
Existing VPC lookup.

The stack never creates networking: it binds to a VPC that already exists and
derives two subnet sets from it.
- Public subnets (map-public-ip-on-launch = true): host the internet-facing ALB.
- Private subnets (map-public-ip-on-launch = false): host the ECS instances.

Explicit subnet ids from stack config take precedence over the lookup.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws


@dataclass
class NetworkOutputs:
    """Identifiers resolved from the existing VPC."""
    vpc_id: str
    vpc_cidr: str
    public_subnet_ids: list[str]
    private_subnet_ids: list[str]


def _lookup_subnets(vpc_id: str, public: bool) -> list[str]:
    result = aws.ec2.get_subnets(
        filters=[
            aws.ec2.GetSubnetsFilterArgs(name="vpc-id", values=[vpc_id]),
            aws.ec2.GetSubnetsFilterArgs(
                name="map-public-ip-on-launch",
                values=["true" if public else "false"],
            ),
        ],
    )
    return sorted(result.ids)


def lookup_existing_vpc(
    vpc_id: str,
    public_subnet_ids: tuple[str, ...] = (),
    private_subnet_ids: tuple[str, ...] = (),
) -> NetworkOutputs:
    """
    Resolve the existing VPC and its public/private subnets.

    Args:
        vpc_id: Existing VPC identifier
        public_subnet_ids: Explicit public subnets, looked up when empty
        private_subnet_ids: Explicit private subnets, looked up when empty

    Returns:
        NetworkOutputs with sorted subnet id lists
    """
    vpc = aws.ec2.get_vpc(id=vpc_id)

    public = list(public_subnet_ids) or _lookup_subnets(vpc.id, public=True)
    private = list(private_subnet_ids) or _lookup_subnets(vpc.id, public=False)

    if not public:
        pulumi.log.warn(f"No public subnets found in {vpc_id}; the ALB needs at least two")
    if not private:
        pulumi.log.warn(f"No private subnets found in {vpc_id}; instances have nowhere to launch")

    return NetworkOutputs(
        vpc_id=vpc.id,
        vpc_cidr=vpc.cidr_block,
        public_subnet_ids=public,
        private_subnet_ids=private,
    )
