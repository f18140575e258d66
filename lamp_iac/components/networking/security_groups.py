"""
Security Groups Component for Network Access Control.

Two rule sets guard the stack:
- Edge (ALB): only the allow-listed public addresses reach HTTP/HTTPS.
- Cluster (ECS instances): only the allow-listed VPC ranges reach the host
  ports the containers publish (8888 admin UI, 80, 8080 app).

Both groups allow all outbound traffic. Each (CIDR, port) pair becomes its own
ingress rule resource, ordered CIDR-major so the plan is stable across runs.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.constants import EDGE_PORT_LABELS
from lamp_iac.configs.schemas import AccessList
from lamp_iac.utils.tags import create_tags


@dataclass(frozen=True)
class IngressRule:
    """One planned ingress rule."""
    cidr: str
    port: int
    description: str
    protocol: str = "tcp"

    @property
    def key(self) -> str:
        """Stable resource-name suffix, e.g. '10-0-16-0-20-8080'."""
        return f"{self.cidr.replace('.', '-').replace('/', '-')}-{self.port}"


def _describe(label: str, port: int, cidr: str, port_labels: dict[int, str]) -> str:
    if port in port_labels:
        return f"Allow {port_labels[port]} from {cidr}"
    return f"Allow {label} {port} from {cidr}"


def build_ingress_rules(
    access_list: AccessList,
    label: str,
    port_labels: dict[int, str] | None = None,
) -> list[IngressRule]:
    """
    Expand an access list into ordered ingress rules.

    Args:
        access_list: Allowed CIDRs and ports
        label: Description prefix (e.g. 'TCP')
        port_labels: Protocol names for well-known ports (e.g. {443: 'HTTPS'})

    Returns:
        One rule per (cidr, port), CIDR-major in declaration order
    """
    port_labels = port_labels or {}
    return [
        IngressRule(
            cidr=cidr,
            port=port,
            description=_describe(label, port, cidr, port_labels),
        )
        for cidr in access_list.cidrs
        for port in access_list.ports
    ]


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    edge_sg_id: pulumi.Output[str]
    cluster_sg_id: pulumi.Output[str]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """
    Security groups for the load balancer and the container instances.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        edge_access: AccessList,
        cluster_access: AccessList,
        listener_port: int,
        listener_open: bool = False,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # ALB security group
        self.edge_sg = aws.ec2.SecurityGroup(
            f"{name}-edge-sg",
            description="Allow HTTP from specific IP",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-edge-sg"),
            opts=child_opts,
        )

        # ECS instance security group
        self.cluster_sg = aws.ec2.SecurityGroup(
            f"{name}-cluster-sg",
            description="Allow inbound traffic from ALB",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-cluster-sg"),
            opts=child_opts,
        )

        self.edge_rules = build_ingress_rules(edge_access, "TCP", EDGE_PORT_LABELS)
        self.cluster_rules = build_ingress_rules(cluster_access, "TCP")

        self._create_rules(name, "edge", self.edge_sg, self.edge_rules, child_opts)
        self._create_rules(name, "cluster", self.cluster_sg, self.cluster_rules, child_opts)

        if listener_open:
            pulumi.log.warn(
                f"Listener port {listener_port} is open to 0.0.0.0/0 on {name}-edge-sg"
            )
            aws.vpc.SecurityGroupIngressRule(
                f"{name}-edge-ingress-listener-open",
                security_group_id=self.edge_sg.id,
                ip_protocol="tcp",
                from_port=listener_port,
                to_port=listener_port,
                cidr_ipv4="0.0.0.0/0",
                description="Allow from anyone on listener port",
                opts=child_opts,
            )

        for label, sg in (("edge", self.edge_sg), ("cluster", self.cluster_sg)):
            aws.vpc.SecurityGroupEgressRule(
                f"{name}-{label}-egress-all",
                security_group_id=sg.id,
                ip_protocol="-1",
                cidr_ipv4="0.0.0.0/0",
                description="All outbound traffic",
                opts=child_opts,
            )

        self.register_outputs({
            "edge_sg_id": self.edge_sg.id,
            "cluster_sg_id": self.cluster_sg.id,
        })

    def _create_rules(
        self,
        name: str,
        label: str,
        security_group: aws.ec2.SecurityGroup,
        rules: list[IngressRule],
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create one ingress rule resource per planned rule."""
        for rule in rules:
            aws.vpc.SecurityGroupIngressRule(
                f"{name}-{label}-ingress-{rule.key}",
                security_group_id=security_group.id,
                ip_protocol=rule.protocol,
                from_port=rule.port,
                to_port=rule.port,
                cidr_ipv4=rule.cidr,
                description=rule.description,
                opts=opts,
            )

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            edge_sg_id=self.edge_sg.id,
            cluster_sg_id=self.cluster_sg.id,
        )
