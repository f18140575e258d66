"""
Route 53 wildcard alias record for the load balancer.

Binds `*.lamp.<zone>` in the EXISTING hosted zone to the ALB. An alias record
resolves to the ALB's current addresses, so nothing changes when AWS rotates
them. The hosted zone is referenced by id and never created.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws


@dataclass
class DnsRecordOutputs:
    """Output values from DNS record component."""
    fqdn: pulumi.Output[str]


class DnsRecordComponent(pulumi.ComponentResource):
    """
    Wildcard A alias record pointing at the load balancer.
    """

    def __init__(
        self,
        name: str,
        hosted_zone_id: str,
        zone_name: str,
        record_name: str,
        alb_dns_name: pulumi.Input[str],
        alb_zone_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:edge:DnsRecord", name, None, opts)

        if not record_name.rstrip(".").endswith(zone_name.rstrip(".")):
            pulumi.log.warn(f"Record {record_name} is outside hosted zone {zone_name}")

        self.record = aws.route53.Record(
            f"{name}-wildcard-record",
            zone_id=hosted_zone_id,
            name=record_name,
            type="A",
            aliases=[
                aws.route53.RecordAliasArgs(
                    name=alb_dns_name,
                    zone_id=alb_zone_id,
                    evaluate_target_health=False,
                ),
            ],
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.register_outputs({
            "fqdn": self.record.fqdn,
        })

    def get_outputs(self) -> DnsRecordOutputs:
        """Get DNS record output values."""
        return DnsRecordOutputs(
            fqdn=self.record.fqdn,
        )
