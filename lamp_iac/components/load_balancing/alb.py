"""
Application Load Balancer Component for the LAMP stack.

The resource chain:
1. Load Balancer: internet-facing, in the public subnets, behind the edge
   security group. Its DNS name is the stack's only output.
2. Target Groups: one per routing entry (HTTP, instance targets, health check
   on path/interval). The ASG is attached to each, so every container instance
   is registered on every target group's port.
3. Listener: binds the listener port and forwards to the default target group.
4. Listener Rules: priority-ranked host-header matches forwarding to other
   target groups. Priorities are unique (validated in RoutingSpec).

Default routing:
- anything       -> dbadmin (8888, phpMyAdmin)
- test.lamp.<zone> (priority 1) -> app (8080, PHP/Apache)
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from lamp_iac.configs.schemas import RoutingSpec, TargetGroupSpec
from lamp_iac.utils.naming import ResourceNamer
from lamp_iac.utils.tags import create_tags


@dataclass
class AlbOutputs:
    """Output values from ALB component."""
    alb_arn: pulumi.Output[str]
    alb_dns_name: pulumi.Output[str]
    alb_zone_id: pulumi.Output[str]
    listener_arn: pulumi.Output[str]
    target_group_arns: dict[str, pulumi.Output[str]]


class AlbComponent(pulumi.ComponentResource):
    """
    Internet-facing Application Load Balancer in front of the ECS instances.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        namer: ResourceNamer,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        asg_name: pulumi.Input[str],
        routing: RoutingSpec,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:load_balancing:Alb", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.alb = aws.lb.LoadBalancer(
            f"{name}-alb",
            name=namer.lb_name("alb"),
            internal=False,
            load_balancer_type="application",
            security_groups=[security_group_id],
            subnets=subnet_ids,
            enable_deletion_protection=False,
            tags=create_tags(environment, f"{name}-alb"),
            opts=child_opts,
        )

        self.target_groups: dict[str, aws.lb.TargetGroup] = {}
        for spec in routing.target_groups:
            self.target_groups[spec.name] = self._create_target_group(
                name, environment, namer, vpc_id, spec, child_opts
            )

            # Register every ASG instance on this target group's port
            aws.autoscaling.Attachment(
                f"{name}-asg-attachment-{spec.name}",
                autoscaling_group_name=asg_name,
                lb_target_group_arn=self.target_groups[spec.name].arn,
                opts=child_opts,
            )

        default_tg = routing.target_group(routing.default_target_group)
        pulumi.log.info(
            f"Listener {routing.listener_port} forwards to '{default_tg.name}' "
            f"(port {default_tg.port}) unless a host-header rule matches"
        )

        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=self.alb.arn,
            port=routing.listener_port,
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_groups[routing.default_target_group].arn,
                ),
            ],
            tags=create_tags(environment, f"{name}-listener"),
            opts=child_opts,
        )

        self.listener_rules: list[aws.lb.ListenerRule] = []
        for rule in sorted(routing.rules, key=lambda r: r.priority):
            self.listener_rules.append(
                aws.lb.ListenerRule(
                    f"{name}-rule-{rule.priority}",
                    listener_arn=self.listener.arn,
                    priority=rule.priority,
                    conditions=[
                        aws.lb.ListenerRuleConditionArgs(
                            host_header=aws.lb.ListenerRuleConditionHostHeaderArgs(
                                values=list(rule.host_headers),
                            ),
                        ),
                    ],
                    actions=[
                        aws.lb.ListenerRuleActionArgs(
                            type="forward",
                            target_group_arn=self.target_groups[rule.target_group].arn,
                        ),
                    ],
                    tags=create_tags(environment, f"{name}-rule-{rule.priority}"),
                    opts=child_opts,
                )
            )

        self.register_outputs({
            "alb_arn": self.alb.arn,
            "alb_dns_name": self.alb.dns_name,
            "listener_arn": self.listener.arn,
        })

    @staticmethod
    def _create_target_group(
        name: str,
        environment: str,
        namer: ResourceNamer,
        vpc_id: pulumi.Input[str],
        spec: TargetGroupSpec,
        opts: pulumi.ResourceOptions,
    ) -> aws.lb.TargetGroup:
        return aws.lb.TargetGroup(
            f"{name}-tg-{spec.name}",
            name=namer.lb_name(f"tg-{spec.name}"),
            port=spec.port,
            protocol="HTTP",
            vpc_id=vpc_id,
            target_type="instance",
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                enabled=True,
                path=spec.health_check.path,
                port="traffic-port",
                protocol="HTTP",
                interval=spec.health_check.interval,
            ),
            tags=create_tags(environment, f"{name}-tg-{spec.name}"),
            opts=opts,
        )

    def get_outputs(self) -> AlbOutputs:
        """Get ALB output values."""
        return AlbOutputs(
            alb_arn=self.alb.arn,
            alb_dns_name=self.alb.dns_name,
            alb_zone_id=self.alb.zone_id,
            listener_arn=self.listener.arn,
            target_group_arns={key: tg.arn for key, tg in self.target_groups.items()},
        )
