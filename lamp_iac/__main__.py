"""
Pulumi program entry point for the LAMP stack infrastructure.

Loads the stack configuration, declares every resource through
`lamp_iac.stack.build_stack`, and exports the load balancer DNS name.
"""

import pulumi

from lamp_iac.configs.environment import get_config, get_db_credentials
from lamp_iac.stack import build_stack
from lamp_iac.utils.outputs import write_outputs_to_env


def main() -> None:
    """Deploy the LAMP stack infrastructure."""
    config = get_config()
    credentials = get_db_credentials()

    pulumi.log.info(
        f"Deploying {config.project} ({config.environment}) into {config.vpc_id}"
    )

    outputs = build_stack(config, credentials)

    # Write outputs to .env file for local tooling
    write_outputs_to_env(
        {"load_balancer_dns": outputs.load_balancer_dns},
        "infrastructure.env",
    )

    pulumi.export("load_balancer_dns", outputs.load_balancer_dns)


# Execute
main()
