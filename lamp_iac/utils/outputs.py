"""
Stack output helpers.

Writes resolved stack outputs to a dotenv file so local tooling can pick up
the load balancer address after `pulumi up`.
"""

from pathlib import Path

import pulumi


def format_env(values: dict[str, object]) -> str:
    """Render outputs as KEY=value lines, keys upper-cased and sorted."""
    lines = [f"{key.upper()}={value}" for key, value in sorted(values.items())]
    return "\n".join(lines) + "\n"


def write_outputs_to_env(
    outputs: dict[str, pulumi.Input[object]],
    filename: str,
) -> None:
    """
    Write stack outputs to a dotenv file once they resolve.

    Skipped during preview, where most outputs are still unknown.

    Args:
        outputs: Export name -> value or Output
        filename: Target file, relative to the working directory
    """
    if pulumi.runtime.is_dry_run():
        return

    def _write(values: dict[str, object]) -> None:
        path = Path(filename)
        path.write_text(format_env(values))
        pulumi.log.info(f"Wrote {len(values)} outputs to {path}")

    pulumi.Output.all(**outputs).apply(_write)
