"""Enable auxiliary services and reload running programs."""

from ..adapters.shell import have, need, run
from ..config import ServicesConfig
from ..console import Console
from .packages import is_arch


def enable_services(config: ServicesConfig, console: Console) -> list[str]:
    """
    Enable each configured unit whose program is installed, then run the
    reload commands. Failures are warnings.

    Returns:
        Units that were enabled
    """
    if not is_arch():
        return []
    need("sudo")

    enabled = []
    for unit in config.enable:
        if not have(unit):
            continue
        console.step(f"Enabling {unit}")
        if run(["sudo", "systemctl", "enable", "--now", unit], check=False) == 0:
            enabled.append(unit)
        else:
            console.warn(f"Failed to enable {unit}")

    for cmd in config.reload:
        if not cmd:
            continue
        if not have(cmd[0]):
            console.warn(f"{cmd[0]} not found; skipping '{' '.join(cmd)}'")
            continue
        console.step(f"Running {' '.join(cmd)}")
        if run(cmd, check=False) != 0:
            console.warn(f"'{' '.join(cmd)}' failed")

    return enabled
