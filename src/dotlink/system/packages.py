"""System package installation (pacman and an AUR helper)."""

from pathlib import Path

from ..adapters.shell import have, need, run
from ..config import PackagesConfig
from ..console import Console

ARCH_RELEASE = Path("/etc/arch-release")


def is_arch() -> bool:
    return ARCH_RELEASE.is_file()


def pacman_command(packages: tuple[str, ...]) -> list[str]:
    return ["sudo", "pacman", "-Syu", "--needed", "--noconfirm", *packages]


def aur_command(helper: str, packages: tuple[str, ...]) -> list[str]:
    return [helper, "-S", "--needed", "--noconfirm", *packages]


def install_pacman(config: PackagesConfig, console: Console) -> bool:
    """Install the configured pacman packages. Returns False when skipped."""
    if not is_arch():
        console.warn("Not Arch Linux; skipping pacman install")
        return False
    need("sudo")
    console.step("Installing pacman packages (if missing)")
    run(pacman_command(config.pacman))
    return True


def install_aur(config: PackagesConfig, console: Console) -> bool:
    """Install the configured AUR packages. Returns False when skipped."""
    if not is_arch():
        console.warn("Not Arch Linux; skipping aur install")
        return False
    if not config.aur:
        console.step("No AUR packages configured; skipping")
        return False
    if not have(config.aur_helper):
        console.warn(
            f"{config.aur_helper} not found; skipping AUR packages. "
            "Install it or set packages.aur_helper."
        )
        return False
    console.step(f"Installing AUR packages with {config.aur_helper}")
    run(aur_command(config.aur_helper, config.aur))
    return True
