"""Configuration loader for dotlink.toml."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .errors import ConfigError

CONFIG_NAME = "dotlink.toml"

# Mirrors GNU Stow's built-in ignore list, as shell globs.
DEFAULT_IGNORE = (
    ".git",
    ".gitignore",
    ".gitmodules",
    "README*",
    "LICENSE*",
    "COPYING",
    "*~",
    ".stow-local-ignore",
)

DEFAULT_PACKAGES = ("hypr", "waybar")
DEFAULT_PACMAN = ("wget", "keyd", "libappindicator-gtk3")
DEFAULT_AUR = (
    "stow",
    "slack-desktop",
    "telegram-desktop",
    "joplin-bin",
    "notion-app-electron",
)


@dataclass(frozen=True)
class Package:
    """A directory of configuration files mirroring its destination layout."""
    name: str
    target: Path
    privileged: bool = False


@dataclass(frozen=True)
class InstallConfig:
    """Where the dotfiles live and where they go."""
    repo: Path
    target: Path
    backup_dir: Path


@dataclass(frozen=True)
class StowConfig:
    """Link packages and ignore globs."""
    packages: tuple[Package, ...]
    ignore: tuple[str, ...] = DEFAULT_IGNORE


@dataclass(frozen=True)
class PackagesConfig:
    """System and AUR packages to install."""
    pacman: tuple[str, ...] = DEFAULT_PACMAN
    aur: tuple[str, ...] = DEFAULT_AUR
    aur_helper: str = "yay"


@dataclass(frozen=True)
class ServicesConfig:
    """Units to enable and commands to run afterwards."""
    enable: tuple[str, ...] = ("keyd",)
    reload: tuple[tuple[str, ...], ...] = (("hyprctl", "reload"),)


@dataclass(frozen=True)
class UIConfig:
    """UI configuration."""
    colors: bool = True


@dataclass(frozen=True)
class DotlinkConfig:
    """Complete dotlink configuration."""
    install: InstallConfig
    stow: StowConfig
    packages: PackagesConfig
    services: ServicesConfig
    ui: UIConfig = field(default_factory=UIConfig)
    source: Path | None = None

    def select(self, names: list[str] | None) -> tuple[Package, ...]:
        """Return configured packages, optionally restricted to ``names``."""
        if not names:
            return self.stow.packages
        wanted = set(names)
        return tuple(p for p in self.stow.packages if p.name in wanted)

    def unknown(self, names: list[str] | None) -> list[str]:
        """Return the names that match no configured package."""
        known = {p.name for p in self.stow.packages}
        return [n for n in names or [] if n not in known]


def _expand(value: Any) -> Path:
    return Path(str(value)).expanduser()


def _str_tuple(data: dict[str, Any], key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = data.get(key, default)
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings")
    return tuple(value)


def _parse_packages(stow_data: dict[str, Any], home_target: Path) -> tuple[Package, ...]:
    names = _str_tuple(stow_data, "packages", DEFAULT_PACKAGES)
    packages = [Package(name=name, target=home_target) for name in names]

    system = stow_data.get("system")
    if system is None:
        system = [{"name": "etc", "target": "/etc", "privileged": True}]
    for entry in system:
        if not isinstance(entry, dict) or "name" not in entry:
            raise ConfigError("each [[stow.system]] entry needs a 'name'")
        packages.append(Package(
            name=str(entry["name"]),
            target=_expand(entry.get("target", "/etc")),
            privileged=bool(entry.get("privileged", True)),
        ))
    return tuple(packages)


def load_config(
    config_path: Path | None = None,
    repo_path: Path | None = None,
) -> DotlinkConfig:
    """
    Load configuration from dotlink.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/dotlink.toml
    3. repo_path/dotlink.toml

    Args:
        config_path: Explicit path to config file
        repo_path: Dotfiles repository root for fallback search

    Returns:
        DotlinkConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    source = None

    if config_path is not None and not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if repo_path:
        search_paths.append(repo_path / CONFIG_NAME)

    for path in search_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigError(f"Invalid config {path}: {e}") from e
            source = path
            break

    # Relative repo paths are taken relative to the config file
    install_data = toml_data.get("install", {})
    if "repo" in install_data:
        repo = _expand(install_data["repo"])
        if not repo.is_absolute() and source is not None:
            repo = source.parent / repo
    else:
        repo = repo_path or (source.parent if source else Path.cwd())

    install_config = InstallConfig(
        repo=repo,
        target=_expand(install_data.get("target", "~")),
        backup_dir=_expand(install_data.get("backup_dir", "~/.dotfiles-backup")),
    )

    stow_data = toml_data.get("stow", {})
    stow_config = StowConfig(
        packages=_parse_packages(stow_data, install_config.target),
        ignore=_str_tuple(stow_data, "ignore", DEFAULT_IGNORE),
    )

    packages_data = toml_data.get("packages", {})
    packages_config = PackagesConfig(
        pacman=_str_tuple(packages_data, "pacman", DEFAULT_PACMAN),
        aur=_str_tuple(packages_data, "aur", DEFAULT_AUR),
        aur_helper=str(packages_data.get("aur_helper", "yay")),
    )

    services_data = toml_data.get("services", {})
    reload_cmds = services_data.get("reload", [["hyprctl", "reload"]])
    if not isinstance(reload_cmds, list) or not all(isinstance(c, list) for c in reload_cmds):
        raise ConfigError("'reload' must be a list of commands")
    services_config = ServicesConfig(
        enable=_str_tuple(services_data, "enable", ("keyd",)),
        reload=tuple(tuple(str(part) for part in cmd) for cmd in reload_cmds),
    )

    ui_data = toml_data.get("ui", {})
    ui_config = UIConfig(colors=ui_data.get("colors", True))

    return DotlinkConfig(
        install=install_config,
        stow=stow_config,
        packages=packages_config,
        services=services_config,
        ui=ui_config,
        source=source,
    )


def with_overrides(
    config: DotlinkConfig,
    repo: Path | None = None,
    target: Path | None = None,
    backup_dir: Path | None = None,
) -> DotlinkConfig:
    """Apply command-line overrides on top of a loaded config."""
    install = config.install
    stow = config.stow
    if repo is not None:
        install = replace(install, repo=repo)
    if backup_dir is not None:
        install = replace(install, backup_dir=backup_dir)
    if target is not None:
        # Only home packages follow the home target
        old_target = install.target
        install = replace(install, target=target)
        stow = replace(stow, packages=tuple(
            replace(p, target=target) if p.target == old_target and not p.privileged else p
            for p in stow.packages
        ))
    return replace(config, install=install, stow=stow)
