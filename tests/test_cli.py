"""Tests for the dotlink CLI."""

import json

import pytest

from cli_helpers import run_cli


@pytest.fixture
def workspace(tmp_path):
    """A dotfiles repo, an empty home and a config pointing at both."""
    repo = tmp_path / "dotfiles"
    for rel in ("hypr/.config/hypr/hyprland.conf", "waybar/.config/waybar/config"):
        path = repo / rel
        path.parent.mkdir(parents=True)
        path.write_text(rel)
    home = tmp_path / "home"
    home.mkdir()
    backups = tmp_path / "backups"
    config = tmp_path / "dotlink.toml"
    config.write_text(f"""
[install]
repo = "{repo}"
target = "{home}"
backup_dir = "{backups}"

[stow]
packages = ["hypr", "waybar", "missing"]
system = []

[ui]
colors = false
""")
    return config, home, backups


def test_unknown_flag_fails_before_any_action(workspace):
    """An unknown option exits non-zero and touches nothing."""
    config, home, backups = workspace

    result = run_cli("--config", str(config), "--stow", "--bogus")

    assert result.returncode != 0
    assert "--bogus" in result.stderr
    assert list(home.iterdir()) == []
    assert not backups.exists()


def test_help_exits_zero():
    """-h prints usage."""
    result = run_cli("-h")
    assert result.returncode == 0
    assert "--stow" in result.stdout
    assert "--backup" in result.stdout


def test_no_action_prints_usage(workspace):
    """Without an action flag nothing happens."""
    config, home, _ = workspace

    result = run_cli("--config", str(config))

    assert result.returncode == 0
    assert "usage:" in result.stdout
    assert list(home.iterdir()) == []


def test_stow_links_and_is_idempotent(workspace):
    """--stow links packages; a second run is a no-op."""
    config, home, backups = workspace

    first = run_cli("--config", str(config), "--stow")
    link = home / ".config/hypr/hyprland.conf"
    assert first.returncode == 0, first.stderr
    assert link.is_symlink()
    assert "Skipping missing package dir: missing" in first.stdout
    assert "Done." in first.stdout

    second = run_cli("--config", str(config), "--stow")
    assert second.returncode == 0
    assert "0 new, 1 unchanged" in second.stdout
    assert not backups.exists()


def test_stow_with_conflict_exits_zero(workspace):
    """Conflicts are logged and the run still succeeds."""
    config, home, backups = workspace
    existing = home / ".config/waybar/config"
    existing.parent.mkdir(parents=True)
    existing.write_text("user config")

    result = run_cli("--config", str(config), "--stow")

    assert result.returncode == 0
    assert existing.read_text() == "user config"
    logs = list(backups.glob("*/waybar.log"))
    assert len(logs) == 1
    assert str(existing) in logs[0].read_text()
    assert (home / ".config/hypr/hyprland.conf").is_symlink()


def test_backup_only(workspace):
    """--backup creates the run directory but links nothing."""
    config, home, backups = workspace

    result = run_cli("--config", str(config), "--backup")

    assert result.returncode == 0
    runs = list(backups.iterdir())
    assert len(runs) == 1
    assert list(runs[0].iterdir()) == []
    assert list(home.iterdir()) == []


def test_json_report(workspace):
    """--json prints one report per link step."""
    config, home, _ = workspace

    result = run_cli("--config", str(config), "--stow", "--json")

    assert result.returncode == 0
    reports = json.loads(result.stdout)
    assert len(reports) == 1
    statuses = {r["name"]: r["status"] for r in reports[0]["results"]}
    assert statuses == {"hypr": "linked", "waybar": "linked", "missing": "skipped"}


def test_only_and_unstow(workspace):
    """--only narrows the packages; --unstow removes their links."""
    config, home, _ = workspace

    run_cli("--config", str(config), "--stow", "--only", "hypr")
    assert (home / ".config/hypr/hyprland.conf").is_symlink()
    assert not (home / ".config/waybar").exists()

    result = run_cli("--config", str(config), "--unstow", "--only", "hypr")
    assert result.returncode == 0
    assert not (home / ".config/hypr/hyprland.conf").exists()


def test_dry_run(workspace):
    """--dry-run prints actions and leaves the home alone."""
    config, home, _ = workspace

    result = run_cli("--config", str(config), "--stow", "--dry-run")

    assert result.returncode == 0
    assert "[DRY RUN] Would link:" in result.stdout
    assert list(home.iterdir()) == []


def test_target_override(workspace, tmp_path):
    """--target redirects home packages."""
    config, home, _ = workspace
    other = tmp_path / "other-home"

    result = run_cli("--config", str(config), "--target", str(other), "--stow", "--only", "waybar")

    assert result.returncode == 0
    assert (other / ".config/waybar/config").is_symlink()
    assert list(home.iterdir()) == []


def test_missing_config_is_fatal(tmp_path):
    """A --config that does not exist aborts with status 1."""
    result = run_cli("--config", str(tmp_path / "nope.toml"), "--stow")
    assert result.returncode == 1
    assert "Config file not found" in result.stderr


def test_dry_run_json_is_parseable(workspace):
    """Dry-run chatter stays off stdout when --json is given."""
    config, home, _ = workspace

    result = run_cli("--config", str(config), "--stow", "--dry-run", "--json")

    assert result.returncode == 0, result.stderr
    reports = json.loads(result.stdout)
    assert reports[0]["results"][0]["name"] == "hypr"
    assert "[DRY RUN]" not in result.stdout
    assert list(home.iterdir()) == []


def test_only_with_unknown_name_warns(workspace):
    """A misspelt --only name is reported instead of silently ignored."""
    config, home, _ = workspace

    result = run_cli("--config", str(config), "--stow", "--only", "hyrp")

    assert result.returncode == 0
    assert "Unknown package: hyrp" in result.stdout
    assert list(home.iterdir()) == []


def test_privilege_failure_exits_one(tmp_path, monkeypatch, capsys):
    """A refused sudo aborts the run with status 1."""
    from dotlink.cli import main

    repo = tmp_path / "dotfiles"
    (repo / "etc/keyd").mkdir(parents=True)
    (repo / "etc/keyd/default.conf").write_text("[ids]")
    etc = tmp_path / "etc"
    etc.mkdir()
    config = tmp_path / "dotlink.toml"
    config.write_text(f"""
[install]
repo = "{repo}"
target = "{tmp_path / 'home'}"
backup_dir = "{tmp_path / 'backups'}"

[stow]
packages = []

[[stow.system]]
name = "etc"
target = "{etc}"

[ui]
colors = false
""")

    class Refused:
        returncode = 1

    monkeypatch.setattr("dotlink.adapters.fs.os.geteuid", lambda: 1000)
    monkeypatch.setattr("dotlink.adapters.shell.shutil.which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr("dotlink.adapters.fs.subprocess.run", lambda cmd: Refused())

    with pytest.raises(SystemExit) as exc:
        main(["--config", str(config), "--stow"])

    assert exc.value.code == 1
    assert "[err]" in capsys.readouterr().err
    assert list(etc.iterdir()) == []
