"""Tests for version information."""

import subprocess
import sys

from cli_helpers import cli_env


def test_version_flag():
    """Test that --version flag works and shows version."""
    result = subprocess.run(
        [sys.executable, "-m", "dotlink", "--version"],
        capture_output=True,
        text=True,
        env=cli_env(),
    )

    assert result.returncode == 0
    assert "dotlink" in result.stdout
    assert "python" in result.stdout
    assert "platform" in result.stdout


def test_version_module():
    """Test that version is accessible from module."""
    from dotlink import __version__

    assert __version__
    assert isinstance(__version__, str)
    parts = __version__.split('.')
    assert len(parts) >= 2
