"""Fatal error types.

Non-fatal conditions (a missing package directory, a link conflict) are
reported through ``RunReport`` results instead of being raised.
"""


class DotlinkError(Exception):
    """Base class for errors that abort the whole run."""


class ConfigError(DotlinkError):
    """The configuration file is invalid."""


class MissingDependency(DotlinkError):
    """A required external tool is not on PATH."""

    def __init__(self, tool: str):
        super().__init__(f"Missing dependency: {tool}")
        self.tool = tool


class PrivilegeFailure(DotlinkError):
    """Elevated privilege could not be acquired."""


class CommandError(DotlinkError):
    """A required external command exited non-zero."""

    def __init__(self, cmd: list[str], returncode: int):
        super().__init__(f"Command failed ({returncode}): {' '.join(cmd)}")
        self.cmd = cmd
        self.returncode = returncode
