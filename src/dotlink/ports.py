from pathlib import Path
from typing import Protocol


class LinkFs(Protocol):
    """
    The mutations the link installer performs. Reads go straight to the
    filesystem; only writes are routed through a port so that privileged
    targets can be handled by a different implementation.
    """

    def makedirs(self, path: Path) -> None:
        pass

    def symlink(self, link_target: str, dest: Path) -> None:
        pass

    def unlink(self, path: Path) -> None:
        pass
