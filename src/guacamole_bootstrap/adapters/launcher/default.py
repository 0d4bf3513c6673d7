"""Hand the container process over to Tomcat.

Purpose
    Implement the :class:`guacamole_bootstrap.application.ports.Launcher` port
    by replacing the current process image with ``catalina.sh run``, so Tomcat
    becomes PID 1 and receives the container's signals directly.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Final, NoReturn, Sequence

from ...observability import log_info

DEFAULT_SERVER_HOME: Final[Path] = Path("/usr/local/tomcat")
DEFAULT_COMMAND: Final[tuple[str, ...]] = ("catalina.sh", "run")


class CatalinaLauncher:
    """Exec the application server from its home directory."""

    def __init__(self, server_home: str | Path = DEFAULT_SERVER_HOME, command: Sequence[str] = DEFAULT_COMMAND) -> None:
        if not command:
            raise ValueError("Launch command must not be empty")
        self.server_home = Path(server_home)
        self.command = tuple(command)

    def launch(self) -> NoReturn:
        """Change into :attr:`server_home` and exec :attr:`command`.

        Raises
        ------
        OSError
            If the directory is missing or the command cannot be executed.
        """

        log_info("server_launch", backend="tomcat", path=str(self.server_home), command=list(self.command))
        os.chdir(self.server_home)
        os.execvp(self.command[0], list(self.command))
