"""Interactive ssh session to a chosen host."""

import logging
import shlex
import subprocess
from typing import Optional

from rich.console import Console

from .errors import SessionError
from .peers import Host

logger = logging.getLogger(__name__)

SSH_OPTIONS = [
    "-o", "StrictHostKeyChecking=no",
    "-o", "UserKnownHostsFile=/dev/null",
]


def build_ssh_command(host: Host, user: str, program: str = "ssh") -> list[str]:
    return [program, *SSH_OPTIONS, f"{user}@{host.address}"]


class SessionLauncher:
    """Runs ssh attached to the current terminal and waits for it to exit."""

    def __init__(self, program: str = "ssh", console: Optional[Console] = None):
        self.program = program
        self.console = console or Console()

    def connect(self, host: Host, user: str) -> None:
        """
        Open an interactive session to host as user.

        Raises:
            SessionError: if ssh cannot be started or exits non-zero
        """
        self.console.print(f"\nAttempting to SSH into: {host}", markup=False)
        command = build_ssh_command(host, user, self.program)
        logger.debug("Executing: %s", shlex.join(command))

        try:
            result = subprocess.run(command)
        except OSError as e:
            raise SessionError(f"Failed to execute '{self.program}': {e}") from e

        if result.returncode != 0:
            raise SessionError(
                f"SSH command failed with status: {result.returncode}",
                returncode=result.returncode,
            )
