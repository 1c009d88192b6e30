"""Live peer listing from ``tailscale status``."""

import logging
import subprocess
from typing import Iterable, Mapping, Sequence

from pydantic import BaseModel, ConfigDict

from .errors import PeerQueryError

logger = logging.getLogger(__name__)

STATUS_COMMAND = ("tailscale", "status")


class Host(BaseModel):
    """A peer reported by the status command."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str

    def __str__(self) -> str:
        return f"{self.name} ({self.address})"


def allowed_names(categories: Mapping[str, Iterable[str]]) -> set[str]:
    """Union of the host names across all categories."""
    return {name for names in categories.values() for name in names}


def short_name(identifier: str) -> str:
    """Strip the domain part: ``web1.tailnet.ts.net`` -> ``web1``."""
    return identifier.split(".", 1)[0]


def parse_status(text: str, allowed: set[str]) -> list[Host]:
    """Parse status output into the hosts whose short name is allowed.

    Each peer line is ``<address> <dotted-name> ...``. Blank lines, ``#``
    comments and lines with fewer than two fields are skipped. Output keeps
    input order and is not deduplicated.
    """
    hosts = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue

        parts = stripped.split()
        if len(parts) < 2:
            logger.debug("Skipping malformed status line: %r", line)
            continue

        address, identifier = parts[0], parts[1]
        name = short_name(identifier)
        if name in allowed:
            hosts.append(Host(name=name, address=address))

    return hosts


class PeerLister:
    """Runs the status command and turns its output into hosts."""

    def __init__(self, command: Sequence[str] = STATUS_COMMAND):
        self.command = list(command)

    def list_hosts(self, allowed: set[str]) -> list[Host]:
        """
        Query live peers and keep the allow-listed ones.

        Raises:
            PeerQueryError: if the command cannot be run or exits non-zero
        """
        display = " ".join(self.command)
        logger.debug("Running %s", display)
        try:
            result = subprocess.run(self.command, capture_output=True, text=True)
        except OSError as e:
            raise PeerQueryError(f"Failed to execute '{display}': {e}") from e

        if result.returncode != 0:
            stderr = result.stderr or ""
            raise PeerQueryError(
                f"'{display}' failed with status {result.returncode}: {stderr.strip()}",
                stderr=stderr,
            )

        hosts = parse_status(result.stdout or "", allowed)
        logger.debug("Found %d allow-listed peer(s)", len(hosts))
        return hosts
