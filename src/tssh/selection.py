"""Category and host menus, and the navigation loop between them."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Protocol, Sequence

from rich.console import Console

from .config import AppConfig
from .errors import SelectionError
from .peers import Host
from .picker import PromptAborted

logger = logging.getLogger(__name__)

EXIT_CHOICE = "Exit"
GO_BACK_CHOICE = "Go Back"


class Picker(Protocol):
    def select(self, message: str, choices: Sequence[str]) -> str: ...


class CategoryAction(Enum):
    SELECT = "select"
    EXIT = "exit"


class HostAction(Enum):
    CONNECT = "connect"
    GO_BACK = "go_back"
    EXIT = "exit"


@dataclass(frozen=True)
class CategoryOutcome:
    action: CategoryAction
    category: Optional[str] = None


@dataclass(frozen=True)
class HostOutcome:
    action: HostAction
    host: Optional[Host] = None


def category_choices(categories: Mapping[str, Sequence[str]]) -> list[str]:
    """Sorted category names followed by the Exit entry."""
    return sorted(categories) + [EXIT_CHOICE]


def filter_hosts(hosts: Sequence[Host], allowed: Sequence[str]) -> list[Host]:
    """Hosts whose name is in allowed, in host order."""
    allowed_set = set(allowed)
    return [host for host in hosts if host.name in allowed_set]


class Selector:
    """Drives the category -> host menus.

    Cancelling the category menu exits; cancelling the host menu goes back to
    the category menu.
    """

    def __init__(
        self,
        config: AppConfig,
        hosts: Sequence[Host],
        picker: Picker,
        console: Optional[Console] = None,
    ):
        self.config = config
        self.hosts = list(hosts)
        self.picker = picker
        self.console = console or Console()

    def select_category(self, hint: Optional[str] = None) -> CategoryOutcome:
        categories = self.config.categories

        if hint is not None:
            if hint in categories:
                logger.debug("Category %r taken from command line", hint)
                return CategoryOutcome(CategoryAction.SELECT, hint)
            self.console.print(
                f"Category '{hint}' not found. Please select from the list.",
                markup=False,
            )

        try:
            choice = self.picker.select(
                "Select a server category:", category_choices(categories)
            )
        except PromptAborted:
            return CategoryOutcome(CategoryAction.EXIT)

        if choice == EXIT_CHOICE:
            return CategoryOutcome(CategoryAction.EXIT)
        return CategoryOutcome(CategoryAction.SELECT, choice)

    def select_host(self, category: str) -> HostOutcome:
        allowed = self.config.categories.get(category, [])
        if not allowed:
            self.console.print(
                f"No servers configured for category '{category}'. "
                "Check the config file.",
                markup=False,
            )
            return HostOutcome(HostAction.GO_BACK)

        matches = filter_hosts(self.hosts, allowed)
        if not matches:
            self.console.print(
                f"No active Tailscale servers found for '{category}'. "
                "Check 'tailscale status'.",
                markup=False,
            )
            return HostOutcome(HostAction.GO_BACK)

        labels = [str(host) for host in matches]
        names_by_label = {str(host): host.name for host in matches}
        choices = labels + [GO_BACK_CHOICE, EXIT_CHOICE]

        try:
            choice = self.picker.select("Select a server:", choices)
        except PromptAborted:
            return HostOutcome(HostAction.GO_BACK)

        if choice == EXIT_CHOICE:
            return HostOutcome(HostAction.EXIT)
        if choice == GO_BACK_CHOICE:
            return HostOutcome(HostAction.GO_BACK)

        name = names_by_label.get(choice)
        host = next((h for h in self.hosts if h.name == name), None)
        if host is None:
            raise SelectionError(f"Selected server {choice!r} not found internally.")
        return HostOutcome(HostAction.CONNECT, host)

    def run(self, hint: Optional[str] = None) -> Optional[Host]:
        """Run the menus until a host is picked (returned) or the user exits (None)."""
        while True:
            outcome = self.select_category(hint)
            # Only the first pass honours the hint.
            hint = None
            if outcome.action is CategoryAction.EXIT:
                logger.debug("Exit from category menu")
                return None

            result = self.select_host(outcome.category)
            logger.debug("Host menu for %r returned %s", outcome.category, result.action.value)
            if result.action is HostAction.CONNECT:
                return result.host
            if result.action is HostAction.EXIT:
                return None
