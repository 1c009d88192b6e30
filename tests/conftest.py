import io

import pytest
from rich.console import Console


class ScriptedPicker:
    """Picker that answers from a fixed script and records what it was shown.

    An exception class or instance in the script is raised instead of answering.
    """

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []

    def select(self, message, choices):
        self.calls.append((message, list(choices)))
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException) or (
            isinstance(answer, type) and issubclass(answer, BaseException)
        ):
            raise answer
        return answer


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return Console(file=output, width=200, color_system=None)
