" generic fixtures "
import pytest

from cmdcomplete.models import CommandParameter, ConsoleIssuer, RegisteredCommand
from cmdcomplete.registry import CompletionRegistry
from cmdcomplete.resolver import CompletionResolver


def pytest_configure():
    "Runs once before all"
    from cmdcomplete.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


def _make_command(complete="", *overrides, name="cmd", on_error=None):
    parameters = [CommandParameter(name=f"p{i}", complete=spec) for i, spec in enumerate(overrides)]
    return RegisteredCommand(name=name, complete=complete, parameters=parameters, on_error=on_error)


@pytest.fixture
def make_command():
    """Build a command with one input consuming parameter per extra argument.

    Each extra argument is the parameter's own spec, or None to use the positional token.
    """
    return _make_command


@pytest.fixture
def registry():
    return CompletionRegistry()


@pytest.fixture
def resolver(registry):
    return CompletionResolver(registry)


@pytest.fixture
def issuer():
    return ConsoleIssuer("tester")
