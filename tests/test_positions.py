"""Tests for the position resolver."""

import pytest

from cmdcomplete.models import CommandParameter, RegisteredCommand
from cmdcomplete.positions import resolve_positions


def _command(complete, *parameters):
    return RegisteredCommand(name="cmd", complete=complete, parameters=list(parameters))


@pytest.mark.parametrize("tokens", [0, 1, 2, 3, 5])
@pytest.mark.parametrize("params", [0, 1, 3, 4])
def test_positional_length(tokens, params):
    """Test the output length without overrides."""
    complete = " ".join(f"@t{i}" for i in range(tokens))
    command = _command(complete, *(CommandParameter(f"p{i}") for i in range(params)))
    assert len(resolve_positions(command)) == min(tokens, params)


def test_positional_order():
    """Test positional tokens keep their order."""
    command = _command("@a  @b\t@c", CommandParameter("x"), CommandParameter("y"), CommandParameter("z"))
    assert resolve_positions(command) == ["@a", "@b", "@c"]


def test_override_takes_two_entries():
    """Test a two-piece override gives two entries."""
    command = _command(
        "@a @b",
        CommandParameter("x", complete="one two"),
        CommandParameter("y"),
    )
    assert resolve_positions(command) == ["one", "two", "@a"]


def test_override_does_not_consume_token():
    """Test an override leaves positional tokens alone."""
    command = _command(
        "@a @b",
        CommandParameter("x"),
        CommandParameter("y", complete="@override"),
        CommandParameter("z"),
    )
    assert resolve_positions(command) == ["@a", "@override", "@b"]


def test_override_with_empty_queue():
    """Test overrides still apply without positional tokens."""
    command = _command("", CommandParameter("x", complete="one two"))
    assert resolve_positions(command) == ["one", "two"]


def test_non_consuming_parameters_skipped():
    """Test parameters not consuming input are skipped."""
    command = _command(
        "@a @b",
        CommandParameter("issuer", consumes_input=False),
        CommandParameter("x"),
        CommandParameter("flag", complete="@ignored", consumes_input=False),
        CommandParameter("y"),
    )
    assert resolve_positions(command) == ["@a", "@b"]


def test_truncates_when_tokens_run_out():
    """Test the walk stops once positional tokens run out."""
    command = _command(
        "@a",
        CommandParameter("x"),
        CommandParameter("y"),
        CommandParameter("z", complete="@late"),
    )
    assert resolve_positions(command) == ["@a"]


def test_no_parameters():
    """Test a command without parameters."""
    assert resolve_positions(_command("@a @b")) == []
