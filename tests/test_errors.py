import pytest

from hermes.errors import (
    AgentInterruptedError,
    ConfigError,
    HermesError,
    IterationBudgetExceededError,
    ToolNotFoundError,
)


def test_tool_not_found_message_and_name():
    err = ToolNotFoundError("grep")
    assert str(err) == "Tool not found: grep"
    assert err.name == "grep"


def test_tool_not_found_is_lookup_error():
    err = ToolNotFoundError("missing")
    assert isinstance(err, LookupError)
    assert str(err) == "Tool not found: missing"


def test_iteration_budget_message():
    assert str(IterationBudgetExceededError()) == "Iteration budget exceeded"


def test_interrupted_message():
    assert str(AgentInterruptedError()) == "Interrupted"


def test_config_error_message():
    err = ConfigError("bad value")
    assert str(err) == "Configuration error: bad value"
    assert err.detail == "bad value"


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (ToolNotFoundError("x"), "Tool not found: x"),
        (IterationBudgetExceededError(), "Iteration budget exceeded"),
        (AgentInterruptedError(), "Interrupted"),
        (ConfigError("y"), "Configuration error: y"),
    ],
)
def test_all_errors_share_base(error, expected):
    assert isinstance(error, HermesError)
    assert str(error) == expected