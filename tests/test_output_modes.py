"""Tests for output mode functionality."""

import logging

import pytest
from rich.logging import RichHandler
from rich.table import Table

from contract_fuzzer.config import OutputMode
from contract_fuzzer.executor import ExecutionResult, Outcome
from contract_fuzzer.output import OutputManager
from contract_fuzzer.report import ExecutionReport
from contract_fuzzer.response_family import ResponseFamily


@pytest.fixture
def mock_console(monkeypatch):
    """Mock console to capture output."""

    class MockConsole:
        def __init__(self):
            self.output = []

        def print(self, *args, **kwargs):
            # Convert any Rich objects to strings
            if args:
                obj = args[0]
                if hasattr(obj, "__rich_console__"):
                    from rich.console import Console

                    real_console = Console()
                    segments = list(
                        obj.__rich_console__(real_console, real_console.options)
                    )
                    text = "".join(segment.text for segment in segments)
                    self.output.append(text)
                else:
                    self.output.append(str(obj))

    mock = MockConsole()
    monkeypatch.setattr("contract_fuzzer.output.Console", lambda: mock)
    return mock


@pytest.mark.parametrize(
    "mode", [OutputMode.QUIET, OutputMode.STANDARD, OutputMode.VERBOSE]
)
def test_output_modes(mock_console, mode):
    """Test different output modes."""
    output = OutputManager(mode)

    output.print("Standard message")
    output.print_verbose("Verbose message")
    output.display_status("Status message")

    table = Table()
    table.add_column("Test")
    table.add_row("Value")
    output.display_table(table)

    if mode == OutputMode.QUIET:
        assert len(mock_console.output) == 0
    elif mode == OutputMode.STANDARD:
        assert len(mock_console.output) == 3  # Standard message + status + table
        assert any("Standard message" in out for out in mock_console.output)
        assert any("Status message" in out for out in mock_console.output)
        assert not any("Verbose message" in out for out in mock_console.output)
    else:  # VERBOSE
        assert len(mock_console.output) == 4  # Standard + verbose + status + table
        assert any("Verbose message" in out for out in mock_console.output)


def test_scenario_and_response_panels_only_in_verbose(mock_console):
    """Scenario and response panels are verbose-only."""
    OutputManager(OutputMode.STANDARD).display_scenario("desc", "POST", "/pets")
    OutputManager(OutputMode.STANDARD).display_response(400, "bad request")
    assert mock_console.output == []

    verbose = OutputManager(OutputMode.VERBOSE)
    verbose.display_scenario("desc", "POST", "/pets")
    verbose.display_response(400, "bad request")
    assert len(mock_console.output) == 2


def test_report_display(mock_console):
    """Test that the report summary is rendered through the output manager."""
    report = ExecutionReport(OutputManager(OutputMode.STANDARD))
    report.add(
        ExecutionResult(
            outcome=Outcome.FAIL,
            description="Send null body",
            expected_family=ResponseFamily.FOURXX,
            expected="4XX",
            method="POST",
            path="/pets",
            status_code=200,
        )
    )

    report.display()

    assert len(mock_console.output) == 2  # Table + one failure line
    assert any("Send null body" in out for out in mock_console.output)


def test_configure_logging_installs_rich_handler(mock_console):
    """Test that logging is routed through a single RichHandler."""
    logger = logging.getLogger("contract_fuzzer")
    original_handlers = list(logger.handlers)
    original_level = logger.level
    try:
        output = OutputManager(OutputMode.VERBOSE)
        output.configure_logging()
        output.configure_logging()

        rich_handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(rich_handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers = original_handlers
        logger.setLevel(original_level)
