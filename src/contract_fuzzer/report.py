"""Collection, summary and export of scenario results."""

import json
import threading
from typing import Any, Dict, List, Optional

from rich.table import Table

from .executor import ExecutionResult, Outcome
from .output import OutputManager


class ExecutionReport:
    """Accumulates results of a fuzzing run.

    An instance can be passed directly as the executor's ``reporter``
    callback; appends are safe from concurrent workers.
    """

    def __init__(self, output: Optional[OutputManager] = None):
        self.output = output
        self.results: List[ExecutionResult] = []
        self._lock = threading.Lock()

    def __call__(self, result: ExecutionResult) -> None:
        self.add(result)

    def add(self, result: ExecutionResult) -> None:
        with self._lock:
            self.results.append(result)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    def failures(self) -> List[ExecutionResult]:
        return [r for r in self.results if r.is_failure()]

    def get_summary(self) -> Dict[str, Any]:
        """Generate a summary of the run.

        Returns:
            Dictionary with per-outcome counts, failures grouped by fuzzer and
            the failing results
        """
        summary: Dict[str, Any] = {
            "total_tests": len(self.results),
            "passed": self.count(Outcome.PASS),
            "failed": self.count(Outcome.FAIL),
            "errors": self.count(Outcome.ERROR),
            "skipped": self.count(Outcome.SKIPPED),
            "failures_by_fuzzer": {},
            "failing_scenarios": [],
        }

        for failure in self.failures():
            fuzzer = failure.fuzzer or "<unnamed>"
            if fuzzer not in summary["failures_by_fuzzer"]:
                summary["failures_by_fuzzer"][fuzzer] = 0
            summary["failures_by_fuzzer"][fuzzer] += 1

            summary["failing_scenarios"].append({
                "fuzzer": failure.fuzzer,
                "scenario": failure.description,
                "request": f"{failure.method} {failure.path}",
                "expected": failure.expected,
                "actual": failure.status_code,
            })

        return summary

    def export_results(self, filepath: str, format: str = "json") -> None:
        """Export results to file.

        Args:
            filepath: Path to output file
            format: Output format ('json' or 'markdown')
        """
        if format == "json":
            self._export_json(filepath)
        elif format == "markdown":
            self._export_markdown(filepath)
        else:
            raise ValueError(f"Unsupported format: {format}")

    def _export_json(self, filepath: str) -> None:
        """Export results as JSON."""
        data = {
            "summary": self.get_summary(),
            "results": [
                {
                    "fuzzer": r.fuzzer,
                    "scenario": r.description,
                    "method": r.method,
                    "path": r.path,
                    "outcome": r.outcome.value,
                    "expected": r.expected,
                    "status_code": r.status_code,
                    "diagnostic": r.diagnostic,
                    "error": r.error_message,
                    "execution_time": r.execution_time,
                    "timestamp": r.timestamp,
                }
                for r in self.results
            ],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

    def _export_markdown(self, filepath: str) -> None:
        """Export results as Markdown."""
        summary = self.get_summary()

        with open(filepath, "w") as f:
            f.write("# Fuzzing Results\n\n")

            f.write("## Summary\n\n")
            f.write(f"- Total Tests: {summary['total_tests']}\n")
            f.write(f"- Passed: {summary['passed']}\n")
            f.write(f"- Failed: {summary['failed']}\n")
            f.write(f"- Errors: {summary['errors']}\n")
            f.write(f"- Skipped: {summary['skipped']}\n\n")

            if summary["failures_by_fuzzer"]:
                f.write("## Failures by Fuzzer\n\n")
                for fuzzer, count in summary["failures_by_fuzzer"].items():
                    f.write(f"- {fuzzer}: {count}\n")
                f.write("\n")

            if summary["failing_scenarios"]:
                f.write("## Failing Scenarios\n\n")
                for failure in summary["failing_scenarios"]:
                    f.write(f"### {failure['scenario']}\n\n")
                    f.write(f"- Request: `{failure['request']}`\n")
                    f.write(f"- Expected: {failure['expected']}\n")
                    f.write(f"- Actual: {failure['actual']}\n\n")

            errors = [r for r in self.results if r.outcome == Outcome.ERROR]
            if errors:
                f.write("## Errors\n\n")
                for result in errors:
                    f.write(f"- {result.description}: {result.error_message}\n")

    def display(self) -> None:
        """Display the summary as a rich table."""
        if self.output is None:
            return

        summary = self.get_summary()
        table = Table(title="[bold cyan]Fuzzing Summary[/bold cyan]")
        table.add_column("Outcome", style="cyan")
        table.add_column("Count", style="green")
        table.add_row("Total", str(summary["total_tests"]))
        table.add_row("Passed", str(summary["passed"]))
        table.add_row("Failed", str(summary["failed"]))
        table.add_row("Errors", str(summary["errors"]))
        table.add_row("Skipped", str(summary["skipped"]))
        self.output.display_table(table)

        for failure in summary["failing_scenarios"]:
            self.output.display_status(
                f"{failure['request']} - {failure['scenario']}: expected {failure['expected']}, got {failure['actual']}",
                style="red",
            )
