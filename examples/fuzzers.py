"""Example fuzzer strategies and dispatchers built on the engine."""

import asyncio
from typing import Any, Dict, List

from contract_fuzzer import (
    ExecutionReport,
    FuzzerConfig,
    HttpRequest,
    HttpResponse,
    HttpxDispatcher,
    OutputMode,
    ResponseFamily,
    Scenario,
    ScenarioExecutor,
)
from contract_fuzzer import navigator

BODYLESS_METHODS = {"GET", "DELETE", "HEAD"}


# Example 1: Null values for every field of a request body
def null_values_scenarios(method: str, path: str, payload: Dict[str, Any]) -> List[Scenario]:
    """One scenario per field, each with that field set to null."""
    scenarios = []
    for field_path in navigator.list_field_paths(payload):
        mutated, _, found = navigator.replace(payload, navigator.split_field_path(field_path), None)
        if not found:
            continue
        scenarios.append(
            Scenario(
                expected_family=ResponseFamily.FOURXX,
                method=method,
                path=path,
                description=f"Send null for field [{field_path}]",
                headers={"Content-Type": "application/json"},
                payload=mutated,
                skipped_methods=BODYLESS_METHODS,
                fuzzer="NullValuesFuzzer",
            )
        )
    return scenarios


# Example 2: Remove each top-level field and check for leaked internals
def remove_fields_scenarios(method: str, path: str, payload: Dict[str, Any]) -> List[Scenario]:
    """One scenario per removed field; a stack trace in the body is a failure."""

    def no_stack_trace(response: HttpResponse, scenario: Scenario) -> bool:
        return "traceback" not in response.body.lower()

    scenarios = []
    for field in payload:
        mutated, found = navigator.delete(payload, [field])
        if found:
            scenarios.append(
                Scenario(
                    expected_family=ResponseFamily.FOURXX,
                    method=method,
                    path=path,
                    description=f"Remove field [{field}]",
                    payload=mutated,
                    skipped_methods=BODYLESS_METHODS,
                    response_processor=no_stack_trace,
                    fuzzer="RemoveFieldsFuzzer",
                )
            )
    return scenarios


# Example 3: Custom dispatcher adding an auth header
class BearerDispatcher:
    """Dispatcher wrapping another one and adding a bearer token."""

    def __init__(self, inner: HttpxDispatcher, token: str):
        self.inner = inner
        self.token = token

    async def __call__(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers)
        headers["Authorization"] = f"Bearer {self.token}"
        return await self.inner(request.model_copy(update={"headers": headers}))


async def main() -> None:
    config = FuzzerConfig(
        base_url="http://localhost:8080",
        max_requests_per_minute=300,
        output_mode=OutputMode.STANDARD,
    )
    payload = {"name": "rex", "owner": {"id": 1, "tags": ["a"]}}

    report = ExecutionReport()
    async with HttpxDispatcher.from_config(config) as dispatcher:
        executor = ScenarioExecutor.from_config(
            config, BearerDispatcher(dispatcher, "your-token"), reporter=report
        )
        report.output = executor.output
        executor.output.configure_logging()

        scenarios = null_values_scenarios("POST", "/pets", payload)
        scenarios += remove_fields_scenarios("POST", "/pets", payload)
        await executor.execute_all(scenarios)

    report.display()
    report.export_results("results.json")


if __name__ == "__main__":
    asyncio.run(main())
