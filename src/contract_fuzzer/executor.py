"""Scenario execution engine.

Fuzzer strategies build :class:`Scenario` objects (one malformed request plus
the response family the service should answer with) and hand them to a
:class:`ScenarioExecutor`. The executor paces the request through the shared
rate limiter, dispatches it, classifies the response and always produces
exactly one :class:`ExecutionResult`:

- ``skipped``: the scenario's method is not applicable to its fuzzer
- ``error``: the request never got a response (connection, timeout, ...)
- ``pass``/``fail``: the service answered, inside or outside the expected family

A failing classification is the product of a fuzzing run, not an engine
error, so it is never reported as ``error``.
"""

import asyncio
import inspect
import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import (
    Any,
    Awaitable,
    Callable,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from .config import FuzzerConfig, OutputMode
from .dispatch import Dispatcher
from .models import HttpRequest, HttpResponse
from .output import OutputManager
from .rate_limiter import RateLimiter
from .response_family import ResponseFamily, family_of
from .serializer import BoundedSerializer

logger = logging.getLogger(__name__)

class Outcome(Enum):
    """Outcome of a single scenario."""

    PASS = "pass"        # Response in the expected family
    FAIL = "fail"        # Response outside the expected family
    ERROR = "error"      # No response: transport failure
    SKIPPED = "skipped"  # Method not applicable to the fuzzer


# Custom per-fuzzer response check; returns an Outcome or a pass/fail bool
ResponseProcessor = Callable[
    [HttpResponse, "Scenario"],
    Union[Outcome, bool, Awaitable[Union[Outcome, bool]]],
]

# Callback receiving every produced result
Reporter = Callable[["ExecutionResult"], None]


@dataclass(frozen=True)
class Scenario:
    """One fully specified fuzz attempt.

    Header names are case-insensitive, both for lookup and for suppression.
    ``payload`` is either a JSON document (sent as JSON text) or raw text
    (sent verbatim).
    """

    expected_family: ResponseFamily
    method: str
    path: str
    description: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    query_params: Mapping[str, str] = field(default_factory=dict)
    payload: Any = None
    suppressed_headers: FrozenSet[str] = frozenset()
    skipped_methods: FrozenSet[str] = frozenset()
    response_processor: Optional[ResponseProcessor] = None
    expected_code: Optional[str] = None
    fuzzer: str = ""

    def __post_init__(self):
        object.__setattr__(self, "expected_family", ResponseFamily(self.expected_family))
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(
            self,
            "headers",
            MappingProxyType({name: str(value) for name, value in self.headers.items()}),
        )
        object.__setattr__(
            self,
            "query_params",
            MappingProxyType({name: str(value) for name, value in self.query_params.items()}),
        )
        object.__setattr__(
            self, "suppressed_headers", frozenset(name.lower() for name in self.suppressed_headers)
        )
        object.__setattr__(
            self, "skipped_methods", frozenset(method.upper() for method in self.skipped_methods)
        )

    @property
    def expected(self) -> str:
        """What the report says the service should return, e.g. ``4XX`` or ``406``."""
        return self.expected_code or self.expected_family.as_string()

    @property
    def is_skipped(self) -> bool:
        return self.method in self.skipped_methods

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None

    def body(self) -> Optional[str]:
        if self.payload is None or isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, ensure_ascii=False)

    def to_request(self) -> HttpRequest:
        """Build the outgoing request, minus any suppressed headers."""
        return HttpRequest(
            method=self.method,
            path=self.path,
            headers={
                name: value
                for name, value in self.headers.items()
                if name.lower() not in self.suppressed_headers
            },
            query_params=dict(self.query_params),
            body=self.body(),
        )


@dataclass
class ExecutionResult:
    """Result of executing a single scenario."""

    outcome: Outcome
    description: str
    expected_family: ResponseFamily
    expected: str
    method: str
    path: str
    fuzzer: str = ""
    status_code: Optional[int] = None
    diagnostic: str = ""
    error_message: Optional[str] = None
    execution_time: float = 0.0
    timestamp: float = field(default_factory=time.time)

    @property
    def actual_family(self) -> ResponseFamily:
        return family_of(self.status_code)

    def is_failure(self) -> bool:
        """Check if this result is a discovered defect.

        Returns:
            True for ``fail`` outcomes only; errors and skips are not defects
        """
        return self.outcome == Outcome.FAIL


_OUTCOME_STYLES = {
    Outcome.PASS: "green",
    Outcome.FAIL: "red",
    Outcome.ERROR: "magenta",
    Outcome.SKIPPED: "dim",
}


class ScenarioExecutor:
    """Runs scenarios against the target service and classifies the responses.

    Args:
        dispatcher: Async callable sending an HttpRequest and returning an HttpResponse
        rate_limiter: Limiter shared by every executor targeting the same service
        serializer: Renders diagnostic payloads into result text
        output: Terminal output manager (quiet when omitted)
        reporter: Optional callback receiving every result
        concurrency: Default number of scenarios in flight for :meth:`execute_all`
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        rate_limiter: RateLimiter,
        serializer: BoundedSerializer,
        output: Optional[OutputManager] = None,
        reporter: Optional[Reporter] = None,
        concurrency: int = 4,
    ):
        self.dispatcher = dispatcher
        self.rate_limiter = rate_limiter
        self.serializer = serializer
        self.output = output or OutputManager(OutputMode.QUIET)
        self.reporter = reporter
        self.concurrency = concurrency

    @classmethod
    def from_config(
        cls,
        config: FuzzerConfig,
        dispatcher: Dispatcher,
        reporter: Optional[Reporter] = None,
    ) -> "ScenarioExecutor":
        return cls(
            dispatcher=dispatcher,
            rate_limiter=RateLimiter(config.max_requests_per_minute),
            serializer=BoundedSerializer(config.serializer_max_depth),
            output=OutputManager(config.output_mode),
            reporter=reporter,
            concurrency=config.concurrency,
        )

    async def execute_all(
        self, scenarios: Iterable[Scenario], concurrency: Optional[int] = None
    ) -> List[ExecutionResult]:
        """Execute scenarios concurrently.

        Args:
            scenarios: Scenarios to run
            concurrency: Maximum scenarios in flight (defaults to the executor's)

        Returns:
            One result per scenario, in input order
        """
        semaphore = asyncio.Semaphore(concurrency or self.concurrency)

        async def run(scenario: Scenario) -> ExecutionResult:
            async with semaphore:
                try:
                    return await self.execute(scenario)
                except Exception as e:
                    logger.exception("Scenario %r aborted", scenario.description)
                    return self._report_error(scenario, e)

        return list(await asyncio.gather(*(run(scenario) for scenario in scenarios)))

    async def execute(self, scenario: Scenario) -> ExecutionResult:
        """Execute a single scenario.

        Args:
            scenario: Scenario to run

        Returns:
            ExecutionResult for this scenario
        """
        description = scenario.description or f"{scenario.method} {scenario.path}"
        self.output.display_scenario(description, scenario.method, scenario.path)

        if scenario.is_skipped:
            return self._report(
                scenario,
                Outcome.SKIPPED,
                diagnostic=f"Method {scenario.method} not supported by {scenario.fuzzer or 'this fuzzer'}",
            )

        await self.rate_limiter.acquire_async()

        start_time = time.time()
        try:
            request = scenario.to_request()
            response = await self.dispatcher(request)
        except Exception as e:
            return self._report_error(scenario, e, time.time() - start_time)
        execution_time = time.time() - start_time

        self.output.display_response(response.status_code, response.body)

        outcome, error_message = await self._classify(scenario, response)
        return self._report(
            scenario,
            outcome,
            status_code=response.status_code,
            diagnostic=self.serializer({"request": request, "response": response}),
            error_message=error_message,
            execution_time=execution_time,
        )

    async def _classify(
        self, scenario: Scenario, response: HttpResponse
    ) -> Tuple[Outcome, Optional[str]]:
        """Decide the outcome of a scenario that received a response.

        A custom processor takes over completely. Without one, the actual
        response family must match the expected family; any mismatch,
        including a 5xx where a 4xx was expected, is a ``fail``.
        """
        if scenario.response_processor is None:
            if family_of(response.status_code) is scenario.expected_family:
                return Outcome.PASS, None
            return Outcome.FAIL, None

        try:
            verdict = scenario.response_processor(response, scenario)
            if inspect.isawaitable(verdict):
                verdict = await verdict
        except Exception as e:
            return Outcome.ERROR, f"Response processor failed: {type(e).__name__}: {e}"

        if isinstance(verdict, Outcome):
            return verdict, None
        return (Outcome.PASS if verdict else Outcome.FAIL), None

    def _report(self, scenario: Scenario, outcome: Outcome, **details: Any) -> ExecutionResult:
        result = ExecutionResult(
            outcome=outcome,
            description=scenario.description or f"{scenario.method} {scenario.path}",
            expected_family=scenario.expected_family,
            expected=scenario.expected,
            method=scenario.method,
            path=scenario.path,
            fuzzer=scenario.fuzzer,
            **details,
        )

        style = _OUTCOME_STYLES[outcome]
        actual = result.status_code if result.status_code is not None else "-"
        self.output.print_verbose(
            f"[{style}]{outcome.value.upper()}[/{style}] {result.description}: "
            f"expected {result.expected}, got {actual}"
        )

        if self.reporter is not None:
            try:
                self.reporter(result)
            except Exception:
                logger.exception("Reporter failed on %r", result.description)
        return result

    def _report_error(
        self, scenario: Scenario, error: Exception, execution_time: float = 0.0
    ) -> ExecutionResult:
        """Report a scenario that never got a classified response."""
        return self._report(
            scenario,
            Outcome.ERROR,
            diagnostic=self.serializer(
                {"error": type(error).__name__, "message": str(error), "payload": scenario.payload}
            ),
            error_message=f"{type(error).__name__}: {error}",
            execution_time=execution_time,
        )
