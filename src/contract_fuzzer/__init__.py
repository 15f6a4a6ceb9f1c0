"""Structured-payload mutation and scenario execution engine for REST API fuzzing."""

from typing import List

from .config import FuzzerConfig, OutputMode
from .cyclic import VisitChain, is_cyclic
from .dispatch import Dispatcher, HttpxDispatcher
from .executor import ExecutionResult, Outcome, Scenario, ScenarioExecutor
from .models import HttpRequest, HttpResponse
from .rate_limiter import RateLimiter
from .report import ExecutionReport
from .response_family import ResponseFamily, family_of
from .serializer import BoundedSerializer, serialize

__version__: str = "0.1.0"

__all__: List[str] = [
    "FuzzerConfig",
    "OutputMode",
    "VisitChain",
    "is_cyclic",
    "Dispatcher",
    "HttpxDispatcher",
    "ExecutionResult",
    "Outcome",
    "Scenario",
    "ScenarioExecutor",
    "HttpRequest",
    "HttpResponse",
    "RateLimiter",
    "ExecutionReport",
    "ResponseFamily",
    "family_of",
    "BoundedSerializer",
    "serialize",
]
