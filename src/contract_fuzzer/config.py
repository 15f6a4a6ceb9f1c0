"""Configuration schema for the contract fuzzer engine."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class OutputMode(str, Enum):
    """Terminal output modes for the fuzzer."""
    QUIET = "quiet"      # No terminal output
    STANDARD = "standard"  # Summaries and status indicators
    VERBOSE = "verbose"   # Every scenario, request and response


class FuzzerConfig(BaseModel):
    """Main configuration for a fuzzing run against one target service."""
    base_url: Optional[str] = Field(
        None,
        description="Base URL of the service under test. Scenario paths are resolved against it"
    )
    max_requests_per_minute: int = Field(
        default=10000,
        gt=0,
        description="Upper bound on requests sent to the target service per minute"
    )
    serializer_max_depth: int = Field(
        default=5,
        description="Depth at which captured payloads are truncated when rendered into reports"
    )
    cyclic_max_repeats: int = Field(
        default=2,
        description="How many consecutive repeats of a path unit are tolerated before it counts as a cycle"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Per-request timeout in seconds"
    )
    verify_tls: bool = Field(
        default=True,
        description="Whether to verify TLS certificates of the target service"
    )
    concurrency: int = Field(
        default=4,
        gt=0,
        description="Maximum number of scenarios in flight at once"
    )
    output_mode: OutputMode = Field(
        default=OutputMode.STANDARD,
        description="Controls the level of terminal output during a run"
    )
