"""Models for run configuration files."""

from typing import Any

from pydantic import BaseModel, Field

from casebench.models.constants import DEFAULT_WARMUP_SECONDS, ProbeKind


class SuiteConfig(BaseModel):
    """Configuration for a single registered suite."""

    name: str = Field(..., min_length=1, description="Registered suite name")
    iteration_count: int | None = Field(
        None, ge=0, description="Override for the suite's iteration count"
    )
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Suite-specific parameter overrides"
    )
    description: str | None = Field(
        None, description="Optional description of this run"
    )

    def overrides(self) -> dict[str, Any]:
        """Return parameters merged with the iteration count override."""
        params = dict(self.parameters)
        if self.iteration_count is not None:
            params["iteration_count"] = self.iteration_count
        return params


class RunConfig(BaseModel):
    """Root configuration for ``casebench run --config``."""

    warmup_seconds: float = Field(
        DEFAULT_WARMUP_SECONDS, ge=0, description="Delay before the first suite"
    )
    iteration_count: int | None = Field(
        None, ge=0, description="Iteration count applied to every suite"
    )
    memory_probe: ProbeKind | None = Field(
        None, description="Memory accounting strategy"
    )
    suites: list[SuiteConfig] = Field(
        default_factory=list,
        description="Suites to run, in order; empty runs every registered suite",
    )
