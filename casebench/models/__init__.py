"""Configuration models and constants for casebench."""

from casebench.models.config_models import RunConfig, SuiteConfig
from casebench.models.constants import (
    DEFAULT_ITERATION_COUNT,
    DEFAULT_PROBE_KIND,
    DEFAULT_WARMUP_SECONDS,
    ProbeKind,
)

__all__ = [
    "DEFAULT_ITERATION_COUNT",
    "DEFAULT_PROBE_KIND",
    "DEFAULT_WARMUP_SECONDS",
    "ProbeKind",
    "RunConfig",
    "SuiteConfig",
]
