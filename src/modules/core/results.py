"""Uniform result envelope returned by application services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ServiceActionResult:
    """Outcome of a service use case.

    Failures are never signalled through ``success``; services raise a
    named domain exception instead.
    """

    success: bool
    data: Any = None
