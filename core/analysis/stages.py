# Path: core/analysis/stages.py
# Purpose: Represent pipeline stage outcomes as tagged values.
# Layer: core/analysis.
# Details: Best-effort stages report either their value or the fallback they degraded to.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StageResult(Generic[T]):
    """Outcome of one pipeline stage."""

    name: str
    value: T
    fallback_used: bool = False
    error: Optional[BaseException] = None

    @classmethod
    def ok(cls, name: str, value: T) -> "StageResult[T]":
        return cls(name=name, value=value)

    @classmethod
    def fallback(cls, name: str, value: T, error: Optional[BaseException] = None) -> "StageResult[T]":
        return cls(name=name, value=value, fallback_used=True, error=error)

    @property
    def skipped(self) -> bool:
        """True when the stage never ran because a prerequisite was missing."""

        return self.fallback_used and self.error is None


async def run_best_effort(name: str, action: Callable[[], Awaitable[T]], fallback: T) -> StageResult[T]:
    """Await ``action``; any exception is logged and replaced by ``fallback``."""

    try:
        value = await action()
    except Exception as exc:  # noqa: BLE001 - best-effort stage degrades instead of failing the run
        logger.warning("%s stage failed, using fallback: %s", name, exc)
        return StageResult.fallback(name, fallback, exc)
    return StageResult.ok(name, value)
