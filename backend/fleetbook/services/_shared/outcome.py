# comments in English; reST docstrings strict
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Outcome:
    """
    Result of a best-effort side effect (cache invalidation, email delivery).

    Best-effort operations never raise; callers inspect the outcome and log
    ``reason`` when it failed.

    :param ok: Whether the side effect was applied.
    :type ok: bool
    :param reason: Failure description when ``ok`` is ``False``.
    :type reason: str | None
    """

    ok: bool
    reason: str | None = None

    @classmethod
    def applied(cls) -> Outcome:
        """Return a successful outcome."""
        return cls(ok=True)

    @classmethod
    def failed(cls, reason: str) -> Outcome:
        """
        Return a failed outcome.

        :param reason: Human-readable cause, safe to log.
        :type reason: str
        """
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok
