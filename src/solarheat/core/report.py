"""Human-readable rendering of heating times."""

from __future__ import annotations

from dataclasses import dataclass

SECONDS_PER_MINUTE = 60.0
SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True)
class ElapsedReport:
    """Elapsed time in the three units shown to users."""

    seconds: float

    @property
    def minutes(self) -> float:
        return self.seconds / SECONDS_PER_MINUTE

    @property
    def hours(self) -> float:
        return self.seconds / SECONDS_PER_HOUR

    def lines(self) -> list[str]:
        """Report lines, each value to two decimals."""
        return [
            f"Total time required: {self.seconds:.2f} seconds",
            f"Total time required: {self.minutes:.2f} minutes",
            f"Total time required: {self.hours:.2f} hours",
        ]

    def to_dict(self) -> dict[str, float]:
        return {
            "seconds": self.seconds,
            "minutes": self.minutes,
            "hours": self.hours,
        }


def format_elapsed(seconds: float) -> ElapsedReport:
    """Wrap an elapsed time in seconds for display."""
    return ElapsedReport(seconds=float(seconds))
