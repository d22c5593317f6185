from __future__ import annotations

"""Range normalization for the work interval and break duration settings."""

ABSOLUTE_MAX_MINUTES = 1440.0
NUDGE_STEP_MINUTES = 0.5


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def normalize_range(minimum: float, maximum: float, fallback_max: float) -> tuple[float, float]:
    """Returns ``(min, max)`` bounded to ``[0, ABSOLUTE_MAX_MINUTES]`` with ``max >= min``.

    A negative ``maximum`` is replaced by ``fallback_max`` before clamping.
    """
    safe_min = clamp(minimum, 0.0, ABSOLUTE_MAX_MINUTES)
    proposed_max = maximum if maximum >= 0 else fallback_max
    safe_max = clamp(proposed_max, 0.0, ABSOLUTE_MAX_MINUTES)
    return safe_min, max(safe_min, safe_max)
