"""Easing curve used by face-turn animation."""

from __future__ import annotations


def ease(t: float, a: float) -> float:
    """Map progress t in [0, 1] onto a symmetric sigmoid with slope a > 0.

    ease(0) == 0, ease(0.5) == 0.5, ease(1) == 1. Larger a gives longer
    plateaus at both ends and a steeper middle. Inputs are not validated.
    """
    ta = t**a
    return ta / (ta + (1.0 - t) ** a)
