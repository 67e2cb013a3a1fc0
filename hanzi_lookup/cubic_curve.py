"""Cubic Bézier curves in the plane, solved for t at a given x."""

from __future__ import annotations

import math
from dataclasses import dataclass

_ONE_THIRD = 1.0 / 3.0
_EPSILON = 0.0000001


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics: zero denominators give inf or nan."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator


def _powf(base: float, exponent: float) -> float:
    """Real power; a negative base with a fractional exponent gives nan."""
    if base < 0.0:
        return math.nan
    return math.pow(base, exponent)


def _sqrt(value: float) -> float:
    return math.nan if value < 0.0 else math.sqrt(value)


def _acos(value: float) -> float:
    return math.acos(value) if -1.0 <= value <= 1.0 else math.nan


@dataclass(frozen=True)
class CubicCurve2D:
    """A cubic curve from (x1, y1) to (x2, y2) with two control points."""

    x1: float
    y1: float
    ctrlx1: float
    ctrly1: float
    ctrlx2: float
    ctrly2: float
    x2: float
    y2: float

    def _x_coefficients(self) -> tuple[float, float, float]:
        c = 3.0 * (self.ctrlx1 - self.x1)
        b = 3.0 * (self.ctrlx2 - self.ctrlx1) - c
        a = self.x2 - self.x1 - b - c
        return a, b, c

    def _y_coefficients(self) -> tuple[float, float, float]:
        c = 3.0 * (self.ctrly1 - self.y1)
        b = 3.0 * (self.ctrly2 - self.ctrly1) - c
        a = self.y2 - self.y1 - b - c
        return a, b, c

    def solve_for_x(self, x: float) -> tuple[float, ...]:
        """Return the roots t of x(t) == x: one value, or three when all are real.

        Roots that cannot be computed come back as nan.
        """
        a, b, c = self._x_coefficients()
        d = self.x1 - x
        shift = _div(b, 3.0 * a)
        f = (3.0 * _div(c, a) - _div(b * b, a * a)) / 3.0
        g = (
            _div(2.0 * b * b * b, a * a * a)
            - _div(9.0 * b * c, a * a)
            + _div(27.0 * d, a)
        ) / 27.0
        h = (g * g / 4.0) + (f * f * f / 27.0)

        if h > 0.0:
            # Only one real root.
            u = -g
            root_h = _powf(h, 0.5)
            s = _powf(u / 2.0 + root_h, _ONE_THIRD)
            v = _powf(-(u / 2.0 - root_h), _ONE_THIRD)
            return ((s - v) - shift,)

        if f == 0.0 and g == 0.0 and h == 0.0:
            # All three roots are real and equal.
            return (-_powf(_div(d, a), _ONE_THIRD),)

        # All three roots are real.
        i = _sqrt((g * g / 4.0) - h)
        j = _powf(i, _ONE_THIRD)
        k = _acos(_div(-g, 2.0 * i))
        m = math.cos(k / 3.0) if not math.isnan(k) else math.nan
        n = math.sqrt(3.0) * math.sin(k / 3.0) if not math.isnan(k) else math.nan
        p = -shift
        return (
            2.0 * j * m - shift,
            -j * (m + n) + p,
            -j * (m - n) + p,
        )

    def first_solution_for_x(self, x: float) -> float:
        """Return the first root in [0, 1] (clamped within a tiny tolerance), else nan."""
        for t in self.solve_for_x(x):
            if -_EPSILON <= t <= 1.0 + _EPSILON:
                return min(max(t, 0.0), 1.0)
        return math.nan

    def y_on_curve(self, t: float) -> float:
        """Return the curve's y coordinate at parameter t."""
        a, b, c = self._y_coefficients()
        t_squared = t * t
        return a * t * t_squared + b * t_squared + c * t + self.y1