"""Segment shapes: map ramp progress onto an eased multiplier.

:func:`evaluate` maps a normalised ramp position *r* in (0, 1] to a
multiplier that is 0 at the start of a segment and 1 at its end.  Lines
use it to shape every segment; the noise oscillator uses it to shape the
glide from one random draw to the next.

Pass a :class:`Shape`, a name string, or a plain callable:

    line.set_shape(Shape.FAST_EXP, 4.0)
    line.set_shape("s_curve")

    # Custom callable, receives the ramp, returns the multiplier:
    line.set_shape(lambda r: r ** 0.5)

Available shapes (*c* is the optional coefficient, clamped to >= 0):

    STEP      Hold the start value, jump to the target at completion.
    LIN       Constant rate (default).
    FAST_EXP  Exponential, fast start.  Linear when c <= 0.
    FAST_POW  r ** (1 / 2**c): fast start, steeper as c grows.
    FAST_COS  Quarter sine: fast start, gentle arrival.
    SLOW_EXP  Exponential, slow start.  Linear when c <= 0.
    SLOW_POW  r ** (2**c): slow start, steeper as c grows.
    SLOW_COS  Quarter cosine: gentle start, fast arrival.
    S_CURVE   Half cosine: gentle at both ends.

Every shape reaches 1 at r = 1 and approaches 0 as r approaches 0.  The
functions are pure, so playback is exactly repeatable.
"""

from __future__ import annotations

import enum
import logging
import math
import typing


logger = logging.getLogger(__name__)


class Shape (enum.Enum):

    """Segment shape kinds understood by :func:`evaluate`."""

    STEP     = "step"
    LIN      = "lin"
    FAST_EXP = "fast_exp"
    FAST_POW = "fast_pow"
    FAST_COS = "fast_cos"
    SLOW_EXP = "slow_exp"
    SLOW_POW = "slow_pow"
    SLOW_COS = "slow_cos"
    S_CURVE  = "s_curve"


ShapeFn = typing.Callable[[float], float]
ShapeLike = typing.Union[Shape, str, ShapeFn]

_MAX_EXP_COEFF = 500.0
_MAX_POW_COEFF = 1000.0


# ─── Shape functions ──────────────────────────────────────────────────────────


def step (r: float, c: float = 0.0) -> float:
    """Hold at 0 until the ramp is complete, then jump to 1."""
    return 1.0 if r >= 1.0 else 0.0


def lin (r: float, c: float = 0.0) -> float:
    """No transformation, constant rate of change."""
    return r


def fast_exp (r: float, c: float = 0.0) -> float:

    """Exponential curve that moves quickly at first and settles into the target.

    Larger coefficients bend the curve harder; ``c <= 0`` is linear.
    """

    if c <= 0.0:
        return r
    return math.expm1(-c * r) / math.expm1(-c)


def fast_pow (r: float, c: float = 0.0) -> float:
    """Power curve with exponent ``1 / 2**c`` (square root at c = 1)."""
    return r ** (1.0 / (2.0 ** min(c, _MAX_POW_COEFF)))


def fast_cos (r: float, c: float = 0.0) -> float:
    """First quarter of a sine wave: fast start, decelerates toward the end."""
    return math.sin(r * math.pi / 2.0)


def slow_exp (r: float, c: float = 0.0) -> float:

    """Exponential curve that starts slowly and accelerates into the target.

    Useful for perceptually even fades of parameters the eye or ear
    perceives logarithmically.  ``c <= 0`` is linear.
    """

    if c <= 0.0:
        return r
    if c > _MAX_EXP_COEFF:
        # e**c overflows; the ratio has converged to its asymptote
        return math.exp(c * (r - 1.0))
    return math.expm1(c * r) / math.expm1(c)


def slow_pow (r: float, c: float = 0.0) -> float:
    """Power curve with exponent ``2**c`` (square at c = 1)."""
    return r ** (2.0 ** min(c, _MAX_POW_COEFF))


def slow_cos (r: float, c: float = 0.0) -> float:
    """Quarter cosine: slow start, accelerates toward the end."""
    return 1.0 - math.cos(r * math.pi / 2.0)


def s_curve (r: float, c: float = 0.0) -> float:
    """Raised half cosine: smooth start and end, fastest in the middle."""
    return 0.5 - 0.5 * math.cos(r * math.pi)


# ─── Registry and lookup ──────────────────────────────────────────────────────

SHAPE_FUNCTIONS: typing.Dict[Shape, typing.Callable[[float, float], float]] = {
    Shape.STEP:     step,
    Shape.LIN:      lin,
    Shape.FAST_EXP: fast_exp,
    Shape.FAST_POW: fast_pow,
    Shape.FAST_COS: fast_cos,
    Shape.SLOW_EXP: slow_exp,
    Shape.SLOW_POW: slow_pow,
    Shape.SLOW_COS: slow_cos,
    Shape.S_CURVE:  s_curve,
}


def get_shape (shape: ShapeLike) -> typing.Union[Shape, ShapeFn]:

    """Normalise *shape* to a :class:`Shape` member or a callable.

    Name strings are matched case-insensitively against the member values
    (``"s_curve"``, ``"FAST_EXP"``).  Unknown names fall back to
    :attr:`Shape.LIN`.
    """

    if isinstance(shape, Shape) or callable(shape):
        return shape

    if isinstance(shape, str):
        try:
            return Shape(shape.lower())
        except ValueError:
            pass

    logger.debug(f"Unknown shape {shape!r}, using linear")
    return Shape.LIN


def evaluate (ramp: float, shape: ShapeLike = Shape.LIN, coeff: float = 0.0) -> float:

    """Return the eased multiplier for *ramp* under *shape*.

    Parameters:
        ramp: Progress through the segment, in (0, 1].
        shape: A :class:`Shape`, a shape name, or a callable ``f(ramp)``.
            Anything unrecognised is treated as linear.
        coeff: Optional coefficient for the EXP and POW shapes.

    Returns:
        The multiplier, nominally in [0, 1].
    """

    resolved = get_shape(shape)

    if isinstance(resolved, Shape):
        return SHAPE_FUNCTIONS.get(resolved, lin)(ramp, coeff)

    return float(resolved(ramp))


def interpolate (start: float, target: float, ramp: float, shape: ShapeLike = Shape.LIN, coeff: float = 0.0) -> float:

    """Return the value *ramp* of the way from *start* to *target*, eased by *shape*."""

    return start + (target - start) * evaluate(ramp, shape, coeff)
