"""Timing constants.

Every control converts its speed multiplier into a per-step increment using
the shared step rate (steps per second).  The time unit is always seconds.

- `DEFAULT_RATE = 30`: step rate used until the host sets one, and the
  fallback for any non-positive rate
- `DEFAULT_SPEED = 1.0`: speed of a fresh control, and the fallback for a
  negative speed
- `PHASE_EPSILON`: bias added to an oscillator's phase before wrapping, so
  accumulated rounding error never leaves the phase a hair below a period
  boundary
- `RAMP_EPSILON`: tolerance on a line segment's completion test, for the
  same reason
"""

DEFAULT_RATE = 30.0
DEFAULT_SPEED = 1.0

PHASE_EPSILON = 1e-9
RAMP_EPSILON = 1e-9
