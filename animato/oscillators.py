"""Phase-accumulating oscillators.

Every oscillator keeps a phase that advances by ``speed * frequency / rate``
per step and wraps into [0, 1).  When the wrapped phase crosses a period
boundary the oscillator fires its actions and counts the period.  The
subclasses differ only in how they turn the wrapped phase into an output.

A freshly created oscillator starts on a period boundary: running forwards
at 1 Hz and 30 steps per second it fires on steps 1, 31, 61, ...
:meth:`Oscillator.set_phase` suppresses the event on the step that
follows it; :meth:`Metro.force_next` does the opposite.

Example::

	lfo = animato.oscillators.SineOsc(frequency=0.25)
	metro = animato.oscillators.Metro(frequency=2.0)
	metro.add_call(drum, "hit")

	# Host loop, once per frame:
	lfo.advance()
	metro.advance()
	sprite.y = 100 + 20 * lfo.out()
"""

import math
import random
import typing

import animato.actions
import animato.constants
import animato.control
import animato.easing
import animato.timebase


def wrap (phase: float) -> float:

	"""Reduce ``phase`` into [0, 1)."""

	wrapped = phase % 1.0

	# A tiny negative phase rounds up to exactly 1.0.
	if wrapped >= 1.0:
		return 0.0

	return wrapped


class Oscillator (animato.control.Control):

	"""
	Base oscillator; its output is the wrapped phase itself (a rising sawtooth).

	Parameters:
		frequency: Cycles per second.  Negative frequencies run the phase
			backwards; zero freezes it.
		timebase: Optional time base; defaults to the process-wide one.
	"""

	def __init__ (self, frequency: float = 1.0, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._frequency: float = float(frequency)
		self._phase: float = 0.0
		self._offset: float = 0.0
		self._wrapped: float = 0.0
		self._counter: int = 0
		self._just_reset: bool = False
		self._fresh: bool = True
		self._actions: typing.List[animato.actions.Action] = []

	def reset (self) -> None:

		super().reset()
		self._frequency = 1.0
		self._phase = 0.0
		self._offset = 0.0
		self._wrapped = 0.0
		self._counter = 0
		self._just_reset = False
		self._fresh = True
		self._actions.clear()

	def advance (self) -> None:

		if not self._running:
			return

		previous = self._wrapped
		self._wrapped = wrap(self._phase + self._offset)

		# A fresh oscillator sits on a period boundary.  Running backwards, the
		# boundary is reported when the phase leaves it on the second step.
		suppressed = self._just_reset or (self._fresh and self._frequency < 0.0)

		if not suppressed and self._crossed(previous, self._wrapped):
			self._on_period()

			# Actions added while firing wait for the next boundary; removed ones never fire.
			for action in list(self._actions):

				if action not in self._actions:
					continue

				action.fire()

			self._counter += 1

		self._just_reset = False
		self._fresh = False
		self._phase = wrap(self._phase + self._speed * self._frequency / self.timebase.get_rate() + animato.constants.PHASE_EPSILON)

	def _crossed (self, previous: float, wrapped: float) -> bool:

		if self._frequency > 0.0:
			return wrapped - previous <= 0.0

		if self._frequency < 0.0:
			return previous - wrapped <= 0.0

		return False

	def _on_period (self) -> None:

		"""Hook called at each period boundary, before the actions fire."""

		return None

	def out (self) -> float:
		return self._wrapped

	@property
	def value (self) -> float:
		return self.out()

	# ─── Frequency and phase ──────────────────────────────────────────────

	def set_frequency (self, hz: float) -> None:
		self._frequency = float(hz)

	def get_frequency (self) -> float:
		return self._frequency

	def set_period (self, seconds: float) -> None:

		"""Set the frequency to ``1 / seconds`` (0 seconds gives an infinite frequency)."""

		self._frequency = 1.0 / seconds if seconds != 0.0 else math.copysign(math.inf, seconds)

	def get_period (self) -> float:

		"""Return ``1 / frequency``; infinite when the frequency is 0."""

		if self._frequency == 0.0:
			return math.inf

		return 1.0 / self._frequency

	def set_phase (self, phase: float) -> None:

		"""
		Jump to ``phase``.  The next step does *not* fire a period event.
		"""

		self._phase = float(phase)
		self._just_reset = True

	def get_phase (self) -> float:

		"""Return the wrapped phase (including the offset) in [0, 1)."""

		return self._wrapped

	def set_phase_offset (self, offset: float) -> None:
		self._offset = float(offset)

	def get_phase_offset (self) -> float:
		return self._offset

	# ─── Period actions ───────────────────────────────────────────────────

	def add (self, action: animato.actions.Action) -> None:

		"""
		Fire ``action`` at every period boundary, after those already added.
		"""

		self._actions.append(action)

	def add_set (self, target: typing.Any, name: typing.Any, value: typing.Any, item: bool = False) -> None:
		self.add(animato.actions.set_value(target, name, value, item=item))

	def add_call (self, target: typing.Any, method: typing.Union[str, typing.Callable[..., typing.Any]], *args: typing.Any) -> None:
		self.add(animato.actions.call(target, method, *args))

	def remove (self, description: animato.actions.Action) -> None:

		"""
		Remove every action that matches ``description`` (see :meth:`Action.matches`).
		"""

		self._actions = [action for action in self._actions if not action.matches(description)]

	def remove_all (self) -> None:
		self._actions.clear()

	@property
	def actions (self) -> typing.Tuple[animato.actions.Action, ...]:
		return tuple(self._actions)

	def get_counter (self) -> int:

		"""Return the number of period boundaries seen since creation or the last reset."""

		return self._counter

	def reset_counter (self) -> None:
		self._counter = 0


Phasor = Oscillator
SawOsc = Oscillator


class SineOsc (Oscillator):

	"""Sine wave in [-1, 1], starting at 0."""

	def out (self) -> float:
		return math.sin(self._wrapped * 2.0 * math.pi)


class CosineOsc (Oscillator):

	"""Cosine wave in [-1, 1], starting at 1."""

	def out (self) -> float:
		return math.cos(self._wrapped * 2.0 * math.pi)


class PulseOsc (Oscillator):

	"""
	Square/pulse wave: 1 for the first ``width`` of each period, else 0.
	"""

	def __init__ (self, frequency: float = 1.0, width: float = 0.5, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(frequency, timebase)
		self._width: float = 0.5
		self.set_pulse_width(width)

	def reset (self) -> None:

		super().reset()
		self._width = 0.5

	def out (self) -> float:
		return 1.0 if self._wrapped < self._width else 0.0

	def set_pulse_width (self, width: float) -> None:

		"""Set the duty cycle, clamped to [0, 1]."""

		self._width = max(0.0, min(1.0, float(width)))

	def get_pulse_width (self) -> float:
		return self._width


class TriangleOsc (Oscillator):

	"""
	Triangle wave in [0, 1] whose peak sits at ``vertex`` within the period.

	A vertex of 0.5 is symmetric; 0 degenerates to a falling ramp and 1 to
	a rising ramp.
	"""

	def __init__ (self, frequency: float = 1.0, vertex: float = 0.5, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(frequency, timebase)
		self._vertex: float = 0.5
		self.set_vertex(vertex)

	def reset (self) -> None:

		super().reset()
		self._vertex = 0.5

	def out (self) -> float:

		if self._vertex == 0.0:
			return 1.0 - self._wrapped

		if self._vertex == 1.0:
			return self._wrapped

		if self._wrapped < self._vertex:
			return self._wrapped / self._vertex

		return 1.0 - (self._wrapped - self._vertex) / (1.0 - self._vertex)

	def set_vertex (self, vertex: float) -> None:

		"""Set the peak position, clamped to [0, 1]."""

		self._vertex = max(0.0, min(1.0, float(vertex)))

	def get_vertex (self) -> float:
		return self._vertex


class NoiseOsc (Oscillator):

	"""
	Random values, one new draw per period, with a shaped glide between draws.

	At every period boundary the previous draw becomes the start point and a
	fresh value is drawn from the selected distribution.  Across the period
	the output moves from the start point to the new draw along the noise
	shape (see :mod:`animato.easing`).  ``Shape.STEP`` gives classic
	sample-and-hold: the output holds each draw for a full period and jumps
	at the boundary.  Shape changes take effect at the next boundary.

	Parameters:
		frequency: Draws per second.
		rng: Optional ``random.Random`` for deterministic playback.
	"""

	UNIFORM = "uniform"
	NORMAL = "normal"

	def __init__ (self, frequency: float = 1.0, rng: typing.Optional[random.Random] = None, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		self.rng: random.Random = rng or random.Random()
		super().__init__(frequency, timebase)
		self._init_noise()

	def _init_noise (self) -> None:

		self._distribution: str = self.UNIFORM
		# uniform: (high, low); normal: (stddev, mean)
		self._a: float = 1.0
		self._b: float = 0.0
		self._next_shape: animato.easing.ShapeLike = animato.easing.Shape.LIN
		self._next_coeff: float = 0.0
		self._shape: animato.easing.ShapeLike = animato.easing.Shape.LIN
		self._coeff: float = 0.0
		self._start: float = 0.0
		self._target: float = 0.0

	def reset (self) -> None:

		super().reset()
		self._init_noise()

	def seed (self, value: typing.Any) -> None:

		"""Reseed the random generator."""

		self.rng.seed(value)

	def set_uniform (self, high: float = 1.0, low: float = 0.0) -> None:

		"""Draw uniformly from [low, high]."""

		self._distribution = self.UNIFORM
		self._a = float(high)
		self._b = float(low)

	def set_normal (self, stddev: float = 1.0, mean: float = 0.0) -> None:

		"""Draw from a normal distribution.  Negative deviations are clamped to 0."""

		self._distribution = self.NORMAL
		self._a = max(0.0, float(stddev))
		self._b = float(mean)

	def is_uniform (self) -> bool:
		return self._distribution == self.UNIFORM

	def is_normal (self) -> bool:
		return self._distribution == self.NORMAL

	def set_noise_shape (self, shape: animato.easing.ShapeLike, coeff: float = 0.0) -> None:

		"""Set the glide shape used from the next period on."""

		self._next_shape = animato.easing.get_shape(shape)
		self._next_coeff = coeff if coeff >= 0.0 else 0.0

	def _draw (self) -> float:

		if self._distribution == self.NORMAL:
			return self.rng.gauss(self._b, self._a)

		low, high = min(self._a, self._b), max(self._a, self._b)
		return self.rng.uniform(low, high)

	def _on_period (self) -> None:

		self._start = self._target
		self._target = self._draw()
		self._shape = self._next_shape
		self._coeff = self._next_coeff

	def _progress (self) -> float:

		"""Position within the current period, counted in the direction of travel."""

		if self._frequency < 0.0:
			return 1.0 - self._wrapped

		return self._wrapped

	def out (self) -> float:

		progress = self._progress()

		if progress <= 0.0:
			return self._start

		return animato.easing.interpolate(self._start, self._target, progress, self._shape, self._coeff)


class Metro (Oscillator):

	"""
	A period-event source whose next event can be forced from outside.

	Example::

		beat = animato.oscillators.Metro(frequency=2.0)
		beat.add_call(lights, "flash")

		def on_tap ():
			beat.force_next()   # flash on the next step and restart the cycle
	"""

	def __init__ (self, frequency: float = 1.0, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(frequency, timebase)
		self._forced: bool = False

	def reset (self) -> None:

		super().reset()
		self._forced = False

	def force_next (self) -> None:

		"""
		Restart the period at phase 0 and fire the actions on the next step.
		"""

		# Running backwards, restart just below 1 so leaving the boundary on
		# the following step is not reported a second time.
		self._phase = 0.0 if self._frequency >= 0.0 else 1.0 - animato.constants.PHASE_EPSILON
		self._just_reset = False
		self._fresh = False
		self._forced = True

	def set_phase (self, phase: float) -> None:

		super().set_phase(phase)
		self._forced = False

	def _crossed (self, previous: float, wrapped: float) -> bool:

		if self._forced:
			self._forced = False
			return True

		return super()._crossed(previous, wrapped)
