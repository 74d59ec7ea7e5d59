"""Segment lines: move one value, or several, through a queue of timed ramps.

A line holds a first-in first-out queue of segments.  Each segment waits
for its onset delay, ramps from the line's value at the moment it became
current toward its target over its ramp time (shaped by
:func:`animato.easing.evaluate`), and then fires the actions attached to
it.  The next segment starts from wherever the previous one ended.

Example::

	line = animato.line.Line()
	line.set_shape(animato.easing.Shape.S_CURVE)
	line.add_segment(1.0, ramp_time=2.0)

	line.on_segment_end_call(sprite, "hide")
	line.add_segment(0.0, ramp_time=0.5, onset=1.0)

	# Host loop, once per frame:
	line.advance()
	sprite.alpha = line.out()
"""

import collections
import dataclasses
import logging
import math
import typing

import animato.actions
import animato.constants
import animato.control
import animato.easing
import animato.timebase


logger = logging.getLogger(__name__)

T = typing.TypeVar("T")


@dataclasses.dataclass
class Segment (typing.Generic[T]):

	"""
	One ramp in a line's queue.

	``start`` is provisional until the segment reaches the head of the
	queue, at which point it is overwritten with the line's current value.
	"""

	ramp_time: float
	onset: float
	start: T
	target: T
	shape: animato.easing.ShapeLike = animato.easing.Shape.LIN
	coeff: float = 0.0
	elapsed: float = 0.0
	actions: typing.List[animato.actions.Action] = dataclasses.field(default_factory=list)

	def ramp (self) -> float:

		"""
		Return the normalised progress: <= 0 while waiting, > 1 once complete.

		A zero ramp time jumps straight past 1 as soon as the onset has passed.
		"""

		delta = self.elapsed - self.onset

		if self.ramp_time > 0.0:
			return delta / self.ramp_time

		return math.inf if delta >= 0.0 else -math.inf


class _SegmentLine (animato.control.Control, typing.Generic[T]):

	"""
	Queue handling shared by :class:`Line` and :class:`MultiLine`.

	Subclasses say how to copy a value and how to blend a segment's start
	and target for a given multiplier.
	"""

	def __init__ (self, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._shape: animato.easing.ShapeLike = animato.easing.Shape.LIN
		self._coeff: float = 0.0
		self._pending: typing.List[animato.actions.Action] = []
		self._segments: typing.Deque[Segment[T]] = collections.deque()

	def reset (self) -> None:

		super().reset()
		self._shape = animato.easing.Shape.LIN
		self._coeff = 0.0
		self._pending.clear()
		self._segments.clear()

	# ─── Value hooks ──────────────────────────────────────────────────────

	def _get (self) -> T:
		raise NotImplementedError

	def _set (self, value: T) -> None:
		raise NotImplementedError

	def _copy (self, value: T) -> T:
		raise NotImplementedError

	def _blend (self, segment: Segment[T], mult: float) -> T:
		raise NotImplementedError

	# ─── Stepping ─────────────────────────────────────────────────────────

	def advance (self) -> None:

		"""
		Move the head segment forward by one step.

		At most one segment completes per call.  Its actions fire in the
		order they were attached, after the value has been set to the
		target, and before the time increment of the next segment.
		"""

		if not self._segments or not self._running:
			return

		segment = self._segments[0]
		ramp = segment.ramp()

		if ramp > 0.0:

			if ramp > 1.0 - animato.constants.RAMP_EPSILON:
				self._finish(segment)

			else:
				mult = animato.easing.evaluate(ramp, segment.shape, segment.coeff)
				self._set(self._blend(segment, mult))

		if self._segments:
			self._segments[0].elapsed += self.step_size()

	def _finish (self, segment: Segment[T]) -> None:

		self._set(self._copy(segment.target))

		for action in segment.actions:
			action.fire()

		if self._segments and self._segments[0] is segment:
			self._segments.popleft()
		else:
			logger.warning("A segment end action already removed the finished segment from its line")

		if self._segments:
			self._segments[0].start = self._copy(self._get())

	# ─── Queue management ─────────────────────────────────────────────────

	def set_shape (self, shape: animato.easing.ShapeLike, coeff: float = 0.0) -> None:

		"""
		Set the shape used by segments added from now on.

		Segments already in the queue keep their shape.  Negative
		coefficients are clamped to 0.
		"""

		self._shape = animato.easing.get_shape(shape)
		self._coeff = coeff if coeff >= 0.0 else 0.0

	def get_shape (self) -> typing.Tuple[animato.easing.ShapeLike, float]:
		return self._shape, self._coeff

	def on_segment_end (self, action: animato.actions.Action) -> None:

		"""
		Attach ``action`` to the next segment added with ``add_segment``.

		Any number of actions can be queued; all of them move onto that
		segment and fire, in order, when it completes.
		"""

		self._pending.append(action)

	def on_segment_end_set (self, target: typing.Any, name: typing.Any, value: typing.Any, item: bool = False) -> None:

		"""Attach a value write to the next segment added."""

		self.on_segment_end(animato.actions.set_value(target, name, value, item=item))

	def on_segment_end_call (self, target: typing.Any, method: typing.Union[str, typing.Callable[..., typing.Any]], *args: typing.Any) -> None:

		"""Attach a method call to the next segment added."""

		self.on_segment_end(animato.actions.call(target, method, *args))

	def clear_on_segment_end (self) -> None:

		"""Drop actions that have not yet been attached to a segment."""

		self._pending.clear()

	def _append (self, target: T, ramp_time: float, onset: float) -> None:

		segment: Segment[T] = Segment(
			ramp_time = ramp_time if ramp_time >= 0.0 else 0.0,
			onset = onset if onset >= 0.0 else 0.0,
			start = self._copy(self._get()),
			target = target,
			shape = self._shape,
			coeff = self._coeff,
			actions = self._pending,
		)

		self._pending = []
		self._segments.append(segment)

	def remove_last_segment (self) -> None:

		"""
		Drop the most recently added segment without firing its actions.
		"""

		if not self._segments:
			return

		self._segments.pop()

		# A lone survivor is (or is about to be) the current segment.
		if len(self._segments) == 1:
			self._segments[0].start = self._copy(self._get())

	def next_segment (self) -> None:

		"""
		Skip the current segment.

		The skipped segment's actions do not fire and the value is left
		where it is; the next segment ramps on from there.
		"""

		if not self._segments:
			return

		self._segments.popleft()

		if self._segments:
			self._segments[0].start = self._copy(self._get())

	def clear (self) -> None:

		"""
		Drop every segment and every not-yet-attached action without firing any.
		"""

		self._segments.clear()
		self._pending.clear()

	@property
	def segments (self) -> typing.Tuple[Segment[T], ...]:
		return tuple(self._segments)

	@property
	def num_segments (self) -> int:
		return len(self._segments)

	def is_idle (self) -> bool:
		return not self._segments


class Line (_SegmentLine[float]):

	"""
	Move a single float through a queue of segments.

	The value starts at 0 and only changes through :meth:`set_value` or
	through segment playback.
	"""

	def __init__ (self, value: float = 0.0, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._value: float = float(value)

	def reset (self) -> None:

		super().reset()
		self._value = 0.0

	def _get (self) -> float:
		return self._value

	def _set (self, value: float) -> None:
		self._value = value

	def _copy (self, value: float) -> float:
		return value

	def _blend (self, segment: Segment[float], mult: float) -> float:
		return segment.start + (segment.target - segment.start) * mult

	def out (self) -> float:

		"""Return the current value."""

		return self._value

	@property
	def value (self) -> float:
		return self._value

	def set_value (self, value: float) -> None:

		"""
		Drop all segments and jump to ``value``.  No actions fire.
		"""

		self._segments.clear()
		self._value = float(value)

	def add_segment (self, target: float, ramp_time: float = 0.0, onset: float = 0.0) -> None:

		"""
		Queue a ramp to ``target``.

		Parameters:
			target: Value reached when the segment completes.
			ramp_time: Seconds from the end of the onset to the target.
				Negative values are clamped to 0 (an instant jump).
			onset: Seconds to wait, once this segment is current, before
				ramping starts.  Negative values are clamped to 0.
		"""

		self._append(float(target), ramp_time, onset)


class MultiLine (_SegmentLine[typing.List[float]]):

	"""
	Move a fixed number of floats ("lines") through a shared queue of segments.

	All lines share each segment's timing and shape but have their own
	start and target.  Reading an index outside the valid range returns
	the nearest valid line rather than raising.

	Example::

		rgb = animato.line.MultiLine(3)
		rgb.add_segment([1.0, 0.5, 0.0], ramp_time=1.5)
		r, g, b = rgb.out()
	"""

	def __init__ (self, num_lines: int = 1, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._values: typing.List[float] = [0.0] * max(1, int(num_lines))

	def reset (self) -> None:

		super().reset()
		self._values = [0.0]

	def _get (self) -> typing.List[float]:
		return self._values

	def _set (self, value: typing.List[float]) -> None:
		self._values = value

	def _copy (self, value: typing.List[float]) -> typing.List[float]:
		return list(value)

	def _blend (self, segment: Segment[typing.List[float]], mult: float) -> typing.List[float]:

		return [
			start + (target - start) * mult
			for start, target in zip(segment.start, segment.target)
		]

	@staticmethod
	def _fit (values: typing.Sequence[float], size: int) -> typing.List[float]:

		"""Truncate or zero-pad ``values`` to ``size`` floats."""

		fitted = [float(v) for v in values[:size]]
		fitted.extend([0.0] * (size - len(fitted)))
		return fitted

	def out (self) -> typing.List[float]:

		"""Return a copy of the current values."""

		return list(self._values)

	@property
	def values (self) -> typing.List[float]:
		return list(self._values)

	def value_at (self, index: int) -> float:

		"""
		Return the value of one line, clamping ``index`` into range.
		"""

		clamped = max(0, min(len(self._values) - 1, int(index)))

		if clamped != index:
			logger.debug(f"Line index {index} clamped to {clamped}")

		return self._values[clamped]

	def __getitem__ (self, index: int) -> float:
		return self.value_at(index)

	def __len__ (self) -> int:
		return len(self._values)

	def set_values (self, values: typing.Union[float, typing.Sequence[float]]) -> None:

		"""
		Drop all segments and jump to ``values``.  No actions fire.

		A sequence replaces the values (and with them the number of lines);
		a single number is written into every line.
		"""

		self._segments.clear()

		if isinstance(values, (int, float)):
			self._values = [float(values)] * len(self._values)
		else:
			self._values = [float(v) for v in values] or [0.0]

	def set_value (self, values: typing.Union[float, typing.Sequence[float]]) -> None:

		"""Alias of :meth:`set_values`."""

		self.set_values(values)

	def set_num_lines (self, num_lines: int) -> None:

		"""
		Resize to ``num_lines`` (at least 1).

		New lines start at 0, and every queued segment is resized the same
		way, so new lines ramp from 0 to 0 until given real targets.
		"""

		num_lines = max(1, int(num_lines))
		self._values = self._fit(self._values, num_lines)

		for segment in self._segments:
			segment.start = self._fit(segment.start, num_lines)
			segment.target = self._fit(segment.target, num_lines)

	def get_num_lines (self) -> int:
		return len(self._values)

	def add_segment (self, targets: typing.Sequence[float], ramp_time: float = 0.0, onset: float = 0.0) -> None:

		"""
		Queue a ramp to ``targets``, padded with 0 or truncated to the number of lines.

		See :meth:`Line.add_segment` for ``ramp_time`` and ``onset``.
		"""

		self._append(self._fit(targets, len(self._values)), ramp_time, onset)
