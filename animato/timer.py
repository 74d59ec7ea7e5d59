"""A stopwatch that accumulates elapsed time while running."""

import typing

import animato.control
import animato.timebase


class Timer (animato.control.Control):

	"""
	Counts seconds of step time.

	Pausing stops the count and changing the speed scales it, exactly as for
	the other controls.

	Example::

		timer = animato.timer.Timer()
		for _ in range(60):
			timer.advance()
		timer.get_time()   # 2.0 at the default rate of 30
	"""

	def __init__ (self, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._elapsed: float = 0.0

	def reset (self) -> None:

		super().reset()
		self._elapsed = 0.0

	def advance (self) -> None:

		if self._running:
			self._elapsed += self.step_size()

	def restart (self) -> None:

		"""Zero the elapsed time without touching speed or running state."""

		self._elapsed = 0.0

	def get_time (self) -> float:
		return self._elapsed

	@property
	def time (self) -> float:
		return self._elapsed

	def out (self) -> float:
		return self._elapsed
