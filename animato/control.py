"""Behavior shared by every stateful control: speed, pause/resume, and stepping."""

import abc
import logging
import typing

import animato.constants
import animato.timebase


logger = logging.getLogger(__name__)


class Control (abc.ABC):

	"""
	Abstract base class for everything the host advances once per step.

	A control reads its step rate from a :class:`~animato.timebase.Timebase`
	(the process-wide one unless another is given) and scales the resulting
	per-step time increment by its own speed.
	"""

	def __init__ (self, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		self.timebase: animato.timebase.Timebase = animato.timebase.resolve(timebase)
		self._speed: float = animato.constants.DEFAULT_SPEED
		self._running: bool = True

	def reset (self) -> None:

		"""
		Return to the freshly constructed state (running, speed 1).

		Subclasses extend this to clear their own state.
		"""

		self._speed = animato.constants.DEFAULT_SPEED
		self._running = True

	@abc.abstractmethod
	def advance (self) -> None:

		"""
		Move forward by one step.  Called by the host once per frame.
		"""

		...

	def out (self) -> typing.Any:

		"""
		Return the current output value.
		"""

		raise NotImplementedError

	def set_speed (self, speed: float) -> None:

		"""
		Set the speed multiplier.  Negative values fall back to 1.0.
		"""

		if speed >= 0.0:
			self._speed = float(speed)
		else:
			logger.debug(f"Invalid speed {speed!r} replaced by {animato.constants.DEFAULT_SPEED}")
			self._speed = animato.constants.DEFAULT_SPEED

	def get_speed (self) -> float:
		return self._speed

	@property
	def speed (self) -> float:
		return self._speed

	@speed.setter
	def speed (self, value: float) -> None:
		self.set_speed(value)

	def pause (self) -> None:
		self._running = False

	def resume (self) -> None:
		self._running = True

	def is_running (self) -> bool:
		return self._running

	@property
	def running (self) -> bool:
		return self._running

	def step_size (self) -> float:

		"""
		Return the time increment of one step at the current speed and rate.
		"""

		return self.timebase.step_size(self._speed)
