"""The shared step rate read by every control.

The host loop updates the rate once per step (or leaves it at the default)
and then advances its controls.  Controls read the rate through a
:class:`Timebase`; unless one is passed explicitly they share the
process-wide instance returned by :func:`default`.

Example::

	import animato.timebase

	animato.timebase.set_rate(60)

	# In tests, keep the process-wide rate untouched:
	tb = animato.timebase.Timebase(rate=30)
	line = animato.line.Line(timebase=tb)
"""

import logging
import typing

import animato.constants


logger = logging.getLogger(__name__)


class Timebase:

	"""
	Holds the number of steps per second.

	Invalid rates are never rejected: anything that is not a positive number
	is replaced by ``animato.constants.DEFAULT_RATE``.
	"""

	def __init__ (self, rate: float = animato.constants.DEFAULT_RATE) -> None:

		self._rate: float = animato.constants.DEFAULT_RATE
		self.set_rate(rate)

	def set_rate (self, rate: float) -> None:

		"""
		Store a new step rate, falling back to the default when ``rate <= 0``.
		"""

		if rate > 0:
			self._rate = float(rate)
		else:
			logger.debug(f"Invalid step rate {rate!r} replaced by {animato.constants.DEFAULT_RATE}")
			self._rate = animato.constants.DEFAULT_RATE

	def get_rate (self) -> float:
		return self._rate

	@property
	def rate (self) -> float:
		return self._rate

	def step_size (self, speed: float = 1.0) -> float:

		"""
		Return the time increment for one step at ``speed``.
		"""

		return speed / self._rate


_default = Timebase()


def default () -> Timebase:

	"""Return the process-wide time base."""

	return _default


def resolve (timebase: typing.Optional[Timebase]) -> Timebase:

	"""Return ``timebase`` or, when it is ``None``, the process-wide one."""

	return timebase if timebase is not None else _default


def set_rate (rate: float) -> None:

	"""Set the process-wide step rate."""

	_default.set_rate(rate)


def get_rate () -> float:

	"""Return the process-wide step rate."""

	return _default.get_rate()
