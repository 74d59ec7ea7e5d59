import logging
import typing

import animato.control
import animato.timebase


logger = logging.getLogger(__name__)

C = typing.TypeVar("C", bound=animato.control.Control)


class Conductor:

	"""
	A registry of named controls that are advanced together.

	Controls never depend on each other's update order, so a host can just
	as well advance them by hand; the conductor saves the bookkeeping and
	keeps every registered control on one time base.

	Example:
		```python
		conductor = animato.conductor.Conductor()
		fade = conductor.add("fade", animato.line.Line())
		conductor.add("wobble", animato.oscillators.SineOsc(frequency=0.5))

		fade.add_segment(1.0, ramp_time=3.0)

		# Host loop, once per frame:
		conductor.advance(rate=measured_fps)
		alpha = conductor.get("fade").out()
		```
	"""

	def __init__ (self, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		"""
		Initialize an empty registry reading ``timebase`` (default: the process-wide one).
		"""

		self.timebase: animato.timebase.Timebase = animato.timebase.resolve(timebase)
		self._controls: typing.Dict[str, animato.control.Control] = {}

	def add (self, name: str, control: C) -> C:

		"""
		Register ``control`` under ``name`` and return it.

		The control is switched to the conductor's time base.  Registering a
		name again replaces the earlier control.
		"""

		if name in self._controls:
			logger.debug(f"Replacing control {name!r}")

		control.timebase = self.timebase
		self._controls[name] = control
		return control

	def get (self, name: str) -> typing.Optional[animato.control.Control]:

		"""
		Return the control registered as ``name``, or None.
		"""

		return self._controls.get(name)

	def remove (self, name: str) -> None:

		"""
		Unregister ``name``.  Unknown names are ignored.
		"""

		self._controls.pop(name, None)

	def names (self) -> typing.List[str]:
		return list(self._controls)

	def __contains__ (self, name: str) -> bool:
		return name in self._controls

	def advance (self, rate: typing.Optional[float] = None) -> None:

		"""
		Advance every control once, in registration order.

		When ``rate`` is given the time base is updated first, which is the
		per-frame order the controls expect.
		"""

		if rate is not None:
			self.timebase.set_rate(rate)

		for control in list(self._controls.values()):
			control.advance()

	def run (self, steps: int) -> None:

		"""
		Advance everything ``steps`` times at the current rate.
		"""

		for _ in range(steps):
			self.advance()
