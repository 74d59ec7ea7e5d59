"""One-shot delayed actions.

A :class:`Clock` holds any number of independent timers.  Each one counts
its own elapsed time and fires its action once the delay has passed, then
disappears.

Example::

	clock = animato.clock.Clock()
	clock.add_call(0.5, door, "open")
	clock.add_set(2.0, door, "locked", True)

	# Changed our mind about the lock:
	clock.cancel(animato.actions.set_value(door, "locked"))
"""

import copy
import logging
import typing

import animato.actions
import animato.control
import animato.timebase


logger = logging.getLogger(__name__)


class Clock (animato.control.Control):

	"""
	A list of delayed actions advanced together.

	Entries are independent: they are visited in the order they were added,
	and removing one never reorders the rest.  Pausing or slowing the clock
	affects every entry.
	"""

	def __init__ (self, timebase: typing.Optional[animato.timebase.Timebase] = None) -> None:

		super().__init__(timebase)
		self._entries: typing.List[animato.actions.Action] = []

	def reset (self) -> None:

		super().reset()
		self._entries.clear()

	def advance (self) -> None:

		"""
		Add one step of time to every entry and fire those whose delay has passed.

		An action may add or cancel entries of this clock while it fires.
		Entries added during the step wait for the next one; entries
		cancelled during the step are not visited.
		"""

		if not self._running:
			return

		increment = self.step_size()

		for entry in list(self._entries):

			if entry not in self._entries:
				continue

			entry.elapsed += increment

			if entry.elapsed > entry.delay:
				self._entries.remove(entry)
				entry.fire()

	def add (self, delay: float, action: animato.actions.Action) -> animato.actions.Action:

		"""
		Schedule a copy of ``action`` to fire after ``delay`` seconds (negative delays count as 0).

		Every call makes its own entry, so one action can be scheduled
		several times with different delays.  Returns the entry, which can
		be passed to :meth:`cancel` later.
		"""

		entry = copy.copy(action)
		entry.delay = delay if delay >= 0.0 else 0.0
		entry.elapsed = 0.0
		self._entries.append(entry)
		return entry

	def add_set (self, delay: float, target: typing.Any, name: typing.Any, value: typing.Any, item: bool = False) -> animato.actions.Action:

		"""Schedule a value write after ``delay`` seconds."""

		return self.add(delay, animato.actions.set_value(target, name, value, item=item))

	def add_call (self, delay: float, target: typing.Any, method: typing.Union[str, typing.Callable[..., typing.Any]], *args: typing.Any) -> animato.actions.Action:

		"""Schedule a method call after ``delay`` seconds."""

		return self.add(delay, animato.actions.call(target, method, *args))

	def cancel (self, description: animato.actions.Action) -> int:

		"""
		Remove every entry matching ``description`` and return how many were removed.

		Only the target location or target behavior is compared, so the
		description's value or argument does not matter.
		"""

		kept = [entry for entry in self._entries if not entry.matches(description)]
		removed = len(self._entries) - len(kept)
		self._entries[:] = kept

		if removed:
			logger.debug(f"Cancelled {removed} clock entr{'y' if removed == 1 else 'ies'} matching {description!r}")

		return removed

	def cancel_first (self) -> None:

		"""Remove the oldest entry still pending."""

		if self._entries:
			self._entries.pop(0)

	def cancel_last (self) -> None:

		"""Remove the most recently added entry still pending."""

		if self._entries:
			self._entries.pop()

	def clear (self) -> None:
		self._entries.clear()

	@property
	def entries (self) -> typing.Tuple[animato.actions.Action, ...]:
		return tuple(self._entries)

	def __len__ (self) -> int:
		return len(self._entries)
