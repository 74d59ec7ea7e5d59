"""Deferred actions: capturable, comparable, one-shot notifications.

An action describes something to do later to an external target: either
write a value into a location (:class:`SetValue`) or invoke a method
(:class:`CallMethod`).  Lines fire them when a segment ends, oscillators at
every period boundary, and clocks once their delay has elapsed.

Two actions *match* when they refer to the same target location or the same
target behavior; the payload (written value, call argument) is ignored.
That lets a caller build a throwaway description and cancel a pending
action without having kept a reference to it:

	clock.add(2.0, animato.actions.call(player, "stop"))
	...
	clock.cancel(animato.actions.call(player, "stop"))

Targets are held through weak references where the type allows it, so an
action whose target has been garbage collected simply does nothing when
fired.  Plain ``dict`` and ``list`` targets cannot be weakly referenced and
are held strongly.
"""

import abc
import typing
import weakref


class _NoArg:

	"""Marker for a call without an argument."""

	def __repr__ (self) -> str:
		return "NO_ARG"


NO_ARG = _NoArg()


def _reference (target: typing.Any) -> typing.Callable[[], typing.Any]:

	"""
	Return a zero-argument callable resolving to ``target`` (or ``None`` once it is gone).
	"""

	if target is None:
		return lambda: None

	try:
		return weakref.ref(target)
	except TypeError:
		return lambda: target


class Action (abc.ABC):

	"""
	Common base for the two action kinds.

	``delay`` and ``elapsed`` are set and used only when the action sits in a
	:class:`~animato.clock.Clock`.
	"""

	def __init__ (self, target: typing.Any) -> None:

		self._ref = _reference(target)
		self.delay: float = 0.0
		self.elapsed: float = 0.0

	@property
	def target (self) -> typing.Any:

		"""The target object, or ``None`` if it no longer exists."""

		return self._ref()

	@abc.abstractmethod
	def fire (self) -> None:

		"""
		Perform the action.  A missing target makes this a no-op.
		"""

		...

	@abc.abstractmethod
	def matches (self, other: "Action") -> bool:

		"""
		Return True if ``other`` refers to the same location or behavior.
		"""

		...

	def _same_target (self, other: "Action") -> bool:

		target = self.target
		return target is not None and target is other.target


class SetValue (Action):

	"""
	Write ``value`` into an attribute (or, with ``item=True``, a key/index) of ``target``.
	"""

	def __init__ (self, target: typing.Any, name: typing.Any, value: typing.Any = None, item: bool = False) -> None:

		super().__init__(target)
		self.name = name
		self.value = value
		self.item = item

	def fire (self) -> None:

		target = self.target

		if target is None:
			return

		if self.item:
			target[self.name] = self.value
		else:
			setattr(target, self.name, self.value)

	def matches (self, other: Action) -> bool:

		if not isinstance(other, SetValue):
			return False

		return self._same_target(other) and self.item == other.item and self.name == other.name

	def __repr__ (self) -> str:
		location = f"[{self.name!r}]" if self.item else f".{self.name}"
		return f"SetValue({type(self.target).__name__}{location} = {self.value!r})"


class CallMethod (Action):

	"""
	Invoke ``target.<method>()`` or, when ``arg`` is given, ``target.<method>(arg)``.

	``method`` is a name or a function/bound method, which is reduced to its
	name.  A call with an argument and a call without one are different
	behaviors and never match each other.
	"""

	def __init__ (self, target: typing.Any, method: typing.Union[str, typing.Callable[..., typing.Any]], arg: typing.Any = NO_ARG) -> None:

		super().__init__(target)
		self.method: str = method if isinstance(method, str) else method.__name__
		self.arg = arg

	@property
	def takes_arg (self) -> bool:
		return self.arg is not NO_ARG

	def fire (self) -> None:

		target = self.target

		if target is None:
			return

		func = getattr(target, self.method)

		if self.takes_arg:
			func(self.arg)
		else:
			func()

	def matches (self, other: Action) -> bool:

		if not isinstance(other, CallMethod):
			return False

		return self._same_target(other) and self.method == other.method and self.takes_arg == other.takes_arg

	def __repr__ (self) -> str:
		arg = "" if not self.takes_arg else repr(self.arg)
		return f"CallMethod({type(self.target).__name__}.{self.method}({arg}))"


def set_value (target: typing.Any, name: typing.Any, value: typing.Any = None, item: bool = False) -> SetValue:

	"""
	Build a :class:`SetValue` action.

	When the action is only used as a cancellation description the value
	can be left out.

	Example::

		line.on_segment_end(animato.actions.set_value(sprite, "visible", False))
		data = {}
		clock.add(1.0, animato.actions.set_value(data, "ready", True, item=True))
	"""

	return SetValue(target, name, value, item=item)


def call (target: typing.Any, method: typing.Union[str, typing.Callable[..., typing.Any]], *args: typing.Any) -> CallMethod:

	"""
	Build a :class:`CallMethod` action taking no argument or exactly one.

	For a cancellation description of a one-argument call, pass any
	placeholder argument; only the target and method are compared.

	Example::

		osc.add(animato.actions.call(player, "trigger"))
		osc.add(animato.actions.call(player, "set_volume", 0.8))
	"""

	if len(args) > 1:
		raise TypeError(f"call() takes at most one method argument ({len(args)} given)")

	arg = args[0] if args else NO_ARG
	return CallMethod(target, method, arg)
