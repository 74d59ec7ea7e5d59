import typing

import pytest

import animato.constants
import animato.timebase


class Recorder:

	"""Action target that remembers what was done to it."""

	def __init__ (self) -> None:

		"""Start with no recorded calls."""

		self.calls: typing.List[typing.Any] = []
		self.value: typing.Any = None

	def hit (self) -> None:

		"""Record an argument-less call."""

		self.calls.append("hit")

	def record (self, label: typing.Any) -> None:

		"""Record a one-argument call."""

		self.calls.append(label)


@pytest.fixture
def timebase () -> animato.timebase.Timebase:

	"""An isolated time base at 30 steps per second."""

	return animato.timebase.Timebase(rate=30)


@pytest.fixture
def recorder () -> Recorder:

	"""A fresh action target."""

	return Recorder()


@pytest.fixture(autouse=True)
def reset_default_rate () -> typing.Iterator[None]:

	"""Leave the process-wide step rate at its default after every test."""

	yield
	animato.timebase.set_rate(animato.constants.DEFAULT_RATE)


def run (control: typing.Any, steps: int) -> None:

	"""Advance ``control`` ``steps`` times."""

	for _ in range(steps):
		control.advance()
