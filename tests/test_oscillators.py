"""Tests for the phase-accumulating oscillators.

Covers:
- Period counting at 30 steps/s, forwards and backwards
- set_phase suppressing the next event, Metro.force_next forcing one
- Waveform outputs for sine, cosine, pulse and triangle
- Period actions and removal by description
- Seeded noise with held and gliding shapes
"""

import math
import random

import pytest

import animato.actions
import animato.easing
import animato.oscillators
import animato.timebase
import conftest
from conftest import run


# ---------------------------------------------------------------------------
# Period events
# ---------------------------------------------------------------------------


def test_one_hertz_fires_once_per_second (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	"""At 1 Hz and 30 steps/s, 30 steps cover exactly one period event."""

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "hit")

	run(osc, 30)

	assert osc.get_counter() == 1
	assert recorder.calls == ["hit"]


def test_fresh_oscillator_fires_on_first_step (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "hit")

	osc.advance()

	assert recorder.calls == ["hit"]


@pytest.mark.parametrize("steps,expected", [(30, 1), (31, 2), (61, 3), (90, 3), (91, 4)])
def test_steady_counting (timebase: animato.timebase.Timebase, steps: int, expected: int) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)

	run(osc, steps)

	assert osc.get_counter() == expected


def test_long_run_stays_within_one_event (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=3.0, timebase=timebase)

	run(osc, 3000)

	assert abs(osc.get_counter() - 300) <= 1


def test_set_phase_suppresses_next_event (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "hit")
	osc.set_phase(0.0)

	osc.advance()
	assert recorder.calls == []

	run(osc, 30)
	assert recorder.calls == ["hit"]


def test_set_phase_mid_period (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	run(osc, 10)

	osc.set_phase(0.5)
	osc.advance()

	assert osc.get_phase() == pytest.approx(0.5)
	assert osc.get_counter() == 1


def test_negative_frequency_counts_without_double_firing (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=-1.0, timebase=timebase)

	osc.advance()
	assert osc.get_counter() == 0

	osc.advance()
	assert osc.get_counter() == 1
	assert osc.get_phase() == pytest.approx(29 / 30)

	run(osc, 29)
	assert osc.get_counter() == 1

	osc.advance()
	assert osc.get_counter() == 2


def test_zero_frequency_never_fires (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=0.0, timebase=timebase)
	osc.set_phase(0.3)

	run(osc, 100)

	assert osc.get_counter() == 0
	assert osc.get_phase() == pytest.approx(0.3)


def test_pause_freezes_phase (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	run(osc, 10)
	phase = osc.get_phase()

	osc.pause()
	run(osc, 50)

	assert osc.get_phase() == phase
	assert osc.get_counter() == 1


def test_double_speed_doubles_event_rate (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.set_speed(2.0)

	run(osc, 60)

	assert osc.get_counter() == 4


def test_reset_counter (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	run(osc, 31)

	osc.reset_counter()

	assert osc.get_counter() == 0


def test_phase_offset_shifts_output (timebase: animato.timebase.Timebase) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.set_phase_offset(0.25)

	osc.advance()

	assert osc.get_phase() == pytest.approx(0.25)
	assert osc.get_phase_offset() == 0.25


# ---------------------------------------------------------------------------
# Frequency and period
# ---------------------------------------------------------------------------


def test_period_is_inverse_frequency () -> None:

	osc = animato.oscillators.Oscillator(frequency=4.0)

	assert osc.get_period() == 0.25

	osc.set_period(0.5)
	assert osc.get_frequency() == 2.0


def test_zero_frequency_has_infinite_period () -> None:

	osc = animato.oscillators.Oscillator(frequency=0.0)

	assert osc.get_period() == math.inf


def test_zero_period_gives_infinite_frequency () -> None:

	osc = animato.oscillators.Oscillator()
	osc.set_period(0.0)

	assert osc.get_frequency() == math.inf


def test_wrap_keeps_phase_in_unit_interval () -> None:

	assert animato.oscillators.wrap(1.25) == pytest.approx(0.25)
	assert animato.oscillators.wrap(-0.25) == pytest.approx(0.75)
	assert animato.oscillators.wrap(-1e-20) == 0.0


# ---------------------------------------------------------------------------
# Waveforms
# ---------------------------------------------------------------------------


def _advance_to (osc: animato.oscillators.Oscillator, steps: int) -> float:

	run(osc, steps)
	return osc.out()


def test_phasor_aliases () -> None:

	assert animato.oscillators.Phasor is animato.oscillators.Oscillator
	assert animato.oscillators.SawOsc is animato.oscillators.Oscillator


def test_sine_and_cosine (timebase: animato.timebase.Timebase) -> None:

	sine = animato.oscillators.SineOsc(frequency=0.25, timebase=timebase)
	cosine = animato.oscillators.CosineOsc(frequency=0.25, timebase=timebase)

	sine.advance()
	cosine.advance()
	assert sine.out() == pytest.approx(0.0)
	assert cosine.out() == pytest.approx(1.0)

	# wrapped phase 0.25
	assert _advance_to(sine, 30) == pytest.approx(1.0, abs=1e-6)
	assert _advance_to(cosine, 60) == pytest.approx(-1.0, abs=1e-6)


def test_pulse_width (timebase: animato.timebase.Timebase) -> None:

	pulse = animato.oscillators.PulseOsc(frequency=1.0, width=0.25, timebase=timebase)

	outputs = []
	for _ in range(30):
		pulse.advance()
		outputs.append(pulse.out())

	assert outputs[:8] == [1.0] * 8
	assert outputs[8:] == [0.0] * 22


def test_pulse_width_is_clamped () -> None:

	pulse = animato.oscillators.PulseOsc()

	pulse.set_pulse_width(3.0)
	assert pulse.get_pulse_width() == 1.0

	pulse.set_pulse_width(-1.0)
	assert pulse.get_pulse_width() == 0.0


def test_symmetric_triangle (timebase: animato.timebase.Timebase) -> None:

	tri = animato.oscillators.TriangleOsc(frequency=0.25, timebase=timebase)

	assert _advance_to(tri, 1) == pytest.approx(0.0)
	assert _advance_to(tri, 30) == pytest.approx(0.5, abs=1e-6)
	assert _advance_to(tri, 30) == pytest.approx(1.0, abs=1e-6)
	assert _advance_to(tri, 30) == pytest.approx(0.5, abs=1e-6)


@pytest.mark.parametrize("vertex,expected", [(0.0, 0.75), (1.0, 0.25), (0.25, 1.0)])
def test_triangle_vertex (timebase: animato.timebase.Timebase, vertex: float, expected: float) -> None:

	tri = animato.oscillators.TriangleOsc(frequency=0.25, vertex=vertex, timebase=timebase)

	# wrapped phase 0.25
	assert _advance_to(tri, 31) == pytest.approx(expected, abs=1e-6)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def test_actions_fire_in_order (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "record", "first")
	osc.add_set(recorder, "value", 7)
	osc.add_call(recorder, "record", "second")

	osc.advance()

	assert recorder.calls == ["first", "second"]
	assert recorder.value == 7


def test_remove_by_description (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	other = conftest.Recorder()
	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "record", "mine")
	osc.add_call(other, "record", "theirs")
	osc.add_set(recorder, "value", 3)

	osc.remove(animato.actions.call(recorder, "record", "anything"))

	assert len(osc.actions) == 2

	osc.advance()

	assert recorder.calls == []
	assert other.calls == ["theirs"]
	assert recorder.value == 3


def test_action_removed_while_firing_never_fires (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(osc, "remove", animato.actions.call(recorder, "hit"))
	osc.add_call(recorder, "hit")

	osc.advance()

	assert recorder.calls == []
	assert len(osc.actions) == 1


def test_remove_all_while_firing (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(osc, "remove_all")
	osc.add_call(recorder, "hit")

	osc.advance()

	assert recorder.calls == []
	assert osc.actions == ()


def test_action_added_while_firing_waits_for_next_boundary (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(osc, "add", animato.actions.call(recorder, "hit"))

	osc.advance()

	assert recorder.calls == []
	assert len(osc.actions) == 2

	run(osc, 30)

	assert recorder.calls == ["hit"]


def test_remove_all (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=1.0, timebase=timebase)
	osc.add_call(recorder, "hit")
	osc.remove_all()

	osc.advance()

	assert recorder.calls == []
	assert osc.get_counter() == 1


def test_reset_restores_defaults (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	osc = animato.oscillators.Oscillator(frequency=5.0, timebase=timebase)
	osc.add_call(recorder, "hit")
	osc.set_speed(3.0)
	run(osc, 10)

	osc.reset()

	assert osc.get_frequency() == 1.0
	assert osc.get_speed() == 1.0
	assert osc.get_counter() == 0
	assert osc.actions == ()


# ---------------------------------------------------------------------------
# Metro
# ---------------------------------------------------------------------------


def test_force_next_fires_on_next_step (timebase: animato.timebase.Timebase, recorder: conftest.Recorder) -> None:

	metro = animato.oscillators.Metro(frequency=1.0, timebase=timebase)
	metro.add_call(recorder, "hit")
	run(metro, 10)

	metro.force_next()
	metro.advance()

	assert metro.get_counter() == 2
	assert metro.out() == 0.0

	# The cycle restarted, so the next natural event is a full period later.
	run(metro, 29)
	assert metro.get_counter() == 2

	metro.advance()
	assert metro.get_counter() == 3


def test_force_next_backwards_fires_once (timebase: animato.timebase.Timebase) -> None:

	metro = animato.oscillators.Metro(frequency=-1.0, timebase=timebase)
	run(metro, 10)
	count = metro.get_counter()

	metro.force_next()
	run(metro, 2)

	assert metro.get_counter() == count + 1


def test_force_next_on_fresh_metro (timebase: animato.timebase.Timebase) -> None:

	metro = animato.oscillators.Metro(frequency=1.0, timebase=timebase)
	metro.force_next()

	metro.advance()

	assert metro.get_counter() == 1


def test_set_phase_cancels_force (timebase: animato.timebase.Timebase) -> None:

	metro = animato.oscillators.Metro(frequency=1.0, timebase=timebase)
	run(metro, 10)

	metro.force_next()
	metro.set_phase(0.5)
	metro.advance()

	assert metro.get_counter() == 1


# ---------------------------------------------------------------------------
# Noise
# ---------------------------------------------------------------------------


def test_noise_is_deterministic_with_seeded_rng (timebase: animato.timebase.Timebase) -> None:

	a = animato.oscillators.NoiseOsc(frequency=2.0, rng=random.Random(42), timebase=timebase)
	b = animato.oscillators.NoiseOsc(frequency=2.0, rng=random.Random(42), timebase=timebase)

	outputs_a = []
	outputs_b = []
	for _ in range(100):
		a.advance()
		b.advance()
		outputs_a.append(a.out())
		outputs_b.append(b.out())

	assert outputs_a == outputs_b


def test_noise_step_shape_holds_each_draw (timebase: animato.timebase.Timebase) -> None:

	reference = random.Random(7)
	first = reference.uniform(0.0, 1.0)
	second = reference.uniform(0.0, 1.0)

	noise = animato.oscillators.NoiseOsc(frequency=1.0, rng=random.Random(7), timebase=timebase)
	noise.set_noise_shape(animato.easing.Shape.STEP)

	run(noise, 30)
	assert noise.out() == 0.0

	noise.advance()
	assert noise.out() == first

	run(noise, 29)
	assert noise.out() == first

	noise.advance()
	assert noise.out() == second


def test_noise_linear_glide (timebase: animato.timebase.Timebase) -> None:

	first = random.Random(3).uniform(-2.0, 2.0)

	noise = animato.oscillators.NoiseOsc(frequency=1.0, rng=random.Random(3), timebase=timebase)
	noise.set_uniform(2.0, -2.0)

	# wrapped phase 0.5 of the first period
	run(noise, 16)

	assert noise.out() == pytest.approx(first / 2, abs=1e-6)


def test_noise_uniform_range (timebase: animato.timebase.Timebase) -> None:

	noise = animato.oscillators.NoiseOsc(frequency=7.0, rng=random.Random(1), timebase=timebase)
	noise.set_uniform(5.0, 4.0)

	assert noise.is_uniform()

	for _ in range(200):
		noise.advance()
		if noise.get_counter() > 1:
			assert 4.0 <= noise.out() <= 5.0


def test_noise_normal_with_zero_deviation (timebase: animato.timebase.Timebase) -> None:

	noise = animato.oscillators.NoiseOsc(frequency=1.0, rng=random.Random(1), timebase=timebase)
	noise.set_normal(-3.0, 5.0)

	assert noise.is_normal()

	run(noise, 16)
	assert noise.out() == pytest.approx(2.5, abs=1e-6)

	run(noise, 15)
	assert noise.out() == pytest.approx(5.0)


def test_noise_shape_waits_for_next_period (timebase: animato.timebase.Timebase) -> None:

	noise = animato.oscillators.NoiseOsc(frequency=1.0, rng=random.Random(9), timebase=timebase)
	noise.set_normal(0.0, 1.0)
	run(noise, 16)

	noise.set_noise_shape("step")
	noise.advance()

	# Still gliding linearly toward the first draw.
	assert noise.out() == pytest.approx(16 / 30, abs=1e-6)
