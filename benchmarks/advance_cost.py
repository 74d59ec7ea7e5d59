"""Per-step advance cost benchmark.

Builds a population of lines, oscillators, and clocks, advances them for a
number of steps, and reports how long one host frame spends inside
``advance()``.

Usage:
    python benchmarks/advance_cost.py [--controls N] [--steps N] [--rate FPS]

Options:
    --controls N    Controls of each kind (default: 200)
    --steps N       Steps to measure (default: 600)
    --rate FPS      Step rate (default: 60)
"""

import argparse
import logging
import statistics
import time

# Keep library logging out of the measurement.
logging.basicConfig(level=logging.ERROR)

import animato.actions
import animato.clock
import animato.conductor
import animato.easing
import animato.line
import animato.oscillators
import animato.timebase


class _Sink:

	"""Target for the actions fired during the run."""

	def __init__ (self) -> None:
		self.hits = 0
		self.level = 0.0

	def hit (self) -> None:
		self.hits += 1


def _build (count: int, timebase: animato.timebase.Timebase, sink: _Sink) -> animato.conductor.Conductor:

	conductor = animato.conductor.Conductor(timebase)

	for i in range(count):

		line = conductor.add(f"line_{i}", animato.line.Line())
		line.set_shape(animato.easing.Shape.S_CURVE)
		for target in (1.0, 0.0, 1.0, 0.0):
			line.on_segment_end_call(sink, "hit")
			line.add_segment(target, ramp_time=0.5 + (i % 7) * 0.1)

		multi = conductor.add(f"multi_{i}", animato.line.MultiLine(3))
		multi.add_segment([1.0, 0.5, 0.25], ramp_time=2.0)

		osc = conductor.add(f"osc_{i}", animato.oscillators.TriangleOsc(frequency=1.0 + i % 5, vertex=0.3))
		osc.add(animato.actions.set_value(sink, "level", float(i)))

		conductor.add(f"noise_{i}", animato.oscillators.NoiseOsc(frequency=2.0))

		clock = conductor.add(f"clock_{i}", animato.clock.Clock())
		for delay in range(5):
			clock.add_call(delay * 0.25, sink, "hit")

	return conductor


def _run_benchmark (count: int, steps: int, rate: float) -> list[float]:

	"""Return the wall time of every step, in seconds."""

	timebase = animato.timebase.Timebase(rate)
	sink = _Sink()
	conductor = _build(count, timebase, sink)

	durations: list[float] = []

	for _ in range(steps):
		start = time.perf_counter()
		conductor.advance()
		durations.append(time.perf_counter() - start)

	return durations


def _print_report (durations: list[float], count: int, rate: float) -> None:

	if not durations:
		print("No timing data collected.")
		return

	ms = [d * 1000 for d in durations]

	mean_ms   = statistics.mean(ms)
	median_ms = statistics.median(ms)
	p99_ms    = sorted(ms)[int(len(ms) * 0.99)]
	max_ms    = max(ms)
	budget_ms = 1000.0 / rate

	print(f"\nAdvance Cost Benchmark: {count * 5} controls, {len(ms)} steps at {rate:.0f} steps/s")
	print(f"{'─' * 62}")
	print(f"  Frame budget    : {budget_ms:>8.3f} ms")
	print(f"  Mean step       : {mean_ms:>8.3f} ms")
	print(f"  Median step     : {median_ms:>8.3f} ms")
	print(f"  P99 step        : {p99_ms:>8.3f} ms")
	print(f"  Max step        : {max_ms:>8.3f} ms")
	print(f"  Budget used     : {100.0 * mean_ms / budget_ms:>7.1f} %")
	print(f"{'─' * 62}")
	print()


def main () -> None:

	parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("--controls", type=int,   default=200, help="Controls of each kind (default: 200)")
	parser.add_argument("--steps",    type=int,   default=600, help="Steps to measure (default: 600)")
	parser.add_argument("--rate",     type=float, default=60,  help="Step rate (default: 60)")
	args = parser.parse_args()

	durations = _run_benchmark(args.controls, args.steps, args.rate)
	_print_report(durations, args.controls, args.rate)


if __name__ == "__main__":
	main()
