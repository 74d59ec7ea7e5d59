import argparse
import logging
import os
import random
import typing

import yaml

import animato.conductor
import animato.control
import animato.line
import animato.oscillators
import animato.timebase
import animato.timer


# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


OSCILLATOR_TYPES: typing.Dict[str, typing.Type[animato.oscillators.Oscillator]] = {
	"oscillator": animato.oscillators.Oscillator,
	"phasor":     animato.oscillators.Phasor,
	"saw":        animato.oscillators.SawOsc,
	"sine":       animato.oscillators.SineOsc,
	"cosine":     animato.oscillators.CosineOsc,
	"pulse":      animato.oscillators.PulseOsc,
	"triangle":   animato.oscillators.TriangleOsc,
	"noise":      animato.oscillators.NoiseOsc,
	"metro":      animato.oscillators.Metro,
}


def load_config (config_path: str = 'config.yaml') -> dict:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		return yaml.safe_load(f) or {}


def _add_segments (line: typing.Union[animato.line.Line, animato.line.MultiLine], segments: typing.List[dict]) -> None:

	for segment in segments:
		line.set_shape(segment.get('shape', 'lin'), segment.get('coeff', 0.0))
		line.add_segment(segment.get('target', 0.0), segment.get('time', 0.0), segment.get('onset', 0.0))


def build_control (entry: dict, timebase: typing.Optional[animato.timebase.Timebase] = None) -> animato.control.Control:

	"""
	Build one control from its config entry.

	Unknown types fall back to a plain ``Line`` with a warning.
	"""

	kind = str(entry.get('type', 'line')).lower()
	control: animato.control.Control

	if kind == 'multiline':
		multi = animato.line.MultiLine(entry.get('lines', 1), timebase=timebase)
		if 'value' in entry:
			multi.set_values(entry['value'])
		_add_segments(multi, entry.get('segments', []))
		control = multi

	elif kind in OSCILLATOR_TYPES:
		osc_class = OSCILLATOR_TYPES[kind]
		if osc_class is animato.oscillators.NoiseOsc:
			noise = animato.oscillators.NoiseOsc(
				entry.get('frequency', 1.0),
				rng = random.Random(entry.get('seed')),
				timebase = timebase,
			)
			if entry.get('distribution') == 'normal':
				noise.set_normal(entry.get('stddev', 1.0), entry.get('mean', 0.0))
			else:
				noise.set_uniform(entry.get('high', 1.0), entry.get('low', 0.0))
			noise.set_noise_shape(entry.get('shape', 'lin'), entry.get('coeff', 0.0))
			osc: animato.oscillators.Oscillator = noise
		else:
			osc = osc_class(entry.get('frequency', 1.0), timebase=timebase)
		if 'width' in entry and isinstance(osc, animato.oscillators.PulseOsc):
			osc.set_pulse_width(entry['width'])
		if 'vertex' in entry and isinstance(osc, animato.oscillators.TriangleOsc):
			osc.set_vertex(entry['vertex'])
		if 'phase' in entry:
			osc.set_phase(entry['phase'])
		osc.set_phase_offset(entry.get('offset', 0.0))
		control = osc

	elif kind == 'timer':
		control = animato.timer.Timer(timebase=timebase)

	else:
		if kind != 'line':
			logger.warning(f"Unknown control type {kind!r}, using a line")
		line = animato.line.Line(entry.get('value', 0.0), timebase=timebase)
		_add_segments(line, entry.get('segments', []))
		control = line

	control.set_speed(entry.get('speed', 1.0))
	return control


def _describe (control: animato.control.Control) -> str:

	value = control.out()

	if isinstance(value, list):
		return "[" + ", ".join(f"{v:.3f}" for v in value) + "]"

	return f"{value:.3f}"


def main (argv: typing.Optional[typing.List[str]] = None) -> None:

	"""
	Run the controls described in a YAML file and log their values.
	"""

	parser = argparse.ArgumentParser(prog="animato", description="Step animato controls from a YAML description.")
	parser.add_argument("config", nargs="?", default="config.yaml", help="YAML file (default: config.yaml)")
	parser.add_argument("--steps", type=int, default=None, help="Override the number of steps")
	args = parser.parse_args(argv)

	logger.info("Animato starting...")

	config = load_config(args.config)

	timebase = animato.timebase.Timebase(config.get('rate', animato.timebase.get_rate()))
	conductor = animato.conductor.Conductor(timebase)

	for index, entry in enumerate(config.get('controls', [])):
		conductor.add(entry.get('name', f"control_{index}"), build_control(entry, timebase))

	steps = args.steps if args.steps is not None else int(config.get('steps', timebase.get_rate()))
	print_every = max(1, int(config.get('print_every', 1)))

	for step in range(1, steps + 1):
		conductor.advance()

		if step % print_every == 0:
			values = ", ".join(f"{name}={_describe(conductor.get(name))}" for name in conductor.names())
			logger.info(f"step {step}: {values}")

	logger.info(f"Finished after {steps} steps ({steps / timebase.get_rate():.2f} s)")


if __name__ == "__main__":
	main()
