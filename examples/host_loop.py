"""A minimal frame loop driving a few animato controls.

Run with ``python examples/host_loop.py``.  Prints a text "scene" once per
tenth of a second for three seconds.
"""

import time

import animato


class Lamp:

	def __init__ (self) -> None:
		self.on = False
		self.flashes = 0

	def flash (self) -> None:
		self.flashes += 1


FPS = 30

animato.timebase.set_rate(FPS)

lamp = Lamp()

# Brightness: fade in, hold, fade out.  Switch the lamp off when done.
brightness = animato.Line()
brightness.set_shape(animato.Shape.S_CURVE)
brightness.add_segment(1.0, ramp_time=1.0)
brightness.set_shape(animato.Shape.FAST_EXP, 3.0)
brightness.on_segment_end_set(lamp, "on", False)
brightness.add_segment(0.0, ramp_time=1.0, onset=0.5)

# Sway between -1 and 1 every two seconds.
sway = animato.SineOsc(frequency=0.5)

# Flash the lamp twice a second; force an extra flash after 1.2 s.
beat = animato.Metro(frequency=2.0)
beat.add_call(lamp, "flash")

clock = animato.Clock()
clock.add_set(0.0, lamp, "on", True)
clock.add_call(1.2, beat, "force_next")

for frame in range(3 * FPS):
	clock.advance()
	brightness.advance()
	sway.advance()
	beat.advance()

	if frame % 3 == 0:
		bar = "#" * int(brightness.out() * 20)
		print(f"{frame / FPS:4.1f}s  on={lamp.on!s:5}  flashes={lamp.flashes:2}  sway={sway.out():+.2f}  {bar}")

	time.sleep(1.0 / FPS)
