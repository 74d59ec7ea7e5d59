"""
Animato - time-driven value animation for frame-based Python hosts.

A host loop (a game loop, a visuals renderer, a lighting controller)
calls ``advance()`` on each animato control once per frame.  The controls
move numbers over time and tell the host when something happened:

- **Lines.** ``Line`` and ``MultiLine`` move one value or several through a
  queue of ramp segments, each with its own target, ramp time, onset
  delay, and easing shape.  Segments chain from wherever the previous one
  ended.
- **Shapes.** Nine segment shapes (step, linear, fast/slow exponential,
  power and cosine curves, S-curve) via ``animato.easing.evaluate()``, or
  any callable.
- **Oscillators.** Phasor/saw, sine, cosine, pulse, triangle (movable
  peak), shaped random noise, and a metronome whose next beat can be
  forced.  Each counts its periods and fires actions at every period
  boundary.
- **Clocks.** One-shot delayed actions that can be cancelled by position
  or by description.
- **Actions.** ``animato.actions.set_value()`` writes an attribute or item;
  ``animato.actions.call()`` calls a method.  Actions compare by target, so
  pending ones can be cancelled without keeping a reference.

All controls share one step rate (steps per second), set with
``animato.timebase.set_rate()``.  Speed, pause, and resume are per control.

Minimal example:

    ```python
    import animato

    animato.timebase.set_rate(60)

    fade = animato.Line()
    fade.set_shape(animato.Shape.S_CURVE)
    fade.on_segment_end_call(scene, "next_slide")
    fade.add_segment(1.0, ramp_time=2.0)

    while running:
        fade.advance()
        scene.alpha = fade.out()
    ```

Package-level exports: ``Line``, ``MultiLine``, ``Shape``, ``Clock``,
``Conductor``, ``Timer``, ``Timebase``, and the oscillators.
"""

import animato.actions
import animato.clock
import animato.conductor
import animato.easing
import animato.line
import animato.oscillators
import animato.timebase
import animato.timer


Line = animato.line.Line
MultiLine = animato.line.MultiLine
Shape = animato.easing.Shape
Clock = animato.clock.Clock
Conductor = animato.conductor.Conductor
Timer = animato.timer.Timer
Timebase = animato.timebase.Timebase

Oscillator = animato.oscillators.Oscillator
Phasor = animato.oscillators.Phasor
SawOsc = animato.oscillators.SawOsc
SineOsc = animato.oscillators.SineOsc
CosineOsc = animato.oscillators.CosineOsc
PulseOsc = animato.oscillators.PulseOsc
TriangleOsc = animato.oscillators.TriangleOsc
NoiseOsc = animato.oscillators.NoiseOsc
Metro = animato.oscillators.Metro
