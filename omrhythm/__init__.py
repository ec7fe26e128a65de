"""The ``omrhythm`` package reconstructs rhythm from recognized chords:
it groups the chords of a measure into time slots, computes the start
time of every slot and assigns every chord to a voice.

The main entry point is :class:`omrhythm.measure.Measure`. Typical use::

    measure = Measure(expected_duration=Fraction(1))
    measure.build_slots(chords)
    measure.build_voices()
    measure.check_durations()

"""

__version__ = "0.2.0"
