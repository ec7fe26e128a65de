"""This module implements the Measure, which drives rhythm
reconstruction for one measure of one part.

The chords of the measure are first grouped into slots, left to right.
Then the slots are processed in that order: each slot gets its start
time, the chords that end at that time are collected, and the slot
decides which voices its chords belong to.

Measures are independent of each other.
"""
import logging

from omrhythm.chord import by_ordinate
from omrhythm.rational import ZERO, format_rational, rational
from omrhythm.rhythm_engine_constants import RhythmEngineConstants as _CONST
from omrhythm.slot import Slot

__version__ = "0.2.0"


class MeasureError(ValueError):
    pass


class Measure(object):
    """One measure of one part: its slots and its voices.

    :param id: The measure id, for display.

    :param expected_duration: The duration the time signature
        requires from every voice, if known.
    """

    def __init__(self, id=1, expected_duration=None):
        self.id = id
        if expected_duration is not None:
            expected_duration = rational(expected_duration)
        self.expected_duration = expected_duration

        self.slots = []
        '''Slots, ordered left to right (and by id).'''

        self.voices = []
        '''Voices, ordered by id.'''

    def get_voices(self):
        return self.voices

    @property
    def voices_number(self):
        return len(self.voices)

    def add_voice(self, voice):
        self.voices.append(voice)

    @property
    def chords(self):
        return [c for s in self.slots for c in s.chords]

    def create_slot(self, chords):
        """Creates the next slot of the measure with the given chords.

        :raises MeasureError: if the new slot is not to the right
            of the previous one.
        """
        slot = Slot(self)
        slot.set_chords(chords)
        if self.slots and slot.mean_x <= self.slots[-1].mean_x:
            for c in slot.chords:
                c.slot = None
            raise MeasureError('Measure#{0}: {1} is not right of {2}'
                               ''.format(self.id, slot, self.slots[-1]))
        self.slots.append(slot)
        return slot

    def build_slots(self, chords, max_dx=None):
        """Groups the chords into slots by abscissa, and creates
        the slots left to right.

        A chord joins the current slot when its center is at most
        ``max_dx`` pixels right of the first chord of the slot.

        :param max_dx: Defaults to ``MAX_SLOT_DX`` interlines of the
            first chord of the slot.

        :returns: The list of created slots.
        """
        chords = sorted(chords, key=lambda c: (c.center.x, c.ordinate, c.id))
        groups = []
        for chord in chords:
            if groups:
                first = groups[-1][0]
                dx = max_dx
                if dx is None:
                    dx = _CONST.MAX_SLOT_DX * first.interline
                if chord.center.x - first.center.x <= dx:
                    groups[-1].append(chord)
                    continue
            groups.append([chord])

        created = []
        for group in groups:
            slot = self.create_slot(group)
            logging.debug('Measure#{0} {1}'.format(self.id, slot))
            created.append(slot)
        return created

    def build_voices(self):
        """Computes the start time of every slot and the voice
        of every chord.

        :returns: The voices of the measure.
        """
        # Chords still sounding
        active = []

        for slot in self.slots:
            start_time = slot.start_time
            if start_time is None:
                known = [c.start_time for c in slot.chords
                         if c.start_time is not None]
                if known:
                    start_time = min(known)
            if start_time is None:
                end_times = [c.end_time for c in active
                             if c.end_time is not None]
                if end_times:
                    start_time = min(end_times)
                else:
                    start_time = ZERO

            slot.set_start_time(start_time)
            start_time = slot.start_time

            endings = sorted([c for c in active
                              if c.end_time is not None
                              and c.end_time <= start_time],
                             key=by_ordinate)
            active = [c for c in active if c not in endings]

            slot.build_voices(endings)
            active.extend(slot.chords)

        self.dump_voices()
        return self.voices

    def check_durations(self):
        """Checks every voice against the expected measure duration.

        :returns: A dict voice id --> (end time - expected duration).
            Empty if the expected duration is unknown.
        """
        if self.expected_duration is None:
            return {}
        deltas = {}
        for voice in self.voices:
            delta = voice.check_duration(self.expected_duration)
            if delta is not None:
                deltas[voice.id] = delta
        return deltas

    def dump_slots(self):
        logging.debug(str(self))
        for slot in self.slots:
            logging.debug(slot.to_chord_string())

    def dump_voices(self):
        logging.debug(str(self))
        for slot in self.slots:
            logging.debug(slot.to_voice_string())
        for voice in self.voices:
            logging.debug(voice.to_strip())

    def __str__(self):
        text = '{Measure#' + str(self.id)
        if self.expected_duration is not None:
            text += ' dur={0}'.format(format_rational(self.expected_duration))
        return text + ' slots={0} voices={1}}}'.format(len(self.slots),
                                                      len(self.voices))
