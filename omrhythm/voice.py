"""This module implements the Voice: one melodic line through a measure.

A voice keeps a slot table, mapping the id of each slot of the measure
to the chord of the voice sounding at that slot, if any. A chord
*begins* at its own slot, and *continues* over the following slots
whose start time falls before the chord end time. A voice is free at
a slot when nothing sounds in it there.
"""
import collections
import logging

from omrhythm.chord import VoiceError
from omrhythm.rational import format_rational
from omrhythm.rhythm_engine_constants import RhythmEngineConstants as _CONST

__version__ = "0.2.0"


VoiceChord = collections.namedtuple('VoiceChord', ['chord', 'status'])


class Voice(object):
    """A voice, created from the first chord that needs it.

    The voice id is the next free id in the measure, so voices of a
    measure are numbered 1, 2, ... in creation order.

    :param chord: The seed chord. It must already be in a slot,
        unless the measure is given explicitly.

    :param measure: The containing measure. Defaults to the measure
        of the seed chord slot.
    """

    def __init__(self, chord, measure=None):
        if measure is None:
            if chord.slot is None:
                raise ValueError('Cannot create a voice from chord #{0}:'
                                 ' it has no slot.'.format(chord.id))
            measure = chord.slot.measure
        if chord.voice is not None:
            raise VoiceError('Chord #{0} already has voice #{1}'
                             ''.format(chord.id, chord.voice.id))
        self.measure = measure
        self.id = measure.voices_number + 1
        self.slot_table = {}

        measure.add_voice(self)
        logging.debug('{0} creating voice#{1}'.format(chord.context_string,
                                                      self.id))
        chord.set_voice(self)

    def get_slot_info(self, slot):
        return self.slot_table.get(slot.id)

    def set_slot_info(self, slot, chord, status=_CONST.BEGIN):
        """Records that the chord sounds in this voice at this slot.

        :raises VoiceError: if another chord already sounds there.
        """
        info = self.slot_table.get(slot.id)
        if info is not None and info.chord is not chord:
            raise VoiceError('Voice#{0} already holds chord #{1} at slot#{2},'
                             ' cannot add chord #{3}'
                             ''.format(self.id, info.chord.id, slot.id,
                                       chord.id))
        self.slot_table[slot.id] = VoiceChord(chord, status)
        self.update_slot_table()

    def is_free(self, slot):
        """Checks whether no chord of this voice sounds at the slot.

        The latest chord before the slot must be known to end at or
        before the slot start time: if either time is still unknown,
        the voice is not free.
        """
        if slot.id in self.slot_table:
            return False
        previous = self.get_chord_before(slot)
        if previous is None:
            return True
        end_time = previous.end_time
        if end_time is None or slot.start_time is None:
            return False
        return end_time <= slot.start_time

    def get_chord_before(self, slot):
        """Returns the latest chord that begins in this voice strictly
        before the given slot, or None."""
        previous = None
        for slot_id in sorted(self.slot_table):
            if slot_id >= slot.id:
                break
            info = self.slot_table[slot_id]
            if info.status == _CONST.BEGIN:
                previous = info.chord
        return previous

    def update_slot_table(self):
        """Extends every chord of the voice over the following slots
        it still sounds at. Only slots with a known start time
        are considered."""
        last_chord = None
        for slot in self.measure.slots:
            if slot.start_time is None:
                continue
            info = self.slot_table.get(slot.id)
            if info is None:
                if last_chord is not None:
                    end_time = last_chord.end_time
                    if end_time is not None and end_time > slot.start_time:
                        self.slot_table[slot.id] = VoiceChord(last_chord,
                                                              _CONST.CONTINUE)
            elif info.status == _CONST.BEGIN:
                last_chord = info.chord

    @property
    def chords(self):
        """The chords that begin in this voice, ordered by slot."""
        return [self.slot_table[slot_id].chord
                for slot_id in sorted(self.slot_table)
                if self.slot_table[slot_id].status == _CONST.BEGIN]

    @property
    def last_chord(self):
        chords = self.chords
        if not chords:
            return None
        return chords[-1]

    @property
    def end_time(self):
        """When the last chord of the voice ends, if known."""
        last = self.last_chord
        if last is None:
            return None
        return last.end_time

    def check_duration(self, expected_duration):
        """Compares the voice end time with the expected measure
        duration, and reports a mismatch on the last chord.

        :returns: The difference (end time - expected duration),
            or None if the voice end time is unknown.
        """
        end_time = self.end_time
        if end_time is None:
            return None
        delta = end_time - expected_duration
        if delta < 0:
            self.last_chord.add_error('Voice#{0} too short by {1}'
                                      ''.format(self.id, -delta))
        elif delta > 0:
            self.last_chord.add_error('Voice#{0} too long by {1}'
                                      ''.format(self.id, delta))
        return delta

    def to_strip(self):
        """One line per voice: for every slot of the measure,
        the chord beginning there, a continuation mark, or nothing."""
        items = []
        for slot in self.measure.slots:
            info = self.slot_table.get(slot.id)
            if info is None:
                items.append('  .  ')
            elif info.status == _CONST.CONTINUE:
                items.append('  =  ')
            else:
                items.append('#{0:<4}'.format(info.chord.id))
        return 'V{0} |{1}|'.format(self.id, '|'.join(items))

    def __str__(self):
        text = '{Voice#' + str(self.id)
        end_time = self.end_time
        if end_time is not None:
            text += ' end={0}'.format(format_rational(end_time))
        chords = ''.join('#{0}'.format(c.id) for c in self.chords)
        return text + ' chords=[' + chords + ']}'

    def __repr__(self):
        return self.__str__()
