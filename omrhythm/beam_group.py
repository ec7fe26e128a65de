"""This module implements the BeamGroup: the chords visually linked
by one beam. Once the start time of one of them is known, the start
times of all the others follow from their durations, and they all
belong to the same voice."""
import logging

from omrhythm.chord import VoiceError

__version__ = "0.2.0"


class BeamGroup(object):
    """A group of beamed chords, kept ordered left to right."""

    def __init__(self, id, chords=None):
        self.id = id
        self.chords = []
        for c in chords or []:
            self.add_chord(c)

    def add_chord(self, chord):
        if chord.beam_group is not None and chord.beam_group is not self:
            raise ValueError('Chord #{0} already belongs to beam group #{1}'
                             ''.format(chord.id, chord.beam_group.id))
        chord.beam_group = self
        if chord not in self.chords:
            self.chords.append(chord)
            self.chords.sort(key=lambda c: (c.center.x, c.id))

    def compute_start_times(self):
        """Derives the start times of all the chords in the group
        from the first chord whose start time is known.

        Chords to the right start when their left neighbour ends;
        chords to the left end when their right neighbour starts.
        Conflicts with start times set earlier are reported on the chords.
        """
        known = [i for i, c in enumerate(self.chords)
                 if c.start_time is not None]
        if not known:
            return
        pivot = known[0]
        logging.debug('BeamGroup#{0} start times from Ch#{1}'
                      ''.format(self.id, self.chords[pivot].id))

        for i in range(pivot + 1, len(self.chords)):
            self.chords[i].set_start_time(self.chords[i - 1].end_time)

        for i in range(pivot - 1, -1, -1):
            chord = self.chords[i]
            start_time = self.chords[i + 1].start_time - chord.duration
            if start_time < 0:
                chord.add_error('Beam group #{0}: negative start time {1}'
                                ''.format(self.id, start_time))
                break
            chord.set_start_time(start_time)

    def set_voice(self, voice):
        """Extends the voice to all the chords of the group."""
        for chord in self.chords:
            if chord.voice is None:
                try:
                    chord.set_voice(voice, propagate=False)
                except VoiceError as e:
                    chord.add_error(str(e))
            elif chord.voice is not voice:
                chord.add_error('Beam group #{0}: voice #{1} differs from'
                                ' group voice #{2}'.format(self.id,
                                                           chord.voice.id,
                                                           voice.id))

    @property
    def voice(self):
        for c in self.chords:
            if c.voice is not None:
                return c.voice
        return None

    def __str__(self):
        return '{{BeamGroup#{0} [{1}]}}'.format(
            self.id, ''.join('#{0}'.format(c.id) for c in self.chords))
