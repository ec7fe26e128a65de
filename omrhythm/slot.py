"""This module implements the Slot: a time slot within a measure,
gathering all the chords that start at the same time.

Slots are where voices are decided. When a slot is processed, the
chords that end right at this slot hand over their voices to the new
chords of the slot, so that each voice continues as smoothly as
possible: same staff, close vertical position, same stem direction.
Chords that do not continue an ending voice take a free voice of the
same staff, or start a new one.
"""
import logging

import numpy

from omrhythm.chord import PixelPoint, VoiceError, by_ordinate
from omrhythm.injection import Distance, InjectionSolver
from omrhythm.rational import format_rational, rational
from omrhythm.rhythm_engine_constants import RhythmEngineConstants as _CONST
from omrhythm.voice import Voice

__version__ = "0.2.0"


class ChordDistance(Distance):
    """The cost of continuing the voice of an old (ending) chord
    with a new chord of the slot.

    Targets beyond the old chords mean "no link": the new chord
    does not continue any of the ending voices.
    """

    def __init__(self, news, olds):
        self.news = news
        self.olds = olds

    def cost(self, source, target):
        # No link to an old chord
        if target >= len(self.olds):
            return _CONST.NO_LINK_COST

        new_chord = self.news[source]
        old_chord = self.olds[target]

        if (new_chord.voice is not None) \
                and (old_chord.voice is not None) \
                and (new_chord.voice is not old_chord.voice):
            return _CONST.INCOMPATIBLE_VOICES_COST
        elif new_chord.staff != old_chord.staff:
            return _CONST.STAFF_DIFF_COST
        else:
            dy = int(abs(new_chord.ordinate - old_chord.ordinate)
                     // new_chord.interline)
            d_stem = abs(new_chord.stem_dir - old_chord.stem_dir)
            return dy + _CONST.STEM_DIFF_WEIGHT * d_stem


class Slot(object):
    """A time slot of a measure.

    The slot id is 1-based, in order of creation within the measure.
    Slots must be created left to right: see
    :meth:`omrhythm.measure.Measure.create_slot`.
    """

    def __init__(self, measure):
        self.measure = measure
        self.id = 1 + len(measure.slots)

        self.ref_point = None
        '''Mean of the chord centers, rounded to the pixel.'''

        self.mean_x = None
        '''Unrounded mean abscissa of the chord centers, used to
        order slots.'''

        self.chords = []
        '''Chords incoming into this slot, sorted top to bottom
        once voices are built.'''

        self.start_time = None
        '''Time offset since measure start.'''

    def set_chords(self, chords):
        """Makes the given chords the chords of this slot,
        and computes the slot reference point."""
        chords = list(chords)
        if not chords:
            raise ValueError('Slot#{0}: cannot be empty'.format(self.id))

        self.chords.extend(chords)
        self.chords.sort(key=by_ordinate)
        for chord in chords:
            chord.slot = self

        centers = numpy.array([[c.center.x, c.center.y] for c in chords],
                              dtype=float)
        mean = centers.mean(axis=0)
        self.mean_x = float(mean[0])
        x, y = numpy.rint(mean)
        self.ref_point = PixelPoint(int(x), int(y))

    @property
    def x(self):
        """The slot abscissa (page-based, not measure-based)."""
        return self.ref_point.x

    def build_voices(self, ending_chords):
        """Computes the voices of the chords of this slot.

        :param ending_chords: The chords that end right at this slot,
            whose voices can be continued by the chords of this slot.
        """
        logging.debug('Slot#{0} ending chords={1}'.format(self.id,
                                                          ending_chords))
        logging.debug('Slot#{0} incomings={1}'.format(self.id, self.chords))

        self.chords.sort(key=by_ordinate)

        # Some chords already have their voice (beam groups)
        endings = list(ending_chords)
        rookies = []
        for chord in self.chords:
            if chord.voice is not None:
                # Populates the voice slot table
                try:
                    chord.set_voice(chord.voice)
                except VoiceError as e:
                    chord.add_error(str(e))

                # The ending chord of this same voice is done
                for ending in endings:
                    if ending.voice is chord.voice:
                        endings.remove(ending)
                        break
            else:
                rookies.append(chord)

        if not rookies:
            return

        # Try to continue some ending voices with the rookies
        if endings:
            solver = InjectionSolver(
                len(rookies),
                len(endings) + len(rookies),
                ChordDistance(rookies, endings),
                forbidden_cost=_CONST.INCOMPATIBLE_VOICES_COST)
            links = solver.solve()

            for i, index in enumerate(links):
                if index >= len(endings):
                    continue
                voice = endings[index].voice
                if voice is None:
                    continue

                chord = rookies[i]
                logging.debug('Slot#{0} reusing voice#{1} for Ch#{2}'
                              ''.format(self.id, voice.id, chord.id))
                try:
                    chord.set_voice(voice)
                except VoiceError as e:
                    chord.add_error('Failed to set voice of chord: {0}'
                                    ''.format(e))
                    break

        self._assign_voices()

    def _assign_voices(self):
        """Gives a voice to every chord still without one: the first
        free voice whose latest chord is on the same staff, or else
        a brand new voice."""
        for chord in self.chords:
            if chord.voice is not None:
                continue

            for voice in self.measure.voices:
                if not voice.is_free(self):
                    continue
                # Don't migrate a voice from one staff to another
                latest = voice.get_chord_before(self)
                if latest is not None and latest.staff == chord.staff:
                    chord.set_voice(voice)
                    break

            if chord.voice is None:
                Voice(chord, self.measure)

    def set_start_time(self, start_time):
        """Assigns the time offset since measure start to this slot,
        to all its chords, and through beams to the beamed chords.

        Only the first start time is kept: a different one later
        is reported on the first chord of the slot.
        """
        start_time = rational(start_time)
        if start_time < 0:
            raise ValueError('Slot#{0}: negative start time {1}'
                             ''.format(self.id, start_time))

        if self.start_time is None:
            logging.debug('setStartTime {0} for Slot#{1}'
                          ''.format(start_time, self.id))
            self.start_time = start_time

            for chord in self.chords:
                chord.set_start_time(start_time)

            for chord in self.chords:
                if chord.beam_group is not None:
                    chord.beam_group.compute_start_times()

            for voice in self.measure.voices:
                voice.update_slot_table()

        elif self.start_time != start_time:
            self.chords[0].add_error('Reassigning startTime from {0} to {1}'
                                     ' in {2}'.format(self.start_time,
                                                      start_time, self))

    def get_chord_above(self, point):
        """Returns the chord whose head is just above the point, or None."""
        chord_above = None
        for chord in self.chords:
            head = chord.head_location
            if head is None:
                continue
            if head.y < point[1]:
                chord_above = chord
            else:
                break
        return chord_above

    def get_chord_below(self, point):
        """Returns the chord whose head is just below the point, or None."""
        for chord in self.chords:
            head = chord.head_location
            if head is not None and head.y > point[1]:
                return chord
        return None

    def get_embraced_chords(self, top, bottom):
        """Returns the chords with a note-head between the two points."""
        return [c for c in self.chords
                if c.is_embraced_by(PixelPoint(*top), PixelPoint(*bottom))]

    def compare_to(self, other):
        """-1, 0 or +1, according to the relative abscissae."""
        return (self.mean_x > other.mean_x) - (self.mean_x < other.mean_x)

    # Equality and hashing stay by identity
    def __lt__(self, other):
        return self.mean_x < other.mean_x

    def __le__(self, other):
        return self.mean_x <= other.mean_x

    def __gt__(self, other):
        return self.mean_x > other.mean_x

    def __ge__(self, other):
        return self.mean_x >= other.mean_x

    def to_chord_string(self):
        text = 'slot#{0}'.format(self.id)
        if self.start_time is not None:
            text += ' start={0}'.format(format_rational(self.start_time, 5))
        return text + ' [' + ','.join(str(c) for c in self.chords) + ']'

    def to_voice_string(self):
        voice_chords = {c.voice.id: c for c in self.chords
                        if c.voice is not None}
        items = []
        for iv in range(1, self.measure.voices_number + 1):
            chord = voice_chords.get(iv)
            if chord is not None:
                items.append('V{0} Ch#{1:02d} St{2} Dur={3}'.format(
                    iv, chord.id, chord.staff.id,
                    format_rational(chord.duration, 5)))
            else:
                items.append(_CONST.NO_VOICE_STRING)
        return 'slot#{0} start={1} [{2}]'.format(
            self.id, format_rational(self.start_time, 5), ', '.join(items))

    def __str__(self):
        text = '{Slot#' + str(self.id)
        if self.ref_point is not None:
            text += ' x={0}'.format(self.x)
        if self.start_time is not None:
            text += ' start={0}'.format(format_rational(self.start_time))
        incomings = ''.join('#{0}'.format(c.id) for c in self.chords)
        return text + ' incomings=[' + incomings + ']}'

    def __repr__(self):
        return self.__str__()
