"""This module implements the Chord: a group of note-heads sharing
one stem and one rhythmic duration, as delivered by chord detection.

During rhythm reconstruction, a chord is given a slot, a start time
and a voice. Inconsistencies found on the way are recorded as
diagnostics on the chord (see :meth:`Chord.add_error`) instead of
being raised.

>>> staff = Staff(1, interline=20)
>>> c = Chord(1, staff, center=(100, 40), duration=rational(1, 4))
>>> c.ordinate
40
>>> c.end_time is None
True
>>> c.set_start_time(rational(1, 2))
>>> c.end_time
Fraction(3, 4)
>>> c.set_start_time(rational(1, 4))
>>> c.start_time
Fraction(1, 2)
>>> len(c.errors)
1
"""
import collections
import logging

from omrhythm.rational import format_rational, rational
from omrhythm.rhythm_engine_constants import RhythmEngineConstants as _CONST

__version__ = "0.2.0"


class VoiceError(ValueError):
    pass


PixelPoint = collections.namedtuple('PixelPoint', ['x', 'y'])


def _to_point(point):
    if point is None or isinstance(point, PixelPoint):
        return point
    return PixelPoint(*point)


class Staff(object):
    """The staff a chord belongs to. Only its identity and its scale
    (the interline, i.e. the distance between two staff lines,
    in pixels) matter here."""

    def __init__(self, id, interline=None):
        self.id = id
        if interline is None:
            interline = _CONST.DEFAULT_INTERLINE
        if interline <= 0:
            raise ValueError('Staff {0}: interline must be positive,'
                             ' got {1}'.format(id, interline))
        self.interline = interline

    def __eq__(self, other):
        return isinstance(other, Staff) and self.id == other.id

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return 'Staff({0}, interline={1})'.format(self.id, self.interline)


class Chord(object):
    """A chord as seen by rhythm reconstruction.

    :param id: Chord id, unique within the measure (used for display).

    :param staff: The :class:`Staff` of the chord.

    :param center: The ``(x, y)`` center of the chord, in pixels.

    :param duration: The rhythmic duration, as an exact rational.

    :param head_location: The ``(x, y)`` location of the head that ends
        the stem (the one farthest from the stem tip). Defaults
        to ``center``, which is what rests use.

    :param stem_dir: -1 for stem up, +1 for stem down, 0 for no stem.

    :param notes: The ``(x, y)`` centers of all the note-heads.
        Defaults to the head location.

    :param voice: A voice already known for this chord, if any.
        It is only registered in the voice slot table once the chord
        is processed by its slot.
    """

    def __init__(self, id, staff, center, duration,
                 head_location=None, stem_dir=0, notes=None, voice=None):
        self.id = id
        self.staff = staff
        self.center = _to_point(center)
        self.duration = rational(duration)

        self.head_location = _to_point(head_location)
        if stem_dir not in (-1, 0, 1):
            raise ValueError('Chord {0}: stem direction must be -1, 0 or 1,'
                             ' got {1}'.format(id, stem_dir))
        self.stem_dir = stem_dir

        if notes is None:
            notes = [self.head_location if self.head_location is not None
                     else self.center]
        self.notes = [_to_point(n) for n in notes]

        self.voice = voice
        self.slot = None
        self.beam_group = None
        self.start_time = None

        self.errors = []
        '''Diagnostics attached to this chord, for the UI and export
        layers to surface.'''

    @property
    def ordinate(self):
        """The vertical position used to sort chords top to bottom."""
        if self.head_location is not None:
            return self.head_location.y
        return self.center.y

    @property
    def interline(self):
        return self.staff.interline

    @property
    def end_time(self):
        if self.start_time is None:
            return None
        return self.start_time + self.duration

    def set_start_time(self, start_time):
        """Records the chord start time. The first value wins; a later,
        different value is reported on the chord."""
        start_time = rational(start_time)
        if self.start_time is None:
            self.start_time = start_time
        elif self.start_time != start_time:
            self.add_error('Reassigning startTime from {0} to {1}'
                           ''.format(self.start_time, start_time))

    def set_voice(self, voice, propagate=True):
        """Assigns the voice to this chord, registering the chord
        in the voice slot table and extending the voice to the other
        chords of the beam group.

        Re-assigning the very same voice only re-registers the chord
        in the voice slot table.

        :param propagate: If unset, the beam group is left alone
            (the group itself uses this when it spreads its voice).

        :raises VoiceError: if the chord already has a different voice,
            or if the voice already holds another chord at this slot.
            The chord is left unchanged.
        """
        if self.voice is not None and self.voice is not voice:
            raise VoiceError('Chord #{0}: attempt to reassign voice from'
                             ' #{1} to #{2}'.format(self.id, self.voice.id,
                                                    voice.id))

        if self.slot is not None:
            voice.set_slot_info(self.slot, self)

        if self.voice is None:
            self.voice = voice
            if propagate and self.beam_group is not None:
                self.beam_group.set_voice(voice)

    def add_error(self, message):
        logging.warning('{0} {1}'.format(self.context_string, message))
        self.errors.append(message)

    def is_embraced_by(self, top, bottom):
        """Checks whether one of the chord note-heads lies in the
        vertical range between the two given points (included)."""
        for note in self.notes:
            if top.y <= note.y <= bottom.y:
                return True
        return False

    @property
    def context_string(self):
        text = 'Staff{0}'.format(self.staff.id)
        if self.slot is not None:
            text += ' Slot#{0}'.format(self.slot.id)
        return text + ' Ch#{0}'.format(self.id)

    def __str__(self):
        text = '{Chord#' + str(self.id)
        if self.voice is not None:
            text += ' voice#{0}'.format(self.voice.id)
        if self.start_time is not None:
            text += ' start={0}'.format(format_rational(self.start_time))
        text += ' dur={0}'.format(format_rational(self.duration))
        return text + '}'

    def __repr__(self):
        return self.__str__()


def by_ordinate(chord):
    """Sort key ordering chords top to bottom, ties broken by staff
    then by chord id so that the order never depends on input order
    of equally placed chords."""
    return chord.ordinate, chord.staff.id, chord.id
