"""This module stores the constants that drive slot and voice building."""

__version__ = "0.2.0"


class RhythmEngineConstants(object):
    """This class stores the constants used for voice assignment."""

    NO_LINK_COST = 20
    '''Cost of leaving a new chord unlinked to any ending chord:
    its voice terminates, and the new chord will look for a free voice
    or start a fresh one.'''

    STAFF_DIFF_COST = 40
    '''Cost of continuing a voice from one staff into another.
    Discouraged, but not forbidden.'''

    INCOMPATIBLE_VOICES_COST = 10000
    '''Two chords that already carry different voices can never
    be linked. Costs at or above this value are forbidden.'''

    STEM_DIFF_WEIGHT = 2
    '''Weight of the stem direction change between the two chords.
    Stem directions are -1, 0 or +1, so the change is at most 2.'''

    MAX_SLOT_DX = 1
    '''Maximum horizontal distance, in interlines, between the first
    chord of a slot and any other chord of that same slot.'''

    DEFAULT_INTERLINE = 20
    '''Fallback interline in pixels, for staffs with no known scale.'''

    # Slot table statuses of a chord within a voice.
    BEGIN = 'begin'
    CONTINUE = 'continue'

    NO_VOICE_STRING = '-' * 22
    '''Placeholder printed for a voice that has no chord at a slot.'''
