"""This module implements the exact arithmetic used for musical time.

Start times and durations are :class:`fractions.Fraction` values,
counted in whole notes from the start of the measure. They must never
be approximated by floats: slot start times are compared for equality
to detect conflicts.
"""
import numbers

from fractions import Fraction

__version__ = "0.2.0"


Rational = Fraction

ZERO = Fraction(0)


def rational(value, denominator=None):
    """Builds an exact rational value.

    >>> rational(1, 4)
    Fraction(1, 4)
    >>> rational('3/8')
    Fraction(3, 8)
    >>> rational((2, 4))
    Fraction(1, 2)
    >>> rational(Fraction(1, 2)) + rational(1, 4)
    Fraction(3, 4)
    >>> rational(0.25)
    Traceback (most recent call last):
        ...
    TypeError: Floating-point value 0.25 cannot be used as a rational time value.

    :param value: An int, a Fraction, a ``"n/d"`` string or
        a ``(numerator, denominator)`` pair.

    :param denominator: If given, ``value`` is the numerator.

    :returns: A ``Fraction``.
    """
    if isinstance(value, float) or isinstance(denominator, float):
        raise TypeError('Floating-point value {0} cannot be used as a'
                        ' rational time value.'.format(value))

    if denominator is not None:
        return Fraction(value, denominator)

    if isinstance(value, tuple):
        if len(value) != 2:
            raise ValueError('Expected a (numerator, denominator) pair,'
                             ' got {0}'.format(value))
        return rational(value[0], value[1])

    if isinstance(value, (numbers.Rational, str)):
        return Fraction(value)

    raise TypeError('Cannot build a rational time value'
                    ' from {0}'.format(value))


def format_rational(value, width=None):
    """Renders a time value the way the diagnostic dumps show it.

    >>> format_rational(Fraction(1, 4))
    '1/4'
    >>> format_rational(ZERO)
    '0'
    >>> format_rational(Fraction(3, 2), width=5)
    '  3/2'
    >>> format_rational(None)
    'None'
    """
    text = str(value)
    if width is not None:
        text = text.rjust(width)
    return text
