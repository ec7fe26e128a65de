'''Unit tests for the omrhythm package.

Runs doctests.
'''
import unittest
import doctest
import logging

import omrhythm.chord
import omrhythm.injection
import omrhythm.rational


DOCTEST_MODULES = [
    omrhythm.chord,
    omrhythm.injection,
    omrhythm.rational,
]


class DoctestTest(unittest.TestCase):
    def test_doctests(self):
        for module in DOCTEST_MODULES:
            logging.info('Running doctests of {0}'.format(module.__name__))
            failed, attempted = doctest.testmod(module)
            self.assertGreater(attempted, 0, module.__name__)
            self.assertEqual(failed, 0, module.__name__)


if __name__ == '__main__':
    unittest.main()
