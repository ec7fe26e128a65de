"""This module implements a generic minimum-cost injection solver.

Given ``n`` sources and ``m >= n`` targets, an injection maps every
source to a distinct target. The solver finds the injection with the
lowest total cost. Targets beyond the meaningful ones can stand for
"no match", so that leaving a source unmatched has an explicit cost.

Some pairings can be forbidden outright with a ``forbidden_cost``:
any cost at or above it is never chosen while a feasible alternative
exists, however expensive that alternative is. When every injection
uses a forbidden pairing, the cheapest one is returned anyway.

>>> solve_injection([[3, 1, 5], [1, 2, 9]])
[1, 0]
>>> solve_injection([[10000, 1], [5, 30000]], forbidden_cost=10000)
[1, 0]
>>> costs = [[10000, 9000, 9500], [8000, 0, 9000], [9000, 9000, 0]]
>>> solve_injection(costs)
[0, 1, 2]
>>> solve_injection(costs, forbidden_cost=10000)
[1, 0, 2]
"""
import logging

import numpy
from scipy.optimize import linear_sum_assignment

__version__ = "0.2.0"


class Distance(object):
    """Interface of the cost of linking a source to a target.
    Sources and targets are given by their indices."""

    def cost(self, source, target):
        raise NotImplementedError()


def solve_injection(costs, forbidden_cost=None):
    """Finds the minimum-cost injection for the given cost matrix.

    :param costs: A ``n x m`` matrix (nested lists or numpy array)
        of non-negative costs, with ``n <= m``. Row ``i`` holds
        the costs of linking source ``i`` to each target.

    :param forbidden_cost: If set, costs at or above this value
        are forbidden pairings. They are only used when no injection
        avoids them, and then the plain costs decide.

    :returns: A list of length ``n``: for each source, the index
        of its target.
    """
    costs = numpy.array(costs, dtype=float)
    if costs.size == 0:
        return []
    if costs.ndim != 2:
        raise ValueError('Cost matrix must be 2-dimensional, got shape {0}'
                         ''.format(costs.shape))
    n_sources, n_targets = costs.shape
    if n_targets < n_sources:
        raise ValueError('Cannot inject {0} sources into {1} targets'
                         ''.format(n_sources, n_targets))
    if (costs < 0).any():
        raise ValueError('Costs must be non-negative.')

    rows, cols = None, None
    if forbidden_cost is not None:
        capped = costs.copy()
        capped[capped >= forbidden_cost] = numpy.inf
        try:
            rows, cols = linear_sum_assignment(capped)
        except ValueError:
            logging.warning('Injection {0}x{1}: every injection uses a'
                            ' forbidden pairing'.format(n_sources, n_targets))
    if rows is None:
        rows, cols = linear_sum_assignment(costs)

    links = [int(t) for t in cols[numpy.argsort(rows)]]
    logging.debug('Injection {0}x{1}: {2}'.format(n_sources, n_targets, links))
    return links


class InjectionSolver(object):
    """Solves an injection problem whose costs are given by a distance.

    :param source_count: Number of sources.

    :param target_count: Number of targets, at least ``source_count``.

    :param distance: A :class:`Distance`, or any callable
        ``(source, target) -> cost``.

    :param forbidden_cost: See :func:`solve_injection`.
    """

    def __init__(self, source_count, target_count, distance,
                 forbidden_cost=None):
        if target_count < source_count:
            raise ValueError('Cannot inject {0} sources into {1} targets'
                             ''.format(source_count, target_count))
        self.source_count = source_count
        self.target_count = target_count
        self.distance = distance
        self.forbidden_cost = forbidden_cost

    def _cost(self, source, target):
        if isinstance(self.distance, Distance):
            return self.distance.cost(source, target)
        return self.distance(source, target)

    def cost_matrix(self):
        costs = numpy.zeros((self.source_count, self.target_count))
        for i in range(self.source_count):
            for j in range(self.target_count):
                costs[i, j] = self._cost(i, j)
        return costs

    def solve(self):
        """Returns, for each source, the index of its target."""
        if self.source_count == 0:
            return []
        return solve_injection(self.cost_matrix(),
                               forbidden_cost=self.forbidden_cost)
