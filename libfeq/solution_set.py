#!/usr/bin/env python3
#
#   Solution sets
#

class SolutionSet:
    """
    Set of solutions to an equation, for `(x, y)` pairs these are tuples of ring elements
    """

    def __init__(self, solutions=None):
        self.solutions = set(solutions) if solutions is not None else set()

    def size(self):
        return len(self.solutions)

    def __len__(self):
        return self.size()

    def insert(self, solution):
        self.solutions.add(solution)

    def unwrap(self):
        """
        Returns a copy of the underlying set
        """
        return set(self.solutions)

    def __contains__(self, solution):
        return solution in self.solutions

    def __iter__(self):
        return iter(self.solutions)

    def __eq__(self, other):
        if isinstance(other, SolutionSet):
            return self.solutions == other.solutions
        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self.solutions))

    def sorted(self):
        try:
            return sorted(self.solutions)
        except TypeError:
            # elements without an ordering are listed as the set yields them
            return list(self.solutions)

    @staticmethod
    def format_solution(solution):
        if isinstance(solution, tuple):
            return "(" + ", ".join(str(s) for s in solution) + ")"
        return str(solution)

    def __str__(self):
        if self.size() == 0:
            return "{ }"
        return "{" + ", ".join(SolutionSet.format_solution(s) for s in self.sorted()) + "}"

    def __repr__(self):
        return f"SolutionSet({repr(self.solutions)})"

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libfeq.basic_types import Mod

class TestSolutionSet(unittest.TestCase):

    def test_empty(self):
        s = SolutionSet()
        self.assertEqual(s.size(), 0)
        self.assertEqual(str(s), "{ }")
        self.assertEqual(str(SolutionSet(set())), "{ }")

    def test_insert(self):
        s = SolutionSet({(Mod(0, 5), Mod(0, 5))})
        s.insert((Mod(1, 5), Mod(4, 5)))
        s.insert((Mod(6, 5), Mod(9, 5)))
        self.assertEqual(s.size(), 2)
        self.assertEqual(len(s), 2)
        self.assertIn((Mod(1, 5), Mod(4, 5)), s)

    def test_unwrap_is_copy(self):
        s = SolutionSet({1, 2})
        u = s.unwrap()
        u.add(3)
        self.assertEqual(s.size(), 2)
        self.assertEqual(u, {1, 2, 3})

    def test_str(self):
        s = SolutionSet([(Mod(4, 5), Mod(2, 5)), (Mod(0, 5), Mod(0, 5)), (Mod(1, 5), Mod(4, 5))])
        self.assertEqual(str(s), "{(0, 0), (1, 4), (4, 2)}")
        self.assertEqual(str(SolutionSet([3, 1, 2])), "{1, 2, 3}")

    def test_unorderable(self):
        s = SolutionSet([1, "a"])
        self.assertIn(str(s), ("{1, a}", "{a, 1}"))

    def test_equality(self):
        self.assertEqual(SolutionSet([1, 2]), SolutionSet([2, 1, 1]))
        self.assertNotEqual(SolutionSet([1, 2]), SolutionSet([1]))
