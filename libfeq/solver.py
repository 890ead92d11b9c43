#!/usr/bin/env python3
#
#   Solving f(x) = g(y) over Z/pZ by exhaustive search
#

import logging

import numpy as np

from libfeq.basic_types import GF, LARGEST_u32_PRIME, Mod
from libfeq.polynomial import Polynomial
from libfeq.solution_set import SolutionSet

logger = logging.getLogger(__name__)

def common_finite_ring(f : Polynomial, g : Polynomial):
    if f.ring != g.ring:
        raise ValueError(f"f and g must share a coefficient ring, got {f.ring!r} and {g.ring!r}")
    if not f.ring.is_finite():
        raise ValueError(f"Cannot search the infinite ring {f.ring!r}")
    return f.ring

def solve_equation(f : Polynomial, g : Polynomial) -> SolutionSet:
    """
    All (x, y) with f(x) = g(y), found by evaluating both sides at every pair of ring elements
    """
    ring = common_finite_ring(f, g)
    elements = list(ring.elements())
    logger.debug("Searching %d pairs in %r", len(elements) ** 2, ring)

    solutions = set()
    for i in elements:
        for j in elements:
            if f.evaluate(i) == g.evaluate(j):
                solutions.add((i, j))

    logger.debug("Found %d solutions of %s = %s", len(solutions), f.to_str("x"), g.to_str("y"))
    return SolutionSet(solutions)

########################################################################################################################
#   Vectorized search
########################################################################################################################

def evaluation_table(poly : Polynomial):
    """
    Values poly(0), poly(1), ..., poly(p-1) as a numpy array, by Horner's rule over all points at once.

    Entries stay below p < 2^32 so every product fits in a uint64.
    """
    ring = poly.ring
    if not isinstance(ring, GF):
        raise ValueError(f"Evaluation tables need a GF(p) coefficient ring, got {ring!r}")
    if ring.p > LARGEST_u32_PRIME:
        raise ValueError(f"Modulus {ring.p} is too large for a 64-bit evaluation table")

    p = np.uint64(ring.p)
    xs = np.arange(ring.p, dtype=np.uint64)
    table = np.zeros(ring.p, dtype=np.uint64)
    for c in reversed(poly.coeffs):
        table = (table * xs + np.uint64(c.x)) % p
    return table

def solve_equation_tabulated(f : Polynomial, g : Polynomial) -> SolutionSet:
    """
    Same solutions as solve_equation, each side is evaluated once per point and the tables are compared
    """
    ring = common_finite_ring(f, g)
    f_table = evaluation_table(f)
    g_table = evaluation_table(g)
    logger.debug("Comparing %d x %d evaluation tables over %r", len(f_table), len(g_table), ring)

    xs, ys = np.nonzero(f_table[:, None] == g_table[None, :])
    solutions = SolutionSet((Mod(int(x), ring.p), Mod(int(y), ring.p)) for x,y in zip(xs, ys))

    logger.debug("Found %d solutions of %s = %s", solutions.size(), f.to_str("x"), g.to_str("y"))
    return solutions

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libfeq.basic_types import LARGEST_u16_PRIME, QQ

def expected_pairs(p, pairs):
    return {(Mod(x, p), Mod(y, p)) for x,y in pairs}

class TestSolveEquation(unittest.TestCase):

    def test_linear_against_square(self):
        F = GF(5)
        f = Polynomial(F, [0, 1])
        g = Polynomial(F, [0, 0, 1])
        s = solve_equation(f, g)
        self.assertEqual(s.size(), 5)
        self.assertEqual(s.unwrap(), expected_pairs(5, [(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)]))
        self.assertEqual(str(s), "{(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)}")

    def test_matches_definition(self):
        F = GF(5)
        s = solve_equation(Polynomial(F, [0, 1]), Polynomial(F, [0, 0, 1]))
        for i in range(5):
            for j in range(5):
                self.assertEqual((Mod(i, 5), Mod(j, 5)) in s, i == (j * j) % 5)

    def test_no_solutions(self):
        F = GF(5)
        s = solve_equation(Polynomial(F, [1]), Polynomial(F, [2]))
        self.assertEqual(s.size(), 0)
        self.assertEqual(str(s), "{ }")

    def test_every_pair(self):
        F = GF(7)
        s = solve_equation(Polynomial(F, [3]), Polynomial(F, [10]))
        self.assertEqual(s.size(), 49)

    def test_same_polynomial(self):
        # f(x) = f(y) always holds on the diagonal
        F = GF(11)
        f = Polynomial(F, [1, 2, 0, 5])
        s = solve_equation(f, f)
        for x in F.elements():
            self.assertIn((x, x), s)

    def test_bad_rings(self):
        with self.assertRaises(ValueError):
            solve_equation(Polynomial(GF(5), [0, 1]), Polynomial(GF(7), [0, 1]))
        with self.assertRaises(ValueError):
            solve_equation(Polynomial(QQ, [0, 1]), Polynomial(QQ, [0, 1]))

class TestTabulated(unittest.TestCase):

    def test_evaluation_table(self):
        for p in (2, 5, 13, 509):
            F = GF(p)
            f = Polynomial(F, [F.rand_elem() for _ in range(6)])
            table = evaluation_table(f)
            self.assertEqual(table.dtype, np.uint64)
            self.assertEqual([int(v) for v in table], [f(x).to_int() for x in range(p)])

    def test_large_modulus(self):
        p = LARGEST_u16_PRIME
        f = Polynomial(GF(p), [-1, -1, -1])
        # (-1) + (-1)x + (-1)x^2 at x = p - 1 is -1 + 1 - 1 = -1
        self.assertEqual(int(evaluation_table(f)[-1]), p - 1)

    def test_too_large(self):
        with self.assertRaises(ValueError):
            evaluation_table(Polynomial(GF(2**64), [0, 1]))
        with self.assertRaises(ValueError):
            evaluation_table(Polynomial(QQ, [0, 1]))

    def test_agrees_with_brute_force(self):
        for p in (2, 3, 5, 6, 7, 13):
            F = GF(p)
            for _ in range(5):
                f = Polynomial(F, [F.rand_elem() for _ in range(random.randint(0, 4))])
                g = Polynomial(F, [F.rand_elem() for _ in range(random.randint(0, 4))])
                self.assertEqual(solve_equation_tabulated(f, g), solve_equation(f, g))

    def test_example(self):
        F = GF(5)
        s = solve_equation_tabulated(Polynomial(F, [0, 1]), Polynomial(F, [0, 0, 1]))
        self.assertEqual(s.unwrap(), expected_pairs(5, [(0, 0), (1, 1), (1, 4), (4, 2), (4, 3)]))
        self.assertEqual(str(solve_equation_tabulated(Polynomial(F, [1]), Polynomial(F, [2]))), "{ }")
