#!/usr/bin/env python3
#
#   Dense univariate polynomials over a CoefficientRing
#

from typing import List, Optional

from libfeq.basic_types import CoefficientRing

class Polynomial:
    """
    Univariate polynomial with coefficients in `ring`. coeffs[i] is the coefficient of x^i.

    The coefficient list is kept normalized: either it is [0], the zero polynomial, or its last entry is non-zero.
    """

    def __init__(self, ring : CoefficientRing, coeffs = ()):
        self.ring = ring
        # Promote to member of coefficient ring
        self.coeffs : List = Polynomial.normalize(ring, [ring(coeff) for coeff in coeffs])

    @staticmethod
    def normalize(ring : CoefficientRing, coeffs : list) -> list:
        """
        Strip trailing zero coefficients, keeping at least one
        """
        zero = ring.zero()
        if len(coeffs) == 0:
            return [zero]
        while len(coeffs) > 1 and coeffs[-1] == zero:
            coeffs.pop()
        return coeffs

    @staticmethod
    def ZERO(ring):
        return Polynomial(ring, [])

    @staticmethod
    def ONE(ring):
        return Polynomial(ring, [ring.one()])

    @staticmethod
    def x(ring):
        return Polynomial.monomial(ring, 1)

    @staticmethod
    def constant(ring, c):
        return Polynomial(ring, [c])

    @staticmethod
    def monomial(ring, n : int, c = 1):
        """
        c x^n
        """
        return Polynomial(ring, [ring.zero()] * n + [ring(c)])

    def degree(self) -> int:
        # the zero polynomial is given degree 0
        return len(self.coeffs) - 1

    def strict_degree(self) -> Optional[int]:
        if self.is_zero():
            return None
        return self.degree()

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0] == self.ring.zero()

    def leading_coeff(self):
        return self.coeffs[-1]

    def __getitem__(self, i : int):
        if 0 <= i < len(self.coeffs):
            return self.coeffs[i]
        return self.ring.zero()

    def cvt_other(self, other):
        if isinstance(other, Polynomial):
            if other.ring != self.ring:
                raise ValueError(f"Cannot mix polynomials over {self.ring!r} and {other.ring!r}")
            return other
        return Polynomial.constant(self.ring, other)

    ####################################################################################################################
    #   Arithmetic
    ####################################################################################################################

    @staticmethod
    def add_coeffs(a, b, subtract=False):
        n = min(len(a), len(b))
        if subtract:
            v = [a[i] - b[i] for i in range(n)]
        else:
            v = [a[i] + b[i] for i in range(n)]

        # remaining terms of the longer operand
        if len(a) > n:
            v += a[n:]
        elif len(b) > n:
            v += [-c for c in b[n:]] if subtract else b[n:]
        return v

    @staticmethod
    def mul_coeffs(a, b, zero):
        """
        Discrete convolution, v[i] = sum_j a[j] * b[i - j]
        """
        v = [zero] * (len(a) + len(b) - 1)
        for i in range(len(v)):
            acc = zero
            for j in range(max(0, i - len(b) + 1), min(i, len(a) - 1) + 1):
                acc = acc + a[j] * b[i - j]
            v[i] = acc
        return v

    def __add__(self, other):
        other = self.cvt_other(other)
        return Polynomial(self.ring, Polynomial.add_coeffs(self.coeffs, other.coeffs))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = self.cvt_other(other)
        return Polynomial(self.ring, Polynomial.add_coeffs(self.coeffs, other.coeffs, subtract=True))

    def __rsub__(self, other):
        return self.cvt_other(other) - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        return Polynomial(self.ring, Polynomial.mul_coeffs(self.coeffs, other.coeffs, self.ring.zero()))

    def __rmul__(self, other):
        # Polynomial rings are commutative
        return self * other

    def __neg__(self):
        """
        Returns the additive inverse of this polynomial
        """
        return Polynomial(self.ring, [-coeff for coeff in self.coeffs])

    # The augmented forms update the receiver in place

    def __iadd__(self, other):
        self.coeffs = (self + other).coeffs
        return self

    def __isub__(self, other):
        self.coeffs = (self - other).coeffs
        return self

    def __imul__(self, other):
        self.coeffs = (self * other).coeffs
        return self

    def __pow__(self, power : int):
        if not isinstance(power, int) or power < 0:
            raise ValueError(f"Polynomials can only be raised to non-negative integer powers, got {power!r}")
        result = Polynomial.ONE(self.ring)
        base = self
        while power != 0:
            if power % 2 == 1:
                result = result * base
            base = base * base
            power //= 2
        return result

    def divmod(self, other):
        """
        Long division, returns (q, r) with self = q * other + r and r either zero or of lower degree than other.

        The leading coefficient of `other` must be a unit of the coefficient ring.
        """
        other = self.cvt_other(other)
        if other.is_zero():
            raise ZeroDivisionError("Polynomial division by zero")
        lc_inv = self.ring.inverse(other.leading_coeff())
        if lc_inv is None:
            raise ZeroDivisionError(f"Leading coefficient {other.leading_coeff()} is not invertible in {self.ring}")

        d = other.degree()
        rem = list(self.coeffs)
        quot = [self.ring.zero()] * max(len(rem) - d, 1)

        for k in reversed(range(len(rem) - d)):
            c = rem[k + d] * lc_inv
            quot[k] = c
            for j in range(d + 1):
                rem[k + j] = rem[k + j] - c * other.coeffs[j]

        return Polynomial(self.ring, quot), Polynomial(self.ring, rem)

    def __divmod__(self, other):
        return self.divmod(other)

    def __floordiv__(self, other):
        return self.divmod(other)[0]

    def __mod__(self, other):
        return self.divmod(other)[1]

    def derivative(self):
        one = self.ring.one()
        # ring element for the integer i, built up as 1 + 1 + ... + 1
        integer = one
        coeffs = []
        for c in self.coeffs[1:]:
            coeffs.append(c * integer)
            integer = integer + one
        return Polynomial(self.ring, coeffs)

    def evaluate(self, t):
        t = self.ring(t)
        t_pow = self.ring.one()
        result = self.ring.zero()
        for c in self.coeffs:
            result = result + c * t_pow
            t_pow = t_pow * t
        return result

    def __call__(self, t):
        return self.evaluate(t)

    ####################################################################################################################
    #   Comparison and display
    ####################################################################################################################

    def __eq__(self, other):
        if isinstance(other, Polynomial):
            return self.ring == other.ring and self.coeffs == other.coeffs
        try:
            other = Polynomial.constant(self.ring, other)
        except ValueError:
            return NotImplemented
        return self.coeffs == other.coeffs

    def __hash__(self):
        # constants compare equal to their coefficient, so they hash like it
        if self.degree() == 0:
            return hash(self.coeffs[0])
        return hash((self.ring, tuple(self.coeffs)))

    def to_str(self, var : str = "x") -> str:
        zero = self.ring.zero()
        one = self.ring.one()
        terms = []
        for i,coeff in enumerate(self.coeffs):
            if i == 0:
                if coeff != zero or self.degree() == 0:
                    terms.append(f"{coeff}")
                continue
            if coeff == zero:
                continue
            coeff_str = "" if coeff == one else f"{coeff}"
            if " " in coeff_str:
                coeff_str = f"({coeff_str})"
            terms.append(coeff_str + (var if i == 1 else f"{var}^{i}"))
        return " + ".join(terms)

    def __str__(self):
        return self.to_str("x")

    def __repr__(self):
        return f"Polynomial({repr(self.ring)}, {repr(self.coeffs)})"

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest
from fractions import Fraction

from libfeq.basic_types import GF, QQ, ZZ, Mod

def rand_poly(ring, max_deg=6):
    return Polynomial(ring, [ring.rand_elem() for _ in range(random.randint(0, max_deg + 1))])

class TestNormalization(unittest.TestCase):

    def test_trailing_zeros(self):
        F = GF(5)
        self.assertEqual(Polynomial(F, [1, 2, 3, 0, 0]), Polynomial(F, [1, 2, 3]))
        self.assertEqual(Polynomial(F, [1, 2, 3, 5, 10]).coeffs, [1, 2, 3])
        self.assertEqual(Polynomial(F, [1, 2, 3, 0, 0]).degree(), 2)

    def test_all_zero(self):
        F = GF(5)
        for n in range(6):
            p = Polynomial(F, [0] * n)
            self.assertEqual(p.coeffs, [Mod(0, 5)])
            self.assertEqual(p, Polynomial.ZERO(F))
            self.assertEqual(p.degree(), 0)
            self.assertIsNone(p.strict_degree())
            self.assertTrue(p.is_zero())

    def test_degree(self):
        F = GF(7)
        self.assertEqual(Polynomial(F, [3]).strict_degree(), 0)
        self.assertEqual(Polynomial(F, [0, 0, 1]).degree(), 2)
        self.assertEqual(Polynomial.monomial(F, 4, 3).degree(), 4)
        self.assertEqual(Polynomial.monomial(F, 4, 3)[4], 3)
        self.assertEqual(Polynomial.monomial(F, 4, 3)[9], 0)

    def test_variable(self):
        F = GF(5)
        x = Polynomial.x(F)
        self.assertEqual(x, Polynomial(F, [0, 1]))
        self.assertEqual(x.degree(), 1)
        self.assertEqual(str(x), "x")
        self.assertEqual(x * x + 1, Polynomial(F, [1, 0, 1]))

    def test_coefficients_promoted(self):
        p = Polynomial(GF(5), [7, -1])
        self.assertEqual(p.coeffs, [Mod(2, 5), Mod(4, 5)])
        with self.assertRaises(ValueError):
            Polynomial(GF(5), [Mod(1, 7)])

class TestArithmetic(unittest.TestCase):

    def test_addition(self):
        F = GF(5)
        self.assertEqual(Polynomial(F, [1, 2]) + Polynomial(F, [3, 4, 1]), Polynomial(F, [4, 1, 1]))
        self.assertEqual(Polynomial(F, [1, 2, 3]) + Polynomial(F, [4, 3, 2]), Polynomial.ZERO(F))
        self.assertEqual(Polynomial(F, [1, 2]) + 4, Polynomial(F, [0, 2]))
        self.assertEqual(4 + Polynomial(F, [1, 2]), Polynomial(F, [0, 2]))

    def test_subtraction(self):
        F = GF(5)
        self.assertEqual(Polynomial(F, [1]) - Polynomial(F, [0, 0, 1]), Polynomial(F, [1, 0, 4]))
        self.assertEqual(Polynomial(F, [0, 0, 1]) - Polynomial(F, [1]), Polynomial(F, [4, 0, 1]))
        self.assertEqual(1 - Polynomial(F, [0, 1]), Polynomial(F, [1, 4]))

    def test_add_sub_inverse(self):
        for p in (2, 5, 13, 509):
            F = GF(p)
            for _ in range(50):
                f, g = rand_poly(F), rand_poly(F)
                self.assertEqual(f + g - g, f)
                self.assertEqual(f - f, Polynomial.ZERO(F))
                self.assertEqual(f + (-f), Polynomial.ZERO(F))
                self.assertEqual(f + g, g + f)

    def test_multiplication(self):
        F = GF(5)
        # (x + 1)^2 = x^2 + 2x + 1
        self.assertEqual(Polynomial(F, [1, 1]) * Polynomial(F, [1, 1]), Polynomial(F, [1, 2, 1]))
        # (x + 1)(x + 4) = x^2 - 1
        self.assertEqual(Polynomial(F, [1, 1]) * Polynomial(F, [4, 1]), Polynomial(F, [4, 0, 1]))
        self.assertEqual(Polynomial(F, [1, 2, 3]) * Polynomial.ZERO(F), Polynomial.ZERO(F))
        self.assertEqual(Polynomial(F, [1, 2, 3]) * 2, Polynomial(F, [2, 4, 1]))
        self.assertEqual(Mod(2, 5) * Polynomial(F, [1, 2, 3]), Polynomial(F, [2, 4, 1]))
        self.assertEqual((Polynomial(F, [0, 1]) * Polynomial(F, [0, 0, 0, 1])).degree(), 4)

    def test_evaluation_homomorphism(self):
        for p in (2, 5, 13, 509):
            F = GF(p)
            for _ in range(20):
                f, g = rand_poly(F), rand_poly(F)
                t = F.rand_elem()
                self.assertEqual((f * g).evaluate(t), f.evaluate(t) * g.evaluate(t))
                self.assertEqual((f + g)(t), f(t) + g(t))
                self.assertEqual((f - g)(t), f(t) - g(t))

    def test_ring_laws(self):
        F = GF(13)
        for _ in range(20):
            f, g, h = rand_poly(F), rand_poly(F), rand_poly(F)
            self.assertEqual(f * Polynomial.ONE(F), f)
            self.assertEqual((f * g) * h, f * (g * h))
            self.assertEqual(f * g, g * f)
            self.assertEqual(f * (g + h), f * g + f * h)

    def test_power(self):
        F = GF(7)
        x = Polynomial.monomial(F, 1)
        self.assertEqual((x + 1) ** 0, Polynomial.ONE(F))
        self.assertEqual((x + 1) ** 3, Polynomial(F, [1, 3, 3, 1]))
        # Frobenius: (x + 1)^7 = x^7 + 1 in characteristic 7
        self.assertEqual((x + 1) ** 7, x ** 7 + 1)
        with self.assertRaises(ValueError):
            x ** -1

    def test_in_place(self):
        F = GF(5)
        p = Polynomial(F, [1, 1])
        q = p
        other = Polynomial(F, [0, 4])
        p += other
        self.assertIs(p, q)
        self.assertEqual(p, Polynomial(F, [1]))
        p -= Polynomial(F, [0, 0, 1])
        self.assertEqual(p, Polynomial(F, [1, 0, 4]))
        p *= Polynomial(F, [0, 1])
        self.assertEqual(p, Polynomial(F, [0, 1, 0, 4]))
        self.assertEqual(other, Polynomial(F, [0, 4]))
        p -= p
        self.assertTrue(p.is_zero())
        self.assertEqual(p.coeffs, [Mod(0, 5)])

    def test_mixed_rings(self):
        with self.assertRaises(ValueError):
            Polynomial(GF(5), [1, 1]) + Polynomial(GF(7), [1, 1])
        with self.assertRaises(ValueError):
            Polynomial(GF(5), [1, 1]) * Polynomial(QQ, [1, 1])
        self.assertNotEqual(Polynomial(GF(5), [1, 1]), Polynomial(GF(7), [1, 1]))

    def test_equality_and_hash(self):
        F = GF(5)
        self.assertEqual(Polynomial(F, [3]), 3)
        self.assertEqual(Polynomial(F, [3]), 8)
        self.assertNotEqual(Polynomial(F, [3, 1]), 3)
        self.assertNotEqual(Polynomial(F, [3]), "3")
        polys = {Polynomial(F, [1, 2, 0]), Polynomial(F, [6, 7]), Polynomial(F, [1, 2, 1])}
        self.assertEqual(len(polys), 2)

    def test_constant_hash_matches_coefficient(self):
        F = GF(5)
        self.assertEqual(Polynomial(F, [3]), Mod(3, 5))
        self.assertEqual(hash(Polynomial(F, [3])), hash(Mod(3, 5)))
        self.assertIn(Mod(3, 5), {Polynomial(F, [3])})
        self.assertIn(Polynomial(F, [8]), {Mod(3, 5)})
        self.assertEqual(hash(Polynomial(ZZ, [7])), hash(7))
        self.assertIn(7, {Polynomial(ZZ, [7])})

class TestDerivative(unittest.TestCase):

    def test_constant(self):
        F = GF(5)
        for c in range(5):
            d = Polynomial(F, [c]).derivative()
            self.assertTrue(d.is_zero())
            self.assertEqual(d.degree(), 0)

    def test_known(self):
        F = GF(5)
        # d/dx (1 + 2x + 3x^2 + 4x^3) = 2 + 6x + 12x^2
        self.assertEqual(Polynomial(F, [1, 2, 3, 4]).derivative(), Polynomial(F, [2, 1, 2]))
        # d/dx x^5 = 5x^4 = 0 in characteristic 5
        self.assertEqual(Polynomial.monomial(F, 5).derivative(), Polynomial.ZERO(F))
        self.assertEqual(Polynomial(QQ, [0, 0, Fraction(1, 2)]).derivative(), Polynomial(QQ, [0, 1]))

    def test_product_rule(self):
        F = GF(13)
        for _ in range(20):
            f, g = rand_poly(F), rand_poly(F)
            self.assertEqual((f * g).derivative(), f.derivative() * g + f * g.derivative())

class TestDivision(unittest.TestCase):

    def test_divmod(self):
        for p in (2, 5, 13, 509):
            F = GF(p)
            for _ in range(20):
                f, g = rand_poly(F), rand_poly(F)
                if g.is_zero():
                    continue
                q, r = divmod(f, g)
                self.assertEqual(q * g + r, f)
                self.assertTrue(r.is_zero() or r.degree() < g.degree())

    def test_exact(self):
        F = GF(7)
        x = Polynomial.monomial(F, 1)
        self.assertEqual((x ** 2 - 1) // (x - 1), x + 1)
        self.assertEqual((x ** 2 - 1) % (x - 1), Polynomial.ZERO(F))
        self.assertEqual(Polynomial(F, [3]) // (x + 1), Polynomial.ZERO(F))

    def test_zero_division(self):
        F = GF(5)
        with self.assertRaises(ZeroDivisionError):
            Polynomial(F, [1, 1]).divmod(Polynomial.ZERO(F))
        # 2 is not a unit of the integers
        with self.assertRaises(ZeroDivisionError):
            Polynomial(ZZ, [1, 1]).divmod(Polynomial(ZZ, [1, 2]))
        # 2 is not a unit modulo 6
        with self.assertRaises(ZeroDivisionError):
            Polynomial(GF(6), [1, 1]).divmod(Polynomial(GF(6), [1, 2]))

    def test_over_integers(self):
        x = Polynomial.monomial(ZZ, 1)
        q, r = divmod(x ** 3 + 2 * x + 5, x - 1)
        self.assertEqual(q, x ** 2 + x + 3)
        self.assertEqual(r, 8)

class TestOtherRings(unittest.TestCase):

    def test_rationals(self):
        for _ in range(20):
            f, g = rand_poly(QQ, 4), rand_poly(QQ, 4)
            t = QQ.rand_elem()
            self.assertEqual((f * g)(t), f(t) * g(t))
            self.assertEqual(f + g - g, f)
            if not g.is_zero():
                q, r = divmod(f, g)
                self.assertEqual(q * g + r, f)

    def test_integers(self):
        f = Polynomial(ZZ, [1, -2, 1])
        self.assertEqual(f(3), 4)
        self.assertEqual(f.derivative(), Polynomial(ZZ, [-2, 2]))
        self.assertEqual(f, Polynomial(ZZ, [1, -1]) * Polynomial(ZZ, [1, -1]))

class TestDisplay(unittest.TestCase):

    def test_display(self):
        F = GF(5)
        self.assertEqual(str(Polynomial(F, [0, 1, 0, 3])), "x + 3x^3")
        self.assertEqual(Polynomial(F, [0, 1, 0, 3]).to_str("y"), "y + 3y^3")
        self.assertEqual(str(Polynomial(F, [2, 1, 1])), "2 + x + x^2")
        self.assertEqual(str(Polynomial(F, [1, 0, 4])), "1 + 4x^2")
        self.assertEqual(str(Polynomial(F, [1])), "1")
        self.assertEqual(str(Polynomial.ZERO(F)), "0")
        self.assertEqual(str(Polynomial(F, [0, 0, 1])), "x^2")
        self.assertEqual(str(Polynomial(QQ, [Fraction(1, 2), 0, Fraction(-3, 4)])), "1/2 + -3/4x^2")

    def test_repr(self):
        self.assertEqual(repr(Polynomial(GF(5), [1, 2])), "Polynomial(GF(5), [Mod(1, 5), Mod(2, 5)])")
