#!/usr/bin/env python3
#
#   Coefficient rings: Z/pZ, the integers and the rationals
#

import logging
import random
from fractions import Fraction
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

########################################################################################################################
#   Integer Arithmetic
########################################################################################################################

def gcd(a, b):
    while b != 0:
        a %= b
        a,b = b,a
    return abs(a)

def is_prime(n : int) -> bool:
    """
    Trial division by 2 and the odd numbers up to sqrt(n)
    """
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    d = 3
    while d * d <= n:
        if n % d == 0:
            return False
        d += 2
    return True

# Largest primes that fit the given integer widths
LARGEST_u32_PRIME = 4294967291
LARGEST_u16_PRIME = 65521

########################################################################################################################
#   Modular Arithmetic
########################################################################################################################

class Mod:
    """
    Element of Z/pZ, held as its representative 0 <= x < p

    Mod(3, 5) == 8 holds but the hash follows (x, p), so sets and dicts must be keyed on Mod values, not ints.
    """

    def __init__(self, x : int, p : int):
        self.x = x % p
        self.p = p

    def __str__(self):
        return str(self.x)

    def __repr__(self):
        return f"Mod({self.x}, {self.p})"

    def __hash__(self):
        return hash((self.x, self.p))

    def __int__(self):
        return self.x

    def to_int(self):
        return self.x

    def cvt_other(self, other):
        if isinstance(other, Mod):
            if other.p != self.p:
                raise ValueError(f"Cannot mix elements of Z/{self.p}Z and Z/{other.p}Z")
            return other
        elif isinstance(other, int):
            return Mod(other, self.p)
        elif isinstance(other, Fraction):
            return Mod(other.numerator, self.p) / Mod(other.denominator, self.p)
        return NotImplemented

    def __add__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return Mod((self.x + other.x) % self.p, self.p)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        # representatives are non-negative, keep them that way
        return Mod((self.x + self.p - other.x) % self.p, self.p)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return other - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return Mod((self.x * other.x) % self.p, self.p)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __neg__(self):
        """
        Additive inverse
        """
        return Mod((self.p - self.x) % self.p, self.p)

    def modpow(self, n : int):
        """
        Square-and-multiply, both the base and the result stay reduced mod p
        """
        assert n >= 0
        res = 1 % self.p
        a = self.x
        while n != 0:
            if n % 2 == 1:
                res = (res * a) % self.p
            a = (a * a) % self.p
            n //= 2
        return Mod(res, self.p)

    def __pow__(self, other):
        assert isinstance(other, int)
        if other < 0:
            return (~self).modpow(-other)
        return self.modpow(other)

    def inverse(self) -> Optional["Mod"]:
        """
        Multiplicative inverse by Fermat's little theorem, a^{p-2}.

        Returns None if x and p share a factor. The result is only correct when p is prime; for a composite p
        a value is returned whenever gcd(x, p) == 1 but it is generally not the inverse.
        """
        if gcd(self.x, self.p) != 1:
            return None
        return self.modpow(self.p - 2)

    def __invert__(self):
        inv = self.inverse()
        if inv is None:
            raise ZeroDivisionError(f"{self.x} is not invertible modulo {self.p}")
        return inv

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return self * ~other

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return other * ~self

    def __eq__(self, other):
        if isinstance(other, Mod):
            return self.p == other.p and self.x == other.x
        elif isinstance(other, int):
            # Test equality mod p
            return self.x == other % self.p
        return NotImplemented

    def __lt__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return self.x < other.x

    def __gt__(self, other):
        other = self.cvt_other(other)
        if other is NotImplemented:
            return other
        return self.x > other.x

    def __bool__(self):
        return self.x != 0

########################################################################################################################
#   Coefficient Rings
########################################################################################################################

class CoefficientRing:
    """
    Describes a commutative ring to generic code such as Polynomial.

    Elements implement +, -, * and unary -, == and hash. Everything else a ring has to offer (its identities,
    inverses, enumeration) is reached through the ring object.
    """

    def __call__(self, arg):
        raise NotImplementedError()

    def zero(self):
        return self(0)

    def one(self):
        return self(1)

    def inverse(self, a):
        """
        The multiplicative inverse of `a`, or None if `a` is not a unit
        """
        raise NotImplementedError()

    def elements(self) -> Iterator:
        raise NotImplementedError(f"{self} has no finite list of elements")

    def is_finite(self):
        return False

    def rand_elem(self, min : int = 0):
        raise NotImplementedError()

class GF(CoefficientRing):
    """
    The integers modulo p.

    Only a prime p makes this a field. Other moduli are accepted with a warning, but then Mod.inverse may return
    wrong results.
    """

    def __init__(self, p : int):
        if not isinstance(p, int) or p < 2:
            raise ValueError(f"Modulus must be an integer >= 2, got {p!r}")
        self.p = p
        self.is_field = is_prime(p)
        if not self.is_field:
            logger.warning("%d is not prime, inverses in GF(%d) may be incorrect", p, p)

    def __repr__(self):
        return f"GF({self.p})"

    def __str__(self):
        return repr(self)

    def __eq__(self, other):
        if isinstance(other, GF):
            return self.p == other.p
        return False

    def __hash__(self):
        return hash(("GF", self.p))

    def __call__(self, arg : Union[Mod, int, Fraction]):
        if isinstance(arg, Mod):
            if arg.p != self.p:
                raise ValueError(f"{arg!r} is not a member of {self}")
            return arg
        elif isinstance(arg, int):
            return Mod(arg, self.p)
        elif isinstance(arg, Fraction):
            return Mod(arg.numerator, self.p) / Mod(arg.denominator, self.p)
        else:
            raise ValueError(f"{arg!r} cannot be a member of {self}")

    def inverse(self, a):
        return self(a).inverse()

    def elements(self):
        return (Mod(x, self.p) for x in range(self.p))

    def is_finite(self):
        return True

    def rand_elem(self, min : int = 0):
        return Mod(random.randint(min, self.p - 1), self.p)

class IntegerRing(CoefficientRing):
    def __call__(self, arg : int):
        if isinstance(arg, int):
            return arg
        elif isinstance(arg, Fraction) and arg.denominator == 1:
            return arg.numerator
        raise ValueError(f"{arg!r} cannot be a member of the integers")

    def __repr__(self):
        return "ZZ"

    def __str__(self):
        return "The Integers"

    def __eq__(self, other):
        return isinstance(other, IntegerRing)

    def __hash__(self):
        return hash("ZZ")

    def inverse(self, a):
        a = self(a)
        # the only units are 1 and -1
        return a if a in (1, -1) else None

    def rand_elem(self, min : int = 0):
        # Bounds are arbitrary for testing purposes
        return random.randint(min, 100)

ZZ = IntegerRing()

class RationalField(CoefficientRing):
    def __call__(self, arg : Union[Fraction, int]):
        if isinstance(arg, Fraction):
            return arg
        elif isinstance(arg, int):
            return Fraction(arg)
        raise ValueError(f"{arg!r} cannot be a member of a rational field")

    def __repr__(self):
        return "QQ"

    def __str__(self):
        return "The Rational Numbers"

    def __eq__(self, other):
        return isinstance(other, RationalField)

    def __hash__(self):
        return hash("QQ")

    def inverse(self, a):
        a = self(a)
        if a == 0:
            return None
        return 1 / a

    def rand_elem(self, min : int = 0):
        # Bounds are arbitrary for testing purposes
        return Fraction(random.randint(min, 100), random.randint(1, 100))

QQ = RationalField()

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 509, 65521]

class TestGCD(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(4, 3), 1)
        self.assertEqual(gcd(12, 3), 3)
        self.assertEqual(gcd(21, 9), 3)
        self.assertEqual(gcd(12, 4), 4)
        self.assertEqual(gcd(0, 5), 5)
        self.assertEqual(gcd(1, -2), gcd(1, 2))
        self.assertEqual(gcd(-1, -2), gcd(1, 2))

    def test_is_prime(self):
        primes = [n for n in range(50) if is_prime(n)]
        self.assertEqual(primes, [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47])
        self.assertTrue(is_prime(LARGEST_u16_PRIME))
        self.assertTrue(is_prime(LARGEST_u32_PRIME))
        self.assertFalse(is_prime(2**32 - 1))
        self.assertFalse(is_prime(49))

class TestMod(unittest.TestCase):

    def test_conversion(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x = random.randint(0, 10**12)
            m = Mod(x, p)
            self.assertEqual(m.to_int(), x % p)
            self.assertIn(m.to_int(), range(p))
        self.assertEqual(Mod(-1, 5).to_int(), 4)
        self.assertEqual(int(GF(7)(23)), 2)

    def test_addition(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x1 = random.randint(0, 65525)
            x2 = random.randint(0, 65525)
            self.assertEqual(Mod(x1, p) + Mod(x2, p), (x1 + x2) % p)
        self.assertEqual(3 + Mod(4, 5), Mod(2, 5))

    def test_subtraction(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x1 = random.randint(0, 65525)
            x2 = random.randint(0, 65525)
            self.assertEqual(Mod(x1, p) - Mod(x2, p), (x1 - x2) % p)
        self.assertEqual(Mod(0, 5) - Mod(1, 5), Mod(4, 5))
        self.assertEqual(1 - Mod(3, 5), Mod(3, 5))

    def test_multiplication(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x1 = random.randint(0, 65525)
            x2 = random.randint(0, 65525)
            self.assertEqual(Mod(x1, p) * Mod(x2, p), (x1 * x2) % p)

    def test_negation(self):
        for _ in range(1000):
            p = random.randint(2, 65525)
            x = random.randint(0, 65525)
            self.assertEqual(-Mod(x, p), (-x) % p)
        self.assertEqual((-Mod(0, 5)).to_int(), 0)

    def test_augmented_assignment(self):
        a = Mod(3, 7)
        b = a
        a += 5
        self.assertEqual(a, Mod(1, 7))
        a -= Mod(2, 7)
        self.assertEqual(a, Mod(6, 7))
        a *= 3
        self.assertEqual(a, Mod(4, 7))
        self.assertEqual(b, Mod(3, 7))

    def test_modpow(self):
        for p in SMALL_PRIMES:
            x = random.randint(0, p - 1)
            for n in range(20):
                self.assertEqual(Mod(x, p).modpow(n), pow(x, n, p))
        self.assertEqual(Mod(2, 1009) ** 10, 1024 % 1009)
        self.assertEqual(Mod(0, 5) ** 0, Mod(1, 5))

    def test_inversion(self):
        ps = [65413, 65419, 65423, 65437, 65447, 65449, 65479, 65497, 65519, 65521]
        for p in ps:
            x = Mod(random.randint(1, p - 1), p)
            ix = x.inverse()
            self.assertEqual(x * ix, 1)
            self.assertEqual(~ix, x)

    def test_inverse_of_every_element(self):
        for p in (2, 3, 5, 7, 13):
            F = GF(p)
            for a in F.elements():
                if a == 0:
                    self.assertIsNone(a.inverse())
                else:
                    self.assertEqual(a * a.inverse(), F.one())

    def test_inverse_not_coprime(self):
        self.assertIsNone(Mod(4, 6).inverse())
        self.assertIsNone(Mod(0, 5).inverse())
        with self.assertRaises(ZeroDivisionError):
            ~Mod(0, 5)
        with self.assertRaises(ZeroDivisionError):
            Mod(1, 5) / Mod(0, 5)
        with self.assertRaises(ZeroDivisionError):
            Mod(0, 5) ** -1

    def test_division(self):
        ps = [65413, 65419, 65423, 65437, 65447, 65449, 65479, 65497, 65519, 65521]
        for p in ps:
            x1 = Mod(random.randint(1, p - 1), p)
            x2 = Mod(random.randint(1, p - 1), p)
            self.assertEqual(x1 / x2, x1 * ~x2)
            self.assertEqual((x1 / x2) * x2, x1)
        self.assertEqual(1 / Mod(2, 5), Mod(3, 5))
        self.assertEqual(Mod(2, 5) ** -1, Mod(3, 5))

    def test_mixed_moduli(self):
        with self.assertRaises(ValueError):
            Mod(1, 5) + Mod(1, 7)
        with self.assertRaises(ValueError):
            Mod(1, 5) * Mod(1, 7)
        with self.assertRaises(ValueError):
            Mod(1, 5) < Mod(2, 7)
        with self.assertRaises(ValueError):
            GF(5)(Mod(1, 7))
        self.assertNotEqual(Mod(1, 5), Mod(1, 7))

    def test_equality_and_hash(self):
        self.assertEqual(Mod(7, 5), Mod(2, 5))
        self.assertEqual(hash(Mod(7, 5)), hash(Mod(2, 5)))
        self.assertEqual(len({Mod(x, 5) for x in range(25)}), 5)
        self.assertEqual(Mod(3, 5), 8)
        self.assertNotEqual(Mod(3, 5), 4)

    def test_set_membership_needs_mod_keys(self):
        s = {Mod(3, 5)}
        self.assertIn(Mod(8, 5), s)
        self.assertIn(GF(5)(13), s)
        self.assertNotEqual(hash(Mod(3, 5)), hash(Mod(3, 7)))
        self.assertNotIn(Mod(3, 7), s)

    def test_ordering(self):
        self.assertLess(Mod(1, 5), Mod(3, 5))
        self.assertGreater(Mod(4, 5), Mod(3, 5))
        self.assertEqual(sorted([Mod(3, 5), Mod(0, 5), Mod(2, 5)]), [0, 2, 3])

    def test_str(self):
        self.assertEqual(str(Mod(8, 5)), "3")
        self.assertEqual(repr(Mod(8, 5)), "Mod(3, 5)")

class TestRingLaws(unittest.TestCase):

    def test_ring_laws(self):
        for p in SMALL_PRIMES:
            F = GF(p)
            for _ in range(50):
                a, b, c = F.rand_elem(), F.rand_elem(), F.rand_elem()
                self.assertEqual(a + F.zero(), a)
                self.assertEqual(a * F.one(), a)
                self.assertEqual(a + (-a), F.zero())
                self.assertEqual((a + b) + c, a + (b + c))
                self.assertEqual((a * b) * c, a * (b * c))
                self.assertEqual(a * b, b * a)
                self.assertEqual(a * (b + c), a * b + a * c)

    def test_ring_laws_exhaustive_composite(self):
        F = GF(6)
        elems = list(F.elements())
        for a in elems:
            self.assertEqual(a + (-a), F.zero())
            for b in elems:
                self.assertEqual(a + b, b + a)
                self.assertEqual(a * b, b * a)

class TestGF(unittest.TestCase):

    def test_construction(self):
        F = GF(5)
        self.assertEqual(F(7), Mod(2, 5))
        self.assertEqual(F(Mod(3, 5)), Mod(3, 5))
        self.assertEqual(F(Fraction(1, 2)), Mod(3, 5))
        self.assertEqual(F, GF(5))
        self.assertNotEqual(F, GF(7))
        self.assertEqual(str(F), "GF(5)")
        self.assertTrue(F.is_finite())

    def test_bad_modulus(self):
        with self.assertRaises(ValueError):
            GF(1)
        with self.assertRaises(ValueError):
            GF(0)
        with self.assertRaises(ValueError):
            GF(5)("3")

    def test_composite_warns(self):
        with self.assertLogs(logger, level="WARNING") as cm:
            F = GF(6)
        self.assertFalse(F.is_field)
        self.assertIn("not prime", cm.output[0])
        self.assertTrue(GF(5).is_field)

    def test_identities(self):
        F = GF(11)
        self.assertEqual(F.zero(), Mod(0, 11))
        self.assertEqual(F.one(), Mod(1, 11))
        self.assertEqual(F.inverse(3) * 3, F.one())
        self.assertIsNone(F.inverse(0))

    def test_elements(self):
        self.assertEqual([m.to_int() for m in GF(5).elements()], [0, 1, 2, 3, 4])

class TestOtherRings(unittest.TestCase):

    def test_integers(self):
        self.assertEqual(ZZ.zero(), 0)
        self.assertEqual(ZZ.one(), 1)
        self.assertEqual(ZZ.inverse(-1), -1)
        self.assertIsNone(ZZ.inverse(2))
        self.assertFalse(ZZ.is_finite())
        with self.assertRaises(NotImplementedError):
            ZZ.elements()
        with self.assertRaises(ValueError):
            ZZ(Fraction(1, 2))

    def test_rationals(self):
        self.assertEqual(QQ(3), Fraction(3))
        self.assertEqual(QQ.inverse(Fraction(2, 3)), Fraction(3, 2))
        self.assertIsNone(QQ.inverse(0))
        for _ in range(20):
            a = QQ.rand_elem(min=1)
            self.assertEqual(a * QQ.inverse(a), QQ.one())
        with self.assertRaises(ValueError):
            QQ(Mod(1, 5))
