#!/usr/bin/env python3
#
#   Coefficient rings for univariate polynomials
#

import operator
import random
from functools import reduce
from typing import Optional, Union

from sympy import isprime

def prod(l):
    return reduce(operator.mul, l)

########################################################################################################################
#   Integer Arithmetic
########################################################################################################################

def gcd(a, b):
    while b != 0:
        a %= b
        a,b = b,a
    return abs(a)

def xgcd(a, b):
    prevx, x = 1, 0
    prevy, y = 0, 1
    while b != 0:
        q, r = divmod(a, b)
        x, prevx = prevx - q * x, x
        y, prevy = prevy - q * y, y
        a, b = b, r
    return a, prevx, prevy

# Signed machine word limits
LONG_MAX_VALUE = (1 << 63) - 1
LONG_MIN_VALUE = -(1 << 63)

def safe_multiply(a : int, b : int) -> int:
    """
    Multiplies two integers, failing if the product does not fit into a signed 64-bit word.
    """
    r = a * b
    if r > LONG_MAX_VALUE or r < LONG_MIN_VALUE:
        raise ArithmeticError(f"long overflow: {a} * {b}")
    return r

########################################################################################################################
#   Rational Numbers
########################################################################################################################

class Rational:
    def __init__(self, num : int, dnm : int = 1):
        self.num = num
        self.dnm = dnm
        self.canonicalise()

    def tup(self):
        return self.num, self.dnm

    def __str__(self):
        if self.dnm == 1:
            return f"{self.num}"
        return f"{self.num}/{self.dnm}"

    def __repr__(self):
        return f"Rational({self.num}, {self.dnm})"

    def __hash__(self):
        return hash((self.num, self.dnm))

    def canonicalise(self):
        if self.dnm == 0:
            raise ZeroDivisionError(f"{self.num}/0")
        # Keep the sign in the numerator
        if self.dnm < 0:
            self.dnm = -self.dnm
            self.num = -self.num
        g = gcd(self.num, self.dnm)
        if g > 1:
            self.num //= g
            self.dnm //= g

    def cvt_other(self, other):
        if isinstance(other, int):
            other = Rational(other, 1)
        elif not isinstance(other, Rational):
            return None
        return other

    def __add__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm + self.dnm * other.num, self.dnm * other.dnm)

    __radd__ = __add__

    def __sub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm - self.dnm * other.num, self.dnm * other.dnm)

    def __rsub__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other - self

    def __mul__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.num, self.dnm * other.dnm)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return Rational(self.num * other.dnm, self.dnm * other.num)

    def __rtruediv__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return other / self

    def __pow__(self, other : int):
        assert isinstance(other, int)
        if other < 0:
            return (~self) ** -other
        return Rational(self.num ** other, self.dnm ** other)

    def __invert__(self):
        return Rational(self.dnm, self.num)

    def __neg__(self):
        return Rational(-self.num, self.dnm)

    def __abs__(self):
        return Rational(abs(self.num), self.dnm)

    def __eq__(self, other):
        if isinstance(other, int):
            return self.dnm == 1 and self.num == other
        if not isinstance(other, Rational):
            return NotImplemented
        return self.num == other.num and self.dnm == other.dnm

    def __lt__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return self.num * other.dnm < other.num * self.dnm

    def __gt__(self, other):
        other = self.cvt_other(other)
        if other is None:
            return NotImplemented
        return self.num * other.dnm > other.num * self.dnm

########################################################################################################################
#   Coefficient Rings
########################################################################################################################

class CoefficientRing:
    """
    Capability contract of a coefficient domain. Elements are plain values (Python integers, `Rational`s), all of the
    arithmetic goes through the ring so that polynomials only ever carry their ring alongside a coefficient buffer.
    Two rings are compatible only if they compare equal.
    """

    def zero(self):
        raise NotImplementedError()

    def one(self):
        raise NotImplementedError()

    def is_zero(self, a):
        return a == self.zero()

    def is_one(self, a):
        return a == self.one()

    def is_minus_one(self, a):
        return a == self.negate(self.one())

    def signum(self, a) -> int:
        raise NotImplementedError()

    def abs(self, a):
        return self.negate(a) if self.signum(a) < 0 else a

    def add(self, a, b):
        return a + b

    def subtract(self, a, b):
        return a - b

    def multiply(self, a, b):
        return a * b

    def negate(self, a):
        return -a

    def divide_or_none(self, a, b):
        """
        Exact division a / b, or None if b does not divide a in this ring
        """
        raise NotImplementedError()

    def divide_exact(self, a, b):
        q = self.divide_or_none(a, b)
        if q is None:
            raise ArithmeticError(f"{a} is not divisible by {b} in {self}")
        return q

    def reciprocal(self, a):
        return self.divide_exact(self.one(), a)

    def gcd(self, a, b):
        raise NotImplementedError()

    def pow(self, a, exponent : int):
        if exponent < 0:
            return self.pow(self.reciprocal(a), -exponent)
        result = self.one()
        k2p = a
        while exponent != 0:
            if exponent & 1:
                result = self.multiply(result, k2p)
            exponent >>= 1
            if exponent != 0:
                k2p = self.multiply(k2p, k2p)
        return result

    def is_field(self) -> bool:
        return False

    def is_finite_field(self) -> bool:
        return False

    def cardinality(self) -> Optional[int]:
        """
        Number of elements, None for infinite rings
        """
        return None

    def value_of(self, arg):
        raise NotImplementedError()

    def __call__(self, arg):
        return self.value_of(arg)

    def rand_elem(self, rnd : random.Random = random):
        raise NotImplementedError()

class IntegerRing(CoefficientRing):
    def __repr__(self):
        return "ZZ"

    def __str__(self):
        return "The Integers"

    def __eq__(self, other):
        return isinstance(other, IntegerRing)

    def __hash__(self):
        return hash("ZZ")

    def zero(self):
        return 0

    def one(self):
        return 1

    def is_zero(self, a):
        return a == 0

    def is_one(self, a):
        return a == 1

    def is_minus_one(self, a):
        return a == -1

    def signum(self, a):
        return (a > 0) - (a < 0)

    def abs(self, a):
        return abs(a)

    def divide_or_none(self, a, b):
        if b == 0:
            raise ZeroDivisionError(f"{a} / 0")
        q, r = divmod(a, b)
        if r != 0:
            return None
        return q

    def gcd(self, a, b):
        return gcd(a, b)

    def pow(self, a, exponent):
        if exponent < 0:
            return super().pow(a, exponent)
        return a ** exponent

    def value_of(self, arg : Union[int, Rational]):
        if isinstance(arg, int):
            return arg
        if isinstance(arg, Rational) and arg.dnm == 1:
            return arg.num
        raise ValueError(f"{arg} cannot be a member of the integers")

    def rand_elem(self, rnd : random.Random = random, bound : int = 100):
        return rnd.randint(-bound, bound)

ZZ = IntegerRing()

class ModularRing(CoefficientRing):
    """
    Integers modulo `modulus`, elements are kept in [0, modulus). This is a field iff the modulus is prime, composite
    (prime power) moduli are needed by Hensel lifting.
    """

    def __init__(self, modulus : int):
        if modulus < 2:
            raise ValueError(f"Modulus should be at least 2, got {modulus}")
        self.modulus = modulus
        self.prime = bool(isprime(modulus))

    def __repr__(self):
        return f"ModularRing({self.modulus})"

    def __str__(self):
        return f"Z/{self.modulus}"

    def __eq__(self, other):
        if isinstance(other, ModularRing):
            return self.modulus == other.modulus
        return False

    def __hash__(self):
        return hash(("Zp", self.modulus))

    def zero(self):
        return 0

    def one(self):
        return 1

    def is_zero(self, a):
        return a == 0

    def is_one(self, a):
        return a == 1

    def is_minus_one(self, a):
        return a == self.modulus - 1

    def signum(self, a):
        return 0 if a == 0 else 1

    def abs(self, a):
        return a

    def add(self, a, b):
        r = a + b
        if r >= self.modulus:
            r -= self.modulus
        return r

    def subtract(self, a, b):
        r = a - b
        if r < 0:
            r += self.modulus
        return r

    def multiply(self, a, b):
        return (a * b) % self.modulus

    def negate(self, a):
        return 0 if a == 0 else self.modulus - a

    def reciprocal_or_none(self, a):
        if a == 0:
            raise ZeroDivisionError(f"1 / 0 in {self}")
        g, x, _ = xgcd(a, self.modulus)
        if g != 1:
            return None
        return x % self.modulus

    def reciprocal(self, a):
        inv = self.reciprocal_or_none(a)
        if inv is None:
            raise ArithmeticError(f"{a} is not invertible in {self}")
        return inv

    def divide_or_none(self, a, b):
        inv = self.reciprocal_or_none(b)
        if inv is None:
            return None
        return (a * inv) % self.modulus

    def gcd(self, a, b):
        if self.prime:
            # every non-zero element is a unit
            return 0 if a == 0 and b == 0 else 1
        return gcd(gcd(a, b), self.modulus)

    def pow(self, a, exponent):
        if exponent < 0:
            return pow(self.reciprocal(a), -exponent, self.modulus)
        return pow(a, exponent, self.modulus)

    def is_field(self):
        return self.prime

    def is_finite_field(self):
        return self.prime

    def cardinality(self):
        return self.modulus

    def sym_mod(self, a):
        """
        Balanced representative of a, in (-modulus/2, modulus/2]
        """
        return a - self.modulus if a > self.modulus // 2 else a

    def value_of(self, arg : Union[int, Rational]):
        if isinstance(arg, int):
            return arg % self.modulus
        elif isinstance(arg, Rational):
            return self.divide_exact(arg.num % self.modulus, arg.dnm % self.modulus)
        raise ValueError(f"{arg} cannot be a member of {self}")

    def rand_elem(self, rnd : random.Random = random, min : int = 0):
        return rnd.randint(min, self.modulus - 1)

def GF(p : int) -> ModularRing:
    """
    The prime field of order p
    """
    ring = ModularRing(p)
    if not ring.is_field():
        raise ValueError(f"{p} is not prime")
    return ring

class RationalField(CoefficientRing):
    def __repr__(self):
        return "QQ"

    def __str__(self):
        return "The Rational Numbers"

    def __eq__(self, other):
        return isinstance(other, RationalField)

    def __hash__(self):
        return hash("QQ")

    def zero(self):
        return Rational(0)

    def one(self):
        return Rational(1)

    def signum(self, a):
        return (a.num > 0) - (a.num < 0)

    def divide_or_none(self, a, b):
        if b.num == 0:
            raise ZeroDivisionError(f"{a} / 0")
        return a / b

    def gcd(self, a, b):
        if a.num == 0 and b.num == 0:
            return self.zero()
        return self.one()

    def is_field(self):
        return True

    def value_of(self, arg : Union[Rational, int]):
        if isinstance(arg, Rational):
            return arg
        elif isinstance(arg, int):
            return Rational(arg, 1)
        raise ValueError(f"{arg} cannot be a member of a rational field")

    def rand_elem(self, rnd : random.Random = random):
        # Bounds are arbitrary for testing purposes
        return Rational(rnd.randint(-100, 100), rnd.randint(1, 100))

QQ = RationalField()

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

class TestGCD(unittest.TestCase):

    def test_gcd(self):
        self.assertEqual(gcd(4, 3), 1)
        self.assertEqual(gcd(12, 3), 3)
        self.assertEqual(gcd(21, 9), 3)
        self.assertEqual(gcd(0, 9), 9)
        self.assertEqual(gcd(1, -2), gcd(1, 2))
        self.assertEqual(gcd(-1, -2), gcd(1, 2))

    def test_xgcd(self):
        self.assertEqual(xgcd(30, 18), (6, -1, 2))
        self.assertEqual(xgcd(18, 30), (6, 2, -1))

    def test_safe_multiply(self):
        self.assertEqual(safe_multiply(1 << 31, 1 << 31), 1 << 62)
        self.assertEqual(safe_multiply(-(1 << 31), 1 << 32), LONG_MIN_VALUE)
        with self.assertRaises(ArithmeticError):
            safe_multiply(1 << 32, 1 << 31)

class TestIntegerRing(unittest.TestCase):

    def test_division(self):
        self.assertEqual(ZZ.divide_or_none(12, -4), -3)
        self.assertIsNone(ZZ.divide_or_none(12, 5))
        self.assertEqual(ZZ.divide_exact(-21, 7), -3)
        with self.assertRaises(ArithmeticError):
            ZZ.divide_exact(7, 2)
        with self.assertRaises(ZeroDivisionError):
            ZZ.divide_or_none(7, 0)

    def test_predicates(self):
        self.assertEqual(ZZ.signum(-7), -1)
        self.assertTrue(ZZ.is_minus_one(-1))
        self.assertFalse(ZZ.is_field())
        self.assertIsNone(ZZ.cardinality())
        self.assertEqual(ZZ.pow(-3, 3), -27)
        with self.assertRaises(ValueError):
            ZZ(Rational(1, 2))

class TestModularRing(unittest.TestCase):

    def test_arithmetic(self):
        rnd = random.Random(1)
        for _ in range(1000):
            p = rnd.randint(2, 65525)
            F = ModularRing(p)
            x1 = F(rnd.randint(-65525, 65525))
            x2 = F(rnd.randint(-65525, 65525))
            self.assertEqual(F.add(x1, x2), (x1 + x2) % p)
            self.assertEqual(F.subtract(x1, x2), (x1 - x2) % p)
            self.assertEqual(F.multiply(x1, x2), (x1 * x2) % p)
            self.assertEqual(F.negate(x1), (-x1) % p)

    def test_inversion(self):
        rnd = random.Random(2)
        for p in [65413, 65419, 65423, 65437, 65447, 65449, 65479, 65497, 65519, 65521]:
            F = GF(p)
            x = F.rand_elem(rnd, min=1)
            self.assertEqual(F.multiply(x, F.reciprocal(x)), 1)
            self.assertEqual(F.divide_exact(F.multiply(x, 17), x), 17)

    def test_prime_power(self):
        R = ModularRing(49)
        self.assertFalse(R.is_field())
        self.assertFalse(R.is_finite_field())
        self.assertIsNone(R.divide_or_none(3, 7))
        self.assertEqual(R.multiply(R.divide_exact(3, 5), 5), 3)
        with self.assertRaises(ValueError):
            GF(49)

    def test_sym_mod(self):
        F = GF(7)
        self.assertEqual([F.sym_mod(x) for x in range(7)], [0, 1, 2, 3, -3, -2, -1])
        self.assertEqual(F(Rational(1, 2)), 4)

    def test_compatibility(self):
        self.assertEqual(GF(7), ModularRing(7))
        self.assertNotEqual(GF(7), GF(11))
        self.assertNotEqual(GF(7), ZZ)

class TestRational(unittest.TestCase):

    def test_conversion(self):
        self.assertEqual(Rational(0, 5).tup(), (0, 1))
        self.assertEqual(Rational(6, 3).tup(), (2, 1))
        self.assertEqual(Rational(7*4, -3*4).tup(), (-7, 3))
        with self.assertRaises(ZeroDivisionError):
            Rational(1, 0)

    def test_arithmetic(self):
        self.assertEqual((Rational(4, 5) + Rational(6, 7)).tup(), (58, 35))
        self.assertEqual((Rational(7, 8) - Rational(5, 6)).tup(), (1, 24))
        self.assertEqual((Rational(3, 2) * Rational(-1, 2)).tup(), (-3, 4))
        self.assertEqual((Rational(2, 3) / Rational(3, 4)).tup(), (8, 9))
        self.assertEqual((~Rational(2, -3)).tup(), (-3, 2))
        self.assertEqual(Rational(2, 3) ** -2, Rational(9, 4))
        self.assertLess(Rational(5, 3), Rational(7, 4))
        with self.assertRaises(TypeError):
            Rational(1, 2) * "x"

    def test_field(self):
        self.assertTrue(QQ.is_field())
        self.assertEqual(QQ.divide_exact(QQ(1), QQ(3)), Rational(1, 3))
        self.assertEqual(QQ.gcd(Rational(2, 3), Rational(5, 7)), QQ.one())
        self.assertEqual(QQ.signum(Rational(-1, 3)), -1)
