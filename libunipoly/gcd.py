#!/usr/bin/env python3
#
#   Univariate polynomial GCD
#

from libunipoly.division import divide_and_remainder
from libunipoly.resultants import subresultant_prs
from libunipoly.univariate import UnivariatePolynomial

def _check_field(poly):
    if not poly.is_over_field():
        raise ValueError(f"Euclidean algorithm requires a field, got {poly.ring}")

def euclid_gcd(a : UnivariatePolynomial, b : UnivariatePolynomial) -> UnivariatePolynomial:
    """
    Monic gcd of two polynomials over a field
    """
    a.check_compatible(b)
    _check_field(a)
    if a.is_zero():
        return b.clone().monic()
    if b.is_zero():
        return a.clone().monic()

    x, y = (a.clone(), b.clone()) if a.degree >= b.degree else (b.clone(), a.clone())
    while not y.is_zero():
        _, r = divide_and_remainder(x, y, False)
        x, y = y, r
    return x.monic()

def extended_euclid(a : UnivariatePolynomial, b : UnivariatePolynomial):
    """
    Returns (g, s, t) with g = gcd(a, b) monic and s * a + t * b = g
    """
    a.check_compatible(b)
    _check_field(a)

    r0, r1 = a.clone(), b.clone()
    s0, s1 = a.create_one(), a.create_zero()
    t0, t1 = a.create_zero(), a.create_one()
    while not r1.is_zero():
        q, r = divide_and_remainder(r0, r1, False)
        r0, r1 = r1, r
        s0, s1 = s1, s0.subtract(q * s1)
        t0, t1 = t1, t0.subtract(q * t1)

    if r0.is_zero():
        return r0, s0, t0
    lc = r0.lc()
    return r0.monic(), s0.divide_or_none(lc), t0.divide_or_none(lc)

def polynomial_gcd(a : UnivariatePolynomial, b : UnivariatePolynomial) -> UnivariatePolynomial:
    """
    Euclidean algorithm over fields, subresultant sequence over other rings
    """
    a.check_compatible(b)
    if a.is_over_field():
        return euclid_gcd(a, b)
    return subresultant_prs(a, b).gcd()

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF, QQ, ZZ, Rational
from libunipoly.division import divide_exact
from libunipoly.random_polynomials import random_polynomial

class TestGCD(unittest.TestCase):

    def test_integers(self):
        a = UnivariatePolynomial(ZZ, [-2, 0, 2])
        b = UnivariatePolynomial(ZZ, [-4, 4])
        self.assertEqual(polynomial_gcd(a, b), UnivariatePolynomial(ZZ, [-2, 2]))
        self.assertEqual(polynomial_gcd(a, UnivariatePolynomial(ZZ, [1, 0, 1])), 1)
        with self.assertRaises(ValueError):
            euclid_gcd(a, b)

    def test_rationals(self):
        a = UnivariatePolynomial(QQ, [-2, 0, 2])
        b = UnivariatePolynomial(QQ, [-4, 4])
        self.assertEqual(polynomial_gcd(a, b), UnivariatePolynomial(QQ, [-1, 1]))
        self.assertEqual(polynomial_gcd(a, UnivariatePolynomial(QQ, [Rational(1, 3), 1])), 1)

    def test_finite_field(self):
        rnd = random.Random(31)
        F = GF(17)
        for _ in range(50):
            f = random_polynomial(F, rnd.randint(0, 4), rnd)
            a = f * random_polynomial(F, rnd.randint(0, 6), rnd)
            b = f * random_polynomial(F, rnd.randint(0, 6), rnd)
            g = polynomial_gcd(a, b)
            self.assertTrue(g.is_monic())
            self.assertIsNotNone(divide_exact(a, g))
            self.assertIsNotNone(divide_exact(b, g))
            self.assertIsNotNone(divide_exact(g, f))

    def test_extended(self):
        rnd = random.Random(32)
        F = GF(101)
        for _ in range(50):
            a = random_polynomial(F, rnd.randint(0, 8), rnd)
            b = random_polynomial(F, rnd.randint(0, 8), rnd)
            g, s, t = extended_euclid(a, b)
            self.assertEqual(g, euclid_gcd(a, b))
            self.assertEqual(s * a + t * b, g)

    def test_zero(self):
        F = GF(7)
        a = UnivariatePolynomial(F, [2, 4])
        z = UnivariatePolynomial.zero(F)
        self.assertEqual(euclid_gcd(a, z), UnivariatePolynomial(F, [4, 1]))
        self.assertEqual(euclid_gcd(z, a), UnivariatePolynomial(F, [4, 1]))
        g, s, t = extended_euclid(z, a)
        self.assertEqual(s * z + t * a, g)
