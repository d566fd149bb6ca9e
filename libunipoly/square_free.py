#!/usr/bin/env python3
#
#   Square-free factorization
#
#   Yun's algorithm in characteristic zero, Musser's algorithm over prime fields.
#

from libunipoly.basic_types import ZZ
from libunipoly.division import divide_exact
from libunipoly.factor_decomposition import FactorDecomposition
from libunipoly.gcd import euclid_gcd, polynomial_gcd
from libunipoly.univariate import UnivariatePolynomial

def is_square_free(poly : UnivariatePolynomial) -> bool:
    """
    Whether poly has no repeated non-constant factors
    """
    if poly.is_constant():
        return True
    deriv = poly.derivative()
    if deriv.is_zero():
        # poly is a p-th power
        return False
    return polynomial_gcd(poly, deriv).is_constant()

def square_free_factorization(poly : UnivariatePolynomial) -> FactorDecomposition:
    """
    Decomposition into pairwise coprime square-free factors with distinct multiplicities. Over the integers the
    factors are primitive with positive leading coefficients and the constant factor carries the (signed) content,
    over fields the factors are monic and the constant factor is the leading coefficient.
    """
    if poly.is_constant():
        return FactorDecomposition(poly.clone())

    if poly.is_over_finite_field():
        return _square_free_musser(poly)
    if poly.ring == ZZ:
        content = poly.content()
        if poly.signum() < 0:
            content = -content
        return _square_free_yun(poly.clone().divide_or_none(content), UnivariatePolynomial.primitive_part) \
            .set_constant_factor(poly.create_constant(content))
    if poly.is_over_field() and poly.ring.cardinality() is None:
        return _square_free_yun(poly.clone().monic(), UnivariatePolynomial.monic) \
            .set_constant_factor(poly.lc_as_poly())
    raise ValueError(f"Square-free factorization is not supported over {poly.ring}")

def _square_free_yun(poly, normalize):
    result = FactorDecomposition.empty(poly)

    deriv = poly.derivative()
    gcd = normalize(polynomial_gcd(poly, deriv))
    if gcd.is_constant():
        return result.add_factor(poly, 1)

    b = divide_exact(poly, gcd)
    c = divide_exact(deriv, gcd)
    d = c.subtract(b.derivative())
    i = 0
    while not b.is_constant():
        i += 1
        a = normalize(polynomial_gcd(b, d))
        b = divide_exact(b, a)
        c = divide_exact(d, a)
        d = c.subtract(b.derivative())
        if not a.is_constant():
            result.add_factor(a, i)
    return result

def _pth_root(poly):
    # coefficients live in the prime field, where every element is its own p-th root
    p = poly.ring.cardinality()
    return UnivariatePolynomial(poly.ring, [poly[i * p] for i in range(poly.degree // p + 1)])

def _square_free_musser(poly):
    result = FactorDecomposition.empty(poly).set_constant_factor(poly.lc_as_poly())
    _musser(poly.clone().monic(), 1, result)
    return result

def _musser(poly, exponent, result):
    if poly.is_constant():
        return

    p = poly.ring.cardinality()
    deriv = poly.derivative()
    if deriv.is_zero():
        _musser(_pth_root(poly), exponent * p, result)
        return

    gcd = euclid_gcd(poly, deriv)
    quot = divide_exact(poly, gcd)
    i = 0
    while not quot.is_constant():
        i += 1
        y = euclid_gcd(gcd, quot)
        factor = divide_exact(quot, y)
        if not factor.is_constant():
            result.add_factor(factor.monic(), i * exponent)
        gcd = divide_exact(gcd, y)
        quot = y

    if not gcd.is_constant():
        _musser(_pth_root(gcd), exponent * p, result)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF, QQ, Rational
from libunipoly.random_polynomials import random_monic_polynomial, random_polynomial

class TestSquareFree(unittest.TestCase):

    def check(self, poly, sqf):
        self.assertEqual(sqf.multiply(), poly)
        for f,_ in sqf:
            self.assertTrue(is_square_free(f))
        self.assertEqual(len(set(sqf.exponents)), len(sqf.exponents))

    def test_integers(self):
        x = UnivariatePolynomial.monomial(ZZ, 1, 1)
        poly = -6 * (x - 1) ** 3 * (2 * x + 3) ** 2 * (x ** 2 + 1)
        sqf = square_free_factorization(poly)
        self.check(poly, sqf)
        self.assertEqual(sqf.constant_factor, -6)
        self.assertEqual(sqf, FactorDecomposition(UnivariatePolynomial(ZZ, [-6]),
                                                  [x ** 2 + 1, 2 * x + 3, x - 1], [1, 2, 3]))
        self.assertFalse(is_square_free(poly))
        self.assertTrue(is_square_free(x ** 2 + 1))

    def test_rationals(self):
        x = UnivariatePolynomial.monomial(QQ, 1, 1)
        poly = (x - Rational(1, 3)) ** 2 * (x + 1) * Rational(1, 2)
        sqf = square_free_factorization(poly)
        self.check(poly, sqf)
        self.assertEqual(sqf.constant_factor, Rational(1, 2))

    def test_finite_field_pth_powers(self):
        F = GF(3)
        x = UnivariatePolynomial.monomial(F, 1, 1)
        poly = 2 * (x + 1) ** 3 * (x ** 2 + 1) ** 7 * x ** 2
        sqf = square_free_factorization(poly)
        self.check(poly, sqf)
        self.assertEqual(sqf, FactorDecomposition(UnivariatePolynomial(F, [2]),
                                                  [x + 1, x, x ** 2 + 1], [3, 2, 7]))
        self.assertFalse(is_square_free(x ** 3 + 1))

    def test_random_finite_field(self):
        rnd = random.Random(41)
        for p in [2, 3, 5, 17]:
            F = GF(p)
            for _ in range(20):
                poly = random_polynomial(F, rnd.randint(1, 4), rnd)
                for _ in range(rnd.randint(1, 3)):
                    poly.multiply(random_monic_polynomial(F, rnd.randint(1, 3), rnd) ** rnd.choice([1, 2, 3, p, p + 1]))
                self.assertEqual(square_free_factorization(poly).multiply(), poly)

    def test_random_integers(self):
        rnd = random.Random(42)
        for _ in range(20):
            poly = random_polynomial(ZZ, rnd.randint(1, 3), rnd, 10)
            for _ in range(rnd.randint(1, 3)):
                poly.multiply(random_polynomial(ZZ, rnd.randint(1, 3), rnd, 10) ** rnd.randint(1, 3))
            self.assertEqual(square_free_factorization(poly).multiply(), poly)
