#!/usr/bin/env python3
#
#   Distinct-degree and equal-degree (Cantor-Zassenhaus) factorization over prime fields
#

import logging
import random

from libunipoly.division import divide_exact, remainder
from libunipoly.factor_decomposition import FactorDecomposition
from libunipoly.gcd import euclid_gcd
from libunipoly.random_polynomials import random_polynomial
from libunipoly.univariate import UnivariatePolynomial

logger = logging.getLogger(__name__)

# number of random polynomials to try before giving up on splitting a polynomial
MAX_SPLITTING_ATTEMPTS = 1000

def powmod(base : UnivariatePolynomial, exponent : int, modulus : UnivariatePolynomial) -> UnivariatePolynomial:
    """
    base^exponent mod modulus
    """
    if exponent < 0:
        raise ValueError(f"Negative exponent {exponent}")
    result = base.create_one()
    k2p = remainder(base, modulus)
    while exponent != 0:
        if exponent & 1:
            result = remainder(result.multiply(k2p), modulus, False)
        exponent >>= 1
        if exponent != 0:
            k2p = remainder(k2p.square(), modulus, False)
    return remainder(result, modulus, False)

def _check_finite_field(poly):
    if not poly.is_over_finite_field():
        raise ValueError(f"Polynomial over a finite field is expected, got {poly.ring}")

def distinct_degree_factorization(poly : UnivariatePolynomial) -> FactorDecomposition:
    """
    Splits a square-free polynomial into monic factors each of which is a product of irreducibles of the same degree,
    that degree is stored in the exponent slot. The constant factor is the leading coefficient.
    """
    _check_finite_field(poly)
    result = FactorDecomposition.empty(poly).set_constant_factor(poly.lc_as_poly())
    if poly.is_constant():
        return result

    q = poly.ring.cardinality()
    f = poly.clone().monic()
    x = poly.create_monomial(1, 1)
    h = remainder(x, f)
    i = 0
    while not f.is_constant():
        i += 1
        if 2 * i > f.degree:
            # no two factors of degree >= i fit, the rest is irreducible
            result.add_factor(f, f.degree)
            break
        h = powmod(h, q, f)
        g = euclid_gcd(h - x, f)
        if not g.is_one():
            result.add_factor(g, i)
            f = divide_exact(f, g)
            h = remainder(h, f, False)
    return result

def _trace_map(a, degree, modulus):
    # a + a^2 + a^4 + ... + a^(2^(degree - 1)) mod modulus
    t = a.clone()
    s = a.clone()
    for _ in range(degree - 1):
        s = remainder(s.square(), modulus, False)
        t.add(s)
    return t

def _split(poly, degree, rnd):
    q = poly.ring.cardinality()
    a = random_polynomial(poly.ring, rnd.randint(1, poly.degree - 1), rnd)

    g = euclid_gcd(a, poly)
    if 0 < g.degree < poly.degree:
        return g

    if q % 2 == 1:
        b = powmod(a, (q ** degree - 1) // 2, poly).subtract(poly.create_one())
    else:
        b = _trace_map(a, degree, poly)

    g = euclid_gcd(b, poly)
    if 0 < g.degree < poly.degree:
        return g
    return None

def _cantor_zassenhaus(poly, degree, rnd, result):
    if poly.degree == degree:
        result.append(poly)
        return

    for attempt in range(MAX_SPLITTING_ATTEMPTS):
        g = _split(poly, degree, rnd)
        if g is not None:
            break
        logger.debug("No split of degree %d polynomial on attempt %d", poly.degree, attempt)
    else:
        raise ArithmeticError(f"Failed to split {poly} after {MAX_SPLITTING_ATTEMPTS} attempts")

    _cantor_zassenhaus(g, degree, rnd, result)
    _cantor_zassenhaus(divide_exact(poly, g).monic(), degree, rnd, result)

def cantor_zassenhaus(poly : UnivariatePolynomial, degree : int, rnd : random.Random = None) -> list:
    """
    Splits a monic square-free polynomial whose irreducible factors all have the given degree into the list of those
    (monic) factors
    """
    _check_finite_field(poly)
    if rnd is None:
        rnd = random.Random()
    if poly.degree % degree != 0:
        raise ValueError(f"Degree {poly.degree} is not a multiple of {degree}")

    result = []
    _cantor_zassenhaus(poly.clone().monic(), degree, rnd, result)
    return result

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libunipoly.basic_types import GF, ZZ
from libunipoly.random_polynomials import random_monic_polynomial
from libunipoly.square_free import is_square_free

class TestFiniteField(unittest.TestCase):

    def test_powmod(self):
        F = GF(13)
        x = UnivariatePolynomial.monomial(F, 1, 1)
        m = x ** 3 + 2 * x + 5
        self.assertEqual(powmod(x, 0, m), 1)
        self.assertEqual(powmod(x, 4, m), remainder(x ** 4, m))
        self.assertEqual(powmod(x + 1, 100, m), remainder((x + 1) ** 100, m))
        # Fermat
        self.assertEqual(powmod(x, 13, x - 3), 3)

    def test_ddf(self):
        F = GF(5)
        x = UnivariatePolynomial.monomial(F, 1, 1)
        # x^2 + 2 and x^2 + 3 are irreducible over GF(5)
        poly = 3 * (x + 1) * (x + 2) * (x ** 2 + 2) * (x ** 2 + 3) * (x ** 3 + x + 1)
        ddf = distinct_degree_factorization(poly)
        self.assertEqual(ddf.multiply_ignoring_exponents(), poly)
        self.assertEqual(ddf, FactorDecomposition(UnivariatePolynomial(F, [3]),
            [(x + 1) * (x + 2), (x ** 2 + 2) * (x ** 2 + 3), x ** 3 + x + 1], [1, 2, 3]))

    def test_cz(self):
        rnd = random.Random(51)
        for p in [2, 3, 17]:
            F = GF(p)
            x = UnivariatePolynomial.monomial(F, 1, 1)
            ddf = distinct_degree_factorization(x ** (p ** 2) - x)
            for f,d in ddf:
                factors = cantor_zassenhaus(f, d, rnd)
                self.assertEqual(len(factors), f.degree // d)
                product = x.create_one()
                for g in factors:
                    self.assertTrue(g.is_monic())
                    self.assertEqual(g.degree, d)
                    product.multiply(g)
                self.assertEqual(product, f)

    def test_random(self):
        rnd = random.Random(52)
        for p in [2, 3, 7, 101, 65521]:
            F = GF(p)
            for _ in range(10):
                poly = random_monic_polynomial(F, rnd.randint(2, 12), rnd)
                if not is_square_free(poly):
                    continue
                ddf = distinct_degree_factorization(poly)
                self.assertEqual(ddf.multiply_ignoring_exponents(), poly)
                for f,d in ddf:
                    self.assertTrue(all(g.degree == d for g in cantor_zassenhaus(f, d, rnd)))

    def test_wrong_ring(self):
        with self.assertRaises(ValueError):
            distinct_degree_factorization(UnivariatePolynomial(ZZ, [1, 0, 1]))
