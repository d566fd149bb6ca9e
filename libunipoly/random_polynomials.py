#!/usr/bin/env python3
#
#   Random univariate polynomials for tests
#

import random

from libunipoly.basic_types import CoefficientRing
from libunipoly.univariate import UnivariatePolynomial

def _random_coefficient(ring, rnd, bound):
    if ring.cardinality() is not None:
        return ring.rand_elem(rnd)
    return ring.value_of(rnd.randint(-bound, bound))

def random_polynomial(ring : CoefficientRing, degree : int, rnd : random.Random, bound : int = 100):
    """
    Polynomial of exactly `degree` with coefficients in [-bound, bound] (reduced into the ring, uniform over
    finite rings) and a non-zero leading coefficient
    """
    coeffs = [_random_coefficient(ring, rnd, bound) for _ in range(degree + 1)]
    while ring.is_zero(coeffs[degree]):
        coeffs[degree] = _random_coefficient(ring, rnd, bound)
    return UnivariatePolynomial(ring, coeffs)

def random_monic_polynomial(ring : CoefficientRing, degree : int, rnd : random.Random, bound : int = 100):
    coeffs = [_random_coefficient(ring, rnd, bound) for _ in range(degree)]
    coeffs.append(ring.one())
    return UnivariatePolynomial(ring, coeffs)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libunipoly.basic_types import GF, ZZ

class TestRandomPolynomials(unittest.TestCase):

    def test_degree(self):
        rnd = random.Random(5)
        for ring in [ZZ, GF(2), GF(65521)]:
            for d in range(10):
                p = random_polynomial(ring, d, rnd, 3)
                self.assertEqual(p.degree, d)
                self.assertFalse(p.is_zero())
                self.assertTrue(random_monic_polynomial(ring, d, rnd).is_monic())
                self.assertEqual(random_monic_polynomial(ring, d, rnd).degree, d)

    def test_bound(self):
        rnd = random.Random(6)
        p = random_polynomial(ZZ, 50, rnd, 3)
        self.assertLessEqual(p.norm_max(), 3)

    def test_reproducible(self):
        self.assertEqual(random_polynomial(ZZ, 20, random.Random(7)), random_polynomial(ZZ, 20, random.Random(7)))
