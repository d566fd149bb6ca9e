#!/usr/bin/env python3
#
#   Factorization of univariate polynomials over prime fields and over the integers
#
#   Over GF(p): square-free, distinct-degree and equal-degree (Cantor-Zassenhaus) stages.
#   Over Z: factorization modulo a suitable prime, Hensel lifting past the Mignotte bound and reconstruction of the
#   true factors from subsets of the lifted modular factors.
#

import logging
import math
import random
from itertools import combinations

from sympy import nextprime

from libunipoly.basic_types import ZZ, ModularRing, prod, safe_multiply
from libunipoly.factor_decomposition import FactorDecomposition
from libunipoly.finite_field import cantor_zassenhaus, distinct_degree_factorization
from libunipoly.hensel import lift_factorization, lifted_modulus
from libunipoly.square_free import is_square_free, square_free_factorization
from libunipoly.univariate import UnivariatePolynomial

logger = logging.getLogger(__name__)

# number of random primes tried over Z, the one giving the fewest modular factors is lifted
N_MODULAR_FACTORIZATION_TRIALS = 2

# random primes are drawn from [LOWER_RND_MODULUS_BOUND, UPPER_RND_MODULUS_BOUND)
LOWER_RND_MODULUS_BOUND = 1 << 24
UPPER_RND_MODULUS_BOUND = 1 << 30

# coefficient bounds below this are handled with word-size moduli
MAX_SUPPORTED_MODULUS = (1 << 62) - 1

MAX_MODULUS_SEARCH_ATTEMPTS = 1000

MAX_PRIME_GAP = 382
MIGNOTTE_MAX_32 = 2 * (2 ** 31 - 1) - 10 * MAX_PRIME_GAP

def _factor_out_monomial(poly):
    i = poly.first_nonzero_position()
    return poly.clone().shift_left(i), i

def _add_monomial(result, poly, exponent):
    if exponent > 0:
        result.add_factor(poly.create_monomial(1, 1), exponent)

########################################################################################################################
#   Finite fields
########################################################################################################################

def factor_over_finite_field(poly : UnivariatePolynomial, rnd : random.Random = None) -> FactorDecomposition:
    """
    Factors a polynomial over a prime field into monic irreducibles, the constant factor is the leading coefficient.
    A power x^n dividing poly is reported as the factor x with multiplicity n.
    """
    if not poly.is_over_finite_field():
        raise ValueError(f"Polynomial over a finite field is expected, got {poly.ring}")
    if rnd is None:
        rnd = random.Random()

    if poly.is_constant():
        return FactorDecomposition(poly.clone())
    lc = poly.lc_as_poly()
    if poly.is_monomial():
        return FactorDecomposition.one_factor(lc, poly.create_monomial(1, 1), poly.degree)
    if poly.degree == 1:
        return FactorDecomposition.one_factor(lc, poly.clone().monic())

    result = FactorDecomposition.empty(poly)
    rest, exponent = _factor_out_monomial(poly)
    _add_monomial(result, poly, exponent)

    for sqf_factor, sqf_exponent in square_free_factorization(rest):
        for ddf_factor, degree in distinct_degree_factorization(sqf_factor):
            for irreducible in cantor_zassenhaus(ddf_factor, degree, rnd):
                result.add_factor(irreducible.monic(), sqf_exponent)

    result.set_constant_factor(lc)
    assert result.multiply() == poly
    return result

########################################################################################################################
#   Integers
########################################################################################################################

def reconstruct_factors(poly : UnivariatePolynomial, modular_factors : list) -> FactorDecomposition:
    """
    Recovers the irreducible integer factors of the primitive square-free `poly` from its monic modular factors,
    lifted modulo some m beyond twice the coefficient bound of the factors of poly.

    Subsets of the modular factors are tried in order of increasing size. The product of a subset scaled by the
    leading coefficient of what is left of poly is taken to balanced representatives; its primitive part is a true
    factor if it and the complementary product multiply back to the rest of poly.
    """
    if len(modular_factors) <= 1:
        return FactorDecomposition.one_factor(poly.create_one(), poly.clone())

    modular_ring = modular_factors[0].ring
    mod_indexes = list(range(len(modular_factors)))
    result = FactorDecomposition.empty(poly)
    f_rest = poly.clone()
    s = 1
    while 2 * s <= len(mod_indexes):
        for indexes in combinations(mod_indexes, s):
            m_factor = prod([UnivariatePolynomial.constant(modular_ring, f_rest.lc())]
                            + [modular_factors[i] for i in indexes])
            factor = m_factor.as_symmetric().primitive_part()

            # cheap necessary conditions before the full product
            if factor.cc() == 0 or f_rest.lc() % factor.lc() != 0 or f_rest.cc() % factor.cc() != 0:
                continue

            rest_indexes = [i for i in mod_indexes if i not in indexes]
            m_rest = prod([UnivariatePolynomial.constant(modular_ring, f_rest.lc() // factor.lc())]
                          + [modular_factors[i] for i in rest_indexes])
            rest = m_rest.as_symmetric().primitive_part()

            if factor.lc() * rest.lc() != f_rest.lc() or factor.cc() * rest.cc() != f_rest.cc():
                continue
            if rest * factor == f_rest:
                logger.debug("True factor %s from modular factors %s", factor, indexes)
                mod_indexes = rest_indexes
                result.add_factor(factor, 1)
                f_rest = rest
                break
        else:
            s += 1

    if not f_rest.is_constant():
        result.add_factor(f_rest, 1)
    return result

def _is_good_image(poly, image):
    return image.cc() != 0 and image.degree == poly.degree and is_square_free(image)

def _modulus_lower_bound(bound2):
    if bound2 < MIGNOTTE_MAX_32:
        # a single prime beyond the bound, no lifting
        return bound2
    # a prime p with p^2 >= bound and one Hensel step
    return math.isqrt(bound2 - 1) + 1

def _word_size_modular_factors(poly, bound2, rnd):
    modulus = _modulus_lower_bound(bound2) - 1
    for _ in range(MAX_MODULUS_SEARCH_ATTEMPTS):
        modulus = int(nextprime(modulus))
        image = poly.set_ring(ModularRing(modulus))
        if _is_good_image(poly, image):
            break
        logger.debug("Rejected modulus %d", modulus)
    else:
        raise ArithmeticError(f"No square-free image of {poly} after {MAX_MODULUS_SEARCH_ATTEMPTS} primes")

    # overflow guard, the lifted modulus has to stay a machine word
    iterations, _ = lifted_modulus(modulus, bound2)
    assert iterations <= 1
    lifted = modulus
    for _ in range(iterations):
        lifted = safe_multiply(lifted, lifted)
    logger.debug("Word-size modulus %d, lifted modulus %d", modulus, lifted)

    return modulus, factor_over_finite_field(image, rnd)

def _random_modular_image(poly, rnd):
    for _ in range(MAX_MODULUS_SEARCH_ATTEMPTS):
        modulus = int(nextprime(rnd.randrange(LOWER_RND_MODULUS_BOUND, UPPER_RND_MODULUS_BOUND)))
        image = poly.set_ring(ModularRing(modulus))
        if _is_good_image(poly, image):
            return modulus, image
        logger.debug("Rejected modulus %d", modulus)
    raise ArithmeticError(f"No square-free image of {poly} after {MAX_MODULUS_SEARCH_ATTEMPTS} random primes")

def factor_square_free(poly : UnivariatePolynomial, rnd : random.Random = None) -> FactorDecomposition:
    """
    Factors a primitive square-free integer polynomial with positive leading coefficient
    """
    assert poly.content() == 1 and poly.signum() > 0
    if rnd is None:
        rnd = random.Random()

    bound2 = 2 * poly.mignotte_bound() * abs(poly.lc())
    if bound2 < MAX_SUPPORTED_MODULUS:
        modulus, modular = _word_size_modular_factors(poly, bound2, rnd)
    else:
        modulus, modular = None, None
        for _ in range(N_MODULAR_FACTORIZATION_TRIALS):
            trial_modulus, image = _random_modular_image(poly, rnd)
            trial = factor_over_finite_field(image, rnd)
            if len(trial) == 1:
                # irreducible modulo a prime, hence over Z
                modular = trial
                modulus = trial_modulus
                break
            if modular is None or len(modular) > len(trial):
                modular = trial
                modulus = trial_modulus
            if len(modular) <= 3:
                break

    logger.debug("%d modular factors of degree %d polynomial modulo %d", len(modular), poly.degree, modulus)
    if len(modular) == 1:
        return FactorDecomposition.one_factor(poly.create_one(), poly.clone())

    lifted = lift_factorization(modulus, bound2, poly, modular.factors)
    return reconstruct_factors(poly, lifted)

def factor_over_integers(poly : UnivariatePolynomial, rnd : random.Random = None) -> FactorDecomposition:
    """
    Factors an integer polynomial into irreducible primitive factors with positive leading coefficients. The constant
    factor is the content, negative if the leading coefficient of poly is. A power x^n dividing poly is reported as
    the factor x with multiplicity n.
    """
    if poly.ring != ZZ:
        raise ValueError(f"Integer polynomial is expected, got {poly.ring}")
    if rnd is None:
        rnd = random.Random()

    if poly.is_constant():
        return FactorDecomposition(poly.clone())

    content = poly.content()
    if poly.signum() < 0:
        content = -content
    constant = poly.create_constant(content)
    if poly.is_monomial():
        return FactorDecomposition.one_factor(constant, poly.create_monomial(1, 1), poly.degree)
    if poly.degree == 1:
        return FactorDecomposition.one_factor(constant, poly.clone().divide_exact(content))

    result = FactorDecomposition.empty(poly)
    rest, exponent = _factor_out_monomial(poly)
    rest.divide_exact(content)
    _add_monomial(result, poly, exponent)

    for sqf_factor, sqf_exponent in square_free_factorization(rest):
        if sqf_factor.degree == 1:
            result.add_factor(sqf_factor, sqf_exponent)
            continue
        for irreducible, _ in factor_square_free(sqf_factor, rnd):
            result.add_factor(irreducible, sqf_exponent)

    result.set_constant_factor(constant)
    assert result.multiply() == poly
    return result

def factor(poly : UnivariatePolynomial, rnd : random.Random = None) -> FactorDecomposition:
    """
    Factors over a prime field or over the integers, depending on the ring of poly
    """
    if poly.is_over_finite_field():
        return factor_over_finite_field(poly, rnd)
    if poly.ring == ZZ:
        return factor_over_integers(poly, rnd)
    raise ValueError(f"Factorization is not supported over {poly.ring}")

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libunipoly.basic_types import GF, QQ
from libunipoly.random_polynomials import random_polynomial

class TestFiniteFieldFactorization(unittest.TestCase):

    def test_factor(self):
        F = GF(5)
        x = UnivariatePolynomial.monomial(F, 1, 1)
        # x^2 + 2 and x^3 + x + 1 are irreducible over GF(5)
        poly = 3 * (x + 1) ** 2 * (x ** 2 + 2) * x ** 3 * (x ** 3 + x + 1)
        result = factor_over_finite_field(poly, random.Random(71))
        self.assertEqual(result, FactorDecomposition(UnivariatePolynomial(F, [3]),
            [x + 1, x ** 2 + 2, x, x ** 3 + x + 1], [2, 1, 3, 1]))

    def test_trivial(self):
        F = GF(7)
        self.assertEqual(len(factor_over_finite_field(UnivariatePolynomial(F, [4]))), 0)
        d = factor_over_finite_field(UnivariatePolynomial(F, [1, 3]))
        self.assertEqual(d.constant_factor, 3)
        self.assertEqual(d[0], UnivariatePolynomial(F, [5, 1]))
        d = factor_over_finite_field(UnivariatePolynomial.monomial(F, 2, 5))
        self.assertEqual((d.constant_factor, d[0], d.exponent(0)), (2, UnivariatePolynomial(F, [0, 1]), 5))

    def test_random(self):
        rnd = random.Random(72)
        for p in [2, 3, 7, 101]:
            F = GF(p)
            for _ in range(10):
                poly = random_polynomial(F, rnd.randint(1, 5), rnd)
                for _ in range(rnd.randint(1, 3)):
                    poly.multiply(random_polynomial(F, rnd.randint(1, 5), rnd) ** rnd.randint(1, 3))
                result = factor_over_finite_field(poly, rnd)
                self.assertEqual(result.multiply(), poly)
                for f,_ in result:
                    self.assertTrue(f.is_monic())
                    self.assertTrue(is_square_free(f))

    def test_wrong_ring(self):
        with self.assertRaises(ValueError):
            factor_over_finite_field(UnivariatePolynomial(ZZ, [1, 0, 1]))

class TestIntegerFactorization(unittest.TestCase):

    def setUp(self):
        self.x = UnivariatePolynomial.monomial(ZZ, 1, 1)
        self.one = UnivariatePolynomial.one(ZZ)

    def test_x4_minus_1(self):
        x = self.x
        result = factor_over_integers(x ** 4 - 1, random.Random(81))
        self.assertEqual(result, FactorDecomposition(self.one, [x - 1, x + 1, x ** 2 + 1]))

    def test_irreducible(self):
        # x^4 + 1 splits modulo every prime
        x = self.x
        result = factor_over_integers(x ** 4 + 1, random.Random(82))
        self.assertEqual(result, FactorDecomposition(self.one, [x ** 4 + 1]))

    def test_hensel_lift_reconstruction(self):
        x = self.x
        F = GF(7)
        poly = x ** 2 - 2
        # x^2 - 2 = (x + 3)(x + 4) mod 7
        lifted = lift_factorization(7, 24, poly, [(x + 3).set_ring(F), (x + 4).set_ring(F)])
        self.assertEqual(lifted[0].ring, ModularRing(49))
        result = reconstruct_factors(poly, lifted)
        self.assertEqual(result, FactorDecomposition(self.one, [poly]))

    def test_reconstruct(self):
        x = self.x
        poly = (2 * x + 1) * (x ** 2 - 3) * (x - 5)
        bound2 = 2 * poly.mignotte_bound() * poly.lc()
        F = GF(13)
        # x^2 - 3 = (x - 4)(x + 4) mod 13
        modular = [(x - 4).set_ring(F), (x + 7).set_ring(F), (x - 5).set_ring(F), (x + 4).set_ring(F)]
        lifted = lift_factorization(13, bound2, poly, modular)
        result = reconstruct_factors(poly, lifted)
        self.assertEqual(result, FactorDecomposition(self.one, [2 * x + 1, x ** 2 - 3, x - 5]))

    def test_multiplicities(self):
        x = self.x
        poly = -6 * x ** 2 * (x - 1) ** 3 * (2 * x + 3) ** 2 * (x ** 2 + 1) * (x ** 4 + x + 1)
        result = factor(poly, random.Random(83))
        self.assertEqual(result, FactorDecomposition(UnivariatePolynomial(ZZ, [-6]),
            [x, x - 1, 2 * x + 3, x ** 2 + 1, x ** 4 + x + 1], [2, 3, 2, 1, 1]))

    def test_modulus_lower_bound(self):
        for bound2 in [MIGNOTTE_MAX_32, 4804291969, 4804291976, 4804291970, MAX_SUPPORTED_MODULUS - 1]:
            lower = _modulus_lower_bound(bound2)
            self.assertGreaterEqual(lower * lower, bound2)
            self.assertLess((lower - 1) * (lower - 1), bound2)
        self.assertEqual(_modulus_lower_bound(1000), 1000)

    def test_single_hensel_step(self):
        x = self.x
        # isqrt(bound2) = 69313 is prime with 69313^2 < bound2
        poly = x ** 2 + x + 600536496
        bound2 = 2 * poly.mignotte_bound()
        self.assertEqual(bound2, 4804291976)
        self.assertTrue(MIGNOTTE_MAX_32 <= bound2 < MAX_SUPPORTED_MODULUS)
        self.assertEqual(nextprime(math.isqrt(bound2) - 1), 69313)
        result = factor_over_integers(poly, random.Random(86))
        self.assertEqual(result, FactorDecomposition(self.one, [poly]))

        # x^2 + 3x + 300000 is irreducible, its discriminant being negative
        a = x + 1000
        b = x ** 2 + 3 * x + 300000
        poly = a * b
        self.assertTrue(MIGNOTTE_MAX_32 <= 2 * poly.mignotte_bound() < MAX_SUPPORTED_MODULUS)
        result = factor_over_integers(poly, random.Random(87))
        self.assertEqual(result.multiply(), poly)
        self.assertEqual(result, FactorDecomposition(self.one, [a, b]))

        poly = -9145845 * x ** 7 + 28786212 * x ** 6 - 30010929 * x ** 5 - 15541914 * x ** 4 + 26042562 * x
        self.assertEqual(factor_over_integers(poly, random.Random(88)).multiply(), poly)

    def test_large_coefficients(self):
        x = self.x
        a = x ** 3 + 10 ** 12 * x + 1
        b = x ** 2 + 3 * x - 10 ** 12
        poly = a * b
        self.assertGreaterEqual(2 * poly.mignotte_bound(), MAX_SUPPORTED_MODULUS)
        result = factor_over_integers(poly, random.Random(84))
        self.assertEqual(result, FactorDecomposition(self.one, [a, b]))

    def test_trivial(self):
        x = self.x
        d = factor_over_integers(UnivariatePolynomial(ZZ, [-5]))
        self.assertEqual((len(d), d.constant_factor), (0, -5))
        d = factor_over_integers(-3 * x ** 3)
        self.assertEqual((d.constant_factor, d[0], d.exponent(0)), (-3, x, 3))
        d = factor_over_integers(-6 * x - 4)
        self.assertEqual((d.constant_factor, d[0]), (-2, 3 * x + 2))

    def test_random(self):
        rnd = random.Random(85)
        for _ in range(15):
            poly = random_polynomial(ZZ, rnd.randint(1, 4), rnd, 20)
            for _ in range(rnd.randint(1, 3)):
                poly.multiply(random_polynomial(ZZ, rnd.randint(1, 4), rnd, 20) ** rnd.randint(1, 2))
            result = factor_over_integers(poly, rnd)
            self.assertEqual(result.multiply(), poly)
            for f,_ in result:
                self.assertEqual(f.content(), 1)
                self.assertGreater(f.lc(), 0)

    def test_wrong_ring(self):
        with self.assertRaises(ValueError):
            factor_over_integers(UnivariatePolynomial(GF(5), [1, 0, 1]))
        with self.assertRaises(ValueError):
            factor(UnivariatePolynomial(QQ, [1, 0, 1]))
