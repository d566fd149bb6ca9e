#!/usr/bin/env python3
#
#   Quadratic Hensel lifting of modular factorizations
#
#   J. von zur Gathen, J. Gerhard, "Modern Computer Algebra", Algorithm 15.10 (Hensel step) and 15.17 (multifactor
#   lifting)
#

import logging

from libunipoly.basic_types import ZZ, ModularRing, prod
from libunipoly.division import divide_and_remainder
from libunipoly.gcd import extended_euclid
from libunipoly.univariate import UnivariatePolynomial

logger = logging.getLogger(__name__)

def lifted_modulus(modulus : int, bound : int):
    """
    Smallest k such that modulus^(2^k) >= bound, together with modulus^(2^k)
    """
    k = 0
    lifted = modulus
    while lifted < bound:
        lifted *= lifted
        k += 1
    return k, lifted

def hensel_step(f : UnivariatePolynomial, g, h, s, t):
    """
    Given f = g*h and s*g + t*h = 1 modulo m, with h monic and deg f = deg g + deg h, returns g*, h*, s*, t* with the
    same relations modulo m^2 and g* = g, h* = h, s* = s, t* = t modulo m.

    f is an integer polynomial, g, h, s, t are polynomials over ModularRing(m).
    """
    m = g.ring.modulus
    R = ModularRing(m * m)
    f, g, h, s, t = (p.set_ring(R) for p in (f, g, h, s, t))

    e = f - g * h
    q, r = divide_and_remainder(s * e, h, False)
    g_star = g + t * e + q * g
    h_star = h + r

    b = s * g_star + t * h_star - 1
    c, d = divide_and_remainder(s * b, h_star, False)
    s_star = s - d
    t_star = t - t * b - c * g_star

    assert f == g_star * h_star
    return g_star, h_star, s_star, t_star

def lift_pair(f : UnivariatePolynomial, g, h, iterations : int):
    """
    Lifts f = g*h mod p (h monic) to a factorization modulo p^(2^iterations)
    """
    _, s, t = extended_euclid(g, h)
    for _ in range(iterations):
        g, h, s, t = hensel_step(f, g, h, s, t)
    return g, h

def _lift(poly, factors, iterations, lifted_ring):
    if len(factors) == 1:
        return [poly.set_ring(lifted_ring).monic()]

    split = len(factors) // 2
    g = prod([factors[0].create_constant(poly.lc())] + factors[:split])
    h = prod(factors[split:])

    g, h = lift_pair(poly, g, h, iterations)
    return _lift(g.set_ring(ZZ), factors[:split], iterations, lifted_ring) \
         + _lift(h.set_ring(ZZ), factors[split:], iterations, lifted_ring)

def lift_factorization(modulus : int, bound : int, poly : UnivariatePolynomial, factors : list) -> list:
    """
    Lifts the factorization poly = lc(poly) * prod(factors) mod `modulus` of an integer polynomial into a
    factorization modulo modulus^(2^k), with k the smallest number of doublings for which modulus^(2^k) >= bound.

    The factors must be monic, pairwise coprime modulo the prime `modulus`, and lc(poly) must be invertible. The
    lifted factors are monic and ordered as the input factors.
    """
    iterations, lifted = lifted_modulus(modulus, bound)
    logger.debug("Lifting %d factors from %d in %d Hensel steps", len(factors), modulus, iterations)

    lifted_ring = ModularRing(lifted)
    if iterations == 0:
        return [f.set_ring(lifted_ring) for f in factors]

    result = _lift(poly, factors, iterations, lifted_ring)
    assert poly.set_ring(lifted_ring) == prod([UnivariatePolynomial.constant(lifted_ring, poly.lc())] + result)
    return result

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF

class TestHensel(unittest.TestCase):

    def test_lifted_modulus(self):
        self.assertEqual(lifted_modulus(7, 7), (0, 7))
        self.assertEqual(lifted_modulus(7, 10), (1, 49))
        self.assertEqual(lifted_modulus(3, 100), (3, 6561))

    def test_step(self):
        F = GF(7)
        f = UnivariatePolynomial(ZZ, [-2, 0, 1])
        g = UnivariatePolynomial(F, [3, 1])
        h = UnivariatePolynomial(F, [4, 1])
        g, h = lift_pair(f, g, h, 1)
        R = ModularRing(49)
        self.assertEqual(g.ring, R)
        self.assertEqual(g * h, f.set_ring(R))
        # the lifted roots are the 7-adic square roots of 2 modulo 49
        self.assertEqual({g.cc(), h.cc()}, {10, 39})

    def test_lift_factorization(self):
        F = GF(11)
        x = UnivariatePolynomial.monomial(ZZ, 1, 1)
        poly = (3 * x + 5) * (x ** 2 + 1) * (x - 7) * (x ** 3 + 2 * x + 9)
        image = poly.set_ring(F)
        lc = image.lc()
        factors = [(x - 7).set_ring(F), (x ** 2 + 1).set_ring(F), (x ** 3 + 2 * x + 9).set_ring(F),
                   (3 * x + 5).set_ring(F).monic()]
        self.assertEqual(prod(factors).multiply(lc), image)

        lifted = lift_factorization(11, 10 ** 12, poly, factors)
        k, m = lifted_modulus(11, 10 ** 12)
        self.assertEqual(len(lifted), 4)
        for a, b in zip(lifted, factors):
            self.assertEqual(a.ring, ModularRing(m))
            self.assertTrue(a.is_monic())
            self.assertEqual(a.set_ring(F), b)
        # monic integer factors lift to themselves
        self.assertEqual(lifted[0], (x - 7).set_ring(ModularRing(m)))
        self.assertEqual(lifted[1], (x ** 2 + 1).set_ring(ModularRing(m)))

    def test_random(self):
        rnd = random.Random(61)
        for p in [5, 13, 101]:
            F = GF(p)
            x = UnivariatePolynomial.monomial(ZZ, 1, 1)
            for _ in range(5):
                roots = rnd.sample(range(p), 4)
                poly = prod([x - r for r in roots]).multiply(1 + p * rnd.randint(1, 5)).add(p * rnd.randint(1, 50))
                factors = [(x - r).set_ring(F) for r in roots]
                lifted = lift_factorization(p, 10 ** 20, poly, factors)
                R = lifted[0].ring
                self.assertEqual(prod(lifted).multiply(R.value_of(poly.lc())), poly.set_ring(R))
