#!/usr/bin/env python3
#
#   Division with remainder of univariate polynomials
#

from libunipoly.univariate import UnivariatePolynomial

def divide_and_remainder(dividend : UnivariatePolynomial, divider : UnivariatePolynomial, copy : bool = True):
    """
    Returns (quotient, remainder) with dividend = quotient * divider + remainder and deg remainder < deg divider, or
    None if some leading coefficient division is not exact over the coefficient ring.

    With copy=False the dividend is reused for the remainder (and for the quotient when the divider is a constant).
    """
    dividend.check_compatible(divider)
    if divider.is_zero():
        raise ZeroDivisionError("Divide by zero polynomial")

    ring = dividend.ring
    if dividend.degree < divider.degree:
        return dividend.create_zero(), (dividend.clone() if copy else dividend)

    if divider.degree == 0:
        q = (dividend.clone() if copy else dividend).divide_or_none(divider.lc())
        if q is None:
            return None
        return q, dividend.create_zero()

    remainder = dividend.clone() if copy else dividend
    quotient = [ring.zero() for _ in range(dividend.degree - divider.degree + 1)]
    lc = divider.lc()
    for i in range(len(quotient) - 1, -1, -1):
        if remainder.degree != divider.degree + i or remainder.is_zero():
            continue
        q = ring.divide_or_none(remainder.lc(), lc)
        if q is None:
            return None
        quotient[i] = q
        remainder.subtract_scaled(divider, q, i)

    return UnivariatePolynomial(ring, quotient), remainder

def quotient(dividend, divider, copy=True):
    qd = divide_and_remainder(dividend, divider, copy)
    return None if qd is None else qd[0]

def remainder(dividend, divider, copy=True):
    qd = divide_and_remainder(dividend, divider, copy)
    return None if qd is None else qd[1]

def divide_exact(dividend, divider, copy=True):
    """
    Quotient of an exact division, None if the divider does not divide the dividend
    """
    qd = divide_and_remainder(dividend, divider, copy)
    if qd is None or not qd[1].is_zero():
        return None
    return qd[0]

def pseudo_divide_and_remainder(dividend : UnivariatePolynomial, divider : UnivariatePolynomial, copy : bool = True):
    """
    Division of lc(divider)^(deg dividend - deg divider + 1) * dividend by divider, which is always exact over an
    integral domain
    """
    dividend.check_compatible(divider)
    if divider.is_zero():
        raise ZeroDivisionError("Divide by zero polynomial")
    if dividend.degree < divider.degree:
        return dividend.create_zero(), (dividend.clone() if copy else dividend)

    ring = dividend.ring
    factor = ring.pow(divider.lc(), dividend.degree - divider.degree + 1)
    return divide_and_remainder((dividend.clone() if copy else dividend).multiply(factor), divider, False)

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF, QQ, ZZ, Rational

class TestDivision(unittest.TestCase):

    def test_exact(self):
        a = UnivariatePolynomial(ZZ, [-1, 0, 0, 1])
        b = UnivariatePolynomial(ZZ, [-1, 1])
        q, r = divide_and_remainder(a, b)
        self.assertEqual(q, UnivariatePolynomial(ZZ, [1, 1, 1]))
        self.assertTrue(r.is_zero())
        self.assertEqual(divide_exact(a, q), b)
        self.assertIsNone(divide_exact(a, UnivariatePolynomial(ZZ, [1, 1])))
        # the dividend is untouched when copying
        self.assertEqual(a, UnivariatePolynomial(ZZ, [-1, 0, 0, 1]))

    def test_inexact_over_integers(self):
        a = UnivariatePolynomial(ZZ, [1, 0, 1])
        b = UnivariatePolynomial(ZZ, [1, 2])
        self.assertIsNone(divide_and_remainder(a, b))
        q, r = divide_and_remainder(a.set_ring(QQ), b.set_ring(QQ))
        self.assertEqual(q, UnivariatePolynomial(QQ, [Rational(-1, 4), Rational(1, 2)]))
        self.assertEqual(r, UnivariatePolynomial(QQ, [Rational(5, 4)]))

    def test_pseudo(self):
        a = UnivariatePolynomial(ZZ, [1, 0, 1])
        b = UnivariatePolynomial(ZZ, [1, 2])
        q, r = pseudo_divide_and_remainder(a, b)
        self.assertEqual(q, UnivariatePolynomial(ZZ, [-1, 2]))
        self.assertEqual(r, 5)

    def test_small_dividend(self):
        a = UnivariatePolynomial(ZZ, [3, 1])
        b = UnivariatePolynomial(ZZ, [1, 0, 1])
        q, r = divide_and_remainder(a, b)
        self.assertTrue(q.is_zero())
        self.assertEqual(r, a)

    def test_zero_divider(self):
        with self.assertRaises(ZeroDivisionError):
            divide_and_remainder(UnivariatePolynomial(ZZ, [1, 1]), UnivariatePolynomial.zero(ZZ))

    def test_random_field(self):
        rnd = random.Random(3)
        F = GF(17)
        for _ in range(100):
            a = UnivariatePolynomial(F, [F.rand_elem(rnd) for _ in range(rnd.randint(1, 20))])
            b = UnivariatePolynomial(F, [F.rand_elem(rnd) for _ in range(rnd.randint(1, 10))])
            if b.is_zero():
                continue
            q, r = divide_and_remainder(a, b)
            self.assertEqual(q * b + r, a)
            self.assertTrue(r.is_zero() or r.degree < b.degree)
            self.assertEqual(quotient(a, b), q)
            self.assertEqual(remainder(a, b), r)
