#!/usr/bin/env python3
#
#   Factor decompositions: constant factor times a product of (factor, multiplicity) pairs
#

from libunipoly.univariate import UnivariatePolynomial

class FactorDecomposition:
    """
    constant_factor * prod(factors[i] ** exponents[i])

    The constant factor is a polynomial of degree 0, non-constant polynomials are kept as factors. For the
    distinct-degree stage of finite field factorization the exponent slot holds the degree of the irreducible
    components instead of a multiplicity.
    """

    def __init__(self, constant_factor : UnivariatePolynomial, factors=None, exponents=None):
        assert constant_factor.is_constant()
        self.constant_factor = constant_factor
        self.factors = list(factors or [])
        self.exponents = list(exponents or [1] * len(self.factors))
        assert len(self.factors) == len(self.exponents)

    @staticmethod
    def empty(poly : UnivariatePolynomial):
        return FactorDecomposition(poly.create_one())

    @staticmethod
    def one_factor(constant_factor, factor, exponent=1):
        return FactorDecomposition.empty(factor).set_constant_factor(constant_factor).add_factor(factor, exponent)

    def add_factor(self, factor : UnivariatePolynomial, exponent : int):
        if factor.is_constant():
            self.constant_factor = self.constant_factor * factor ** exponent
            return self
        self.factors.append(factor)
        self.exponents.append(exponent)
        return self

    def set_constant_factor(self, constant_factor : UnivariatePolynomial):
        assert constant_factor.is_constant()
        self.constant_factor = constant_factor
        return self

    def __len__(self):
        return len(self.factors)

    def __getitem__(self, i):
        return self.factors[i]

    def exponent(self, i):
        return self.exponents[i]

    def __iter__(self):
        return zip(self.factors, self.exponents)

    def is_trivial(self):
        return len(self.factors) <= 1

    def multiply(self) -> UnivariatePolynomial:
        """
        The product constant_factor * prod(f^e)
        """
        result = self.constant_factor.clone()
        for f,e in self:
            result.multiply(f ** e)
        return result

    def multiply_ignoring_exponents(self) -> UnivariatePolynomial:
        """
        The product constant_factor * prod(f), for decompositions whose exponent slots are not multiplicities
        """
        result = self.constant_factor.clone()
        for f in self.factors:
            result.multiply(f)
        return result

    def canonical(self):
        """
        Copy with the pairs in a deterministic order, by degree, exponent and coefficients
        """
        pairs = sorted(self, key=lambda fe: (fe[0].degree, fe[1], fe[0].coefficients()))
        return FactorDecomposition(self.constant_factor, [f for f,_ in pairs], [e for _,e in pairs])

    def __eq__(self, other):
        if not isinstance(other, FactorDecomposition):
            return NotImplemented
        a, b = self.canonical(), other.canonical()
        return a.constant_factor == b.constant_factor and a.factors == b.factors and a.exponents == b.exponents

    def __str__(self):
        terms = [f"({self.constant_factor})"]
        for f,e in self:
            terms.append(f"({f})" if e == 1 else f"({f})^{{{e}}}")
        return " * ".join(terms)

    def __repr__(self):
        return f"FactorDecomposition({self.constant_factor!r}, {self.factors!r}, {self.exponents!r})"

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libunipoly.basic_types import GF, ZZ

class TestFactorDecomposition(unittest.TestCase):

    def test_multiply(self):
        x_plus_1 = UnivariatePolynomial(ZZ, [1, 1])
        x_minus_1 = UnivariatePolynomial(ZZ, [-1, 1])
        d = FactorDecomposition.empty(x_plus_1)
        d.add_factor(x_plus_1, 2).add_factor(x_minus_1, 1).set_constant_factor(UnivariatePolynomial(ZZ, [-3]))
        self.assertEqual(len(d), 2)
        self.assertEqual(d[1], x_minus_1)
        self.assertEqual(d.exponent(0), 2)
        self.assertEqual(d.multiply(), -3 * x_plus_1 ** 2 * x_minus_1)
        self.assertEqual(d.multiply_ignoring_exponents(), -3 * x_plus_1 * x_minus_1)
        self.assertFalse(d.is_trivial())

    def test_constant_absorbed(self):
        p = UnivariatePolynomial(GF(7), [1, 1])
        d = FactorDecomposition.one_factor(UnivariatePolynomial(GF(7), [3]), p)
        d.add_factor(UnivariatePolynomial(GF(7), [2]), 3)
        self.assertEqual(len(d), 1)
        self.assertTrue(d.is_trivial())
        self.assertEqual(d.constant_factor, 3 * 8)

    def test_canonical(self):
        a = UnivariatePolynomial(ZZ, [1, 0, 1])
        b = UnivariatePolynomial(ZZ, [1, 1])
        c = UnivariatePolynomial(ZZ, [-1, 1])
        one = UnivariatePolynomial.one(ZZ)
        d1 = FactorDecomposition(one, [a, b, c])
        d2 = FactorDecomposition(one, [c, a, b])
        self.assertEqual(d1, d2)
        self.assertEqual(d2.canonical().factors, [c, b, a])
        self.assertNotEqual(d1, FactorDecomposition(one, [a, b, c], [1, 2, 1]))
