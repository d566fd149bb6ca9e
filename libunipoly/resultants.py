#!/usr/bin/env python3
#
#   Polynomial remainder sequences, resultants and subresultants
#
#   Implements the Fundamental Theorem of Resultant Theory in the formulation of
#       L. Ducos, "Optimizations of the subresultant algorithm"
#       W. S. Brown, J. F. Traub, "On Euclid's algorithm and the theory of subresultants"
#

import threading

from libunipoly.division import divide_and_remainder
from libunipoly.univariate import UnivariatePolynomial

class PolynomialRemainderSequence:
    """
    Generalized Euclidean algorithm. At every step polynomials quot, rem and scalars alpha, beta are computed so that

        alpha_i * r_(i - 2) = quot_(i - 1) * r_(i - 1) + beta_i * r_i

    where r_0, r_1 are the inputs ordered by decreasing degree. Subclasses choose alpha and beta.
    """

    def __init__(self, a : UnivariatePolynomial, b : UnivariatePolynomial):
        a.check_compatible(b)
        self.a = a
        self.b = b
        self.ring = a.ring
        self.remainders = []
        self.quotients = []
        self.alphas = []
        self.betas = []

        if a.degree >= b.degree:
            self.remainders += [a, b]
            self.swap = False
        else:
            self.remainders += [b, a]
            # both degrees are odd => odd permutation of the Sylvester matrix rows
            self.swap = a.degree % 2 == 1 and b.degree % 2 == 1

        self._subresultants = None
        self._lock = threading.Lock()

    def next_alpha(self):
        raise NotImplementedError()

    def next_beta(self, remainder : UnivariatePolynomial):
        raise NotImplementedError()

    def _step(self):
        i = len(self.remainders)
        dividend = self.remainders[i - 2].clone()
        divider = self.remainders[i - 1]

        alpha = self.next_alpha()
        dividend.multiply(alpha)

        qd = divide_and_remainder(dividend, divider, False)
        if qd is None:
            raise RuntimeError("exact division is not possible")

        quotient, remainder = qd
        if remainder.is_zero():
            return remainder

        beta = self.next_beta(remainder)
        if remainder.divide_or_none(beta) is None:
            raise RuntimeError("exact division is not possible")

        self.alphas.append(alpha)
        self.betas.append(beta)
        self.quotients.append(quotient)
        self.remainders.append(remainder)
        return remainder

    def run(self):
        # one of the inputs is zero
        if self.last_remainder().is_zero():
            return self
        while not self._step().is_zero():
            pass
        return self

    def __len__(self):
        return len(self.remainders)

    def last_remainder(self) -> UnivariatePolynomial:
        return self.remainders[-1]

    def gcd(self) -> UnivariatePolynomial:
        """
        GCD of the inputs: monic over fields, otherwise the primitive part of the last remainder scaled by the gcd of
        the contents of the inputs
        """
        if self.a.is_zero():
            return self.b.clone()
        if self.b.is_zero():
            return self.a.clone()

        if self.a.is_over_field():
            return self.last_remainder().clone().monic()

        r = self.last_remainder().clone().primitive_part_same_sign()
        return r.multiply(self.ring.gcd(self.a.content(), self.b.content()))

    def degree_diff(self, i : int) -> int:
        """
        n_i - n_(i + 1)
        """
        return self.remainders[i].degree - self.remainders[i + 1].degree

    def _flip_sign(self, i, di):
        return di % 2 == 1 and (self.remainders[0].degree - self.remainders[i + 1].degree + i + 1) % 2 == 1

    def fundamental_nonzero_subresultants(self) -> list:
        """
        Scalar subresultants S_(n_1), S_(n_2), ... for the degrees occurring in the sequence, from the general
        Fundamental Theorem for arbitrary alpha and beta
        """
        ring = self.ring
        # largest subresultant
        subresultant = ring.pow(self.remainders[1].lc(), self.degree_diff(0))
        subresultants = [subresultant]

        for i in range(1, len(self.remainders) - 1):
            di = self.degree_diff(i)
            rho = ring.pow(ring.multiply(self.remainders[i + 1].lc(), self.remainders[i].lc()), di)
            den = ring.one()
            for j in range(1, i + 1):
                rho = ring.multiply(rho, ring.pow(self.betas[j - 1], di))
                den = ring.multiply(den, ring.pow(self.alphas[j - 1], di))
            if self._flip_sign(i, di):
                rho = ring.negate(rho)
            subresultant = ring.divide_exact(ring.multiply(subresultant, rho), den)
            subresultants.append(subresultant)
        return subresultants

    def nonzero_subresultants(self) -> list:
        return self.fundamental_nonzero_subresultants()

    def subresultants(self) -> list:
        """
        Dense list of scalar subresultants, the i-th element is the subresultant of degree i
        """
        with self._lock:
            if self._subresultants is None:
                ring = self.ring
                nonzero = self.nonzero_subresultants()
                if self.swap:
                    nonzero = [ring.negate(s) for s in nonzero]
                subresultants = [ring.zero() for _ in range(self.remainders[1].degree + 1)]
                for i in range(1, len(self.remainders)):
                    subresultants[self.remainders[i].degree] = nonzero[i - 1]
                self._subresultants = subresultants
            return self._subresultants

    def resultant(self):
        return self.subresultants()[0]

class ClassicalPRS(PolynomialRemainderSequence):
    """
    Euclidean division over fields, alpha = beta = 1
    """

    def next_alpha(self):
        return self.ring.one()

    def next_beta(self, remainder):
        return self.ring.one()

    def nonzero_subresultants(self):
        ring = self.ring
        subresultant = ring.pow(self.remainders[1].lc(), self.degree_diff(0))
        subresultants = [subresultant]

        for i in range(1, len(self.remainders) - 1):
            di = self.degree_diff(i)
            rho = ring.pow(ring.multiply(self.remainders[i + 1].lc(), self.remainders[i].lc()), di)
            if self._flip_sign(i, di):
                rho = ring.negate(rho)
            subresultant = ring.multiply(subresultant, rho)
            subresultants.append(subresultant)
        return subresultants

class PseudoPRS(PolynomialRemainderSequence):
    """
    Pseudo-division, alpha = lc(r_(i - 1))^(n_(i - 2) - n_(i - 1) + 1) and beta = 1
    """

    def next_alpha(self):
        i = len(self.remainders)
        lc = self.remainders[i - 1].lc()
        deg = self.remainders[i - 2].degree - self.remainders[i - 1].degree
        return self.ring.pow(lc, deg + 1)

    def next_beta(self, remainder):
        return self.ring.one()

class PrimitivePRS(PseudoPRS):
    """
    Pseudo-division followed by removal of the content
    """

    def next_beta(self, remainder):
        return remainder.content()

class ReducedPRS(PseudoPRS):
    """
    Reduced pseudo-division, beta is the previous alpha
    """

    def next_beta(self, remainder):
        return self.alphas[-1] if len(self.alphas) != 0 else self.ring.one()

    def nonzero_subresultants(self):
        ring = self.ring
        subresultant = ring.pow(self.remainders[1].lc(), self.degree_diff(0))
        subresultants = [subresultant]

        for i in range(1, len(self.remainders) - 1):
            di = self.degree_diff(i)
            rho = ring.pow(self.remainders[i + 1].lc(), di)
            den = ring.pow(self.remainders[i].lc(), self.degree_diff(i - 1) * di)
            subresultant = ring.divide_exact(ring.multiply(subresultant, rho), den)
            if self._flip_sign(i, di):
                subresultant = ring.negate(subresultant)
            subresultants.append(subresultant)
        return subresultants

class SubresultantPRS(PseudoPRS):
    """
    Subresultant sequence, the remainders are (up to sign) the subresultant polynomials
    """

    def __init__(self, a, b):
        super().__init__(a, b)
        self.psis = []

    def next_beta(self, remainder):
        ring = self.ring
        i = len(self.remainders)
        lc = ring.one() if i == 2 else self.remainders[i - 2].lc()
        if i == 2:
            psi = ring.negate(ring.one())
        else:
            prev_psi = self.psis[-1]
            deg = self.remainders[i - 3].degree - self.remainders[i - 2].degree
            f = ring.pow(ring.negate(lc), deg)
            if 1 - deg < 0:
                psi = ring.divide_exact(f, ring.pow(prev_psi, deg - 1))
            else:
                psi = ring.multiply(f, ring.pow(prev_psi, 1 - deg))
        self.psis.append(psi)
        deg = self.remainders[i - 2].degree - self.remainders[i - 1].degree
        return ring.negate(ring.multiply(lc, ring.pow(psi, deg)))

    def _eij(self, i, j):
        e = self.degree_diff(j - 1)
        for k in range(j, i + 1):
            e *= 1 - self.degree_diff(k)
        return e

    def nonzero_subresultants(self):
        ring = self.ring
        subresultant = ring.pow(self.remainders[1].lc(), self.degree_diff(0))
        subresultants = [subresultant]

        for i in range(1, len(self.remainders) - 1):
            di = self.degree_diff(i)
            rho = ring.pow(self.remainders[i + 1].lc(), di)
            den = ring.one()
            for k in range(1, i + 1):
                deg = -di * self._eij(i - 1, k)
                if deg >= 0:
                    rho = ring.multiply(rho, ring.pow(self.remainders[k].lc(), deg))
                else:
                    den = ring.multiply(den, ring.pow(self.remainders[k].lc(), -deg))
            subresultant = ring.divide_exact(ring.multiply(subresultant, rho), den)
            subresultants.append(subresultant)
        return subresultants

def classical_prs(a, b) -> ClassicalPRS:
    return ClassicalPRS(a, b).run()

def pseudo_prs(a, b) -> PseudoPRS:
    return PseudoPRS(a, b).run()

def primitive_prs(a, b) -> PrimitivePRS:
    return PrimitivePRS(a, b).run()

def reduced_prs(a, b) -> ReducedPRS:
    return ReducedPRS(a, b).run()

def subresultant_prs(a, b) -> SubresultantPRS:
    return SubresultantPRS(a, b).run()

def _default_prs(a, b):
    if a.is_over_field():
        return classical_prs(a, b)
    return subresultant_prs(a, b)

def resultant(a : UnivariatePolynomial, b : UnivariatePolynomial):
    """
    Resultant of a and b, classical sequence over fields and subresultant sequence otherwise
    """
    return _default_prs(a, b).resultant()

def subresultants(a : UnivariatePolynomial, b : UnivariatePolynomial) -> list:
    return _default_prs(a, b).subresultants()

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF, ZZ
from libunipoly.division import divide_exact
from libunipoly.linalg import subresultant_matrix, sylvester_matrix
from libunipoly.random_polynomials import random_polynomial

RING_RULES = [pseudo_prs, primitive_prs, reduced_prs, subresultant_prs]
FIELD_RULES = [classical_prs] + RING_RULES

class TestResultants(unittest.TestCase):

    def test_sylvester_scenario(self):
        F = GF(7)
        a = UnivariatePolynomial(F, [1, 2, 0, 1])
        b = UnivariatePolynomial(F, [1, 0, 1])
        prs = classical_prs(a, b)
        # number of division steps
        self.assertLessEqual(len(prs) - 2, min(a.degree, b.degree) + 1)
        self.assertEqual(prs.resultant(), sylvester_matrix(a, b).det())
        self.assertEqual(prs.resultant(), 2)

        za, zb = a.as_symmetric(), b.as_symmetric()
        for rule in RING_RULES:
            self.assertEqual(rule(za, zb).resultant(), 2)

    def test_constant_operand(self):
        a = UnivariatePolynomial(ZZ, [1, 2, 0, 1])
        c = UnivariatePolynomial(ZZ, [3])
        self.assertEqual(resultant(a, c), 27)
        self.assertEqual(resultant(c, a), 27)

    def test_zero_operand(self):
        a = UnivariatePolynomial(ZZ, [1, 2, 0, 1])
        z = UnivariatePolynomial.zero(ZZ)
        prs = subresultant_prs(a, z)
        self.assertEqual(len(prs), 2)
        self.assertEqual(prs.gcd(), a)
        self.assertEqual(subresultant_prs(z, a).gcd(), a)
        self.assertEqual(prs.resultant(), 0)

    def test_recurrence(self):
        rnd = random.Random(21)
        for _ in range(20):
            a = random_polynomial(ZZ, rnd.randint(3, 7), rnd, 10)
            b = random_polynomial(ZZ, rnd.randint(1, 6), rnd, 10)
            for rule in RING_RULES:
                prs = rule(a, b)
                for i in range(2, len(prs)):
                    lhs = prs.remainders[i - 2] * prs.alphas[i - 2]
                    rhs = prs.quotients[i - 2] * prs.remainders[i - 1] + prs.remainders[i] * prs.betas[i - 2]
                    self.assertEqual(lhs, rhs)
                    self.assertFalse(ZZ.is_zero(prs.alphas[i - 2]))
                    self.assertFalse(ZZ.is_zero(prs.betas[i - 2]))

    def test_sign_symmetry(self):
        rnd = random.Random(22)
        for _ in range(30):
            a = random_polynomial(ZZ, rnd.randint(1, 7), rnd, 10)
            b = random_polynomial(ZZ, rnd.randint(1, 7), rnd, 10)
            sign = -1 if (a.degree * b.degree) % 2 == 1 else 1
            for rule in RING_RULES:
                self.assertEqual(rule(a, b).resultant(), sign * rule(b, a).resultant())

    def test_closed_forms(self):
        rnd = random.Random(23)
        F = GF(17)
        for ring, rules in [(ZZ, RING_RULES), (F, FIELD_RULES)]:
            for _ in range(30):
                a = random_polynomial(ring, rnd.randint(1, 8), rnd, 10)
                b = random_polynomial(ring, rnd.randint(1, 8), rnd, 10)
                for rule in rules:
                    prs = rule(a, b)
                    self.assertEqual(prs.nonzero_subresultants(), prs.fundamental_nonzero_subresultants())

    def test_rules_agree(self):
        rnd = random.Random(24)
        for _ in range(30):
            a = random_polynomial(ZZ, rnd.randint(1, 7), rnd, 10)
            b = random_polynomial(ZZ, rnd.randint(1, 7), rnd, 10)
            expected = subresultant_prs(a, b).subresultants()
            for rule in RING_RULES:
                self.assertEqual(rule(a, b).subresultants(), expected)

    def test_against_minors(self):
        rnd = random.Random(25)
        for ring in [ZZ, GF(101)]:
            for _ in range(20):
                n = rnd.randint(1, 5)
                a = random_polynomial(ring, n + rnd.randint(0, 3), rnd, 10)
                b = random_polynomial(ring, n, rnd, 10)
                subs = subresultants(a, b)
                self.assertEqual(len(subs), b.degree + 1)
                self.assertEqual(subs[0], sylvester_matrix(a, b).det())
                for j in range(b.degree + 1):
                    self.assertEqual(subs[j], subresultant_matrix(a, b, j).det())

    def test_defective_sequence(self):
        # remainder degrees 4, 3, 1, 0
        a = UnivariatePolynomial(ZZ, [1, 0, 0, 0, 1])
        b = UnivariatePolynomial(ZZ, [2, 0, 0, 1])
        prs = subresultant_prs(a, b)
        self.assertEqual([r.degree for r in prs.remainders], [4, 3, 1, 0])
        subs = prs.subresultants()
        self.assertEqual(len(subs), 4)
        self.assertEqual(subs[2], 0)
        self.assertEqual(subs[3], 1)
        for j in range(4):
            self.assertEqual(subs[j], subresultant_matrix(a, b, j).det())

    def test_gcd(self):
        rnd = random.Random(26)
        F = GF(101)
        for ring, rules in [(ZZ, RING_RULES), (F, FIELD_RULES)]:
            for _ in range(20):
                f = random_polynomial(ring, rnd.randint(1, 3), rnd, 10)
                a = f * random_polynomial(ring, rnd.randint(0, 4), rnd, 10)
                b = f * random_polynomial(ring, rnd.randint(0, 4), rnd, 10)
                for rule in rules:
                    g = rule(a, b).gcd()
                    self.assertIsNotNone(divide_exact(a, g))
                    self.assertIsNotNone(divide_exact(b, g))
                    self.assertIsNotNone(divide_exact(g, f))
                    if ring.is_field():
                        self.assertTrue(g.is_monic())
