#!/usr/bin/env python3
#
#   Dense univariate polynomials over a coefficient ring
#

import math

import numpy as np

from libunipoly.basic_types import LONG_MAX_VALUE, ZZ, CoefficientRing, ModularRing, Rational

# switch to classical multiplication inside Karatsuba recursion
KARATSUBA_THRESHOLD = 1024
# when to use Karatsuba multiplication / squaring
MUL_CLASSICAL_THRESHOLD = 256 * 256
SQUARE_CLASSICAL_THRESHOLD = 128 * 128

########################################################################################################################
#   Multiplication kernels
########################################################################################################################

def _zeros(ring, n):
    return [ring.zero() for _ in range(n)]

def _multiply_classical(ring, result, a, a_from, a_to, b, b_from, b_to):
    if a_to - a_from > b_to - b_from:
        a, a_from, a_to, b, b_from, b_to = b, b_from, b_to, a, a_from, a_to

    add, mul, is_zero = ring.add, ring.multiply, ring.is_zero
    b_len = b_to - b_from
    for i in range(a_to - a_from):
        c = a[a_from + i]
        if is_zero(c):
            continue
        for j in range(b_len):
            result[i + j] = add(result[i + j], mul(c, b[b_from + j]))

def _sum_halves(ring, f, f_from, f_mid, f_to):
    # f0 + f1
    s = list(f[f_from:f_mid])
    s.extend(_zeros(ring, max(f_mid - f_from, f_to - f_mid) - len(s)))
    for i in range(f_mid, f_to):
        s[i - f_mid] = ring.add(s[i - f_mid], f[i])
    return s

def _combine(ring, f0g0, mid, f1g1, split, length):
    # mid - f0g0 - f1g1, then f0g0 + mid * x^split + f1g1 * x^(2 * split)
    if len(mid) < max(len(f0g0), len(f1g1)):
        mid.extend(_zeros(ring, max(len(f0g0), len(f1g1)) - len(mid)))
    for i in range(len(f0g0)):
        mid[i] = ring.subtract(mid[i], f0g0[i])
    for i in range(len(f1g1)):
        mid[i] = ring.subtract(mid[i], f1g1[i])

    result = f0g0 + _zeros(ring, length - len(f0g0))
    for i in range(len(mid)):
        result[i + split] = ring.add(result[i + split], mid[i])
    for i in range(len(f1g1)):
        result[i + 2 * split] = ring.add(result[i + 2 * split], f1g1[i])
    return result

def _multiply_karatsuba(ring, f, f_from, f_to, g, g_from, g_to):
    if f_from >= f_to or g_from >= g_to:
        return []

    mul = ring.multiply
    f_len, g_len = f_to - f_from, g_to - g_from

    # single element in f
    if f_len == 1:
        return [mul(f[f_from], g[i]) for i in range(g_from, g_to)]
    # single element in g
    if g_len == 1:
        return [mul(g[g_from], f[i]) for i in range(f_from, f_to)]
    # both linear
    if f_len == 2 and g_len == 2:
        return [mul(f[f_from], g[g_from]),
                ring.add(mul(f[f_from], g[g_from + 1]), mul(f[f_from + 1], g[g_from])),
                mul(f[f_from + 1], g[g_from + 1])]
    # switch to classical
    if f_len * g_len < KARATSUBA_THRESHOLD:
        result = _zeros(ring, f_len + g_len - 1)
        _multiply_classical(ring, result, g, g_from, g_to, f, f_from, f_to)
        return result

    if f_len < g_len:
        return _multiply_karatsuba(ring, g, g_from, g_to, f, f_from, f_to)

    split = (f_len + 1) // 2

    # g is too short to be split
    if g_from + split >= g_to:
        f0g = _multiply_karatsuba(ring, f, f_from, f_from + split, g, g_from, g_to)
        f1g = _multiply_karatsuba(ring, f, f_from + split, f_to, g, g_from, g_to)

        result = f0g + _zeros(ring, f_len + g_len - 1 - len(f0g))
        for i in range(len(f1g)):
            result[i + split] = ring.add(result[i + split], f1g[i])
        return result

    f_mid, g_mid = f_from + split, g_from + split
    f0g0 = _multiply_karatsuba(ring, f, f_from, f_mid, g, g_from, g_mid)
    f1g1 = _multiply_karatsuba(ring, f, f_mid, f_to, g, g_mid, g_to)

    f0_plus_f1 = _sum_halves(ring, f, f_from, f_mid, f_to)
    g0_plus_g1 = _sum_halves(ring, g, g_from, g_mid, g_to)
    mid = _multiply_karatsuba(ring, f0_plus_f1, 0, len(f0_plus_f1), g0_plus_g1, 0, len(g0_plus_g1))

    return _combine(ring, f0g0, mid, f1g1, split, f_len + g_len - 1)

def _square_classical(ring, result, a, a_from, a_to):
    add, mul, is_zero = ring.add, ring.multiply, ring.is_zero
    n = a_to - a_from
    for i in range(n):
        c = a[a_from + i]
        if is_zero(c):
            continue
        for j in range(n):
            result[i + j] = add(result[i + j], mul(c, a[a_from + j]))

def _square_karatsuba(ring, f, f_from, f_to):
    if f_from >= f_to:
        return []

    mul = ring.multiply
    f_len = f_to - f_from

    if f_len == 1:
        return [mul(f[f_from], f[f_from])]
    if f_len == 2:
        cross = mul(f[f_from], f[f_from + 1])
        return [mul(f[f_from], f[f_from]), ring.add(cross, cross), mul(f[f_from + 1], f[f_from + 1])]
    # switch to classical
    if f_len * f_len < KARATSUBA_THRESHOLD:
        result = _zeros(ring, 2 * f_len - 1)
        _square_classical(ring, result, f, f_from, f_to)
        return result

    split = (f_len + 1) // 2
    f_mid = f_from + split
    f0g0 = _square_karatsuba(ring, f, f_from, f_mid)
    f1g1 = _square_karatsuba(ring, f, f_mid, f_to)

    f0_plus_f1 = _sum_halves(ring, f, f_from, f_mid, f_to)
    mid = _square_karatsuba(ring, f0_plus_f1, 0, len(f0_plus_f1))

    return _combine(ring, f0g0, mid, f1g1, split, 2 * f_len - 1)

def multiply_classical(ring : CoefficientRing, a : list, b : list) -> list:
    """
    Classical O(n*m) product of two coefficient lists (constant term first)
    """
    if len(a) == 0 or len(b) == 0:
        return []
    result = _zeros(ring, len(a) + len(b) - 1)
    _multiply_classical(ring, result, a, 0, len(a), b, 0, len(b))
    return result

def multiply_karatsuba(ring : CoefficientRing, a : list, b : list) -> list:
    return _multiply_karatsuba(ring, a, 0, len(a), b, 0, len(b))

def square_classical(ring : CoefficientRing, a : list) -> list:
    if len(a) == 0:
        return []
    result = _zeros(ring, 2 * len(a) - 1)
    _square_classical(ring, result, a, 0, len(a))
    return result

def square_karatsuba(ring : CoefficientRing, a : list) -> list:
    return _square_karatsuba(ring, a, 0, len(a))

def _multiply_safe(ring, a, a_len, b, b_len):
    # switch algorithms
    if a_len * b_len <= MUL_CLASSICAL_THRESHOLD:
        result = _zeros(ring, a_len + b_len - 1)
        _multiply_classical(ring, result, a, 0, a_len, b, 0, b_len)
        return result
    return _multiply_karatsuba(ring, a, 0, a_len, b, 0, b_len)

def _square_safe(ring, a, a_len):
    # switch algorithms
    if a_len * a_len <= SQUARE_CLASSICAL_THRESHOLD:
        result = _zeros(ring, 2 * a_len - 1)
        _square_classical(ring, result, a, 0, a_len)
        return result
    return _square_karatsuba(ring, a, 0, a_len)

def fits_word_accumulator(n_terms : int, modulus : int) -> bool:
    """
    Whether a sum of n_terms products of residues mod `modulus` fits into a signed 64-bit accumulator
    """
    return n_terms * (modulus - 1) ** 2 <= LONG_MAX_VALUE

def _convolve_word(a, b, modulus):
    prod = np.convolve(np.array(a, dtype=np.int64), np.array(b, dtype=np.int64)) % modulus
    return prod.tolist()

def _multiply_mod(a, a_len, b, b_len, modulus):
    # products of residues are accumulated unreduced and reduced once
    if a_len * b_len <= MUL_CLASSICAL_THRESHOLD and fits_word_accumulator(min(a_len, b_len), modulus):
        return _convolve_word(a[:a_len], b[:b_len], modulus)
    return [c % modulus for c in _multiply_safe(ZZ, a, a_len, b, b_len)]

def _square_mod(a, a_len, modulus):
    if a_len * a_len <= SQUARE_CLASSICAL_THRESHOLD and fits_word_accumulator(a_len, modulus):
        return _convolve_word(a[:a_len], a[:a_len], modulus)
    return [c % modulus for c in _square_safe(ZZ, a, a_len)]

########################################################################################################################
#   Polynomial
########################################################################################################################

class UnivariatePolynomial:
    """
    Mutable dense univariate polynomial. `data[i]` is the coefficient of x^i and `degree` points to the last non-zero
    coefficient (0 for the zero polynomial); every slot of `data` beyond `degree` holds the ring's zero.

    Most arithmetic methods modify the polynomial in place and return it, the operators (+, -, *, **) work on a
    clone.
    """

    def __init__(self, ring : CoefficientRing, coeffs):
        self.ring = ring
        self.data = [ring.value_of(c) for c in coeffs]
        if len(self.data) == 0:
            self.data.append(ring.zero())
        self.degree = len(self.data) - 1
        self._fix_degree()

    @classmethod
    def _create_unsafe(cls, ring, data, degree=None):
        poly = cls.__new__(cls)
        poly.ring = ring
        poly.data = data
        if degree is None:
            poly.degree = len(data) - 1
            poly._fix_degree()
        else:
            poly.degree = degree
        return poly

    @staticmethod
    def zero(ring : CoefficientRing):
        return UnivariatePolynomial._create_unsafe(ring, [ring.zero()], 0)

    @staticmethod
    def one(ring : CoefficientRing):
        return UnivariatePolynomial._create_unsafe(ring, [ring.one()], 0)

    @staticmethod
    def constant(ring : CoefficientRing, value):
        return UnivariatePolynomial(ring, [value])

    @staticmethod
    def monomial(ring : CoefficientRing, coefficient, exponent : int):
        """
        coefficient * x^exponent
        """
        data = _zeros(ring, exponent + 1)
        data[exponent] = ring.value_of(coefficient)
        return UnivariatePolynomial._create_unsafe(ring, data)

    @staticmethod
    def linear(ring : CoefficientRing, cc, lc):
        """
        cc + lc * x
        """
        return UnivariatePolynomial(ring, [cc, lc])

    def create_zero(self):
        return UnivariatePolynomial.zero(self.ring)

    def create_one(self):
        return UnivariatePolynomial.one(self.ring)

    def create_constant(self, value):
        return UnivariatePolynomial.constant(self.ring, value)

    def create_monomial(self, coefficient, exponent : int):
        return UnivariatePolynomial.monomial(self.ring, coefficient, exponent)

    def clone(self):
        return UnivariatePolynomial._create_unsafe(self.ring, list(self.data), self.degree)

    def set_ring(self, ring : CoefficientRing):
        """
        A copy of this polynomial with coefficients converted into `ring`
        """
        return UnivariatePolynomial(ring, self.data[:self.degree + 1])

    def as_symmetric(self):
        """
        Integer polynomial formed from the balanced representatives (-modulus/2 < c <= modulus/2) of the coefficients
        of this modular polynomial
        """
        if not isinstance(self.ring, ModularRing):
            raise ValueError(f"Not a modular ring: {self.ring}")
        return UnivariatePolynomial._create_unsafe(ZZ, [self.ring.sym_mod(c) for c in self.data[:self.degree + 1]])

    ####################################################################################################################
    #   Accessors
    ####################################################################################################################

    def __getitem__(self, i : int):
        if i > self.degree:
            return self.ring.zero()
        return self.data[i]

    def __len__(self):
        return self.degree + 1

    def coefficients(self):
        return self.data[:self.degree + 1]

    def lc(self):
        """
        Leading coefficient
        """
        return self.data[self.degree]

    def cc(self):
        """
        Constant coefficient
        """
        return self.data[0]

    def lc_as_poly(self):
        return self.create_constant(self.lc())

    def first_nonzero_position(self) -> int:
        if self.is_zero():
            return 0
        i = 0
        while self.ring.is_zero(self.data[i]):
            i += 1
        return i

    def is_zero(self):
        return self.degree == 0 and self.ring.is_zero(self.data[0])

    def is_one(self):
        return self.degree == 0 and self.ring.is_one(self.data[0])

    def is_monic(self):
        return self.ring.is_one(self.lc())

    def is_constant(self):
        return self.degree == 0

    def is_monomial(self):
        return all(self.ring.is_zero(c) for c in self.data[:self.degree])

    def signum(self):
        return self.ring.signum(self.lc())

    def is_over_field(self):
        return self.ring.is_field()

    def is_over_finite_field(self):
        return self.ring.is_finite_field()

    def check_compatible(self, other):
        if self.ring != other.ring:
            raise ValueError(f"Mixing polynomials from different rings: {self.ring!r} and {other.ring!r}")

    ####################################################################################################################
    #   Degree bookkeeping
    ####################################################################################################################

    def ensure_capacity(self, desired_degree : int):
        """
        Makes room for a polynomial of `desired_degree`, raising `degree` to it if it is lower
        """
        if self.degree < desired_degree:
            self.degree = desired_degree
        if len(self.data) < desired_degree + 1:
            self.data.extend(_zeros(self.ring, desired_degree + 1 - len(self.data)))

    def _fix_degree(self):
        # strip zero leading coefficients
        i = self.degree
        while i >= 0 and self.ring.is_zero(self.data[i]):
            i -= 1
        if i < 0:
            i = 0
        if i != self.degree:
            self.degree = i
            for j in range(i + 1, len(self.data)):
                self.data[j] = self.ring.zero()

    def to_zero(self):
        for i in range(self.degree + 1):
            self.data[i] = self.ring.zero()
        self.degree = 0
        return self

    def set(self, other):
        self.data = list(other.data)
        self.degree = other.degree
        return self

    def shift_left(self, offset : int):
        """
        Drops the `offset` lowest coefficients, i.e. divides by x^offset
        """
        if offset == 0:
            return self
        if offset > self.degree:
            return self.to_zero()
        n = self.degree - offset + 1
        self.data[:n] = self.data[offset:self.degree + 1]
        for i in range(n, self.degree + 1):
            self.data[i] = self.ring.zero()
        self.degree -= offset
        return self

    def shift_right(self, offset : int):
        """
        Multiplies by x^offset
        """
        if offset == 0 or self.is_zero():
            return self
        self.data = _zeros(self.ring, offset) + self.data[:self.degree + 1]
        self.degree += offset
        return self

    def truncate(self, new_degree : int):
        """
        Drops all terms of degree higher than `new_degree`
        """
        if new_degree >= self.degree:
            return self
        for i in range(new_degree + 1, self.degree + 1):
            self.data[i] = self.ring.zero()
        self.degree = new_degree
        self._fix_degree()
        return self

    def reverse(self):
        self.data[:self.degree + 1] = self.data[self.degree::-1]
        self._fix_degree()
        return self

    ####################################################################################################################
    #   Content and primitive part
    ####################################################################################################################

    def content(self):
        if self.degree == 0:
            return self.data[0]
        g = self.data[self.degree]
        for i in range(self.degree - 1, -1, -1):
            g = self.ring.gcd(g, self.data[i])
        return g

    def content_as_poly(self):
        return self.create_constant(self.content())

    def primitive_part(self):
        """
        Divides out the content so that the result has a positive leading coefficient. Returns None (and leaves this
        polynomial in an unspecified state) if the division is not exact.
        """
        if self.is_zero():
            return self
        content = self.content()
        if self.ring.signum(self.lc()) * self.ring.signum(content) < 0:
            content = self.ring.negate(content)
        if self.ring.is_minus_one(content):
            return self.negate()
        return self._primitive_part(content)

    def primitive_part_same_sign(self):
        """
        Divides out the content keeping the sign of the content
        """
        if self.is_zero():
            return self
        return self._primitive_part(self.content())

    def _primitive_part(self, content):
        if self.ring.is_one(content):
            return self
        return self.divide_or_none(content)

    ####################################################################################################################
    #   Arithmetic
    ####################################################################################################################

    def evaluate(self, point):
        """
        Evaluates at `point` via Horner's rule
        """
        point = self.ring.value_of(point)
        if self.ring.is_zero(point):
            return self.cc()

        add, mul = self.ring.add, self.ring.multiply
        res = self.ring.zero()
        for i in range(self.degree, -1, -1):
            res = add(mul(res, point), self.data[i])
        return res

    def __call__(self, point):
        return self.evaluate(point)

    def derivative(self):
        if self.is_constant():
            return self.create_zero()
        ring = self.ring
        return UnivariatePolynomial._create_unsafe(
            ring, [ring.multiply(self.data[i], ring.value_of(i)) for i in range(1, self.degree + 1)])

    def add(self, other):
        if not isinstance(other, UnivariatePolynomial):
            self.data[0] = self.ring.add(self.data[0], self.ring.value_of(other))
            self._fix_degree()
            return self

        self.check_compatible(other)
        if other.is_zero():
            return self
        if self.is_zero():
            return self.set(other)

        self.ensure_capacity(other.degree)
        for i in range(other.degree + 1):
            self.data[i] = self.ring.add(self.data[i], other.data[i])
        self._fix_degree()
        return self

    def add_monomial(self, coefficient, exponent : int):
        """
        this + coefficient * x^exponent
        """
        coefficient = self.ring.value_of(coefficient)
        if self.ring.is_zero(coefficient):
            return self
        self.ensure_capacity(exponent)
        self.data[exponent] = self.ring.add(self.data[exponent], coefficient)
        self._fix_degree()
        return self

    def add_scaled(self, other, factor):
        """
        this + factor * other
        """
        self.check_compatible(other)
        factor = self.ring.value_of(factor)
        if other.is_zero() or self.ring.is_zero(factor):
            return self

        self.ensure_capacity(other.degree)
        add, mul = self.ring.add, self.ring.multiply
        for i in range(other.degree + 1):
            self.data[i] = add(self.data[i], mul(factor, other.data[i]))
        self._fix_degree()
        return self

    def subtract(self, other):
        if not isinstance(other, UnivariatePolynomial):
            self.data[0] = self.ring.subtract(self.data[0], self.ring.value_of(other))
            self._fix_degree()
            return self

        self.check_compatible(other)
        if other.is_zero():
            return self
        if self.is_zero():
            return self.set(other).negate()

        self.ensure_capacity(other.degree)
        for i in range(other.degree + 1):
            self.data[i] = self.ring.subtract(self.data[i], other.data[i])
        self._fix_degree()
        return self

    def subtract_scaled(self, other, factor, exponent : int = 0):
        """
        this - factor * x^exponent * other
        """
        self.check_compatible(other)
        factor = self.ring.value_of(factor)
        if other.is_zero() or self.ring.is_zero(factor):
            return self

        self.ensure_capacity(other.degree + exponent)
        sub, mul = self.ring.subtract, self.ring.multiply
        for i in range(other.degree + exponent, exponent - 1, -1):
            self.data[i] = sub(self.data[i], mul(factor, other.data[i - exponent]))
        self._fix_degree()
        return self

    def negate(self):
        for i in range(self.degree + 1):
            if not self.ring.is_zero(self.data[i]):
                self.data[i] = self.ring.negate(self.data[i])
        return self

    def _multiply_scalar(self, factor):
        if self.ring.is_one(factor):
            return self
        if self.ring.is_zero(factor):
            return self.to_zero()
        for i in range(self.degree + 1):
            self.data[i] = self.ring.multiply(self.data[i], factor)
        # zero divisors of a composite modulus can kill the leading term
        self._fix_degree()
        return self

    def multiply(self, other):
        """
        Multiplies in place by a scalar or by another polynomial
        """
        if not isinstance(other, UnivariatePolynomial):
            return self._multiply_scalar(self.ring.value_of(other))

        self.check_compatible(other)
        if self.is_zero():
            return self
        if other.is_zero():
            return self.to_zero()
        if other is self:
            return self.square()
        if other.degree == 0:
            return self._multiply_scalar(other.data[0])
        if self.degree == 0:
            factor = self.data[0]
            self.data = other.data[:other.degree + 1]
            self.degree = other.degree
            return self._multiply_scalar(factor)

        if isinstance(self.ring, ModularRing):
            self.data = _multiply_mod(self.data, self.degree + 1, other.data, other.degree + 1, self.ring.modulus)
        else:
            self.data = _multiply_safe(self.ring, self.data, self.degree + 1, other.data, other.degree + 1)
        self.degree += other.degree
        self._fix_degree()
        return self

    def square(self):
        if self.is_zero():
            return self
        if self.degree == 0:
            return self._multiply_scalar(self.data[0])

        if isinstance(self.ring, ModularRing):
            self.data = _square_mod(self.data, self.degree + 1, self.ring.modulus)
        else:
            self.data = _square_safe(self.ring, self.data, self.degree + 1)
        self.degree += self.degree
        self._fix_degree()
        return self

    def divide_or_none(self, factor):
        """
        Divides every coefficient by `factor`. Returns None if some coefficient is not exactly divisible, in which
        case the contents of this polynomial are destroyed; clone first if the original is still needed.
        """
        factor = self.ring.value_of(factor)
        if self.ring.is_zero(factor):
            raise ZeroDivisionError("Divide by zero")
        if self.ring.is_one(factor):
            return self
        for i in range(self.degree, -1, -1):
            q = self.ring.divide_or_none(self.data[i], factor)
            if q is None:
                return None
            self.data[i] = q
        return self

    def divide_exact(self, factor):
        if self.divide_or_none(factor) is None:
            raise ArithmeticError(f"Not divisible by {factor}")
        return self

    def monic(self):
        """
        Divides by the leading coefficient, None if that is not possible over the ring
        """
        if self.is_zero():
            return self
        return self.divide_or_none(self.lc())

    ####################################################################################################################
    #   Integer polynomials
    ####################################################################################################################

    def norm1(self):
        return sum(abs(c) for c in self.data[:self.degree + 1])

    def norm2(self):
        """
        Square root of the sum of the squares of the coefficients, rounded up
        """
        s = sum(c * c for c in self.data[:self.degree + 1])
        r = math.isqrt(s)
        return r if r * r == s else r + 1

    def norm_max(self):
        return max(abs(c) for c in self.data[:self.degree + 1])

    def mignotte_bound(self):
        """
        Mignotte's bound 2^degree * ||this||_2 on the coefficients of any factor of this integer polynomial
        """
        return (1 << self.degree) * self.norm2()

    ####################################################################################################################
    #   Operators
    ####################################################################################################################

    def __add__(self, other):
        return self.clone().add(other)

    __radd__ = __add__

    def __sub__(self, other):
        return self.clone().subtract(other)

    def __rsub__(self, other):
        return self.clone().negate().add(other)

    def __mul__(self, other):
        return self.clone().multiply(other)

    __rmul__ = __mul__

    def __neg__(self):
        return self.clone().negate()

    def __pow__(self, exponent : int):
        if exponent < 0:
            raise ValueError(f"Negative exponent {exponent}")
        result = self.create_one()
        k2p = self.clone()
        while exponent != 0:
            if exponent & 1:
                result.multiply(k2p)
            exponent >>= 1
            if exponent != 0:
                k2p.square()
        return result

    def __eq__(self, other):
        if isinstance(other, (int, Rational)):
            return self.degree == 0 and self.data[0] == self.ring.value_of(other)
        if not isinstance(other, UnivariatePolynomial):
            return NotImplemented
        if self.ring != other.ring or self.degree != other.degree:
            return False
        return self.data[:self.degree + 1] == other.data[:other.degree + 1]

    def __hash__(self):
        return hash((self.ring, tuple(self.data[:self.degree + 1])))

    def __str__(self):
        terms = []
        for i in range(self.degree, -1, -1):
            c = self.data[i]
            if self.ring.is_zero(c):
                continue
            if i == 0:
                terms.append(f"{c}")
            elif self.ring.is_one(c):
                terms.append("x" if i == 1 else f"x^{{{i}}}")
            else:
                terms.append(f"{c} x" if i == 1 else f"{c} x^{{{i}}}")
        if len(terms) == 0:
            return "0"
        return " + ".join(terms)

    def __repr__(self):
        return f"UnivariatePolynomial({self.ring!r}, {self.coefficients()!r})"

########################################################################################################################
#   Unit Tests
########################################################################################################################

import random
import unittest

from libunipoly.basic_types import GF, QQ

def _random_coeffs(rnd, ring, n):
    return [ring.rand_elem(rnd) for _ in range(n)]

class TestUnivariatePolynomial(unittest.TestCase):

    def test_degree(self):
        p = UnivariatePolynomial(ZZ, [1, 2, 0, 0])
        self.assertEqual(p.degree, 1)
        self.assertEqual(p.lc(), 2)
        self.assertEqual(p[5], 0)

        z = UnivariatePolynomial(ZZ, [0, 0, 0])
        self.assertTrue(z.is_zero())
        self.assertEqual(z.degree, 0)

        a = UnivariatePolynomial(ZZ, [1, 0, 1])
        self.assertTrue((a - a).is_zero())
        self.assertEqual(a - UnivariatePolynomial.monomial(ZZ, 1, 2), 1)
        self.assertEqual((a - UnivariatePolynomial.monomial(ZZ, 1, 2)).degree, 0)

    def test_incompatible_rings(self):
        a = UnivariatePolynomial(GF(7), [1, 2])
        b = UnivariatePolynomial(GF(11), [1, 2])
        with self.assertRaises(ValueError):
            a.clone().add(b)
        with self.assertRaises(ValueError):
            a * b

    def test_arithmetic(self):
        x = UnivariatePolynomial.monomial(ZZ, 1, 1)
        p = (x + 1) * (x - 1)
        self.assertEqual(p, UnivariatePolynomial(ZZ, [-1, 0, 1]))
        self.assertEqual(p ** 2, UnivariatePolynomial(ZZ, [1, 0, -2, 0, 1]))
        self.assertEqual(p.clone().add_scaled(x, 3), UnivariatePolynomial(ZZ, [-1, 3, 1]))
        self.assertEqual(p.clone().subtract_scaled(x, 2, 2), UnivariatePolynomial(ZZ, [-1, 0, 1, -2]))
        self.assertEqual(2 - x, UnivariatePolynomial(ZZ, [2, -1]))
        self.assertEqual(-p, UnivariatePolynomial(ZZ, [1, 0, -1]))

    def test_in_place(self):
        p = UnivariatePolynomial(ZZ, [1, 2, 3])
        q = p.multiply(2)
        self.assertIs(p, q)
        self.assertEqual(p, UnivariatePolynomial(ZZ, [2, 4, 6]))
        self.assertEqual(p.clone().shift_left(1), UnivariatePolynomial(ZZ, [4, 6]))
        self.assertEqual(p.clone().shift_right(2), UnivariatePolynomial(ZZ, [0, 0, 2, 4, 6]))
        self.assertEqual(p.clone().truncate(1), UnivariatePolynomial(ZZ, [2, 4]))
        self.assertEqual(p.clone().reverse(), UnivariatePolynomial(ZZ, [6, 4, 2]))
        self.assertTrue(p.clone().shift_left(5).is_zero())

    def test_content(self):
        p = UnivariatePolynomial(ZZ, [2, -4, 6])
        self.assertEqual(p.content(), 2)
        self.assertEqual(p.content_as_poly(), UnivariatePolynomial(ZZ, [2]))
        self.assertEqual(p.clone().primitive_part(), UnivariatePolynomial(ZZ, [1, -2, 3]))

        n = UnivariatePolynomial(ZZ, [4, 0, -6])
        self.assertEqual(n.clone().primitive_part(), UnivariatePolynomial(ZZ, [-2, 0, 3]))
        self.assertEqual(n.clone().primitive_part_same_sign(), UnivariatePolynomial(ZZ, [2, 0, -3]))

        c = UnivariatePolynomial(ZZ, [-5])
        self.assertEqual(c.content(), -5)
        self.assertEqual(c.clone().primitive_part(), 1)

    def test_divide_or_none(self):
        p = UnivariatePolynomial(ZZ, [2, 4, 7])
        self.assertIsNone(p.clone().divide_or_none(2))
        self.assertEqual(UnivariatePolynomial(ZZ, [2, 4, 8]).divide_or_none(2), UnivariatePolynomial(ZZ, [1, 2, 4]))
        with self.assertRaises(ZeroDivisionError):
            p.divide_or_none(0)
        self.assertTrue(UnivariatePolynomial(GF(7), [2, 4, 3]).monic().is_monic())

    def test_evaluate(self):
        p = UnivariatePolynomial(ZZ, [1, 2, 0, 1])
        self.assertEqual(p.evaluate(0), 1)
        self.assertEqual(p.evaluate(2), 13)
        self.assertEqual(p(-1), -2)
        self.assertEqual(UnivariatePolynomial(GF(7), [1, 2, 0, 1])(2), 6)

    def test_derivative(self):
        p = UnivariatePolynomial(ZZ, [1, 2, 0, 5])
        self.assertEqual(p.derivative(), UnivariatePolynomial(ZZ, [2, 0, 15]))
        self.assertTrue(UnivariatePolynomial(ZZ, [7]).derivative().is_zero())
        # x^7 has vanishing derivative in characteristic 7
        self.assertTrue(UnivariatePolynomial.monomial(GF(7), 1, 7).derivative().is_zero())

    def test_symmetric(self):
        p = UnivariatePolynomial(GF(7), [6, 3, 4])
        self.assertEqual(p.as_symmetric(), UnivariatePolynomial(ZZ, [-1, 3, -3]))
        self.assertEqual(p.as_symmetric().set_ring(GF(7)), p)
        with self.assertRaises(ValueError):
            UnivariatePolynomial(ZZ, [1]).as_symmetric()

    def test_mignotte(self):
        p = UnivariatePolynomial(ZZ, [-1, 0, 0, 0, 1])
        self.assertEqual(p.norm2(), 2)
        self.assertEqual(p.norm1(), 2)
        self.assertEqual(UnivariatePolynomial(ZZ, [3, -4, 1]).norm1(), 8)
        self.assertEqual(UnivariatePolynomial(ZZ, [3, -4, 1]).norm_max(), 4)
        self.assertEqual(p.mignotte_bound(), 32)
        self.assertEqual(UnivariatePolynomial(ZZ, [3, 4]).norm2(), 5)

    def test_rationals(self):
        p = UnivariatePolynomial(QQ, [Rational(1, 2), 3])
        self.assertEqual((p * p).lc(), Rational(9))
        self.assertEqual(p.clone().monic(), UnivariatePolynomial(QQ, [Rational(1, 6), 1]))

        x = UnivariatePolynomial.monomial(QQ, 1, 1)
        self.assertEqual(Rational(1, 2) * x, x * Rational(1, 2))
        self.assertEqual(Rational(1, 3) + x, x + Rational(1, 3))
        self.assertEqual(Rational(1, 3) - x, UnivariatePolynomial(QQ, [Rational(1, 3), -1]))
        self.assertEqual((Rational(2, 3) * (x + 1)).lc(), Rational(2, 3))

class TestMultiplication(unittest.TestCase):

    SIZES = [10, 100, 255, 256, 257, 1023, 1024, 1025]

    def test_classical_karatsuba_agree(self):
        rnd = random.Random(11)
        for n in self.SIZES:
            a = _random_coeffs(rnd, ZZ, n)
            b = _random_coeffs(rnd, ZZ, n)
            self.assertEqual(multiply_classical(ZZ, a, b), multiply_karatsuba(ZZ, a, b))
            self.assertEqual(square_classical(ZZ, a), square_karatsuba(ZZ, a))

    def test_classical_karatsuba_unbalanced(self):
        rnd = random.Random(12)
        F = GF(1000003)
        for n, m in [(1025, 100), (300, 7), (64, 2000), (513, 512)]:
            a = _random_coeffs(rnd, F, n)
            b = _random_coeffs(rnd, F, m)
            self.assertEqual(multiply_classical(F, a, b), multiply_karatsuba(F, a, b))

    def test_commutative_associative(self):
        rnd = random.Random(13)
        for ring in [ZZ, GF(65521), GF(2**61 - 1)]:
            for n, m, k in [(300, 200, 5), (20, 400, 30), (1, 260, 260)]:
                a = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, n))
                b = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, m))
                c = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, k))
                self.assertEqual(a * b, b * a)
                self.assertEqual((a * b) * c, a * (b * c))

    def test_associative_across_threshold(self):
        rnd = random.Random(16)
        for ring in [ZZ, GF(65521)]:
            # (300, 230, 3): a * b is Karatsuba, b * c classical
            # (250, 250, 20): (a * b) * c is classical throughout, a * (b * c) is Karatsuba
            for n, m, k in [(300, 230, 3), (250, 250, 20)]:
                a = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, n - 1) + [ring.one()])
                b = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, m - 1) + [ring.one()])
                c = UnivariatePolynomial(ring, _random_coeffs(rnd, ring, k - 1) + [ring.one()])
                self.assertEqual((a * b) * c, a * (b * c))
                self.assertEqual((a * c) * b, a * (b * c))
                ab = UnivariatePolynomial(ring, multiply_classical(ring, b.coefficients(), a.coefficients()))
                self.assertEqual(a * b, ab)
                self.assertEqual(b * a, ab)

    def test_modular_routes(self):
        rnd = random.Random(14)
        for p in [7, 65521, 2**31 - 1, 2**61 - 1]:
            F = GF(p)
            for n in [3, 100, 300]:
                a = _random_coeffs(rnd, F, n)
                b = _random_coeffs(rnd, F, n + 5)
                expected = multiply_classical(F, a, b)
                product = UnivariatePolynomial(F, a) * UnivariatePolynomial(F, b)
                self.assertEqual(product, UnivariatePolynomial(F, expected))
                self.assertEqual(UnivariatePolynomial(F, a) ** 2, UnivariatePolynomial(F, square_classical(F, a)))

    def test_square(self):
        rnd = random.Random(15)
        for n in [1, 2, 3, 129, 300]:
            a = UnivariatePolynomial(ZZ, _random_coeffs(rnd, ZZ, n))
            self.assertEqual(a.clone().square(), a * a.clone())
