#!/usr/bin/env python3
#
#   Dense matrices over a coefficient ring, Sylvester matrices
#

from libunipoly.basic_types import CoefficientRing
from libunipoly.univariate import UnivariatePolynomial

class Matrix:

    def __init__(self, ring : CoefficientRing, rows, cols, entries=None):
        self.ring = ring
        self.rows = rows
        self.cols = cols
        if entries is None:
            self.entries = [ring.zero() for _ in range(rows * cols)]
        else:
            assert len(entries) == rows * cols
            self.entries = [ring.value_of(e) for e in entries]

    @staticmethod
    def zeros(ring, n, m=None):
        """
        n x m matrix of zeros
        """
        m = m or n
        return Matrix(ring, n, m)

    @staticmethod
    def ident(ring, n):
        """
        n x n identity matrix
        """
        return Matrix(ring, n, n, [ring.one() if i == j else ring.zero() for i in range(n) for j in range(n)])

    def copy(self):
        M = Matrix.__new__(Matrix)
        M.ring, M.rows, M.cols = self.ring, self.rows, self.cols
        M.entries = self.entries.copy()
        return M

    def is_zero(self):
        return all(self.ring.is_zero(e) for e in self.entries)

    def __str__(self):
        return "\n".join(", ".join(str(self[i,j]) for j in range(self.cols)) for i in range(self.rows))

    def __repr__(self):
        return f"Matrix({self.ring!r}, {self.rows}, {self.cols}, {self.entries!r})"

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return False
        if self.ring == other.ring and self.rows == other.rows and self.cols == other.cols:
            return self.entries == other.entries
        return False

    def __setitem__(self, i, v):
        r,c = i
        if r >= self.rows: raise IndexError("Row too large")
        if c >= self.cols: raise IndexError("Column too large")
        self.entries[r * self.cols + c] = v

    def __getitem__(self, i):
        r,c = i
        if r >= self.rows: raise IndexError("Row too large")
        if c >= self.cols: raise IndexError("Column too large")
        return self.entries[r * self.cols + c]

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            raise TypeError(f"Cannot multiply a matrix by {type(other)}")
        if self.ring != other.ring:
            raise ValueError(f"Mixing matrices from different rings: {self.ring!r} and {other.ring!r}")
        assert self.cols == other.rows

        ring = self.ring
        M = Matrix(ring, self.rows, other.cols)
        for i in range(self.rows):
            for j in range(other.cols):
                acc = ring.zero()
                for k in range(self.cols):
                    acc = ring.add(acc, ring.multiply(self[i,k], other[k,j]))
                M[i,j] = acc
        return M

    def row_swap(self, i, j):
        # swaps rows i and j
        for c in range(self.cols):
            self[i,c], self[j,c] = self[j,c], self[i,c]

    def det(self):
        """
        Fraction-free (Bareiss) elimination, every division is exact over an integral domain
        """
        assert self.rows == self.cols
        ring = self.ring
        n = self.rows
        if n == 0:
            return ring.one()

        A = self.copy()
        parity = 0
        prev = ring.one()
        for k in range(n - 1):
            if ring.is_zero(A[k,k]):
                for i in range(k + 1, n):
                    if not ring.is_zero(A[i,k]):
                        A.row_swap(k, i)
                        # flip parity
                        parity ^= 1
                        break
                else:
                    return ring.zero() # Singular input

            for i in range(k + 1, n):
                for j in range(k + 1, n):
                    num = ring.subtract(ring.multiply(A[i,j], A[k,k]), ring.multiply(A[i,k], A[k,j]))
                    A[i,j] = ring.divide_exact(num, prev)
            prev = A[k,k]

        det = A[n - 1,n - 1]
        return ring.negate(det) if parity else det

    def submatrix(self, row_indices, col_indices):
        assert len(set(row_indices)) == len(row_indices) , "Rows should be distinct"
        assert len(set(col_indices)) == len(col_indices) , "Cols should be distinct"

        M = Matrix(self.ring, len(row_indices), len(col_indices))
        for i in range(M.rows):
            for j in range(M.cols):
                M[i,j] = self[row_indices[i],col_indices[j]]
        return M

    def minor(self, row_indices, col_indices):
        assert len(row_indices) == len(col_indices) , "Submatrix should be square"
        return self.submatrix(row_indices, col_indices).det()

def _shifted_rows(M, row, poly, count):
    # coefficients from the leading one down, shifted one column per row
    for k in range(count):
        for i in range(poly.degree + 1):
            c = k + poly.degree - i
            if c < M.cols:
                M[row + k, c] = poly[i]
    return row + count

def sylvester_matrix(a : UnivariatePolynomial, b : UnivariatePolynomial) -> Matrix:
    """
    (deg a + deg b) square Sylvester matrix: deg b shifted rows of a followed by deg a shifted rows of b, whose
    determinant is the resultant of a and b
    """
    a.check_compatible(b)
    m, n = a.degree, b.degree
    M = Matrix(a.ring, m + n, m + n)
    row = _shifted_rows(M, 0, a, n)
    _shifted_rows(M, row, b, m)
    return M

def subresultant_matrix(a : UnivariatePolynomial, b : UnivariatePolynomial, j : int) -> Matrix:
    """
    Square matrix whose determinant is the j-th principal subresultant coefficient of a and b (deg a >= deg b >= j):
    the first deg a + deg b - 2j columns of the Sylvester matrix restricted to deg b - j rows of a and deg a - j rows
    of b
    """
    a.check_compatible(b)
    m, n = a.degree, b.degree
    assert m >= n and 0 <= j <= n
    size = m + n - 2 * j
    M = Matrix(a.ring, size, size)
    row = _shifted_rows(M, 0, a, n - j)
    _shifted_rows(M, row, b, m - j)
    return M

########################################################################################################################
#   Unit Tests
########################################################################################################################

import unittest

from libunipoly.basic_types import GF, ZZ, QQ, Rational

class TestMatrix(unittest.TestCase):
    def test_init(self):
        M = Matrix(ZZ, 2, 2, [
            1, 2,
            3, 4
        ])
        self.assertEqual(M[0,0], 1)
        self.assertEqual(M[0,1], 2)
        self.assertEqual(M[1,0], 3)
        self.assertEqual(M[1,1], 4)
        with self.assertRaises(IndexError):
            M[2,0]
        self.assertFalse(M.is_zero())

        Z = Matrix.zeros(ZZ, 2, 3)
        self.assertEqual((Z.rows, Z.cols), (2, 3))
        self.assertTrue(Z.is_zero())
        self.assertTrue((Matrix.zeros(ZZ, 2) * M).is_zero())
        self.assertEqual(Matrix.ident(ZZ, 2) * M, M)

    def test_det(self):
        M = Matrix(ZZ, 3, 3, [
            0, 1, 2,
            3, 4, 5,
            6, 7, 8
        ])

        self.assertEqual(M.det(), 0)
        self.assertEqual(M.minor((1,2),(1,2)), -3)
        self.assertEqual(M.minor((0,2),(0,2)), -12)

        M2 = Matrix(ZZ, 3,3, [
             4, -1,  3,
            -2,  1,  2,
            -1,  3, -3
        ])
        self.assertEqual(M2.det(), -43)
        self.assertEqual(Matrix.ident(ZZ, 4).det(), 1)

    def test_det_pivoting(self):
        M = Matrix(ZZ, 3, 3, [
            0, 2, 1,
            1, 0, 0,
            0, 0, 3
        ])
        self.assertEqual(M.det(), -6)

    def test_det_multiplicative(self):
        M1 = Matrix(QQ, 3,3, [
             2, -1, -2,
            -4,  6,  3,
            -4, -2,  8
        ])
        M2 = Matrix(QQ, 3,3, [
            Rational(1, 2), -1,  3,
            -2,  1,  2,
            -1,  3, Rational(-3, 4)
        ])
        self.assertEqual((M1 * M2).det(), M1.det() * M2.det())

    def test_sylvester(self):
        F = GF(7)
        a = UnivariatePolynomial(F, [1, 2, 0, 1])
        b = UnivariatePolynomial(F, [1, 0, 1])
        S = sylvester_matrix(a, b)
        self.assertEqual(S, Matrix(F, 5, 5, [
            1, 0, 2, 1, 0,
            0, 1, 0, 2, 1,
            1, 0, 1, 0, 0,
            0, 1, 0, 1, 0,
            0, 0, 1, 0, 1
        ]))
        self.assertEqual(S.det(), 2)
        self.assertEqual(sylvester_matrix(a.as_symmetric(), b.as_symmetric()).det(), 2)
        self.assertEqual(subresultant_matrix(a, b, 0), S)
