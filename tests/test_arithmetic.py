import random
import unittest
from fractions import Fraction

import numpy as np

from densemat import Matrix, ShapeError, identity, ones, to_ndarray, zeros


def random_matrix(rng: random.Random, m: int, n: int) -> Matrix:
    return Matrix.from_fn(m, n, lambda i, j: rng.uniform(-10, 10))


class TestAddition(unittest.TestCase):
    def test_commutative(self):
        a = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        b = Matrix.from_rows([[7, -8, 9], [0, 1, -2]])
        self.assertEqual(a + b, b + a)
        self.assertEqual(Matrix.from_rows([[8, -6, 12], [4, 6, 4]]), a + b)

    def test_add_then_subtract(self):
        a = Matrix.from_fn(3, 2, lambda i, j: Fraction(i + 1, j + 2))
        b = Matrix.from_fn(3, 2, lambda i, j: Fraction(j - i, 3))
        self.assertEqual(a, (a + b) + (-b))
        self.assertEqual(a, (a + b) - b)

    def test_negation(self):
        a = Matrix.from_rows([[1, -2], [0, 4]])
        self.assertEqual(Matrix.from_rows([[-1, 2], [0, -4]]), -a)
        self.assertEqual(zeros(2, 2), a - a)

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeError):
            zeros(2, 2) + zeros(2, 3)
        with self.assertRaises(ShapeError):
            zeros(2, 2) - zeros(3, 2)

    def test_shape_error_is_value_error(self):
        with self.assertRaises(ValueError):
            zeros(2, 2) + zeros(2, 3)

    def test_unsupported_operand(self):
        with self.assertRaises(TypeError):
            zeros(2, 2) + 1
        with self.assertRaises(TypeError):
            zeros(2, 2) - 'x'


class TestMultiplication(unittest.TestCase):
    def test_ones(self):
        self.assertEqual(Matrix.from_value(2, 2, 3.0), ones(2, 3) * ones(3, 2))

    def test_identity(self):
        rng = random.Random(1)
        for m, k in [(1, 1), (2, 3), (4, 2), (3, 3)]:
            a = random_matrix(rng, m, k)
            self.assertEqual(a, identity(m) * a)
            self.assertEqual(a, a * identity(k))

    def test_associative(self):
        rng = random.Random(2)
        a = random_matrix(rng, 2, 3)
        b = random_matrix(rng, 3, 4)
        c = random_matrix(rng, 4, 2)
        np.testing.assert_allclose(to_ndarray((a * b) * c), to_ndarray(a * (b * c)), atol=1e-9)

    def test_associative_exact(self):
        a = Matrix.from_fn(2, 3, lambda i, j: Fraction(i + j, 5))
        b = Matrix.from_fn(3, 3, lambda i, j: Fraction(i - 2 * j, 7))
        c = Matrix.from_fn(3, 1, lambda i, j: Fraction(1, i + 1))
        self.assertEqual((a * b) * c, a * (b * c))

    def test_matches_numpy(self):
        rng = random.Random(3)
        a = random_matrix(rng, 3, 5)
        b = random_matrix(rng, 5, 2)
        np.testing.assert_allclose(to_ndarray(a * b), to_ndarray(a) @ to_ndarray(b), atol=1e-9)

    def test_empty_inner_dimension(self):
        self.assertEqual(zeros(2, 3), zeros(2, 0) * zeros(0, 3))

    def test_shape_mismatch(self):
        with self.assertRaises(ShapeError):
            ones(2, 3) * ones(2, 3)

    def test_scalar(self):
        self.assertEqual(Matrix.from_value(2, 2, 2.0), ones(2, 2) * 2)
        self.assertEqual(Matrix.from_value(2, 2, 2.0), 2 * ones(2, 2))
        with self.assertRaises(TypeError):
            ones(2, 2) * 'x'

    def test_dot(self):
        row = Matrix.from_rows([[1, 2, 3]])
        col = Matrix.from_rows([[4], [5], [6]])
        self.assertEqual(32, row._dot(col))

    def test_power(self):
        fib = Matrix.from_rows([[1, 1], [1, 0]])
        self.assertEqual(identity(2), fib ** 0)
        self.assertEqual(fib, fib ** 1)
        self.assertEqual(fib * fib * fib, fib ** 3)
        with self.assertRaises(ShapeError):
            ones(2, 3) ** 2
        with self.assertRaises(ValueError):
            fib ** -1

    def test_power_zero_keeps_entry_type(self):
        self.assertEqual(identity(3), ones(3, 3) ** 0)
        self.assertIsInstance((ones(2, 2) ** 0)[0, 1], float)
        self.assertIsInstance((ones(2, 2) ** 0)[1, 1], float)
        frac = Matrix.from_value(2, 2, Fraction(1, 3)) ** 0
        self.assertIsInstance(frac[0, 0], Fraction)
        self.assertEqual(Matrix(0, 0, ()), zeros(0, 0) ** 0)


class TestReductions(unittest.TestCase):
    def test_sum(self):
        for m, n in [(0, 0), (1, 4), (3, 2)]:
            self.assertEqual(0, zeros(m, n).sum())
            self.assertEqual(m * n, ones(m, n).sum())

    def test_sum_is_left_fold(self):
        # Summed left to right, the 1.0 is absorbed by 1e16 before the cancellation.
        self.assertEqual(0.0, Matrix.from_rows([[1e16, 1.0], [-1e16, 0.0]]).sum())

    def test_sum_start(self):
        frac = Matrix.from_value(2, 2, Fraction(1, 4))
        self.assertEqual(Fraction(1), frac.sum())
        self.assertEqual(Fraction(3), frac.sum(start=Fraction(2)))

    def test_trace(self):
        self.assertEqual(3.0, identity(3).trace())
        with self.assertRaises(ShapeError):
            ones(2, 3).trace()

    def test_symmetric(self):
        self.assertTrue(identity(3).is_symmetric())
        self.assertTrue(Matrix.from_rows([[1, 2], [2, 1]]).is_symmetric())
        self.assertFalse(Matrix.from_rows([[1, 2], [3, 1]]).is_symmetric())
        self.assertFalse(ones(2, 3).is_symmetric())
