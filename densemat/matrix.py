from __future__ import annotations

import copy
import dataclasses
import functools
import numbers
import operator
from typing import Any, Callable, Generic, Iterator, Protocol, Sequence, TypeVar


class ShapeError(ValueError):
    """Raised when the shapes of matrix operands are incompatible with an operation."""


class SupportsArithmetic(Protocol):
    """Elements which can be added, negated, subtracted and multiplied."""

    def __add__(self, other: Any) -> Any: ...

    def __neg__(self) -> Any: ...

    def __sub__(self, other: Any) -> Any: ...

    def __mul__(self, other: Any) -> Any: ...


T = TypeVar('T')
U = TypeVar('U')
R = TypeVar('R', bound=SupportsArithmetic)


@dataclasses.dataclass(frozen=True)
class Matrix(Generic[T]):
    """
    An immutable dense m x n matrix, with entries of any type, stored as a tuple of rows. Matrices are hashable (and
    hence suitable for use as dictionary keys) whenever their entries are. Matrices may be constructed in the following
    ways, for example direct construction::

    >>> Matrix(2, 3, ((1, 2, 3), (4, 5, 6)))
    Matrix([
        [1, 2, 3],
        [4, 5, 6],
    ])

    Construction from a function of the row and column::

    >>> Matrix.from_fn(2, 3, lambda i, j: 10 * i + j)
    Matrix([
        [0, 1, 2],
        [10, 11, 12],
    ])

    Construction from a single value, or from a list of rows::

    >>> Matrix.from_value(2, 2, 'x')
    Matrix([
        ['x', 'x'],
        ['x', 'x'],
    ])
    >>> Matrix.from_rows([[1, 2], [3, 4]])
    Matrix([
        [1, 2],
        [3, 4],
    ])

    Structural operations (transpose, augment, row and column extraction) work for entries of any type, while the
    arithmetic operators need entries supporting +, - and *.
    """
    m: int
    n: int
    data: tuple[tuple[T, ...], ...]

    def __post_init__(self):
        if not (self.m >= 0 and self.n >= 0):
            raise ValueError("Cannot have a negative number of rows or columns.")
        if not isinstance(self.data, tuple) or not all(isinstance(row, tuple) for row in self.data):
            raise ValueError("Data should be a tuple of row tuples")
        if len(self.data) != self.m or any(len(row) != self.n for row in self.data):
            raise ValueError(f"Length of data incompatible with a {self.m} x {self.n} matrix")

    @classmethod
    def from_fn(cls, m: int, n: int, fn: Callable[[int, int], T]) -> Matrix[T]:
        """
        Construct an m x n matrix whose (i, j) entry is fn(i, j). The function is called once for each entry, going
        along each row before moving down to the next.

        >>> Matrix.from_fn(0, 3, lambda i, j: i + j)
        Matrix(0, 3, [])
        """
        return cls(m, n, tuple(tuple(fn(i, j) for j in range(n)) for i in range(m)))

    @classmethod
    def from_value(cls, m: int, n: int, value: T) -> Matrix[T]:
        """Construct an m x n matrix with every entry a copy of value."""
        return cls(m, n, tuple(tuple(copy.copy(value) for _ in range(n)) for _ in range(m)))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[T]]) -> Matrix[T]:
        """
        Construct a matrix from a list of rows, which must all have the same length.

        >>> Matrix.from_rows([[1, 2, 3], [4, 5, 6]]).rows()
        [[1, 2, 3], [4, 5, 6]]
        >>> Matrix.from_rows([])
        Matrix(0, 0, [])
        """
        rows = [tuple(row) for row in rows]
        ncols = len(rows[0]) if rows else 0
        if any(len(row) != ncols for row in rows):
            raise ShapeError("Rows must all have the same length.")

        return cls(len(rows), ncols, tuple(rows))

    @classmethod
    def scalar(cls, size: int, scalar: T) -> Matrix[T]:
        """
        Create a size x size scalar matrix: the diagonal matrix with every diagonal entry equal to the scalar.

        >>> Matrix.scalar(3, 6).rows()
        [[6, 0, 0], [0, 6, 0], [0, 0, 6]]
        """
        return cls.from_fn(size, size, lambda i, j: scalar if i == j else 0)

    def size(self) -> tuple[int, int]:
        """The shape of the matrix, as (rows, columns)."""
        return self.m, self.n

    def indices(self) -> Iterator[tuple[int, int]]:
        return ((i, j) for i in range(self.m) for j in range(self.n))

    def entries(self) -> Iterator[T]:
        """Return an iterator over copies of the entries of the matrix, in row-major order."""
        return (copy.copy(x) for row in self.data for x in row)

    def rows(self) -> list[list[T]]:
        """Return the matrix as a list of lists of rows.

        >>> Matrix.from_rows([[1, 2], [3, 4]]).rows()
        [[1, 2], [3, 4]]
        """
        return [[copy.copy(x) for x in row] for row in self.data]

    def _checkbounds(self, i: int, j: int):
        if not (0 <= i < self.m and 0 <= j < self.n):
            raise IndexError(f"Index ({i}, {j}) out of range for matrix with dimensions ({self.m}, {self.n})")

    def at(self, row: int, col: int) -> T:
        """
        Return a copy of the zero-indexed (row, col) entry. Negative indices do not wrap around.

        >>> Matrix.from_rows([[1, 2, 3], [4, 5, 6]]).at(1, 2)
        6
        >>> Matrix.from_rows([[1, 2, 3], [4, 5, 6]]).at(2, 0)
        Traceback (most recent call last):
        ...
        IndexError: Index (2, 0) out of range for matrix with dimensions (2, 3)
        """
        self._checkbounds(row, col)
        return copy.copy(self.data[row][col])

    def __getitem__(self, key: tuple[int, int]) -> T:
        """
        For a matrix M, M[i, j] returns the zero-indexed (i, j)th entry, the same as M.at(i, j).

        >>> M = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        >>> M[0, 0]
        1
        >>> M[1, 1]
        5
        """
        if not isinstance(key, tuple) or len(key) != 2:
            raise KeyError(f"Supplied key {key!r} should be a tuple of length 2.")

        i, j = key
        return self.at(i, j)

    def row(self, row: int) -> Matrix[T]:
        """
        Return a row of the matrix as a 1 x n row vector.
        """
        if not 0 <= row < self.m:
            raise IndexError(f"Row {row} is out of bounds for a {self.m} x {self.n} matrix.")

        return Matrix.from_fn(1, self.n, lambda _, j: self.at(row, j))

    def col(self, col: int) -> Matrix[T]:
        """
        Return a column of the matrix as an m x 1 column vector.
        """
        if not 0 <= col < self.n:
            raise IndexError(f"Column {col} is out of bounds for a {self.m} x {self.n} matrix.")

        return Matrix.from_fn(self.m, 1, lambda i, _: self.at(i, col))

    def augment(self, other: Matrix[T]) -> Matrix[T]:
        """
        Place the columns of other to the right of the columns of this matrix. Both must have the same number of rows.
        Also available as self | other.

        >>> Matrix.from_rows([[1, 2], [3, 4]]).augment(Matrix.from_rows([[5], [6]])).rows()
        [[1, 2, 5], [3, 4, 6]]
        """
        if self.m != other.m:
            raise ShapeError(f"Cannot augment a {self.m} x {self.n} matrix with a {other.m} x {other.n} matrix.")

        return Matrix.from_fn(
            self.m,
            self.n + other.n,
            lambda i, j: self.at(i, j) if j < self.n else other.at(i, j - self.n),
        )

    def transpose(self) -> Matrix[T]:
        """
        Also available as ~self.

        >>> Matrix.from_rows([[1, 2, 3]]).transpose()
        Matrix([[1], [2], [3]])
        """
        return Matrix.from_fn(self.n, self.m, lambda i, j: self.at(j, i))

    def apply(self, f: Callable[[int, int], Any]) -> None:
        """Call f(i, j) for every index of the matrix, in row-major order."""
        for i, j in self.indices():
            f(i, j)

    def map(self, f: Callable[[T], U]) -> Matrix[U]:
        """Map a function over the entries of the matrix."""
        return Matrix.from_fn(self.m, self.n, lambda i, j: f(self.at(i, j)))

    def __invert__(self) -> Matrix[T]:
        return self.transpose()

    def __or__(self, other: Matrix[T]) -> Matrix[T]:
        if not isinstance(other, Matrix):
            return NotImplemented

        return self.augment(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size() != other.size():
            return False

        return all(self.at(i, j) == other.at(i, j) for i, j in self.indices())

    def sum(self: Matrix[R], start: Any = 0) -> Any:
        """
        Add up the entries in row-major order, starting from start.

        >>> Matrix.from_value(2, 3, 5).sum()
        30
        """
        # A plain left fold: the builtin sum() compensates float rounding, changing the result.
        return functools.reduce(operator.add, self.entries(), start)

    def _dot(self: Matrix[R], other: Matrix[R]) -> Any:
        # Row 0 of self against column 0 of other; the shapes are not checked.
        return functools.reduce(operator.add, (self.at(0, k) * other.at(k, 0) for k in range(self.n)), 0)

    def __add__(self: Matrix[R], other: Matrix[R]) -> Matrix[R]:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.size() != other.size():
            raise ShapeError(f"Matrix dimensions incompatible: {self.size()} + {other.size()}")

        return Matrix.from_fn(self.m, self.n, lambda i, j: self.at(i, j) + other.at(i, j))

    def __neg__(self: Matrix[R]) -> Matrix[R]:
        return self.map(operator.neg)

    def __sub__(self: Matrix[R], other: Matrix[R]) -> Matrix[R]:
        if not isinstance(other, Matrix):
            return NotImplemented

        return self + (-other)

    def __mul__(self, other):
        """
        Matrix multiplication, or multiplication of every entry by a scalar.

        >>> M = Matrix.from_rows([[1, 1], [1, 0]]) # Fibonacci matrix
        >>> (M*M*M*M*M*M).rows()
        [[13, 8], [8, 5]]
        >>> (M * 3).rows()
        [[3, 3], [3, 0]]
        """
        if isinstance(other, Matrix):
            if self.n != other.m:
                raise ShapeError(f"Matrix dimensions incompatible: {self.size()} * {other.size()}")

            return Matrix.from_fn(self.m, other.n, lambda i, j: self.row(i)._dot(other.col(j)))

        if isinstance(other, numbers.Number):
            return self.map(lambda x: x * other)

        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self.map(lambda x: other * x)

        return NotImplemented

    def __pow__(self, exp: int):
        """
        >>> (Matrix.from_rows([[1, 1], [1, 0]]) ** 10).rows()
        [[89, 55], [55, 34]]
        >>> (Matrix.from_rows([[2.0, 1.0], [0.0, 3.0]]) ** 0).rows()
        [[1.0, 0.0], [0.0, 1.0]]
        """
        if not self.is_square():
            raise ShapeError("Can only take powers of square matrices")

        if exp < 0:
            raise ValueError("Negative powers of matrices are not supported")

        if exp == 0:
            # The identity takes its zero and one from the type of the entries.
            zero = self.at(0, 0) * 0 if self.m else 0
            one = zero + 1
            return Matrix.from_fn(self.m, self.m, lambda i, j: one if i == j else zero)

        acc = None
        pow2 = self
        while exp:
            if exp % 2 == 1:
                acc = pow2 if acc is None else acc * pow2

            exp //= 2
            if exp:
                pow2 = pow2 * pow2

        return acc

    def trace(self):
        """
        The trace of a square matrix is the sum of the diagonal entries.

        >>> Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]]).trace()
        15
        """
        if not self.is_square():
            raise ShapeError("Trace defined only for square matrices")

        return functools.reduce(operator.add, (self.at(i, i) for i in range(self.m)), 0)

    def is_square(self) -> bool:
        return self.m == self.n

    def is_symmetric(self) -> bool:
        return self.is_square() and all(self.at(i, j) == self.at(j, i) for i, j in self.indices())

    def __repr__(self):
        """
        >>> Matrix(5, 0, ((),) * 5)
        Matrix(5, 0, [])
        >>> Matrix.from_rows([[1, 2, 3, 4]])
        Matrix([[1, 2, 3, 4]])
        >>> Matrix.from_rows([[1], [2], [3], [4]])
        Matrix([[1], [2], [3], [4]])
        >>> Matrix.from_rows([[2, 3, 4], [5, 6, 7]])
        Matrix([
            [2, 3, 4],
            [5, 6, 7],
        ])
        """
        if self.m == 0 or self.n == 0:
            return f'Matrix({self.m}, {self.n}, [])'
        if self.m == 1:
            return 'Matrix([[' + ', '.join(repr(c) for c in self.data[0]) + ']])'
        if self.n == 1:
            return 'Matrix([' + ', '.join(f'[{row[0]!r}]' for row in self.data) + '])'
        return '\n'.join([
            'Matrix([',
            *('    [' + ', '.join(repr(c) for c in row) + '],' for row in self.data),
            '])'
        ])

    def _repr_latex_(self):
        def get_repr(x):
            return x._repr_latex_() if hasattr(x, '_repr_latex_') else repr(x)

        return ''.join([
            r'\begin{pmatrix}',
            r' \\ '.join(' & '.join(get_repr(c) for c in row) for row in self.data),
            r'\end{pmatrix}',
        ])

    def __str__(self):
        """
        >>> print(Matrix.from_rows([[1, 2], [3, 4]]))
        M[[1, 2], [3, 4]]
        """
        rows = ['[' + ', '.join(str(c) for c in row) + ']' for row in self.data]
        return f"M[{', '.join(rows)}]"


def zeros(m: int, n: int) -> Matrix[float]:
    """
    The m x n matrix of floating point zeros.

    >>> zeros(2, 3)
    Matrix([
        [0.0, 0.0, 0.0],
        [0.0, 0.0, 0.0],
    ])
    """
    return Matrix.from_value(m, n, 0.0)


def ones(m: int, n: int) -> Matrix[float]:
    """The m x n matrix of floating point ones."""
    return Matrix.from_value(m, n, 1.0)


def identity(dim: int) -> Matrix[float]:
    """
    The dim x dim floating point identity matrix.

    >>> identity(2)
    Matrix([
        [1.0, 0.0],
        [0.0, 1.0],
    ])
    """
    return Matrix.from_fn(dim, dim, lambda i, j: 1.0 if i == j else 0.0)
