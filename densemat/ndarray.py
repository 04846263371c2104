"""
ndarray: converting matrices to and from two-dimensional numpy arrays.

A Matrix of shape (m, n) corresponds to a numpy array of shape (m, n), including when either dimension is zero.
Entries which numpy cannot represent natively (for example Fractions) end up in an array of dtype object.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt

from .matrix import Matrix, ShapeError


def to_ndarray(mat: Matrix, dtype: npt.DTypeLike = None) -> npt.NDArray:
    """
    Return the matrix as a numpy array of shape (m, n).

    >>> to_ndarray(Matrix.from_rows([[1, 2], [3, 4]]))
    array([[1, 2],
           [3, 4]])
    >>> to_ndarray(Matrix.from_value(0, 3, 1.0)).shape
    (0, 3)
    """
    return np.array(mat.rows(), dtype=dtype).reshape(mat.m, mat.n)


def from_ndarray(arr: npt.ArrayLike) -> Matrix:
    """
    Convert a two-dimensional array to a matrix, turning numpy scalars into the corresponding Python scalars.

    >>> from_ndarray(np.eye(2))
    Matrix([
        [1.0, 0.0],
        [0.0, 1.0],
    ])
    """
    arr = np.asarray(arr)
    if arr.ndim != 2:
        raise ShapeError(f"Expected a two-dimensional array, was given one of shape {arr.shape}.")

    m, n = arr.shape
    return Matrix(m, n, tuple(tuple(row) for row in arr.tolist()))
