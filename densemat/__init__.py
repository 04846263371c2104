from .matrix import Matrix, ShapeError, identity, ones, zeros
from .ndarray import from_ndarray, to_ndarray

__all__ = [
    "Matrix",
    "ShapeError",
    "from_ndarray",
    "identity",
    "ones",
    "to_ndarray",
    "zeros",
]
