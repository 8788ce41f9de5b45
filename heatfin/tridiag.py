"""Square tridiagonal matrices with an O(n) LU factorization and solver."""

from __future__ import annotations

import operator
import warnings
from collections.abc import Callable, Sequence

PIVOT_TOLERANCE = 1e-8


class Tridiag:
    """A square tridiagonal matrix stored as its three diagonals.

    ``lower[i]`` sits at row ``i + 1``, column ``i``; ``upper[i]`` sits at
    row ``i``, column ``i + 1``.
    """

    __slots__ = ("lower", "diag", "upper")

    def __init__(self, lower: Sequence[float], diag: Sequence[float], upper: Sequence[float]):
        diag = list(diag)
        lower = list(lower)
        upper = list(upper)
        if not diag:
            raise ValueError("a tridiagonal matrix needs at least one row")
        if len(lower) != len(diag) - 1 or len(upper) != len(diag) - 1:
            raise ValueError(
                "off-diagonals must have exactly one element less than the diagonal"
            )
        self.lower = lower
        self.diag = diag
        self.upper = upper

    @classmethod
    def constant(cls, n: int, lower: float, diag: float, upper: float) -> Tridiag:
        """Build an n x n matrix with the same value along each diagonal."""
        if n < 1:
            raise ValueError("matrix size must be at least 1")
        return cls([lower] * (n - 1), [diag] * n, [upper] * (n - 1))

    @classmethod
    def zeros(cls, n: int) -> Tridiag:
        """Build an n x n matrix filled with zeros."""
        return cls.constant(n, 0.0, 0.0, 0.0)

    def __len__(self) -> int:
        return len(self.diag)

    def _check_index(self, key) -> tuple[int, int]:
        try:
            i, j = key
        except (TypeError, ValueError):
            raise TypeError("index must be a (row, column) pair") from None
        n = len(self)
        if not (0 <= i < n and 0 <= j < n):
            raise IndexError(f"index ({i}, {j}) is out of range for a {n}x{n} matrix")
        return i, j

    def __getitem__(self, key) -> float:
        i, j = self._check_index(key)
        if i == j:
            return self.diag[i]
        if i == j + 1:
            return self.lower[i - 1]
        if i == j - 1:
            return self.upper[i]
        return 0.0

    def __setitem__(self, key, value: float) -> None:
        i, j = self._check_index(key)
        if i == j:
            self.diag[i] = value
        elif i == j + 1:
            self.lower[i - 1] = value
        elif i == j - 1:
            self.upper[i] = value
        else:
            raise IndexError(f"the coefficient ({i}, {j}) is not in the band of the matrix")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tridiag):
            return NotImplemented
        return (
            self.diag == other.diag
            and self.lower == other.lower
            and self.upper == other.upper
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Tridiag(lower={self.lower!r}, diag={self.diag!r}, upper={self.upper!r})"

    def __str__(self) -> str:
        n = len(self)
        rows = []
        for i in range(n):
            cells = []
            for j in range(n):
                if abs(i - j) <= 1:
                    cells.append(f"{self[i, j]:g}\t")
                else:
                    cells.append(". \t")
            rows.append("".join(cells) + "\n")
        return "".join(rows)

    def copy(self) -> Tridiag:
        return Tridiag(self.lower, self.diag, self.upper)

    def factorize(self) -> Tridiag:
        """Return the LU factorization packed in a single matrix.

        ``lower`` holds the sub-diagonal of L (whose diagonal is all ones),
        ``diag`` and ``upper`` hold the two diagonals of U.
        """
        diag = [self.diag[0]]
        lower: list[float] = []
        upper: list[float] = []
        for sub, main, sup in zip(self.lower, self.diag[1:], self.upper):
            factor = sub / diag[-1]
            lower.append(factor)
            upper.append(sup)
            diag.append(main - factor * sup)
        return Tridiag(lower, diag, upper)

    def clear(self) -> None:
        """Reset every coefficient to zero, keeping the size."""
        n = len(self)
        self.diag = [0.0] * n
        self.lower = [0.0] * (n - 1)
        self.upper = [0.0] * (n - 1)

    def _combine(self, other: Tridiag, op: Callable[[float, float], float]) -> Tridiag:
        if len(self) != len(other):
            raise ValueError("matrices must have the same size")
        return Tridiag(
            list(map(op, self.lower, other.lower)),
            list(map(op, self.diag, other.diag)),
            list(map(op, self.upper, other.upper)),
        )

    def _scale(self, op: Callable[[float, float], float], scalar: float) -> Tridiag:
        return Tridiag(
            [op(v, scalar) for v in self.lower],
            [op(v, scalar) for v in self.diag],
            [op(v, scalar) for v in self.upper],
        )

    def __add__(self, other: Tridiag) -> Tridiag:
        if not isinstance(other, Tridiag):
            return NotImplemented
        return self._combine(other, operator.add)

    def __sub__(self, other: Tridiag) -> Tridiag:
        if not isinstance(other, Tridiag):
            return NotImplemented
        return self._combine(other, operator.sub)

    def __iadd__(self, other: Tridiag) -> Tridiag:
        if not isinstance(other, Tridiag):
            return NotImplemented
        result = self._combine(other, operator.add)
        self.lower, self.diag, self.upper = result.lower, result.diag, result.upper
        return self

    def __isub__(self, other: Tridiag) -> Tridiag:
        if not isinstance(other, Tridiag):
            return NotImplemented
        result = self._combine(other, operator.sub)
        self.lower, self.diag, self.upper = result.lower, result.diag, result.upper
        return self

    def __mul__(self, scalar: float) -> Tridiag:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return self._scale(operator.mul, scalar)

    def __rmul__(self, scalar: float) -> Tridiag:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Tridiag:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return self._scale(operator.truediv, scalar)

    def __matmul__(self, vector: Sequence[float]) -> list[float]:
        if isinstance(vector, Tridiag):
            return NotImplemented
        if len(vector) != len(self):
            raise ValueError("vector length does not match the matrix size")
        result = [d * v for d, v in zip(self.diag, vector)]
        for i, (sup, v) in enumerate(zip(self.upper, vector[1:])):
            result[i] += sup * v
        for i, (sub, v) in enumerate(zip(self.lower, vector[:-1]), start=1):
            result[i] += sub * v
        return result


def _check_length(lu: Tridiag, vector: Sequence[float]) -> None:
    if len(vector) != len(lu):
        raise ValueError("vector length does not match the matrix size")


def solve_l(lu: Tridiag, b: Sequence[float]) -> list[float]:
    """Solve Ly = b by forward substitution."""
    _check_length(lu, b)
    y = [b[0]]
    for sub, value in zip(lu.lower, b[1:]):
        y.append(value - sub * y[-1])
    return y


def solve_u(lu: Tridiag, y: Sequence[float]) -> list[float]:
    """Solve Ux = y by backward substitution."""
    _check_length(lu, y)
    x = [y[-1] / lu.diag[-1]]
    for main, sup, value in zip(reversed(lu.diag[:-1]), reversed(lu.upper), reversed(y[:-1])):
        if abs(main) < PIVOT_TOLERANCE:
            warnings.warn("pivot is too close to zero", RuntimeWarning, stacklevel=2)
        x.append((value - sup * x[-1]) / main)
    x.reverse()
    return x


def solve_lu(lu: Tridiag, b: Sequence[float]) -> list[float]:
    """Solve LUx = b in linear time, given a factorized matrix."""
    _check_length(lu, b)
    return solve_u(lu, solve_l(lu, b))