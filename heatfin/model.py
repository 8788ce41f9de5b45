"""Abstract one-dimensional model discretized on a uniform grid."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from heatfin.mesh3d import Mesh3D
from heatfin.tridiag import Tridiag


class Model(ABC):
    """A system on [x0, xend] split into ``nx`` steps.

    ``u`` holds the current solution, ``matrix`` the system matrix (in LU
    form once :meth:`set_lu` ran) and ``b`` the right-hand side.
    """

    def __init__(self, nx: int, x0: float, xend: float):
        if nx < 1:
            raise ValueError("a model needs at least one space step")
        self.nx = int(nx)
        self.x0 = x0
        self.xend = xend
        self.x: list[float] = []
        self._update_grid()
        self.u = [0.0] * (self.nx + 1)
        self.matrix = Tridiag.constant(self.nx + 1, -1.0, 2.0, -1.0)
        self.b = [0.0] * (self.nx + 1)
        self.dt = 0.0
        self.mesh: Mesh3D | None = None

    def _update_grid(self) -> None:
        step = self.dx()
        self.x = [self.x0 + i * step for i in range(self.nx + 1)]

    def dx(self) -> float:
        """Space step."""
        return (self.xend - self.x0) / self.nx

    def set_u0(self, u0: float) -> None:
        """Set a constant initial condition."""
        self.u = [u0] * (self.nx + 1)

    def set_xend(self, xend: float) -> None:
        """Move the end of the domain and rebuild the grid."""
        self.xend = xend
        self._update_grid()

    @abstractmethod
    def set_lu(self) -> None:
        """Assemble the system matrix and store its LU factorization."""

    @abstractmethod
    def set_b(self, u: Sequence[float], t: float, nt: int, tf: float) -> None:
        """Assemble the right-hand side for time step ``t``."""

    def solve_exact(self, x: float) -> float:
        """Exact solution at ``x``; models without one return 0."""
        return 0.0