"""Regular 3D grid used to visualise a one-dimensional model."""

from __future__ import annotations


class Mesh3D:
    """A box of size lx x ly x lz split into mx x my x mz cells."""

    def __init__(self, lx: float, ly: float, lz: float, mx: int, my: int, mz: int):
        if min(mx, my, mz) < 1:
            raise ValueError("a mesh needs at least one step along each axis")
        self.lx = lx
        self.ly = ly
        self.lz = lz
        self.mx = mx
        self.my = my
        self.mz = mz
        self.x = [i * self.dx() for i in range(mx + 1)]
        self.y = [j * self.dy() for j in range(my + 1)]
        self.z = [k * self.dz() for k in range(mz + 1)]

    def dx(self) -> float:
        return self.lx / self.mx

    def dy(self) -> float:
        return self.ly / self.my

    def dz(self) -> float:
        return self.lz / self.mz

    def point(self, i: int, j: int, k: int) -> tuple[float, float, float]:
        """Coordinates of the grid node (i, j, k)."""
        return self.x[i], self.y[j], self.z[k]