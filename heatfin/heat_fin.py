"""One-dimensional model of a single fin of a CPU radiator."""

from __future__ import annotations

import bisect
import copy as _copy
import math
from collections.abc import Sequence
from pathlib import Path

from heatfin.model import Model
from heatfin.tridiag import Tridiag

FAN_ON_HC = 200.0
FAN_OFF_HC = 10.0
CYCLE_LENGTH = 30.0


class HeatFin(Model):
    """Heat equation along the x-axis of a fin of size lx x ly x lz.

    A heat flux ``phi`` enters at x = 0, the far end is insulated and the
    fin exchanges heat with the air at temperature ``te`` through the
    surface transfer coefficient ``hc``.
    """

    def __init__(
        self,
        nx: int,
        rho: float,
        c: float,
        k: float,
        te: float,
        phi: float,
        hc: float,
        lx: float,
        ly: float,
        lz: float,
    ):
        super().__init__(nx, 0.0, lx)
        self.rho = rho
        self.c = c
        self.k = k
        self.te = te
        self.phi = phi
        self.hc = hc
        self.ly = ly
        self.lz = lz
        self.cooler = 0.0
        self.flux = True
        self.cooling = False
        self.cycling = False
        self.stationary = False
        self.static_interpolation: list[float] = []

    @property
    def lx(self) -> float:
        """Length of the fin along the x-axis."""
        return self.xend

    def copy(self) -> HeatFin:
        """Independent copy of the fin; the mesh is shared, not copied."""
        clone = _copy.copy(self)
        clone.x = list(self.x)
        clone.u = list(self.u)
        clone.b = list(self.b)
        clone.matrix = self.matrix.copy()
        clone.static_interpolation = list(self.static_interpolation)
        return clone

    def perimeter(self) -> float:
        return 2 * (self.ly + self.lz)

    def surface(self) -> float:
        return self.lz * self.ly

    def _exchange(self) -> float:
        return self.hc * self.perimeter() / self.surface()

    def _check_time_step(self) -> None:
        if self.dt <= 0:
            raise ValueError("a positive time step is needed for the dynamic model")

    def set_lu(self) -> None:
        n = self.nx
        dx = self.dx()

        stiffness = Tridiag.constant(n + 1, -1.0, 2.0, -1.0)
        stiffness[0, 0] = dx
        stiffness[n, n] = dx
        stiffness[0, 1] = -dx
        stiffness[n, n - 1] = -dx

        identity = Tridiag.constant(n + 1, 0.0, 1.0, 0.0)
        identity[0, 0] = 0.0
        identity[n, n] = 0.0

        diffusion = (self.k / dx**2) * stiffness
        if self.stationary:
            system = diffusion + self._exchange() * identity
        else:
            self._check_time_step()
            system = (self.rho * self.c / self.dt + self._exchange()) * identity + diffusion
        self.matrix = system.factorize()

    def set_b(self, u: Sequence[float], t: float, nt: int, tf: float) -> None:
        n = self.nx
        source = self.te * self._exchange()
        self.b = [0.0] * (n + 1)
        if self.stationary:
            self.b[1:n] = [source] * (n - 1)
        else:
            self._check_time_step()
            if len(u) != n + 1:
                raise ValueError("solution length does not match the grid")
            inertia = self.rho * self.c / self.dt
            self.b[1:n] = [inertia * value + source for value in u[1:n]]
            if self.cycling:
                current_cycle = int(t / (CYCLE_LENGTH * nt / tf))
                if current_cycle % 2 == 0:
                    self.flux_on()
                else:
                    self.flux_off()
        self.b[n] = 0.0
        self.b[0] = self.phi if self.flux else 0.0
        if self.cooling:
            self.cooling_on()
        else:
            self.cooling_off()

    def solve_exact(self, x: float) -> float:
        """Exact stationary temperature at ``x``."""
        root = math.sqrt(self._exchange() / self.k)
        num = self.phi * math.cosh(root * self.xend) * math.cosh(root * (self.xend - x))
        denom = self.k * root * math.sinh(root * self.xend) * math.cosh(root * self.xend)
        return self.te + num / denom

    def fan_on(self) -> None:
        self.hc = FAN_ON_HC

    def fan_off(self) -> None:
        self.hc = FAN_OFF_HC

    def flux_on(self) -> None:
        self.flux = True
        self.b[0] = self.phi

    def flux_off(self) -> None:
        self.flux = False
        self.b[0] = 0.0

    def cooling_on(self) -> None:
        """Turn cooling on; each call lowers the flux by ``cooler``."""
        self.cooling = True
        self.phi += self.cooler

    def cooling_off(self) -> None:
        self.cooling = False

    def set_lx(self, lx: float) -> None:
        """Change the length of the fin."""
        self.set_xend(lx)

    def interpolate(self, u: Sequence[float]) -> list[float]:
        """Interpolate a 1D solution onto the x nodes of the mesh."""
        if self.mesh is None:
            raise RuntimeError("a mesh must be set before interpolating")
        if len(u) != self.nx + 1:
            raise ValueError("solution length does not match the grid")
        last = len(self.x) - 2
        base = u[0]
        values = []
        for position in self.mesh.x:
            k = min(bisect.bisect_left(self.x, position), last)
            slope = (u[k] + u[k + 1] - 2 * base) / (self.x[k] + self.x[k + 1])
            values.append(slope * position + base)
        self.static_interpolation = values
        return values

    def interpolate_series(
        self,
        solutions: Sequence[Sequence[float]],
        nt: int,
        sol_name: str,
        directory: str | Path = "../data/3d",
    ) -> list[Path]:
        """Interpolate and save the solutions of time steps 0..nt as VTK files."""
        paths = []
        for t in range(nt + 1):
            self.interpolate(solutions[t])
            path = Path(directory) / f"{sol_name}.{t}.vtk"
            self.save_static_interpolation(path)
            paths.append(path)
        return paths

    def save_static_interpolation(self, filename: str | Path) -> Path:
        """Write the last interpolation as a legacy ASCII VTK structured grid."""
        if self.mesh is None:
            raise RuntimeError("no data to save: no mesh is set")
        mesh = self.mesh
        if len(self.static_interpolation) < mesh.mx:
            raise ValueError("no interpolation to save; call interpolate first")
        count = mesh.mx * mesh.my * mesh.mz

        lines = [
            "# vtk DataFile Version 2.0",
            "vtk output",
            "ASCII",
            "DATASET STRUCTURED_GRID",
            f"DIMENSIONS {mesh.mx} {mesh.my} {mesh.mz}",
            f"POINTS {count} float",
        ]
        lines.extend(
            f"{i} {j} {k}"
            for k in range(mesh.mz)
            for j in range(mesh.my)
            for i in range(mesh.mx)
        )
        lines.append(f"POINT_DATA {count} ")
        lines.append("FIELD FieldData 1")
        lines.append(f"sol1 1 {count} float")
        row = [f"{value:g}" for value in self.static_interpolation[: mesh.mx]]
        lines.extend(row * (mesh.my * mesh.mz))

        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n")
        return path