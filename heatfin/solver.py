"""Time integration of a model and export of its solutions as CSV."""

from __future__ import annotations

import copy as _copy
import subprocess
from collections.abc import Sequence
from pathlib import Path

from heatfin.model import Model
from heatfin.tridiag import solve_lu

PLOT_SCRIPTS_DIR = Path("../ploting")


def _fmt(value: float) -> str:
    return f"{value:g}"


def _open_for_writing(filename: str | Path) -> Path:
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _plot(script: str, filename: str | Path) -> None:
    command = ["python3", str(PLOT_SCRIPTS_DIR / script), str(filename)]
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise RuntimeError(f"can't execute {script} script: {exc}") from exc
    if result.returncode != 0:
        raise RuntimeError(f"can't execute {script} script")


class SolverTime:
    """Solves a :class:`Model`, stationary or over ``nt`` time steps up to ``t_final``.

    After :meth:`solve`, ``solutions[0]`` holds the initial condition and
    ``solutions[t + 1]`` the solution computed at step ``t``; ``times``
    holds the time of each step.
    """

    def __init__(self, nt: int = 0, tf: float = 1.0):
        self.nt = int(nt)
        self.t_final = tf
        self.solutions: list[list[float]] = []
        self.times: list[float] = []
        self.model: Model | None = None

    def copy(self) -> SolverTime:
        """Copy of the solver with its own solutions; the model is shared."""
        clone = _copy.copy(self)
        clone.solutions = [list(sol) for sol in self.solutions]
        clone.times = list(self.times)
        return clone

    def dt(self) -> float:
        """Time step."""
        if self.nt <= 0:
            raise ValueError("the number of time steps must be positive")
        return self.t_final / self.nt

    def set_nt(self, nt: int) -> None:
        """Change the number of time steps."""
        self.nt = int(nt)
        self.times = []

    def _require_model(self) -> Model:
        if self.model is None:
            raise RuntimeError("a model must be set first")
        return self.model

    def _require_solutions(self) -> Model:
        model = self._require_model()
        if not self.solutions:
            raise ValueError("no data to save: nothing was solved")
        return model

    def solve_static(self) -> list[float]:
        """Solve the stationary model and return its solution."""
        model = self._require_model()
        model.set_b([0.0] * (model.nx + 1), 0, self.nt, self.t_final)
        model.set_lu()
        solution = solve_lu(model.matrix, model.b)
        self.solutions = [solution]
        return solution

    def solve(self, t_final: float | None = None) -> list[list[float]]:
        """Integrate the dynamic model in time, optionally up to a new final time."""
        if t_final is not None:
            self.t_final = t_final
        model = self._require_model()
        dt = self.dt()
        model.dt = dt
        model.set_lu()

        self.solutions = [list(model.u)]
        self.times = []
        for t in range(self.nt + 1):
            self.times.append(t * dt)
            model.set_b(self.solutions[-1], t, self.nt, self.t_final)
            self.solutions.append(solve_lu(model.matrix, model.b))
        return self.solutions

    def save_static(self, filename: str | Path, do_plot: bool = False) -> Path:
        """Write the stationary solution with the exact one as CSV."""
        model = self._require_solutions()
        solution = self.solutions[-1]
        lines = ["x,sol,solEx"]
        for i in range(model.nx):
            x = model.x[i]
            lines.append(f"{_fmt(x)},{_fmt(solution[i])},{_fmt(model.solve_exact(x))}")
        path = _open_for_writing(filename)
        path.write_text("\n".join(lines) + "\n")
        if do_plot:
            _plot("plotStatic.py", path)
        return path

    def save_at_times(
        self, filename: str | Path, times: Sequence[float], do_plot: bool = False
    ) -> Path:
        """Write the solution along x at each of the given times as CSV."""
        model = self._require_solutions()
        indices = []
        for t in times:
            index = int(self.nt * t / self.t_final)
            if not 0 <= index < len(self.solutions):
                raise IndexError(f"invalid time step index for time {t:g}")
            indices.append(index)

        parts = ["x,", *(f"{_fmt(t)}," for t in times)]
        for i in range(model.nx):
            parts.append("\n" + _fmt(model.x[i]))
            parts.extend("," + _fmt(self.solutions[index][i]) for index in indices)
        path = _open_for_writing(filename)
        path.write_text("".join(parts))
        if do_plot:
            _plot("plotTimes.py", path)
        return path

    def save_at_points(
        self, filename: str | Path, points: Sequence[float], do_plot: bool = False
    ) -> Path:
        """Write the solution in time at each of the given points as CSV."""
        model = self._require_solutions()
        if len(self.times) < self.nt:
            raise ValueError("no data to save: the dynamic model was not solved")
        indices = []
        for point in points:
            index = int(model.nx * point / model.xend)
            if not 0 <= index <= model.nx:
                raise IndexError(f"point {point:g} lies outside the domain")
            indices.append(index)

        parts = ["x,", *(f"{_fmt(p)}," for p in points)]
        for t in range(self.nt):
            parts.append("\n" + _fmt(self.times[t]))
            parts.extend("," + _fmt(self.solutions[t][index]) for index in indices)
        path = _open_for_writing(filename)
        path.write_text("".join(parts))
        if do_plot:
            _plot("plotPoints.py", path)
        return path