# heatfin

Simulates the temperature along a single fin of a CPU radiator. The fin is
modelled by a one-dimensional heat equation. Heat is lost by convection
through the faces of the fin, and a heat flux enters at its base. The
equation is discretised with finite differences and solved with a
tridiagonal LU factorisation in linear time.

Two models are available through `HeatFin.stationary`:

- **stationary**: the steady-state profile, which can be saved next to the
  exact analytic solution;
- **dynamic**: implicit time stepping from a uniform initial temperature.
  With `HeatFin.cycling` set, the heat flux is switched on and off in
  cycles of 30 time units.

Results are written as CSV files. Interpolations of a solution onto a 3D
mesh can be written as legacy ASCII VTK structured grids.

## Installation

```
pip install .
```

## Modules

- `heatfin.tridiag`: `Tridiag`, a square tridiagonal matrix with
  arithmetic, `factorize()` and `@` for the product with a vector, plus
  `solve_l`, `solve_u` and `solve_lu`.
- `heatfin.mesh3d`: `Mesh3D`, a regular grid used for 3D output.
- `heatfin.model`: `Model`, the abstract base class of a 1D model on a
  uniform grid.
- `heatfin.heat_fin`: `HeatFin`, the radiator-fin model.
- `heatfin.solver`: `SolverTime`, which solves a model and saves its
  results.

## Stationary run

All quantities are in SI units.

```python
from heatfin.heat_fin import HeatFin
from heatfin.solver import SolverTime

fin = HeatFin(1000, 2700, 940, 164, 20, 1.25e5, 200, 0.04, 0.004, 0.05)
fin.stationary = True

solver = SolverTime(600, 1)
solver.model = fin
solver.solve_static()
solver.save_static("out/static.csv", False)
```

The file has the columns `x,sol,solEx`.

## Dynamic run

```python
fin.stationary = False
fin.cycling = True
fin.set_u0(20)
solver.solve(300)
solver.save_at_times("out/times.csv", [15, 30, 65, 90, 150, 210], False)
solver.save_at_points("out/points.csv", [0, 0.02, 0.04], False)
```

`solver.solutions[0]` holds the initial condition, and
`solver.solutions[t + 1]` holds the solution computed at step `t`.
`fan_on()` and `fan_off()` set the transfer coefficient `hc` to 200 and
10. `cooling_on()` lowers `phi` by `cooler` each time it is called.

## 3D output

```python
from heatfin.mesh3d import Mesh3D

fin.mesh = Mesh3D(0.04, 0.004, 0.05, 40, 4, 50)
fin.interpolate(solver.solutions[-1])
fin.save_static_interpolation("out/fin.vtk")
```

`fin.interpolate_series(solver.solutions, solver.nt, "run1", "out/3d")`
writes one file per time step, named `run1.<t>.vtk`.

## Plots

If `do_plot` is true, the save methods run `python3` on a plotting script
under `../ploting/` (`plotStatic.py`, `plotTimes.py` or `plotPoints.py`).
These scripts are not part of this package. If the script fails, a
`RuntimeError` is raised.

## Linear solver on its own

```python
from heatfin.tridiag import Tridiag, solve_lu

a = Tridiag.constant(3, -1.0, 2.0, -1.0)
x = solve_lu(a.factorize(), [1.0, 1.0, 2.0])   # [1.75, 2.5, 2.25]
```

## What this package does not do

The package has no command-line program and no reader for configuration
files. A simulation is set up and run from Python code, as shown above.

## Tests

```
pip install .[test]
pytest
```