import math
import subprocess
from unittest.mock import patch

import pytest

from heatfin.heat_fin import HeatFin
from heatfin.solver import SolverTime

RHO = 2700
CP = 940
K = 164
TE = 20
PHI = 1.25e5
HC = 200
LX = 0.04
LY = 0.004
LZ = 0.05
NX = 100
NT = 600
T_FINAL = 300


def make_fin():
    return HeatFin(NX, RHO, CP, K, TE, PHI, HC, LX, LY, LZ)


@pytest.fixture
def fin():
    return make_fin()


@pytest.fixture
def solver(fin):
    s = SolverTime(NT)
    s.model = fin
    return s


def solve_dynamic(solver, fin):
    fin.stationary = False
    fin.set_u0(TE)
    solver.solve(T_FINAL)
    return solver.solutions


def test_static_matches_exact_solution(solver, fin):
    fin.stationary = True
    solution = solver.solve_static()
    assert len(solution) == NX + 1
    for x, value in zip(fin.x, solution):
        assert abs(value - fin.solve_exact(x)) < 0.5


def test_static_with_longer_fin(solver, fin):
    fin.stationary = True
    fin.set_lx(2 * LX)
    solution = solver.solve_static()
    assert fin.x[-1] == pytest.approx(2 * LX)
    assert abs(solution[0] - fin.solve_exact(0.0)) < 0.5
    assert solution[0] > solution[-1] > TE


def test_dynamic_converges_to_static(solver, fin):
    fin.stationary = True
    static = list(solver.solve_static())
    solutions = solve_dynamic(solver, fin)
    assert len(solutions) == NT + 2
    assert solutions[0] == [TE] * (NX + 1)
    for a, b in zip(solutions[-1], static):
        assert a == pytest.approx(b, abs=1e-3)


def test_dynamic_heats_up_monotonically(solver, fin):
    solutions = solve_dynamic(solver, fin)
    assert TE < solutions[10][0] < solutions[100][0] < solutions[-1][0]
    assert solver.times[0] == 0
    assert solver.times[-1] == pytest.approx(T_FINAL)
    assert len(solver.times) == NT + 1


def test_cycling_cools_when_flux_is_off(solver, fin):
    fin.cycling = True
    solutions = solve_dynamic(solver, fin)
    assert solutions[120][0] < solutions[60][0]
    assert solutions[180][0] > solutions[120][0]


def test_fan_off_is_hotter(solver, fin):
    baseline = solve_dynamic(solver, fin)[-1][0]
    fin2 = fin.copy()
    s2 = solver.copy()
    s2.model = fin2
    fin2.fan_off()
    hotter = solve_dynamic(s2, fin2)[-1][0]
    assert hotter > baseline


def test_cooling_lowers_temperature(solver, fin):
    baseline = solve_dynamic(solver, fin)[-1][0]
    fin.cooler = -200
    fin.cooling_on()
    cooled = solve_dynamic(solver, fin)[-1][0]
    assert fin.phi < PHI
    assert cooled < baseline


def test_copy_keeps_solutions_independent(solver, fin):
    solve_dynamic(solver, fin)
    before = [list(s) for s in solver.solutions]
    s2 = solver.copy()
    s2.set_nt(10)
    s2.solve()
    assert len(s2.solutions) == 12
    assert solver.solutions == before


def test_dt(solver):
    solver.t_final = T_FINAL
    assert solver.dt() == pytest.approx(0.5)


def test_dt_without_steps_raises():
    with pytest.raises(ValueError):
        SolverTime().dt()


def test_solve_without_model_raises():
    with pytest.raises(RuntimeError):
        SolverTime(10).solve()
    with pytest.raises(RuntimeError):
        SolverTime(10).solve_static()


def test_save_without_solution_raises(solver, tmp_path):
    with pytest.raises(ValueError):
        solver.save_static(tmp_path / "s.csv")


def test_save_static_file(solver, fin, tmp_path):
    fin.stationary = True
    solution = solver.solve_static()
    path = solver.save_static(tmp_path / "sub" / "static.csv")
    lines = path.read_text().splitlines()
    assert lines[0] == "x,sol,solEx"
    assert len(lines) == NX + 1
    x, sol, exact = map(float, lines[5].split(","))
    assert x == pytest.approx(fin.x[4], rel=1e-5)
    assert sol == pytest.approx(solution[4], rel=1e-5)
    assert exact == pytest.approx(fin.solve_exact(fin.x[4]), rel=1e-5)


def test_save_at_times_file(solver, fin, tmp_path):
    solutions = solve_dynamic(solver, fin)
    times = [15, 30, 65, 90, 150, 210]
    path = solver.save_at_times(tmp_path / "times.csv", times)
    rows = path.read_text().split("\n")
    assert rows[0] == "x,15,30,65,90,150,210,"
    assert len(rows) == NX + 1
    fields = [float(v) for v in rows[3].split(",")]
    assert len(fields) == len(times) + 1
    assert fields[0] == pytest.approx(fin.x[2], rel=1e-5)
    for value, t in zip(fields[1:], times):
        assert value == pytest.approx(solutions[int(NT * t / T_FINAL)][2], rel=1e-5)


def test_save_at_times_out_of_range(solver, fin, tmp_path):
    solve_dynamic(solver, fin)
    with pytest.raises(IndexError):
        solver.save_at_times(tmp_path / "times.csv", [10 * T_FINAL])


def test_save_at_points_file(solver, fin, tmp_path):
    fin.cycling = True
    solutions = solve_dynamic(solver, fin)
    points = [0, LX / 2, LX]
    path = solver.save_at_points(tmp_path / "points.csv", points)
    rows = path.read_text().split("\n")
    assert rows[0].startswith("x,0,")
    assert len(rows) == NT + 1
    fields = [float(v) for v in rows[11].split(",")]
    assert fields[0] == pytest.approx(solver.times[10])
    assert fields[1] == pytest.approx(solutions[10][0], rel=1e-5)
    assert fields[3] == pytest.approx(solutions[10][NX], rel=1e-5)


def test_save_at_points_outside_domain(solver, fin, tmp_path):
    solve_dynamic(solver, fin)
    with pytest.raises(IndexError):
        solver.save_at_points(tmp_path / "p.csv", [2 * LX])


def test_plot_failure_raises(solver, fin, tmp_path):
    fin.stationary = True
    solver.solve_static()
    failed = subprocess.CompletedProcess([], 1)
    with patch("heatfin.solver.subprocess.run", return_value=failed):
        with pytest.raises(RuntimeError):
            solver.save_static(tmp_path / "static.csv", True)


def test_plot_runs_script(solver, fin, tmp_path):
    solve_dynamic(solver, fin)
    ok = subprocess.CompletedProcess([], 0)
    with patch("heatfin.solver.subprocess.run", return_value=ok) as run:
        path = solver.save_at_points(tmp_path / "points.csv", [0.02, 0.03], True)
    command = run.call_args[0][0]
    assert command[0] == "python3"
    assert command[1].endswith("plotPoints.py")
    assert command[2] == str(path)
    assert math.isfinite(float(path.read_text().split("\n")[1].split(",")[1]))