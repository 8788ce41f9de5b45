"""One-dimensional heat transfer simulation of a radiator fin."""

__version__ = "0.1.0"
__all__ = ["heat_fin", "mesh3d", "model", "solver", "tridiag"]