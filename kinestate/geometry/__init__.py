"""Geometric shapes built on Cartesian poses."""

from kinestate.geometry.ellipsoid import Ellipsoid
from kinestate.geometry.shape import Shape

__all__ = ["Shape", "Ellipsoid"]
