"""
Transfer Functions
Plain-data description of a scalar -> colour/opacity mapping.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class TransferFunction:
    """
    Piecewise-linear colour and opacity ramps over a scalar range.

    Both point lists are sorted by value. Values outside the ramp are clamped
    to the nearest control point, the same way VTK evaluates them.
    """
    color_points: Tuple[Tuple[float, RGB], ...]
    opacity_points: Tuple[Tuple[float, float], ...]

    def __post_init__(self) -> None:
        for name, points in (("color", self.color_points), ("opacity", self.opacity_points)):
            if not points:
                raise ValueError(f"Transfer function needs at least one {name} point.")
            values = [p[0] for p in points]
            if any(b < a for a, b in zip(values, values[1:])):
                raise ValueError(f"{name.capitalize()} points must be sorted by value.")

    @property
    def scalar_range(self) -> Tuple[float, float]:
        return self.color_points[0][0], self.color_points[-1][0]

    def opacity_at(self, value: float) -> float:
        xs = [p[0] for p in self.opacity_points]
        ys = [p[1] for p in self.opacity_points]
        return float(np.interp(value, xs, ys))

    def color_at(self, value: float) -> RGB:
        xs = [p[0] for p in self.color_points]
        channels = np.array([p[1] for p in self.color_points], dtype=np.float64)
        r, g, b = (float(np.interp(value, xs, channels[:, c])) for c in range(3))
        return r, g, b


def ramp_transfer_function(
    max_value: float,
    low_color: RGB,
    high_color: RGB,
    opacity_fractions: Tuple[float, ...],
    opacity_values: Tuple[float, ...],
) -> TransferFunction:
    """
    Build a colour ramp over [0, max_value] and an opacity curve whose knots
    are given as fractions of `max_value`.

    A non-positive `max_value` collapses both ramps to one fully transparent
    point at 0.
    """
    if len(opacity_fractions) != len(opacity_values):
        raise ValueError("Opacity fractions and values must have the same length.")

    if max_value <= 0:
        return TransferFunction(
            color_points=((0.0, low_color),),
            opacity_points=((0.0, 0.0),),
        )

    return TransferFunction(
        color_points=((0.0, low_color), (float(max_value), high_color)),
        opacity_points=tuple(
            (float(max_value) * f, float(o)) for f, o in zip(opacity_fractions, opacity_values)
        ),
    )
