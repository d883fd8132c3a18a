"""
Data-space to Render-space Mapping
==================================
Both volumetric fields are stored as (x, y, depth) arrays, while the scene is
rendered with the depth axis pointing up. Every builder goes through the two
functions below so the heatmap and the wireframes can never disagree on the
orientation.

    data axis 0 (x)     -> render X
    data axis 1 (y)     -> render Z
    data axis 2 (depth) -> render Y
"""
from __future__ import annotations

from typing import Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

# Render axis that receives each data axis
RENDER_AXIS_ORDER: Tuple[int, int, int] = (0, 2, 1)


def to_render_point(x: float, y: float, depth: float) -> Tuple[float, float, float]:
    """Map one data-space sample to a render-space point."""
    return x, depth, y


def to_render_points(x: npt.ArrayLike, y: npt.ArrayLike, depth: npt.ArrayLike) -> npt.NDArray[np.float64]:
    """Vectorised `to_render_point`, returns an (N, 3) array."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    depth = np.asarray(depth, dtype=np.float64)
    return np.column_stack(np.broadcast_arrays(x, depth, y))


def to_render_volume(array: npt.NDArray) -> npt.NDArray:
    """
    Permute a (X, Y, D) array into render axis order (X, D, Y).

    The result is a view; callers flatten it in Fortran order for VTK, whose
    point ids run with the first axis fastest.
    """
    if array.ndim != 3:
        raise ValueError(f"Expected a 3D array, got {array.ndim}D.")
    return np.transpose(array, RENDER_AXIS_ORDER)
