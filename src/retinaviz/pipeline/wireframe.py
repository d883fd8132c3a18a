"""
Layer Boundary Wireframes
=========================
Cuts the layer-boundary height field into cross-sections along both grid axes
and turns them into line actors, one actor per boundary.

The field stores a depth for every (x, y) cell and every boundary index
(axis 2). A cross-section fixes one grid axis (the swept axis) at index `i`
and traces the other one, reading the depth of a single boundary.

Classes:
    Polyline: One traced cross-section in render space.
    LayerWireframeExtractor: Field -> polylines -> actors.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Dict, Iterable, List, Optional, TYPE_CHECKING

import numpy as np
import pyvista as pv

from retinaviz.config import WireframeStyle
from retinaviz.model.coords import to_render_points
from retinaviz.model.field import VolumetricField
from retinaviz.model.layers import LAYER_BOUNDARIES, resolve_boundaries
from retinaviz.pipeline.sampling import AnySampling, EvenCountSampling
from retinaviz.pipeline.vtk_utils import VtkUtils

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

# Sweep directions: 0 fixes x and traces y, 1 fixes y and traces x
SWEEP_DIRECTIONS = (0, 1)


@dataclass(frozen=True, eq=False)
class Polyline:
    """
    Consecutive points of one cross-section, joined pairwise, not closed.

    `points` is an (N, 3) render-space array: (x, depth, y).
    """
    boundary: int
    direction: int
    index: int
    points: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=np.float64).reshape(-1, 3)
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @property
    def n_points(self) -> int:
        return int(self.points.shape[0])

    def segments(self) -> npt.NDArray[np.int_]:
        """(N-1, 2) array of point index pairs."""
        ids = np.arange(self.n_points, dtype=np.int_)
        return np.column_stack([ids[:-1], ids[1:]])


class LayerWireframeExtractor:
    def __init__(self, sampling: Optional[AnySampling] = None, style: Optional[WireframeStyle] = None) -> None:
        self.sampling: AnySampling = sampling or EvenCountSampling()
        self.style: WireframeStyle = style or WireframeStyle()

    def extract(self, field: VolumetricField, boundaries: Iterable[int]) -> Dict[int, List[Polyline]]:
        """
        Trace every selected boundary along both sweep directions.

        Raises:
            ValueError: If `boundaries` is empty or names an unknown boundary.
        """
        resolved = resolve_boundaries(boundaries)
        heights = field.as_array()

        result: Dict[int, List[Polyline]] = {}
        for boundary in resolved:
            j = boundary.index
            if j >= field.shape[2]:
                # A broken boundary must not take the rest of the scene down
                logger.error(f"Boundary {j} is outside the layer field (depth axis has {field.shape[2]} entries).")
                result[j] = []
                continue

            polylines: List[Polyline] = []
            for direction in SWEEP_DIRECTIONS:
                polylines.extend(self._sweep(heights, j, direction))
            result[j] = polylines
            logger.debug(f"Boundary {j}: {len(polylines)} cross-sections")

        return result

    def _sweep(self, heights: npt.NDArray[np.float64], boundary: int, direction: int) -> List[Polyline]:
        swept_len = heights.shape[direction]
        traced_len = heights.shape[1 - direction]

        traced = self.sampling.samples(traced_len)
        polylines = []
        for i in self.sampling.cross_sections(swept_len):
            swept = np.full(traced.shape, i, dtype=np.int_)
            x, y = (swept, traced) if direction == 0 else (traced, swept)
            depth = heights[x, y, boundary]
            polylines.append(Polyline(
                boundary=boundary,
                direction=direction,
                index=int(i),
                points=to_render_points(x, y, depth),
            ))
        return polylines

    @staticmethod
    def to_polydata(polylines: Iterable[Polyline]) -> pv.PolyData:
        return VtkUtils.polylines_to_polydata([p.points for p in polylines])

    def build_actors(self, polylines_by_boundary: Dict[int, List[Polyline]]) -> Dict[int, pv.Actor]:
        """One styled line actor per boundary."""
        actors: Dict[int, pv.Actor] = {}
        for j, polylines in polylines_by_boundary.items():
            mapper = pv.DataSetMapper(self.to_polydata(polylines))
            mapper.scalar_visibility = False

            actor = pv.Actor(mapper=mapper)
            actor.prop.color = LAYER_BOUNDARIES[j].color
            actor.prop.opacity = self.style.opacity
            actor.prop.line_width = self.style.line_width
            actor.GetProperty().BackfaceCullingOff()
            actor.GetProperty().FrontfaceCullingOff()
            actors[j] = actor
        return actors

    def build(self, field: VolumetricField, boundaries: Iterable[int]) -> Dict[int, pv.Actor]:
        return self.build_actors(self.extract(field, boundaries))
