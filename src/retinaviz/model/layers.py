"""
Retinal Layer Boundaries
Static description of the anatomical boundaries stored in the layer field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

RGB = Tuple[float, float, float]


@dataclass(frozen=True)
class LayerBoundary:
    """
    One anatomical boundary of the segmentation.

    `index` is the position along axis 2 of the layer-boundary field. The
    remaining positions on that axis are placeholders without a boundary.
    """
    index: int
    name: str
    color: RGB

    @property
    def group(self) -> str:
        """Visibility group key used by the UI toggles."""
        return f"layer_{self.index}"

    def css_color(self) -> str:
        r, g, b = (round(c * 255) for c in self.color)
        return f"rgb({r}, {g}, {b})"


LAYER_BOUNDARIES: Dict[int, LayerBoundary] = {
    1: LayerBoundary(1, "Inner limiting membrane", (0.0, 0.0, 1.0)),
    5: LayerBoundary(5, "Inner border of the outer nuclear layer", (0.0, 1.0, 0.0)),
    7: LayerBoundary(7, "Inner border of the ellipsoid line", (1.0, 0.647, 0.0)),
    9: LayerBoundary(9, "Outer border of the Bruch's membrane", (0.5, 0.0, 0.5)),
}

LAYER_INDICES: Tuple[int, ...] = tuple(LAYER_BOUNDARIES)


def resolve_boundaries(indices: Iterable[int]) -> Tuple[LayerBoundary, ...]:
    """
    Map boundary indices to their static description, keeping the given order.

    Raises:
        ValueError: If the set is empty or contains an unknown index.
    """
    resolved = []
    for idx in indices:
        if idx not in LAYER_BOUNDARIES:
            raise ValueError(f"Unknown layer boundary index: {idx}")
        resolved.append(LAYER_BOUNDARIES[idx])
    if not resolved:
        raise ValueError("At least one layer boundary is required.")
    return tuple(resolved)
