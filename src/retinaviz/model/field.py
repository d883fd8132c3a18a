"""
Volumetric Field
================
Thin wrapper around a 3D scalar array as it comes out of a `.npy` file.

Two fields are used by the scene:
1. The attribution volume (axis 2 are intensity bins, rendered as a density).
2. The layer-boundary field (axis 2 is the boundary index, every value is a
   depth, rendered as a height field).

Classes:
    VolumetricField: Shape + flat row-major data, immutable after creation.
    NpyArrayLoader: Loads a VolumetricField from disk.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class VolumetricField:
    """
    A 3D scalar field stored as a flat array with axis 2 varying fastest:
    ``index = k + shape[2] * (y + shape[1] * x)``.
    """
    shape: Tuple[int, int, int]
    data: npt.NDArray[np.float64]

    def __post_init__(self) -> None:
        shape = tuple(int(s) for s in self.shape)
        if len(shape) != 3 or any(s <= 0 for s in shape):
            raise ValueError(f"Field shape must be three positive integers, got {self.shape}.")

        data = np.asarray(self.data, dtype=np.float64).reshape(-1)
        expected = shape[0] * shape[1] * shape[2]
        if data.size != expected:
            raise ValueError(f"Field data has {data.size} samples, shape {shape} requires {expected}.")

        # Builders only read from the field
        data = data.copy()
        data.setflags(write=False)
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "data", data)

    @classmethod
    def from_array(cls, array: npt.ArrayLike) -> VolumetricField:
        arr = np.asarray(array, dtype=np.float64)
        if arr.ndim != 3:
            raise ValueError(f"Expected a 3D array, got shape {arr.shape}.")
        return cls(shape=arr.shape, data=np.ascontiguousarray(arr).reshape(-1))

    @property
    def size(self) -> int:
        return int(self.data.size)

    def flat_index(self, x: int, y: int, k: int) -> int:
        return k + self.shape[2] * (y + self.shape[1] * x)

    def value_at(self, x: int, y: int, k: int) -> float:
        return float(self.data[self.flat_index(x, y, k)])

    def as_array(self) -> npt.NDArray[np.float64]:
        """Read-only (X, Y, K) view of the data."""
        return self.data.reshape(self.shape)

    def max_value(self) -> float:
        """
        Largest finite sample, or 0.0 for a field without finite samples.
        """
        finite = self.data[np.isfinite(self.data)]
        if finite.size == 0:
            return 0.0
        return float(finite.max())


class NpyArrayLoader:
    """Loads `.npy` arrays into VolumetricField instances."""

    def load(self, path: str) -> VolumetricField:
        """
        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the stored array is not 3D.
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Array file not found: {path}")

        logger.info(f"Loading array: {path}")
        array = np.load(path, allow_pickle=False)
        field = VolumetricField.from_array(array)
        logger.debug(f"Loaded field with shape {field.shape} from {path}")
        return field
