"""
Wireframe Sampling Policies
Decide which cross-sections are cut from the layer field and which samples
are taken along each of them.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def rounded_linspace(start: float, stop: float, num: int) -> npt.NDArray[np.int_]:
    """
    `num` evenly spaced integers in [start, stop] (both ends included).

    Rounds half up, so 0.5 -> 1 and 1.5 -> 2 (np.round would give 0 and 2).
    """
    if num <= 0:
        return np.empty(0, dtype=np.int_)
    if num == 1:
        return np.array([int(np.floor(start + 0.5))], dtype=np.int_)
    values = np.linspace(start, stop, num)
    return np.floor(values + 0.5).astype(np.int_)


class SamplingPolicy(Protocol):
    def cross_sections(self, length: int) -> npt.NDArray[np.int_]:
        """Indices along the swept axis where a cross-section is cut."""
        ...

    def samples(self, length: int) -> npt.NDArray[np.int_]:
        """Indices along the traced axis sampled by each cross-section."""
        ...


@dataclass(frozen=True)
class EvenCountSampling:
    """
    A fixed number of cross-sections with a fixed number of points each,
    independent of the field extent.
    """
    segments: int = 14
    resolution: int = 48

    def __post_init__(self) -> None:
        if self.segments < 1 or self.resolution < 1:
            raise ValueError("Segments and resolution must be positive.")

    def cross_sections(self, length: int) -> npt.NDArray[np.int_]:
        return rounded_linspace(0, length - 1, self.segments)

    def samples(self, length: int) -> npt.NDArray[np.int_]:
        return rounded_linspace(0, length - 1, self.resolution)


@dataclass(frozen=True)
class FixedStrideSampling:
    """
    Every `stride`-th cross-section, each traced through every index.

    The last index is always included. When the stride already lands on it
    the clamped final step would repeat the same cross-section, so it is not
    emitted twice.
    """
    stride: int = 8

    def __post_init__(self) -> None:
        if self.stride < 1:
            raise ValueError("Stride must be positive.")

    def cross_sections(self, length: int) -> npt.NDArray[np.int_]:
        if length <= 0:
            return np.empty(0, dtype=np.int_)
        indices = np.arange(0, length, self.stride, dtype=np.int_)
        if indices[-1] != length - 1:
            indices = np.append(indices, length - 1)
        return indices

    def samples(self, length: int) -> npt.NDArray[np.int_]:
        return np.arange(max(length, 0), dtype=np.int_)


AnySampling = Union[EvenCountSampling, FixedStrideSampling]
