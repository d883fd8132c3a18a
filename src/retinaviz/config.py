"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and scene presets.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths and magic numbers scattered
   throughout the builders. Every builder receives its settings explicitly.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the data directory when the app is frozen into an .exe.
3. Variants: The two scene variants differ only in constants, so they are
   expressed as two presets of one immutable SceneConfig.

Exports:
    DATA_PATH (str): Absolute path to the data directory.
    STANDARD_PRESET, DENSE_PRESET, PRESETS: Scene configurations.
"""
from __future__ import annotations

import sys
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Tuple

from retinaviz.model.layers import LAYER_INDICES
from retinaviz.pipeline.sampling import AnySampling, EvenCountSampling, FixedStrideSampling

RGB = Tuple[float, float, float]
Vec3 = Tuple[float, float, float]


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/retinaviz/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


DATA_PATH: str = get_resource_path("data")


@dataclass(frozen=True)
class HeatmapStyle:
    low_color: RGB = (0.0, 0.0, 0.0)
    high_color: RGB = (1.0, 0.0, 0.0)
    # Soft threshold: near-zero attribution stays invisible, 25-30% saturates
    opacity_fractions: Tuple[float, ...] = (0.0, 0.1, 0.25, 0.3, 1.0)
    opacity_values: Tuple[float, ...] = (0.0, 0.0, 0.5, 0.9, 1.0)
    sample_distance: float = 0.7
    opacity_unit_distance: float = 3.0


@dataclass(frozen=True)
class ColorScaleStyle:
    title: str = "Attribution"
    font_family: str = "arial"
    font_size: int = 20
    text_color: RGB = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class WireframeStyle:
    opacity: float = 0.5
    line_width: float = 3.0


@dataclass(frozen=True)
class ModelAsset:
    filename: str
    color: RGB


@dataclass(frozen=True)
class ModelPlacement:
    scale: float
    position: Vec3
    color: RGB


@dataclass(frozen=True)
class ModelLayout:
    """
    All eye models share one local frame. The first model of a preset (the
    lens/pupil) lies outside the bounding box of the others and gets its own
    offset.
    """
    scale: float = 170.0
    shared_position: Vec3 = (55.0, -100.0, 50.0)
    first_position: Vec3 = (-348.0, -100.0, 50.0)

    def placement_for(self, index: int, color: RGB) -> ModelPlacement:
        position = self.first_position if index == 0 else self.shared_position
        return ModelPlacement(scale=self.scale, position=position, color=color)


@dataclass(frozen=True)
class LabelSpec:
    text: str
    position: Vec3
    color: RGB
    orientation: Vec3 = (0.0, -90.0, -270.0)
    scale: float = 1.0
    depth: float = 0.5


@dataclass(frozen=True)
class SceneConfig:
    name: str
    sampling: AnySampling
    models: Tuple[ModelAsset, ...]
    labels: Tuple[LabelSpec, ...]
    attribution_file: str = "attr.npy"
    layers_file: str = "layers.npy"
    boundaries: Tuple[int, ...] = LAYER_INDICES
    heatmap: HeatmapStyle = field(default_factory=HeatmapStyle)
    color_scale: ColorScaleStyle = field(default_factory=ColorScaleStyle)
    wireframe: WireframeStyle = field(default_factory=WireframeStyle)
    model_layout: ModelLayout = field(default_factory=ModelLayout)
    background: str = "white"
    data_dir: str = DATA_PATH

    def data_file(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)

    def with_data_dir(self, data_dir: str) -> SceneConfig:
        return replace(self, data_dir=data_dir)


EYE_MODELS: Tuple[ModelAsset, ...] = (
    ModelAsset("Lens_Pupil.stl", (0.0, 0.0, 0.0)),
    ModelAsset("Retina_Optic_Disk.stl", (0.88, 0.64, 0.375)),
    ModelAsset("Chloroid_Cilliary_Body_Suspensory_Ligaments.stl", (1.0, 0.502, 0.482)),
    ModelAsset("Iris.stl", (0.0, 0.0, 1.0)),
    ModelAsset("Sclera.stl", (1.0, 1.0, 1.0)),
)


def _orientation_labels(orientation: Vec3) -> Tuple[LabelSpec, ...]:
    return (
        LabelSpec("Temporal", (-15.0, 30.0, 75.0), (0.0, 0.0, 1.0), orientation=orientation),
        LabelSpec("Nasal", (115.0, 30.0, 65.0), (1.0, 0.0, 0.0), orientation=orientation),
    )


STANDARD_PRESET = SceneConfig(
    name="standard",
    sampling=EvenCountSampling(segments=14, resolution=48),
    models=EYE_MODELS,
    labels=_orientation_labels((0.0, -90.0, -270.0)),
)

DENSE_PRESET = SceneConfig(
    name="dense",
    sampling=FixedStrideSampling(stride=8),
    models=(EYE_MODELS[0], EYE_MODELS[1], EYE_MODELS[4]),
    labels=_orientation_labels((0.0, -90.0, -90.0)),
)

PRESETS: Dict[str, SceneConfig] = {
    STANDARD_PRESET.name: STANDARD_PRESET,
    DENSE_PRESET.name: DENSE_PRESET,
}
