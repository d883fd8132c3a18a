"""
Scene Composition
=================
Orchestrates loading, building and registering everything the retina scene
shows.

Why is this file needed?
------------------------
1. Load order: Both core arrays must be fully loaded before any derived actor
   is built. Models are fetched concurrently (one future per asset) and joined
   here before their actors are created.
2. Error aggregation: A failing core array aborts the whole scene (there is no
   partial-data mode). A failing model or label is logged, recorded in
   `Scene.failures` and left out.
3. Threading: `load_assets` only does I/O and parsing and may run in a worker
   thread. `build` and `attach` create and register actors and belong to the
   thread that owns the renderer.

Classes:
    SceneAssets: Raw inputs (fields + parsed meshes).
    Scene: Actor handles produced from the assets.
    SceneComposer: The orchestrator.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from typing import Any, Dict, List, Optional, Protocol, Tuple

import pyvista as pv
from vtkmodules.vtkRenderingAnnotation import vtkScalarBarActor
from vtkmodules.vtkRenderingCore import vtkVolume

from retinaviz.config import SceneConfig
from retinaviz.model.field import NpyArrayLoader, VolumetricField
from retinaviz.model.layers import LAYER_BOUNDARIES
from retinaviz.pipeline.color_scale import ColorScaleBuilder
from retinaviz.pipeline.heatmap import HeatmapVolumeBuilder
from retinaviz.pipeline.labels import create_label
from retinaviz.pipeline.surfaces import SurfaceModelLoader
from retinaviz.pipeline.visibility import EYE_MODELS_GROUP, VisibilityController
from retinaviz.pipeline.wireframe import LayerWireframeExtractor

logger = logging.getLogger(__name__)


class ArrayLoader(Protocol):
    def load(self, path: str) -> VolumetricField: ...


class SceneRenderer(Protocol):
    def add_actor(self, actor: Any, reset_camera: bool = False) -> Any: ...

    def remove_actor(self, actor: Any, reset_camera: bool = False, render: bool = True) -> Any: ...

    def reset_camera(self) -> None: ...

    def render(self) -> None: ...


@dataclass
class SceneAssets:
    attribution: VolumetricField
    layers: VolumetricField
    max_value: float
    # (model index, mesh or None) in completion order
    meshes: List[Tuple[int, Optional[pv.PolyData]]] = field(default_factory=list)


@dataclass
class Scene:
    heatmap: vtkVolume
    color_scale: vtkScalarBarActor
    wireframes: Dict[int, pv.Actor]
    models: List[pv.Actor] = field(default_factory=list)
    labels: List[pv.Actor] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)
    max_value: float = 0.0

    def actors(self) -> List[Any]:
        """Every actor in the order it is added to the renderer."""
        return [self.heatmap, self.color_scale, *self.wireframes.values(), *self.models, *self.labels]


class SceneComposer:
    def __init__(
        self,
        config: SceneConfig,
        array_loader: Optional[ArrayLoader] = None,
        model_loader: Optional[SurfaceModelLoader] = None,
        max_workers: int = 4,
    ) -> None:
        self.config = config
        self.array_loader: ArrayLoader = array_loader or NpyArrayLoader()
        self.model_loader: SurfaceModelLoader = model_loader or SurfaceModelLoader()
        self.max_workers = max_workers

    # ------------------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------------------

    def load_fields(self) -> Tuple[VolumetricField, VolumetricField, float]:
        """Loads both core arrays. Any failure here is fatal for the scene."""
        attribution = self.array_loader.load(self.config.data_file(self.config.attribution_file))
        layers = self.array_loader.load(self.config.data_file(self.config.layers_file))
        max_value = attribution.max_value()
        logger.info(f"Attribution maximum: {max_value}")
        return attribution, layers, max_value

    def load_meshes(self) -> List[Tuple[int, Optional[pv.PolyData]]]:
        """Fetches every eye model concurrently, results in completion order."""
        models = self.config.models
        if not models:
            return []

        results: List[Tuple[int, Optional[pv.PolyData]]] = []
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = {
                pool.submit(self.model_loader.load_mesh, self.config.data_file(asset.filename)): idx
                for idx, asset in enumerate(models)
            }
            for future in as_completed(futures):
                results.append((futures[future], future.result()))
        return results

    def load_assets(self) -> SceneAssets:
        attribution, layers, max_value = self.load_fields()
        meshes = self.load_meshes()
        return SceneAssets(attribution=attribution, layers=layers, max_value=max_value, meshes=meshes)

    # ------------------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------------------

    def build(self, assets: SceneAssets) -> Scene:
        cfg = self.config

        heatmap = HeatmapVolumeBuilder(cfg.heatmap).build(assets.attribution, assets.max_value)
        color_scale = ColorScaleBuilder(cfg.color_scale, cfg.heatmap).build(assets.max_value)
        wireframes = LayerWireframeExtractor(cfg.sampling, cfg.wireframe).build(assets.layers, cfg.boundaries)

        scene = Scene(
            heatmap=heatmap,
            color_scale=color_scale,
            wireframes=wireframes,
            max_value=assets.max_value,
        )

        for idx, mesh in assets.meshes:
            asset = cfg.models[idx]
            if mesh is None:
                scene.failures.append(f"model:{asset.filename}")
                continue
            placement = cfg.model_layout.placement_for(idx, asset.color)
            scene.models.append(SurfaceModelLoader.make_actor(mesh, placement))

        for spec in cfg.labels:
            label = create_label(spec)
            if label is None:
                scene.failures.append(f"label:{spec.text}")
                continue
            scene.labels.append(label)

        if scene.failures:
            logger.warning(f"Scene built without: {', '.join(scene.failures)}")
        logger.info(
            f"Scene built: {len(wireframes)} wireframes, {len(scene.models)} models, {len(scene.labels)} labels."
        )
        return scene

    # ------------------------------------------------------------------------------
    # Renderer
    # ------------------------------------------------------------------------------

    @staticmethod
    def attach(scene: Scene, renderer: SceneRenderer) -> None:
        """
        Adds all actors, fits the camera and renders once.

        If any actor is rejected, the ones already added are removed again
        before the error propagates.
        """
        added: List[Any] = []
        try:
            for actor in scene.actors():
                renderer.add_actor(actor, reset_camera=False)
                added.append(actor)
        except Exception:
            for actor in added:
                renderer.remove_actor(actor, reset_camera=False, render=False)
            raise
        renderer.reset_camera()
        renderer.render()

    @staticmethod
    def create_visibility(scene: Scene, renderer: SceneRenderer) -> VisibilityController:
        controller = VisibilityController(renderer)
        for j, actor in scene.wireframes.items():
            controller.register(LAYER_BOUNDARIES[j].group, [actor])
        controller.register(EYE_MODELS_GROUP, scene.models, reset_camera=True)
        return controller

    def compose(self, renderer: SceneRenderer) -> Tuple[Scene, VisibilityController]:
        """Load, build and attach in one go (used off-screen and in tests)."""
        scene = self.build(self.load_assets())
        self.attach(scene, renderer)
        return scene, self.create_visibility(scene, renderer)
