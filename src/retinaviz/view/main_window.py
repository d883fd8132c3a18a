"""
Main Application Window
=======================
The primary GUI container holding the 3D retina view.

Why is this file needed?
------------------------
1. Layout: It hosts the render view with its overlays.
2. Routing: It starts the background asset loading and routes the result
   (scene or error) to the view.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow

from retinaviz.config import SceneConfig
from retinaviz.controller.workers import SceneLoadWorker
from retinaviz.model.layers import resolve_boundaries
from retinaviz.scene.composer import SceneAssets, SceneComposer
from retinaviz.view.scene_widget import RetinaSceneWidget

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Retina Attribution Viewer"


class MainWindow(QMainWindow):
    def __init__(self, config: SceneConfig) -> None:
        super().__init__()
        self.config = config
        self.composer = SceneComposer(config)

        self.setWindowTitle(f"{VISIBLE_APP_NAME} [{config.name}]")
        self.resize(1400, 900)

        self.visualizer = RetinaSceneWidget(resolve_boundaries(config.boundaries), background=config.background)
        self.setCentralWidget(self.visualizer)

        self._worker: Optional[SceneLoadWorker] = None

    def start_loading(self) -> None:
        logger.info(f"Setting up scene with preset '{self.config.name}' from {self.config.data_dir}")
        self._worker = SceneLoadWorker(self.composer)
        self._worker.loaded.connect(self.on_assets_loaded)
        self._worker.error_occurred.connect(self.visualizer.show_error)
        self._worker.start()

    def on_assets_loaded(self, assets: SceneAssets) -> None:
        try:
            scene = self.composer.build(assets)
            self.visualizer.show_scene(scene)
        except Exception as e:
            logger.exception(f"Failed to build the visualisation: {e}")
            self.visualizer.clear_scene()
            self.visualizer.show_error(str(e))

    def closeEvent(self, event) -> None:
        if self._worker is not None and self._worker.isRunning():
            self._worker.wait()
        super().closeEvent(event)
