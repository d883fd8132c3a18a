"""
Background Workers (Threading)
==============================
This module contains QThread subclasses for handling long-running tasks.

Why is this file needed?
------------------------
1. Responsiveness: Loading the arrays and fetching the eye models can take a
   while. Doing it on the main thread would freeze the loading overlay.
2. Signals: They hand the loaded assets (or the error) back to the GUI thread,
   where the actors are built and registered with the renderer.

Classes:
    SceneLoadWorker: Runs SceneComposer.load_assets().
"""
import logging

from PySide6.QtCore import QThread, Signal

from retinaviz.scene.composer import SceneComposer

logger = logging.getLogger(__name__)


class SceneLoadWorker(QThread):
    # Emits SceneAssets
    loaded = Signal(object)
    error_occurred = Signal(str)

    def __init__(self, composer: SceneComposer) -> None:
        super().__init__()
        self.composer = composer

    def run(self) -> None:
        try:
            logger.info("Loading scene assets in background thread...")
            assets = self.composer.load_assets()
            self.loaded.emit(assets)
        except Exception as e:
            logger.error(f"Failed to load the visualisation: {e}")
            self.error_occurred.emit(str(e))
