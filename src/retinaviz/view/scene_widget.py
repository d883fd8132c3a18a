"""
3D Visualization Widget (PyVista Wrapper)
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QResizeEvent
from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget

from pyvistaqt import QtInteractor

from retinaviz.model.layers import LayerBoundary
from retinaviz.pipeline.visibility import VisibilityController
from retinaviz.scene.composer import Scene, SceneComposer
from retinaviz.view.control_panel import ControlPanel

logger = logging.getLogger(__name__)

LOADING_TEXT = "Loading visualisation..."
ERROR_TEXT = "Error creating visualisation. Please try refreshing."


class RetinaSceneWidget(QWidget):
    def __init__(self, boundaries: Iterable[LayerBoundary], background: str = "white",
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.plotter.set_background(background)
        self.layout_box.addWidget(self.plotter)

        self.scene: Optional[Scene] = None
        self.visibility: Optional[VisibilityController] = None

        # --- Overlays ---
        self.control_panel = ControlPanel(boundaries, self)
        self.control_panel.setEnabled(False)
        self.control_panel.toggled.connect(self.on_toggle)

        self.loading_overlay = QLabel(LOADING_TEXT, self)
        self.loading_overlay.setAlignment(Qt.AlignCenter)
        self.loading_overlay.setStyleSheet(
            "QLabel { background-color: rgba(255, 255, 255, 230); font-size: 16px; padding: 12px; }"
        )
        self._place_overlays()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def show_scene(self, scene: Scene) -> None:
        """Registers the scene actors with the plotter and wires the toggles."""
        logger.info("Attaching scene to the 3D view.")
        SceneComposer.attach(scene, self.plotter)
        self.scene = scene
        self.visibility = SceneComposer.create_visibility(scene, self.plotter)

        for name, group in self.visibility.groups.items():
            if name in self.control_panel.checkboxes:
                self.control_panel.set_checked(name, group.visible)
        self.control_panel.setEnabled(True)
        self.loading_overlay.hide()

    def clear_scene(self) -> None:
        """Drops any actors left over from a failed attach."""
        self.plotter.clear_actors()
        self.scene = None
        self.visibility = None
        self.control_panel.setEnabled(False)

    def show_error(self, message: str) -> None:
        logger.error(f"Scene setup failed: {message}")
        self.loading_overlay.setText(ERROR_TEXT)
        self.loading_overlay.show()
        self.loading_overlay.raise_()

    # --- Toggle Slots ---
    def on_toggle(self, group: str, checked: bool) -> None:
        if self.visibility is None:
            return
        self.visibility.toggle(group, checked)

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def _place_overlays(self) -> None:
        self.control_panel.adjustSize()
        self.control_panel.move(10, 10)
        self.control_panel.raise_()
        self.loading_overlay.setGeometry(self.rect())
        if self.loading_overlay.isVisible():
            self.loading_overlay.raise_()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        self._place_overlays()

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
