"""
Layer Control Panel
Floating checkboxes for the layer wireframes and the eye models.
"""
from __future__ import annotations

from typing import Dict, Iterable, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QCheckBox, QFrame, QLabel, QVBoxLayout, QWidget

from retinaviz.model.layers import LayerBoundary
from retinaviz.pipeline.visibility import EYE_MODELS_GROUP


class ControlPanel(QFrame):
    # (group name, checked)
    toggled = Signal(str, bool)

    def __init__(self, boundaries: Iterable[LayerBoundary], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QCheckBox, QLabel { background-color: transparent; border: none; padding: 2px; }
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)

        title = QLabel("<b>Retinal layers</b>")
        layout.addWidget(title)

        self.checkboxes: Dict[str, QCheckBox] = {}
        for boundary in boundaries:
            cb = self._make_checkbox(boundary.group, boundary.name, layout)
            # Label text in the wireframe colour doubles as the legend
            cb.setStyleSheet(f"QCheckBox {{ color: {boundary.css_color()}; }}")

        self._make_checkbox(EYE_MODELS_GROUP, "Eye model", layout)
        self.adjustSize()

    def _make_checkbox(self, group: str, text: str, layout: QVBoxLayout) -> QCheckBox:
        cb = QCheckBox(text)
        cb.setChecked(True)
        cb.toggled.connect(lambda checked, g=group: self.toggled.emit(g, checked))
        layout.addWidget(cb)
        self.checkboxes[group] = cb
        return cb

    def set_checked(self, group: str, checked: bool) -> None:
        """Sync a checkbox without emitting `toggled`."""
        cb = self.checkboxes[group]
        if cb.isChecked() != checked:
            cb.blockSignals(True)
            cb.setChecked(checked)
            cb.blockSignals(False)
