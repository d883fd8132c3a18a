"""
Visibility Controller
=====================
Maps UI toggle events to actor visibility and re-renders.

Every group (one per layer boundary, one for all eye models) holds a single
boolean, initially True. A toggle applies the checked state to every actor of
the group and requests a render. Groups registered with `reset_camera=True`
refit the camera first, because showing or hiding a large occluding mesh
changes the scene bounds.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Iterable, List, Protocol

logger = logging.getLogger(__name__)

EYE_MODELS_GROUP = "eye_models"


class Renderer(Protocol):
    def reset_camera(self) -> None: ...

    def render(self) -> None: ...


@dataclass
class VisibilityGroup:
    name: str
    actors: List[Any] = field(default_factory=list)
    reset_camera: bool = False
    visible: bool = True


class VisibilityController:
    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer
        self._groups: Dict[str, VisibilityGroup] = {}

    def register(self, name: str, actors: Iterable[Any], reset_camera: bool = False) -> VisibilityGroup:
        """Register (or replace) a group. Its actors are made visible."""
        group = VisibilityGroup(name=name, actors=[a for a in actors if a is not None], reset_camera=reset_camera)
        for actor in group.actors:
            actor.SetVisibility(True)
        self._groups[name] = group
        return group

    @property
    def groups(self) -> Dict[str, VisibilityGroup]:
        return dict(self._groups)

    def is_visible(self, name: str) -> bool:
        return self._groups[name].visible

    def toggle(self, name: str, checked: bool) -> None:
        """
        Raises:
            KeyError: If no group with this name was registered.
        """
        group = self._groups[name]
        group.visible = bool(checked)
        for actor in group.actors:
            actor.SetVisibility(group.visible)
        logger.debug(f"Group '{name}' visible={group.visible} ({len(group.actors)} actors)")

        if group.reset_camera:
            self.renderer.reset_camera()
        self.renderer.render()
