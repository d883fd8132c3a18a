"""
3D Text Labels
Orientation labels drawn as extruded vector text in the scene.
"""
from __future__ import annotations

import logging
from typing import Optional

import pyvista as pv

from retinaviz.config import LabelSpec

logger = logging.getLogger(__name__)


def create_label(spec: LabelSpec) -> Optional[pv.Actor]:
    """
    Build a text actor from VTK's vector font. Returns None if the text
    geometry cannot be generated.
    """
    try:
        text = pv.Text3D(spec.text, depth=spec.depth)
        mapper = pv.DataSetMapper(text)
        mapper.scalar_visibility = False

        actor = pv.Actor(mapper=mapper)
        actor.position = spec.position
        actor.scale = (spec.scale, spec.scale, spec.scale)
        actor.orientation = spec.orientation
        actor.prop.color = spec.color
        return actor
    except Exception as e:
        logger.error(f"Error setting up text label '{spec.text}': {e}")
        return None
