"""
Attribution Heatmap Volume
Turns the attribution field into a maximum-intensity volume actor.
"""
from __future__ import annotations

import logging
from typing import Optional

from vtkmodules.vtkRenderingCore import vtkVolume, vtkVolumeProperty
from vtkmodules.vtkRenderingVolumeOpenGL2 import vtkSmartVolumeMapper

from retinaviz.config import HeatmapStyle
from retinaviz.model.coords import to_render_volume
from retinaviz.model.field import VolumetricField
from retinaviz.model.transfer import TransferFunction, ramp_transfer_function
from retinaviz.pipeline.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)

SCALARS_NAME = "attribution"


def attribution_transfer_function(max_value: float, style: Optional[HeatmapStyle] = None) -> TransferFunction:
    """Black -> red colour ramp with the soft-threshold opacity curve."""
    style = style or HeatmapStyle()
    return ramp_transfer_function(
        max_value,
        low_color=style.low_color,
        high_color=style.high_color,
        opacity_fractions=style.opacity_fractions,
        opacity_values=style.opacity_values,
    )


class HeatmapVolumeBuilder:
    def __init__(self, style: Optional[HeatmapStyle] = None) -> None:
        self.style: HeatmapStyle = style or HeatmapStyle()

    def transfer_function(self, max_value: float) -> TransferFunction:
        return attribution_transfer_function(max_value, self.style)

    def build(self, field: VolumetricField, max_value: float) -> vtkVolume:
        """
        Create the volume actor.

        Args:
            field: Attribution volume.
            max_value: Upper end of the colour/opacity ramps. Should be at
                least the field maximum. A value <= 0 yields an invisible
                volume.
        """
        if max_value <= 0:
            logger.warning(f"Attribution maximum is {max_value}, heatmap will be fully transparent.")

        grid = VtkUtils.volume_to_image_data(to_render_volume(field.as_array()), SCALARS_NAME)

        mapper = vtkSmartVolumeMapper()
        mapper.SetInputData(grid)
        mapper.SetBlendModeToMaximumIntensity()
        mapper.SetAutoAdjustSampleDistances(False)
        mapper.SetSampleDistance(self.style.sample_distance)

        tf = self.transfer_function(max_value)
        prop = vtkVolumeProperty()
        prop.SetColor(0, VtkUtils.color_function(tf))
        prop.SetScalarOpacity(0, VtkUtils.opacity_function(tf))
        prop.SetScalarOpacityUnitDistance(0, self.style.opacity_unit_distance)
        prop.SetInterpolationTypeToLinear()

        volume = vtkVolume()
        volume.SetMapper(mapper)
        volume.SetProperty(prop)

        logger.debug(f"Heatmap volume built: dimensions={grid.dimensions}, max={max_value}")
        return volume
