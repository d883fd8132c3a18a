"""
Attribution Colour Scale
2D legend explaining the heatmap colours.
"""
from __future__ import annotations

import logging
from typing import Optional

from vtkmodules.vtkRenderingAnnotation import vtkScalarBarActor
from vtkmodules.vtkRenderingCore import vtkTextProperty

from retinaviz.config import ColorScaleStyle, HeatmapStyle
from retinaviz.pipeline.heatmap import attribution_transfer_function
from retinaviz.pipeline.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


class ColorScaleBuilder:
    def __init__(self, style: Optional[ColorScaleStyle] = None, heatmap_style: Optional[HeatmapStyle] = None) -> None:
        self.style: ColorScaleStyle = style or ColorScaleStyle()
        # Same ramp as the volume so the legend always matches it
        self.heatmap_style: HeatmapStyle = heatmap_style or HeatmapStyle()

    def build(self, max_value: float) -> vtkScalarBarActor:
        """
        Legend over [0, max_value]. A non-positive maximum gives a [0, 0]
        legend instead of an error.
        """
        upper = max(float(max_value), 0.0)
        lut = VtkUtils.color_function(attribution_transfer_function(upper, self.heatmap_style))

        bar = vtkScalarBarActor()
        bar.SetLookupTable(lut)
        bar.SetTitle(self.style.title)
        bar.DrawNanAnnotationOff()
        self._apply_text_style(bar.GetTitleTextProperty())
        self._apply_text_style(bar.GetLabelTextProperty())

        logger.debug(f"Colour scale built for range [0, {upper}]")
        return bar

    def _apply_text_style(self, prop: vtkTextProperty) -> None:
        prop.SetColor(*self.style.text_color)
        prop.SetFontSize(self.style.font_size)
        if self.style.font_family.lower() == "arial":
            prop.SetFontFamilyToArial()
        elif self.style.font_family.lower() == "courier":
            prop.SetFontFamilyToCourier()
        else:
            prop.SetFontFamilyToTimes()
        prop.ItalicOff()
        prop.ShadowOff()
