"""
VTK and Geometry Utilities
Helper functions for converting plain data into VTK objects.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt
import pyvista as pv
from vtkmodules.vtkCommonDataModel import vtkPiecewiseFunction
from vtkmodules.vtkRenderingCore import vtkColorTransferFunction

from retinaviz.model.transfer import TransferFunction


class VtkUtils:
    @staticmethod
    def color_function(tf: TransferFunction) -> vtkColorTransferFunction:
        """Colour ramp of `tf` as a vtkColorTransferFunction."""
        ctf = vtkColorTransferFunction()
        for value, (r, g, b) in tf.color_points:
            ctf.AddRGBPoint(value, r, g, b)
        return ctf

    @staticmethod
    def opacity_function(tf: TransferFunction) -> vtkPiecewiseFunction:
        """Opacity ramp of `tf` as a vtkPiecewiseFunction."""
        pwf = vtkPiecewiseFunction()
        for value, opacity in tf.opacity_points:
            pwf.AddPoint(value, opacity)
        return pwf

    @staticmethod
    def volume_to_image_data(volume: npt.NDArray[np.float64], name: str) -> pv.ImageData:
        """
        Wrap a 3D array (already in render axis order) as ImageData.

        VTK numbers points with the first axis fastest, hence the Fortran
        ordered flatten.
        """
        volume = np.asarray(volume, dtype=np.float64)
        if volume.ndim != 3:
            raise ValueError(f"Expected a 3D array, got shape {volume.shape}.")

        grid = pv.ImageData(dimensions=volume.shape)
        grid.point_data[name] = volume.ravel(order="F")
        grid.set_active_scalars(name)
        return grid

    @staticmethod
    def polylines_to_polydata(polylines: Sequence[npt.NDArray[np.float64]]) -> pv.PolyData:
        """
        Pack independent (N, 3) polylines into one PolyData, one line cell each.

        Points are not shared between polylines.
        """
        pts_list: list[npt.NDArray[np.float64]] = []
        cells_list: list[npt.NDArray[np.int_]] = []
        offset = 0

        for line in polylines:
            line = np.asarray(line, dtype=np.float64).reshape(-1, 3)
            n = line.shape[0]
            if n == 0:
                continue
            pts_list.append(line)
            # polyline cell: [n, id0, id1, ..., id(n-1)]
            cells_list.append(np.hstack([[n], np.arange(offset, offset + n, dtype=np.int_)]))
            offset += n

        if not pts_list:
            return pv.PolyData()

        # Line cells only, no per-point vertex cells
        return pv.PolyData(np.vstack(pts_list), lines=np.concatenate(cells_list).astype(np.int_))
