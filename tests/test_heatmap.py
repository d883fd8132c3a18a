from __future__ import annotations

import numpy as np
import pytest
import pyvista as pv

from retinaviz.config import HeatmapStyle
from retinaviz.model.field import VolumetricField
from retinaviz.pipeline.heatmap import SCALARS_NAME, HeatmapVolumeBuilder, attribution_transfer_function


def _end_to_end_field() -> VolumetricField:
    return VolumetricField(shape=(2, 2, 2), data=[0, 1, 2, 3, 4, 5, 6, 7])


def test_transfer_function_matches_soft_threshold_curve() -> None:
    field = _end_to_end_field()
    tf = attribution_transfer_function(field.max_value())

    assert tf.color_points[0] == (0.0, (0.0, 0.0, 0.0))
    assert tf.color_points[-1] == (7.0, (1.0, 0.0, 0.0))

    values = [p[0] for p in tf.opacity_points]
    opacities = [p[1] for p in tf.opacity_points]
    assert values == pytest.approx([0.0, 0.7, 1.75, 2.1, 7.0])
    assert opacities == [0.0, 0.0, 0.5, 0.9, 1.0]


@pytest.mark.parametrize("max_value", [0.5, 7.0, 1234.0])
def test_opacity_is_non_decreasing(max_value: float) -> None:
    tf = attribution_transfer_function(max_value)
    samples = [tf.opacity_at(v) for v in np.linspace(0.0, max_value, 101)]

    assert all(b >= a for a, b in zip(samples, samples[1:]))
    assert tf.opacity_at(0.0) == 0.0
    assert tf.opacity_at(max_value) == 1.0
    assert tf.color_at(max_value / 2) == pytest.approx((0.5, 0.0, 0.0))


@pytest.mark.parametrize("max_value", [0.0, -3.0])
def test_degenerate_maximum_gives_invisible_single_point(max_value: float) -> None:
    tf = attribution_transfer_function(max_value)

    assert tf.opacity_points == ((0.0, 0.0),)
    assert tf.color_points == ((0.0, (0.0, 0.0, 0.0)),)
    assert tf.opacity_at(0.0) == 0.0
    assert tf.scalar_range == (0.0, 0.0)


def test_volume_actor_uses_transfer_function_and_mip() -> None:
    volume = HeatmapVolumeBuilder().build(_end_to_end_field(), 7.0)
    prop = volume.GetProperty()
    mapper = volume.GetMapper()

    ctf = prop.GetRGBTransferFunction(0)
    assert ctf.GetColor(0.0) == pytest.approx((0.0, 0.0, 0.0))
    assert ctf.GetColor(7.0) == pytest.approx((1.0, 0.0, 0.0))

    pwf = prop.GetScalarOpacity(0)
    assert pwf.GetSize() == 5
    assert pwf.GetValue(0.7) == pytest.approx(0.0)
    assert pwf.GetValue(1.75) == pytest.approx(0.5)
    assert pwf.GetValue(2.1) == pytest.approx(0.9)
    assert pwf.GetValue(7.0) == pytest.approx(1.0)

    assert mapper.GetBlendMode() == mapper.MAXIMUM_INTENSITY_BLEND
    assert mapper.GetSampleDistance() == pytest.approx(HeatmapStyle().sample_distance)
    assert prop.GetScalarOpacityUnitDistance(0) == pytest.approx(3.0)


def test_all_zero_field_does_not_raise() -> None:
    field = VolumetricField(shape=(2, 2, 2), data=np.zeros(8))
    volume = HeatmapVolumeBuilder().build(field, field.max_value())

    pwf = volume.GetProperty().GetScalarOpacity(0)
    assert pwf.GetSize() == 1
    assert pwf.GetValue(0.0) == 0.0


def test_volume_is_laid_out_in_render_axes() -> None:
    arr = np.arange(2 * 3 * 4, dtype=float).reshape(2, 3, 4)
    volume = HeatmapVolumeBuilder().build(VolumetricField.from_array(arr), float(arr.max()))

    grid = pv.wrap(volume.GetMapper().GetInput())
    assert tuple(grid.dimensions) == (2, 4, 3)

    scalars = np.asarray(grid.point_data[SCALARS_NAME])
    nx, ny = 2, 4
    for x, y, d in [(0, 0, 0), (1, 2, 3), (0, 1, 2)]:
        # render (x, depth, y), VTK ids run x fastest
        pid = x + nx * (d + ny * y)
        assert scalars[pid] == arr[x, y, d]


def test_custom_style_changes_curve() -> None:
    style = HeatmapStyle(opacity_fractions=(0.0, 1.0), opacity_values=(0.2, 0.4))
    tf = HeatmapVolumeBuilder(style).transfer_function(10.0)

    assert tf.opacity_points == ((0.0, 0.2), (10.0, 0.4))
