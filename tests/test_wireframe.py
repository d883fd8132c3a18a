from __future__ import annotations

import numpy as np
import pytest

from retinaviz.config import WireframeStyle
from retinaviz.model.field import VolumetricField
from retinaviz.pipeline.sampling import EvenCountSampling, FixedStrideSampling
from retinaviz.pipeline.wireframe import LayerWireframeExtractor


def _boundary_field(nx: int = 3, ny: int = 3, depth: int = 10) -> VolumetricField:
    """Boundary j at cell (x, y) sits at height 100*j + ny*x + y."""
    arr = np.zeros((nx, ny, depth))
    for j in range(depth):
        arr[:, :, j] = 100.0 * j + np.arange(nx * ny).reshape(nx, ny)
    return VolumetricField.from_array(arr)


def test_end_to_end_even_count_three_by_three() -> None:
    data = np.zeros((3, 3, 10))
    data[:, :, 1] = np.arange(9).reshape(3, 3)
    field = VolumetricField.from_array(data)

    result = LayerWireframeExtractor(EvenCountSampling(segments=3, resolution=3)).extract(field, [1])
    polylines = result[1]

    assert len(polylines) == 6
    for direction in (0, 1):
        sections = [p for p in polylines if p.direction == direction]
        assert [p.index for p in sections] == [0, 1, 2]
        assert all(p.n_points == 3 for p in sections)

    middle_x = next(p for p in polylines if p.direction == 0 and p.index == 1)
    # (x, height, y) for x=1, y=0..2, height = 3x + y
    assert middle_x.points.tolist() == [[1, 3, 0], [1, 4, 1], [1, 5, 2]]

    middle_y = next(p for p in polylines if p.direction == 1 and p.index == 1)
    assert middle_y.points.tolist() == [[0, 1, 1], [1, 4, 1], [2, 7, 1]]


@pytest.mark.parametrize("sampling", [EvenCountSampling(4, 5), FixedStrideSampling(2)])
def test_heights_round_trip_through_flat_lookup(sampling) -> None:
    field = _boundary_field(nx=5, ny=4)
    nx, ny, nb = field.shape

    result = LayerWireframeExtractor(sampling).extract(field, [1, 5, 7, 9])

    for j, polylines in result.items():
        for line in polylines:
            for x, height, y in line.points:
                x, y = int(x), int(y)
                assert height == field.data[j + nb * (y + ny * x)]


def test_even_count_point_counts() -> None:
    field = _boundary_field(nx=6, ny=9)
    polylines = LayerWireframeExtractor(EvenCountSampling(segments=4, resolution=7)).extract(field, [5])[5]

    assert len(polylines) == 8
    assert all(p.n_points == 7 for p in polylines)


def test_fixed_stride_point_counts_follow_traced_axis() -> None:
    field = _boundary_field(nx=6, ny=9)
    polylines = LayerWireframeExtractor(FixedStrideSampling(stride=4)).extract(field, [7])[7]

    along_x = [p for p in polylines if p.direction == 0]
    along_y = [p for p in polylines if p.direction == 1]
    assert [p.index for p in along_x] == [0, 4, 5]
    assert [p.index for p in along_y] == [0, 4, 8]
    assert all(p.n_points == 9 for p in along_x)
    assert all(p.n_points == 6 for p in along_y)


def test_polylines_are_independent() -> None:
    field = _boundary_field()
    polylines = LayerWireframeExtractor(EvenCountSampling(3, 3)).extract(field, [1])[1]

    assert polylines[0].points is not polylines[1].points
    assert not polylines[0].points.flags.writeable
    assert polylines[0].segments().tolist() == [[0, 1], [1, 2]]


def test_single_cell_axis_degenerates_without_raising() -> None:
    field = _boundary_field(nx=1, ny=1)

    result = LayerWireframeExtractor(EvenCountSampling(2, 3)).extract(field, [1])
    assert all(np.all(p.points == p.points[0]) for p in result[1])

    stride = LayerWireframeExtractor(FixedStrideSampling(5)).extract(field, [1])
    assert [p.n_points for p in stride[1]] == [1, 1]


def test_boundary_outside_field_yields_empty_list() -> None:
    field = _boundary_field(depth=6)
    result = LayerWireframeExtractor(EvenCountSampling(3, 3)).extract(field, [1, 5, 7])

    assert len(result[1]) == 6
    assert len(result[5]) == 6
    assert result[7] == []


def test_unknown_or_empty_boundary_set_fails_fast() -> None:
    extractor = LayerWireframeExtractor()
    with pytest.raises(ValueError):
        extractor.extract(_boundary_field(), [])
    with pytest.raises(ValueError):
        extractor.extract(_boundary_field(), [2])


def test_actors_are_styled_per_boundary() -> None:
    field = _boundary_field()
    extractor = LayerWireframeExtractor(EvenCountSampling(3, 3), WireframeStyle(opacity=0.5, line_width=3.0))
    actors = extractor.build(field, [1, 9])

    assert set(actors) == {1, 9}
    dataset = actors[1].mapper.dataset
    assert dataset.n_points == 18
    assert dataset.n_cells == 6
    assert dataset.n_lines == 6
    assert dataset.n_verts == 0

    prop = actors[1].GetProperty()
    assert prop.GetColor() == pytest.approx((0.0, 0.0, 1.0))
    assert prop.GetOpacity() == pytest.approx(0.5)
    assert prop.GetLineWidth() == pytest.approx(3.0)
    assert not prop.GetBackfaceCulling()
    assert not prop.GetFrontfaceCulling()
    assert actors[1].GetVisibility()


def test_empty_boundary_builds_empty_actor() -> None:
    field = _boundary_field(depth=6)
    actors = LayerWireframeExtractor(EvenCountSampling(3, 3)).build(field, [7])

    assert actors[7].mapper.dataset.n_points == 0
