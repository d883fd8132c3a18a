import numpy as np
import pytest

from retinaviz.pipeline.sampling import EvenCountSampling, FixedStrideSampling, rounded_linspace


def test_rounded_linspace_includes_both_ends_and_rounds_half_up() -> None:
    assert rounded_linspace(0, 2, 3).tolist() == [0, 1, 2]
    assert rounded_linspace(0, 3, 3).tolist() == [0, 2, 3]
    assert rounded_linspace(0, 9, 4).tolist() == [0, 3, 6, 9]
    assert rounded_linspace(0, 0, 3).tolist() == [0, 0, 0]
    assert rounded_linspace(0, 5, 1).tolist() == [0]


def test_even_count_is_independent_of_extent() -> None:
    sampling = EvenCountSampling(segments=14, resolution=48)

    assert len(sampling.cross_sections(500)) == 14
    assert len(sampling.samples(7)) == 48
    assert sampling.cross_sections(500)[0] == 0
    assert sampling.cross_sections(500)[-1] == 499


def test_fixed_stride_clamps_final_step() -> None:
    sampling = FixedStrideSampling(stride=4)

    assert sampling.cross_sections(10).tolist() == [0, 4, 8, 9]
    assert sampling.samples(10).tolist() == list(range(10))


def test_fixed_stride_does_not_repeat_last_section() -> None:
    assert FixedStrideSampling(stride=4).cross_sections(9).tolist() == [0, 4, 8]
    assert FixedStrideSampling(stride=4).cross_sections(1).tolist() == [0]


@pytest.mark.parametrize("kwargs", [{"segments": 0}, {"resolution": 0}])
def test_even_count_rejects_non_positive(kwargs) -> None:
    with pytest.raises(ValueError):
        EvenCountSampling(**kwargs)


def test_fixed_stride_rejects_non_positive() -> None:
    with pytest.raises(ValueError):
        FixedStrideSampling(stride=0)


def test_indices_are_integers() -> None:
    assert EvenCountSampling(3, 3).cross_sections(10).dtype.kind == "i"
    assert FixedStrideSampling(3).cross_sections(10).dtype.kind == "i"
    assert np.issubdtype(FixedStrideSampling(3).samples(4).dtype, np.integer)
