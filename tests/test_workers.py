from __future__ import annotations

from dataclasses import replace

import numpy as np

from retinaviz.config import STANDARD_PRESET
from retinaviz.controller.workers import SceneLoadWorker
from retinaviz.scene.composer import SceneAssets, SceneComposer


def _worker(tmp_path) -> tuple[SceneLoadWorker, list, list]:
    config = replace(STANDARD_PRESET.with_data_dir(str(tmp_path)), models=())
    worker = SceneLoadWorker(SceneComposer(config))
    loaded: list = []
    errors: list[str] = []
    worker.loaded.connect(loaded.append)
    worker.error_occurred.connect(errors.append)
    return worker, loaded, errors


def test_missing_core_array_emits_error(tmp_path) -> None:
    np.save(tmp_path / "attr.npy", np.ones((2, 2, 2)))
    worker, loaded, errors = _worker(tmp_path)

    worker.run()

    assert loaded == []
    assert len(errors) == 1
    assert "layers.npy" in errors[0]


def test_loaded_assets_are_emitted(tmp_path) -> None:
    np.save(tmp_path / "attr.npy", np.full((2, 2, 2), 4.0))
    np.save(tmp_path / "layers.npy", np.ones((3, 3, 10)))
    worker, loaded, errors = _worker(tmp_path)

    worker.run()

    assert errors == []
    assert len(loaded) == 1
    assert isinstance(loaded[0], SceneAssets)
    assert loaded[0].max_value == 4.0
