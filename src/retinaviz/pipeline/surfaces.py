"""
Eye Surface Models
==================
Loads the static anatomical STL meshes and turns them into placed, flat
coloured actors.

Why is this file needed?
------------------------
1. I/O: Models may live on disk or behind a URL. Fetching is the only place
   in the pipeline that can fail for reasons outside our control.
2. Robustness: A missing model must only remove that model from the scene.
   Every failure is logged and reported as `None`, nothing is raised.

Classes:
    MeshFetcher: bytes from a local path or an http(s) URL.
    SurfaceModelLoader: bytes -> PolyData with normals -> placed actor.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import pyvista as pv
import requests

from retinaviz.config import ModelPlacement

logger = logging.getLogger(__name__)


def model_suffix(ref: str) -> str:
    """File extension of a path or URL, ignoring any query string."""
    return Path(urlparse(ref).path).suffix or ".stl"


class MeshFetcher:
    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    def fetch(self, ref: str) -> bytes:
        """
        Raises:
            requests.RequestException: On HTTP failures.
            OSError: If a local file cannot be read.
        """
        if ref.startswith(("http://", "https://")):
            response = requests.get(ref, timeout=self.timeout)
            response.raise_for_status()
            return response.content
        return Path(ref).read_bytes()


class SurfaceModelLoader:
    def __init__(self, fetcher: Optional[MeshFetcher] = None) -> None:
        self.fetcher: MeshFetcher = fetcher or MeshFetcher()

    def load_mesh(self, ref: str) -> Optional[pv.PolyData]:
        """Fetch, parse and smooth one model. Returns None on any failure."""
        try:
            raw = self.fetcher.fetch(ref)
            mesh = self._parse(raw, suffix=model_suffix(ref))
            return mesh.compute_normals(point_normals=True, cell_normals=False)
        except Exception as e:
            logger.error(f"Error loading STL model '{ref}': {e}")
            return None

    def load(self, ref: str, placement: ModelPlacement) -> Optional[pv.Actor]:
        mesh = self.load_mesh(ref)
        if mesh is None:
            return None
        return self.make_actor(mesh, placement)

    @staticmethod
    def make_actor(mesh: pv.PolyData, placement: ModelPlacement) -> pv.Actor:
        mapper = pv.DataSetMapper(mesh)
        # Flat material colour, no data-driven colouring
        mapper.scalar_visibility = False

        actor = pv.Actor(mapper=mapper)
        actor.scale = (placement.scale, placement.scale, placement.scale)
        actor.position = placement.position
        actor.prop.color = placement.color
        return actor

    @staticmethod
    def _parse(raw: bytes, suffix: str) -> pv.PolyData:
        """VTK readers only read from disk, so the bytes go through a temp file."""
        if not raw:
            raise ValueError("Model data is empty.")

        fd, temp_path = tempfile.mkstemp(suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(raw)
            mesh = pv.read(temp_path)
        finally:
            try:
                os.remove(temp_path)
            except OSError as e:
                logger.warning(f"Could not delete temp file '{temp_path}': {e}")

        if not isinstance(mesh, pv.PolyData):
            mesh = mesh.extract_surface()
        if mesh.n_points == 0:
            raise ValueError("Model contains no geometry.")
        return mesh
