from __future__ import annotations
import io
import os
from typing import Callable

import trimesh
from trimesh.exchange.obj import parse_mtl
from trimesh.resolvers import FilePathResolver
from trimesh.visual.material import SimpleMaterial
from trimesh.visual.texture import TextureVisuals

from .errors import LoadFailure
from .logging import get_logger
from .scene import Node

ProgressCallback = Callable[[int, int], None]


class AssetLoader:
    """
    Reads material libraries and meshes from disk with trimesh.

    Both loads report `(bytes_loaded, bytes_total)` through `on_progress`
    after every chunk. Any I/O or decode problem surfaces as LoadFailure.
    """

    def __init__(self, chunk_size: int = 1 << 16):
        self.chunk_size = max(1, chunk_size)
        self.logger = get_logger(__name__)

    def _read(self, path: str, on_progress: ProgressCallback | None) -> bytes:
        try:
            total = os.path.getsize(path)
            buf = bytearray()
            with open(path, "rb") as f:
                while True:
                    chunk = f.read(self.chunk_size)
                    if not chunk:
                        break
                    buf.extend(chunk)
                    if on_progress is not None:
                        on_progress(len(buf), total)
        except OSError as e:
            raise LoadFailure(f"could not read {path}: {e}", path) from e
        return bytes(buf)

    def load_material(
        self, path: str, on_progress: ProgressCallback | None = None
    ) -> dict[str, SimpleMaterial]:
        data = self._read(path, on_progress)
        try:
            parsed = parse_mtl(data, resolver=FilePathResolver(path))
        except Exception as e:
            raise LoadFailure(f"could not parse material library {path}: {e}", path) from e

        materials = {}
        for name, kwargs in parsed.items():
            kwargs = dict(kwargs)
            kwargs.setdefault("name", name)
            materials[name] = SimpleMaterial(**kwargs)
        if not materials:
            raise LoadFailure(f"no materials defined in {path}", path)
        self.logger.debug(f"Parsed materials: {', '.join(materials)}")
        return materials

    def load_mesh(
        self,
        path: str,
        materials: dict[str, SimpleMaterial] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> Node:
        data = self._read(path, on_progress)
        file_type = os.path.splitext(path)[1].lstrip(".").lower() or "obj"
        try:
            mesh = trimesh.load_mesh(
                io.BytesIO(data),
                file_type=file_type,
                resolver=FilePathResolver(path),
                process=False,
            )
        except Exception as e:
            raise LoadFailure(f"could not decode mesh {path}: {e}", path) from e
        if not isinstance(mesh, trimesh.Trimesh):
            raise LoadFailure(f"{path} did not decode to a single mesh", path)

        if materials:
            uv = getattr(mesh.visual, "uv", None)
            current = getattr(mesh.visual, "material", None)
            name = getattr(current, "name", None)
            # several usemtl groups decode to one packed atlas material whose
            # name is not in the library; that one stays as decoded
            if uv is not None and (name is None or name in materials):
                material = materials.get(name, next(iter(materials.values())))
                mesh.visual = TextureVisuals(uv=uv, material=material)

        return Node(os.path.basename(path), geometry=mesh)
