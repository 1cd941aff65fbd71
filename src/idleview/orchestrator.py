from __future__ import annotations
import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

from .animator import RotationState
from .config import AppConfig
from .errors import LoadFailure, ViewerError
from .framing import FramingResult, frame
from .logging import get_logger
from .scene import Node, Scene

logger = get_logger(__name__)


@dataclass
class ViewerState:
    """
    Everything the viewer mutates at runtime.

    The orchestrator fills in model/pivot once a load succeeds; after that the
    animator is the only writer of `rotation` and of the pivot's angle.
    """

    scene: Scene = field(default_factory=Scene)
    model: Node | None = None
    pivot: Node | None = None
    rotation: RotationState = field(default_factory=RotationState)
    framing: FramingResult | None = None
    animating: bool = False
    error: Exception | None = None


@dataclass
class LoadedAsset:
    materials: dict
    mesh: Node


class AssetLoadOrchestrator:
    """
    Material -> mesh -> framing -> scene -> animator, as one linear sequence.

    File reads run on a worker thread (`start`); framing and every scene
    mutation happen on the thread that calls `poll`, i.e. the render loop.
    """

    def __init__(
        self,
        loader,
        state: ViewerState,
        viewport_height: float,
        cfg: AppConfig | None = None,
        executor: ThreadPoolExecutor | None = None,
        on_loaded: Callable[[ViewerState], None] | None = None,
        on_unloaded: Callable[[Node], None] | None = None,
    ):
        self.loader = loader
        self.state = state
        self.viewport_height = viewport_height
        self.cfg = cfg or AppConfig()
        self.on_loaded = on_loaded
        self.on_unloaded = on_unloaded
        self._executor = executor
        self._owns_executor = executor is None
        self._future: Future | None = None

    def paths(self, base_path: str | None = None) -> tuple[str, str]:
        base = base_path if base_path is not None else self.cfg.asset_dir
        return (
            os.path.join(base, self.cfg.material_file),
            os.path.join(base, self.cfg.mesh_file),
        )

    @staticmethod
    def _progress(path: str):
        def report(loaded: int, total: int):
            if total > 0:
                logger.debug(f"{path}: {loaded / total * 100:.1f}% loaded")

        return report

    def load_assets(self, base_path: str | None = None) -> LoadedAsset:
        """Load the material library, then the mesh with it. Raises LoadFailure."""
        mtl_path, mesh_path = self.paths(base_path)
        logger.info("Starting model load...")
        materials = self.loader.load_material(mtl_path, self._progress(mtl_path))
        logger.info("MTL loaded successfully")
        mesh = self.loader.load_mesh(mesh_path, materials, self._progress(mesh_path))
        logger.info("OBJ loaded successfully")
        return LoadedAsset(materials=materials, mesh=mesh)

    def start(self, base_path: str | None = None) -> Future:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="asset-load"
            )
        self._future = self._executor.submit(self.load_assets, base_path)
        return self._future

    @property
    def pending(self) -> bool:
        return self._future is not None

    def poll(self) -> bool:
        """Finish a background load if it is done. Returns True on the call that handles it."""
        if self._future is None or not self._future.done():
            return False
        future, self._future = self._future, None
        if future.cancelled():
            logger.info("Model load cancelled")
            return True
        exc = future.exception()
        if exc is not None and not isinstance(exc, ViewerError):
            raise exc
        self.complete(exc if exc is not None else future.result())
        return True

    def complete(self, outcome: LoadedAsset | Exception) -> bool:
        if isinstance(outcome, Exception):
            self._fail(outcome)
            return False

        try:
            result, pivot = frame(outcome.mesh, self.viewport_height, self.cfg)
        except ViewerError as e:
            self._fail(e)
            return False

        if self.state.pivot is not None:
            self.state.scene.remove_child(None, self.state.pivot)
            if self.on_unloaded is not None:
                self.on_unloaded(self.state.pivot)
        self.state.scene.add_child(None, pivot)
        self.state.pivot = pivot
        self.state.model = outcome.mesh
        self.state.framing = result
        self.state.error = None

        angle = float(pivot.rotation[self.cfg.rotation_axis])
        self.state.rotation = RotationState(current=angle, target=angle)

        if not self.state.animating:
            self.state.animating = True
            logger.info("Idle rotation started")
        if self.on_loaded is not None:
            self.on_loaded(self.state)
        return True

    def load(self, base_path: str | None = None) -> bool:
        """Synchronous variant of start() + poll()."""
        try:
            asset = self.load_assets(base_path)
        except LoadFailure as e:
            return self.complete(e)
        return self.complete(asset)

    def _fail(self, exc: Exception):
        self.state.error = exc
        if isinstance(exc, LoadFailure):
            logger.error(f"Error loading {exc.path}: {exc}")
        else:
            logger.error(f"Framing aborted ({type(exc).__name__}): {exc}")

    def cancel(self):
        if self._future is not None and self._future.cancel():
            self._future = None
            logger.info("Model load cancelled")

    def shutdown(self):
        self.cancel()
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
