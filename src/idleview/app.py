from __future__ import annotations
import argparse
import shutil
import sys
import time

import glfw, moderngl

from .animator import IdleRotationAnimator
from .camera import Camera
from .config import AppConfig
from .errors import InvalidCameraConfig
from .loader import AssetLoader
from .logging import get_logger, setup_logging
from .orchestrator import AssetLoadOrchestrator, ViewerState
from .profiler import FrameProfiler
from .renderer import ModelRenderer


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Autonomous model viewer: auto-frames an OBJ/MTL asset and idles it."
    )
    p.add_argument(
        "--assets",
        type=str,
        default=None,
        help="Directory holding obj.mtl and obj.obj. Default: from config.",
    )
    p.add_argument(
        "--fullscreen",
        action="store_true",
        help="Open in fullscreen on the primary monitor.",
    )
    p.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Vertical field of view in degrees. Default: from config.",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the idle rotation. Default: random.",
    )
    p.add_argument(
        "--no-grayscale",
        action="store_true",
        help="Skip the grayscale post-processing pass.",
    )
    p.add_argument(
        "--frame-rate-independent",
        action="store_true",
        help="Scale the idle rotation by elapsed time instead of per frame.",
    )
    p.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Minimum log level (DEBUG, INFO, ...). Default: from config.",
    )
    p.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Log to a file instead of the console.",
    )
    return p.parse_args(argv)


def config_from_args(args) -> AppConfig:
    cfg = AppConfig()
    if args.assets is not None:
        cfg.asset_dir = args.assets
    if args.fov is not None:
        cfg.fov = args.fov
    if args.seed is not None:
        cfg.seed = args.seed
    if args.no_grayscale:
        cfg.grayscale = False
    if args.frame_rate_independent:
        cfg.frame_rate_independent = True
    if args.log_level is not None:
        cfg.log_level = args.log_level
    if args.log_file is not None:
        cfg.log_file = args.log_file
    return cfg


def _linux_gl_hint():
    if sys.platform.startswith("linux") and shutil.which("glxinfo") is None:
        return (
            "Linux OpenGL loaders not found.\n"
            "Install the dev libraries:\n"
            "  sudo apt install -y libgl1-mesa-dev libegl1-mesa-dev libglvnd-dev mesa-utils\n"
        )


def main(argv=None):
    args = parse_args(argv)
    cfg = config_from_args(args)

    setup_logging(cfg.log_level, cfg.log_file)
    logger = get_logger(__name__)

    # --- window / context ---
    if not glfw.init():
        raise RuntimeError("GLFW init failed")
    glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, 3)
    glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, 3)
    glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)
    glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, True)

    monitor = None
    if args.fullscreen:
        monitor = glfw.get_primary_monitor()
        mode = glfw.get_video_mode(monitor)
        cfg.width, cfg.height = mode.size.width, mode.size.height

    win = glfw.create_window(cfg.width, cfg.height, cfg.title, monitor, None)
    glfw.make_context_current(win)

    try:
        ctx = moderngl.create_context()
    except Exception:
        logger.error(_linux_gl_hint() or "Failed to create ModernGL context.")
        glfw.terminate()
        raise

    camera = Camera.from_config(cfg)
    renderer = ModelRenderer(ctx, cfg)
    state = ViewerState()
    animator = IdleRotationAnimator(cfg)

    def on_resize(_win, width, height):
        camera.set_aspect(width, height)
        renderer.resize(width, height)

    glfw.set_framebuffer_size_callback(win, on_resize)
    # framebuffer size differs from the window size on HiDPI displays
    on_resize(win, *glfw.get_framebuffer_size(win))

    orchestrator = None
    try:
        viewport_height = camera.viewport_height()
    except InvalidCameraConfig as e:
        # nothing to frame against; keep the window up with an empty scene
        logger.error(f"Invalid camera configuration: {e}")
    else:
        logger.info(f"Viewport height at origin: {viewport_height:.3f}")
        orchestrator = AssetLoadOrchestrator(
            AssetLoader(cfg.read_chunk_size),
            state,
            viewport_height,
            cfg,
            on_loaded=lambda s: renderer.upload(s.pivot),
            on_unloaded=renderer.forget,
        )
        orchestrator.start()

    logger.info("ESC quit")

    profiler = FrameProfiler()
    prev_t = time.time()
    try:
        while not glfw.window_should_close(win):
            with profiler.record("frame"):
                glfw.poll_events()
                if glfw.get_key(win, glfw.KEY_ESCAPE) == glfw.PRESS:
                    break

                now = time.time()
                actual_dt = now - prev_t
                prev_t = now

                if orchestrator is not None:
                    orchestrator.poll()

                with profiler.record("animate"):
                    dt = min(cfg.dt_clamp, actual_dt) if cfg.frame_rate_independent else None
                    animator.step(state, dt)

                with profiler.record("render"):
                    renderer.render(state.scene, camera)

            profiler.end_frame(actual_dt)

            with profiler.record("swap"):
                glfw.swap_buffers(win)
    finally:
        if orchestrator is not None:
            orchestrator.shutdown()
        renderer.release()
        glfw.terminate()

    return state


if __name__ == "__main__":
    main()
