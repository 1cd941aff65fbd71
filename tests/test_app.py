from concurrent.futures import Future

import pytest
from unittest.mock import MagicMock, patch
from idleview import app
from idleview.errors import LoadFailure


@pytest.fixture
def mock_glfw():
    """Provides a mocked glfw module."""
    with patch("idleview.app.glfw") as mock:
        mock.init.return_value = True
        mock.get_primary_monitor.return_value = MagicMock()
        mock.get_video_mode.return_value = MagicMock(
            size=MagicMock(width=1920, height=1080)
        )
        mock.create_window.return_value = MagicMock()
        mock.get_framebuffer_size.return_value = (1024, 768)
        # Simulate a few frames and then exit
        mock.window_should_close.side_effect = [False, False, True]
        yield mock


@pytest.fixture
def mock_moderngl():
    """Provides a mocked moderngl module."""
    with patch("idleview.app.moderngl") as mock:
        mock.create_context.return_value = MagicMock()
        yield mock


@pytest.fixture
def mock_renderer():
    with patch("idleview.app.ModelRenderer") as mock:
        yield mock


@pytest.fixture
def mock_orchestrator():
    with patch("idleview.app.AssetLoadOrchestrator") as mock:
        yield mock


def test_app_main_defaults(mock_glfw, mock_moderngl, mock_renderer, mock_orchestrator):
    """Test the main function with default arguments."""
    app.main([])
    mock_orchestrator.return_value.start.assert_called_once()
    assert mock_orchestrator.return_value.poll.call_count == 2
    # Check that the main loop runs
    assert mock_glfw.poll_events.call_count > 1
    assert mock_glfw.swap_buffers.call_count > 1
    assert mock_renderer.return_value.render.call_count == 2
    mock_orchestrator.return_value.shutdown.assert_called_once()
    mock_glfw.terminate.assert_called_once()


def test_app_main_fullscreen(mock_glfw, mock_moderngl, mock_renderer, mock_orchestrator):
    app.main(["--fullscreen"])
    args = mock_glfw.create_window.call_args[0]
    assert args[:2] == (1920, 1080)
    assert args[3] is mock_glfw.get_primary_monitor.return_value


def test_app_main_invalid_fov_keeps_running(
    mock_glfw, mock_moderngl, mock_renderer, mock_orchestrator
):
    """A camera that cannot be framed against still opens an empty viewer."""
    state = app.main(["--fov", "0"])
    mock_orchestrator.assert_not_called()
    assert mock_glfw.swap_buffers.call_count > 1
    assert state.pivot is None


class ImmediateExecutor:
    """Runs submitted work inline so the first poll sees a finished load."""

    def __init__(self, *args, **kwargs):
        pass

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def shutdown(self, wait=True, cancel_futures=False):
        pass


def test_app_main_load_failure_is_not_fatal(mock_glfw, mock_moderngl, mock_renderer):
    with patch("idleview.app.AssetLoader") as mock_loader, patch(
        "idleview.orchestrator.ThreadPoolExecutor", ImmediateExecutor
    ):
        mock_loader.return_value.load_material.side_effect = LoadFailure(
            "missing", "static/sceneone/obj.mtl"
        )
        state = app.main([])
    mock_loader.return_value.load_mesh.assert_not_called()
    assert isinstance(state.error, LoadFailure)
    assert state.pivot is None
    assert state.animating is False
    assert mock_glfw.swap_buffers.call_count > 1


def test_app_resize_callback(mock_glfw, mock_moderngl, mock_renderer, mock_orchestrator):
    app.main([])
    callback = mock_glfw.set_framebuffer_size_callback.call_args[0][1]
    callback(None, 800, 400)
    mock_renderer.return_value.resize.assert_called_with(800, 400)


def test_app_sizes_targets_from_framebuffer(
    mock_glfw, mock_moderngl, mock_renderer, mock_orchestrator
):
    """On HiDPI displays the framebuffer is larger than the requested window."""
    mock_glfw.get_framebuffer_size.return_value = (2048, 1536)
    app.main([])
    mock_renderer.return_value.resize.assert_called_once_with(2048, 1536)


def test_app_context_failure_terminates(mock_glfw, mock_moderngl, mock_renderer):
    mock_moderngl.create_context.side_effect = RuntimeError("no GL")
    with pytest.raises(RuntimeError):
        app.main([])
    mock_glfw.terminate.assert_called_once()
    mock_renderer.assert_not_called()
