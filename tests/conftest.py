import numpy as np
import pytest, moderngl
import trimesh

from idleview.config import AppConfig
from idleview.scene import Node


@pytest.fixture(scope="module")
def ctx():
    try:
        return moderngl.create_standalone_context()
    except Exception as e:
        pytest.skip(f"Could not create headless GL context: {e}")


@pytest.fixture
def small_cfg():
    # tiny window, deterministic rotation
    return AppConfig(width=64, height=48, seed=1234)


def box_node(extents=(2.0, 2.0, 2.0), center=(0.0, 0.0, 0.0), name="box") -> Node:
    mesh = trimesh.creation.box(extents=extents)
    mesh.apply_translation(center)
    return Node(name, geometry=mesh)


def degenerate_node(name="flat") -> Node:
    mesh = trimesh.Trimesh(
        vertices=np.zeros((3, 3)), faces=[[0, 1, 2]], process=False
    )
    return Node(name, geometry=mesh)


@pytest.fixture
def make_box():
    return box_node


@pytest.fixture
def make_degenerate():
    return degenerate_node
