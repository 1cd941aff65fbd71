from __future__ import annotations
from dataclasses import dataclass

import moderngl
import numpy as np

from . import shaders as S
from .camera import Camera
from .config import AppConfig
from .logging import get_logger
from .scene import Node, Scene


def make_tex(ctx, size, comps, dtype="f1", data=None):
    tex = ctx.texture(size, comps, data, dtype=dtype)
    tex.filter = (moderngl.LINEAR, moderngl.LINEAR)
    tex.repeat_x = False
    tex.repeat_y = False
    return tex


def fullscreen_quad(ctx):
    v = np.array([-1, -1, 1, -1, -1, 1, 1, 1], dtype="f4")
    return ctx.buffer(v.tobytes())


def gl_matrix(m) -> bytes:
    # numpy is row-major, GLSL expects column-major
    return np.asarray(m, dtype="f4").T.tobytes()


def interleave(mesh) -> np.ndarray:
    """Unindexed position/normal/uv rows (8 floats per vertex) for one trimesh."""
    faces = np.asarray(mesh.faces, dtype=np.int64)
    pos = np.asarray(mesh.vertices, dtype="f4")[faces].reshape(-1, 3)
    nrm = np.asarray(mesh.vertex_normals, dtype="f4")[faces].reshape(-1, 3)
    uv = getattr(mesh.visual, "uv", None)
    if uv is not None and len(uv) == len(mesh.vertices):
        tex = np.asarray(uv, dtype="f4")[faces].reshape(-1, 2)
    else:
        tex = np.zeros((len(pos), 2), dtype="f4")
    return np.hstack([pos, nrm, tex]).astype("f4")


@dataclass
class GpuMesh:
    vbo: object
    vao: object
    texture: object
    diffuse: tuple
    owns_texture: bool = False

    def release(self):
        self.vao.release()
        self.vbo.release()
        if self.owns_texture:
            self.texture.release()


class ModelRenderer:
    """
    Draws the scene into an offscreen target, then composites it to the screen
    through a grayscale pass.
    """

    def __init__(self, ctx: moderngl.Context, cfg: AppConfig):
        self.ctx = ctx
        self.cfg = cfg
        self.logger = get_logger(__name__)

        self.prog_mesh = ctx.program(
            vertex_shader=S.VS_MESH, fragment_shader=S.FS_MESH
        )
        self.prog_post = ctx.program(vertex_shader=S.VS, fragment_shader=S.FS_GRAYSCALE)
        self.vbo_quad = fullscreen_quad(ctx)
        self.vao_post = ctx.simple_vertex_array(self.prog_post, self.vbo_quad, "in_vert")
        self.white = make_tex(ctx, (1, 1), 4, data=bytes([255, 255, 255, 255]))

        self.meshes: dict[Node, GpuMesh] = {}
        self.width, self.height = cfg.width, cfg.height
        self.color = self.depth = self.fbo = None
        self._build_targets()

        # static uniforms
        self.prog_mesh["ambient"].value = cfg.ambient_intensity
        self.prog_mesh["key_dir"].value = tuple(cfg.key_light_position)
        self.prog_mesh["key_intensity"].value = cfg.key_light_intensity
        self.prog_mesh["fill_dir"].value = tuple(cfg.fill_light_position)
        self.prog_mesh["fill_intensity"].value = cfg.fill_light_intensity
        self.prog_mesh["exposure"].value = cfg.exposure

    def _build_targets(self):
        size = (max(1, self.width), max(1, self.height))
        self.color = make_tex(self.ctx, size, 4)
        self.depth = self.ctx.depth_renderbuffer(size)
        self.fbo = self.ctx.framebuffer(
            color_attachments=[self.color], depth_attachment=self.depth
        )

    def resize(self, width: int, height: int):
        if width <= 0 or height <= 0 or (width, height) == (self.width, self.height):
            return
        for res in (self.fbo, self.color, self.depth):
            res.release()
        self.width, self.height = width, height
        self._build_targets()
        self.logger.info(f"Render targets resized to {width}x{height}")

    def upload(self, root: Node):
        """Create GPU buffers for every mesh under `root` that has none yet."""
        for node in root.traverse():
            if node.geometry is None or node in self.meshes:
                continue
            self.meshes[node] = self._build_mesh(node.geometry)
            self.logger.info(
                f"Uploaded '{node.name}': {len(node.geometry.faces)} triangles"
            )

    def _build_mesh(self, mesh) -> GpuMesh:
        data = interleave(mesh)
        vbo = self.ctx.buffer(data.tobytes())
        vao = self.ctx.vertex_array(
            self.prog_mesh, [(vbo, "3f 3f 2f", "in_position", "in_normal", "in_uv")]
        )

        material = getattr(mesh.visual, "material", None)
        diffuse = (1.0, 1.0, 1.0, 1.0)
        if material is not None and getattr(material, "diffuse", None) is not None:
            diffuse = tuple(float(c) / 255.0 for c in material.diffuse[:4])

        image = getattr(material, "image", None)
        if image is None:
            return GpuMesh(vbo, vao, self.white, diffuse)

        # image rows run top-down, GL texture rows bottom-up
        pixels = np.ascontiguousarray(np.asarray(image.convert("RGBA"))[::-1])
        tex = make_tex(self.ctx, image.size, 4, data=pixels.tobytes())
        tex.repeat_x = True
        tex.repeat_y = True
        return GpuMesh(vbo, vao, tex, diffuse, owns_texture=True)

    def forget(self, root: Node):
        """Release the GPU buffers of every mesh under `root`."""
        for node in root.traverse():
            gpu = self.meshes.pop(node, None)
            if gpu is not None:
                gpu.release()

    def release(self):
        for gpu in self.meshes.values():
            gpu.release()
        self.meshes.clear()

    def render(self, scene: Scene, camera: Camera):
        self.fbo.use()
        self.ctx.viewport = (0, 0, self.width, self.height)
        self.ctx.clear(*self.cfg.clear_color)
        self.ctx.enable(moderngl.DEPTH_TEST)

        self.prog_mesh["view"].write(gl_matrix(camera.view_matrix()))
        self.prog_mesh["projection"].write(gl_matrix(camera.projection_matrix()))
        self.prog_mesh["tex"].value = 0

        for node in scene.mesh_nodes():
            gpu = self.meshes.get(node)
            if gpu is None:
                continue
            model = node.world_matrix()
            self.prog_mesh["model"].write(gl_matrix(model))
            self.prog_mesh["normal_matrix"].write(
                gl_matrix(np.linalg.inv(model[:3, :3]).T)
            )
            self.prog_mesh["diffuse"].value = gpu.diffuse
            gpu.texture.use(location=0)
            gpu.vao.render(moderngl.TRIANGLES)

        self.ctx.disable(moderngl.DEPTH_TEST)

        # composite
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, self.width, self.height)
        self.ctx.clear(*self.cfg.clear_color)
        self.color.use(location=0)
        self.prog_post["tDiffuse"].value = 0
        self.prog_post["enabled"].value = 1 if self.cfg.grayscale else 0
        self.vao_post.render(moderngl.TRIANGLE_STRIP)
