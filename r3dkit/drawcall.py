"""Draw calls: one mesh or sprite with its transform, visibility tests and skinning."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from r3dkit.frustum import Frustum
from r3dkit.geometry import BoundingBox, Matrix, Vector3

FLT_MAX = 3.4028234663852886e38


class GeometryType(Enum):
    """What a draw call renders; plain meshes count as models."""

    MODEL = "model"
    SPRITE = "sprite"


class RenderMode(Enum):
    """The pass a draw call is rendered in."""

    DEFERRED = "deferred"
    FORWARD = "forward"


class BlendMode(Enum):
    """How a draw call's colour is blended with the frame."""

    OPAQUE = "opaque"
    ALPHA = "alpha"
    ADDITIVE = "additive"
    MULTIPLY = "multiply"


@dataclass
class Mesh:
    """Geometry data needed for culling, sorting and skinning."""

    aabb: BoundingBox
    vertex_count: int = 0
    index_count: int = 0
    bone_matrices: list[Matrix] = field(default_factory=list)


@dataclass
class ModelAnimation:
    """Skeletal animation: one list of bone poses per frame."""

    frame_poses: Sequence[Sequence[Matrix]]
    bone_count: int

    @property
    def frame_count(self) -> int:
        return len(self.frame_poses)


@dataclass
class DrawCall:
    """A single mesh or sprite to render, optionally instanced."""

    transform: Matrix = field(default_factory=Matrix.identity)
    geometry_type: GeometryType = GeometryType.MODEL
    render_mode: RenderMode = RenderMode.DEFERRED
    blend_mode: BlendMode = BlendMode.OPAQUE

    mesh: Mesh | None = None
    anim: ModelAnimation | None = None
    bone_offsets: Sequence[Matrix] | None = None
    frame: int = 0

    uv_offset: tuple[float, float] = (0.0, 0.0)
    uv_scale: tuple[float, float] = (1.0, 1.0)
    quad: tuple[Vector3, ...] = ()

    instance_transforms: Sequence[Matrix] | None = None
    instance_colors: Sequence[tuple[int, int, int, int]] | None = None
    instance_aabb: BoundingBox | None = None
    instance_count: int = 0

    @property
    def is_opaque(self) -> bool:
        return self.blend_mode is BlendMode.OPAQUE

    def _require_mesh(self) -> Mesh:
        if self.mesh is None:
            raise ValueError("a model draw call needs a mesh")
        return self.mesh

    def is_visible(self, frustum: Frustum) -> bool:
        """Whether the geometry intersects the frustum."""
        if self.geometry_type is GeometryType.MODEL:
            mesh = self._require_mesh()
            if self.transform.is_identity():
                return frustum.contains_aabb(mesh.aabb)
            return frustum.contains_obb(mesh.aabb, self.transform)
        if self.geometry_type is GeometryType.SPRITE:
            return frustum.contains_any_point(self.quad)
        return False

    def instanced_is_visible(self, frustum: Frustum) -> bool:
        """Whether the box around all instances intersects the frustum.

        Without a finite instance box the instances are always considered visible.
        """
        aabb = self.instance_aabb
        if aabb is None or aabb.min.x == -FLT_MAX:
            return True
        if self.transform.is_identity():
            return frustum.contains_aabb(aabb)
        return frustum.contains_obb(aabb, self.transform)

    def update_model_animation(self) -> None:
        """Write the current frame's skinning matrices into the mesh."""
        mesh = self._require_mesh()
        anim = self.anim
        if anim is None or self.bone_offsets is None:
            raise ValueError("draw call has no animation to apply")
        if anim.frame_count == 0:
            raise ValueError("animation has no frames")
        if self.frame < 0:
            raise IndexError(f"animation frame must not be negative, got {self.frame}")

        frame = self.frame
        if frame >= anim.frame_count:
            frame %= anim.frame_count

        poses = anim.frame_poses[frame]
        if len(mesh.bone_matrices) < anim.bone_count:
            mesh.bone_matrices.extend(
                Matrix.identity() for _ in range(anim.bone_count - len(mesh.bone_matrices))
            )
        for bone, (offset, pose) in enumerate(
            zip(self.bone_offsets[:anim.bone_count], poses[:anim.bone_count])
        ):
            mesh.bone_matrices[bone] = offset @ pose