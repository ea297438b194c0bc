"""Light sources: default parameters, shadow update scheduling, bounds and matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from r3dkit.geometry import BoundingBox, Matrix, Vector3

FLT_MAX = 3.4028234663852886e38

SHADOW_NEAR_PLANE = 0.05
SCENE_MARGIN = 1.1

_OMNI_DIRECTIONS = (
    Vector3(1.0, 0.0, 0.0),
    Vector3(-1.0, 0.0, 0.0),
    Vector3(0.0, 1.0, 0.0),
    Vector3(0.0, -1.0, 0.0),
    Vector3(0.0, 0.0, 1.0),
    Vector3(0.0, 0.0, -1.0),
)

_OMNI_UPS = (
    Vector3(0.0, -1.0, 0.0),
    Vector3(0.0, -1.0, 0.0),
    Vector3(0.0, 0.0, 1.0),
    Vector3(0.0, 0.0, -1.0),
    Vector3(0.0, -1.0, 0.0),
    Vector3(0.0, -1.0, 0.0),
)

_SPOT_BASE_SAMPLES = 12


class LightType(IntEnum):
    """Kind of light source."""

    DIR = 0
    SPOT = 1
    OMNI = 2


class ShadowUpdateMode(Enum):
    """When a light's shadow map is redrawn."""

    MANUAL = "manual"
    INTERVAL = "interval"
    CONTINUOUS = "continuous"


@dataclass
class ShadowUpdateConfig:
    """Scheduling state of shadow map updates."""

    mode: ShadowUpdateMode = ShadowUpdateMode.INTERVAL
    frequency_sec: float = 0.016
    timer_sec: float = 0.0
    should_update: bool = True


_SHADOW_DEFAULTS = {
    LightType.DIR: (0.0005, 0.02),
    LightType.SPOT: (0.001, 0.0002),
    LightType.OMNI: (0.025, 0.05),
}


@dataclass
class Shadow:
    """Shadow parameters of a light."""

    softness: float = 0.0
    bias: float = 0.0
    enabled: bool = False
    mat_vp: Matrix = field(default_factory=Matrix.identity)
    update_config: ShadowUpdateConfig = field(default_factory=ShadowUpdateConfig)

    @classmethod
    def for_type(cls, light_type: LightType) -> Shadow:
        """Default shadow settings for a kind of light."""
        softness, bias = _SHADOW_DEFAULTS[LightType(light_type)]
        return cls(softness=softness, bias=bias)


@dataclass
class Light:
    """A light source with its shadow configuration."""

    type: LightType
    color: Vector3 = Vector3(1.0, 1.0, 1.0)
    position: Vector3 = Vector3()
    direction: Vector3 = Vector3(0.0, 0.0, -1.0)
    specular: float = 0.5
    energy: float = 1.0
    range: float = 50.0
    near: float = 0.0
    far: float = 0.0
    attenuation: float = 1.0
    inner_cutoff: float = math.cos(math.radians(22.5))
    outer_cutoff: float = math.cos(math.radians(45.0))
    enabled: bool = False
    shadow: Shadow | None = None

    def __post_init__(self) -> None:
        self.type = LightType(self.type)
        if self.shadow is None:
            self.shadow = Shadow.for_type(self.type)

    def process_shadow_update(self, frame_time: float) -> None:
        """Advance the update schedule by one frame lasting ``frame_time`` seconds."""
        conf = self.shadow.update_config
        if conf.mode is ShadowUpdateMode.INTERVAL:
            if not conf.should_update:
                conf.timer_sec += frame_time
                if conf.timer_sec >= conf.frequency_sec:
                    conf.should_update = True
                    conf.timer_sec = 0.0
        elif conf.mode is ShadowUpdateMode.CONTINUOUS:
            conf.should_update = True

    def indicate_shadow_update(self) -> None:
        """Record that the shadow map has just been redrawn."""
        conf = self.shadow.update_config
        if conf.mode is ShadowUpdateMode.MANUAL:
            conf.should_update = False
        elif conf.mode is ShadowUpdateMode.INTERVAL:
            conf.should_update = False
            conf.timer_sec = 0.0

    def bounding_box(self) -> BoundingBox:
        """The region of space this light can reach."""
        if self.type is LightType.OMNI:
            return self._sphere_box(self.range)
        if self.type is LightType.SPOT:
            return self._spot_box()
        return BoundingBox(
            Vector3(-FLT_MAX, -FLT_MAX, -FLT_MAX),
            Vector3(FLT_MAX, FLT_MAX, FLT_MAX),
        )

    def _sphere_box(self, radius: float) -> BoundingBox:
        offset = Vector3(radius, radius, radius)
        return BoundingBox(self.position - offset, self.position + offset)

    def _spot_box(self) -> BoundingBox:
        h = self.range
        cos_theta = self.outer_cutoff

        # Very wide cones are bounded like an omni light of the same range
        if cos_theta < 0.1:
            return self._sphere_box(h)

        sin_theta = math.sqrt(1.0 - cos_theta * cos_theta)
        radius = min(h * sin_theta / cos_theta, h * 5.0)

        direction = self.direction
        tip = self.position
        base = self.position + direction * h
        points = [tip, base]

        reference = Vector3(1.0, 0.0, 0.0) if abs(direction.x) < 0.9 else Vector3(0.0, 1.0, 0.0)
        right = direction.cross(reference)
        if right.length() > 1e-6:
            right = right * (1.0 / right.length())
        else:
            right = direction.cross(Vector3(0.0, 0.0, 1.0))
            if right.length() > 1e-6:
                right = right * (1.0 / right.length())
        up = direction.cross(right)

        for i in range(_SPOT_BASE_SAMPLES):
            angle = i * 2.0 * math.pi / _SPOT_BASE_SAMPLES
            points.append(base + (right * math.cos(angle) + up * math.sin(angle)) * radius)

        xs, ys, zs = zip(*points)
        return BoundingBox(
            Vector3(min(xs), min(ys), min(zs)),
            Vector3(max(xs), max(ys), max(zs)),
        )

    def directional_view_projection(self, scene_bounds: BoundingBox) -> tuple[Matrix, Matrix]:
        """View and orthographic projection matrices covering ``scene_bounds``.

        Also places the light outside the scene and stores its near and far planes.
        """
        center = scene_bounds.center()
        extents = (scene_bounds.max - scene_bounds.min) * (0.5 * SCENE_MARGIN)

        light_dir = self.direction.normalized()
        distance = max(extents.x, extents.y, extents.z) * 2.0
        light_pos = center + (-light_dir) * distance
        self.position = light_pos

        if abs(light_dir.y) > 0.99:
            up = Vector3(0.0, 0.0, 1.0)
        else:
            up = Vector3(0.0, 1.0, 0.0)
        view = Matrix.look_at(light_pos, center, up)

        transformed = [view.transform_point(c) for c in scene_bounds.corners()]
        xs, ys, zs = zip(*transformed)

        # Points in front of the camera have negative z, so the signs flip here
        self.near = -max(zs)
        self.far = -min(zs)
        proj = Matrix.ortho(min(xs), max(xs), min(ys), max(ys), self.near, self.far)
        return view, proj

    def spot_view(self) -> Matrix:
        """View matrix looking along the light direction."""
        return Matrix.look_at(
            self.position, self.position + self.direction, Vector3(0.0, 1.0, 0.0)
        )

    def spot_projection(self) -> Matrix:
        """90 degree perspective projection; stores the near and far planes."""
        return self._cube_projection()

    def omni_view(self, face: int) -> Matrix:
        """View matrix for one of the six cube faces (+X, -X, +Y, -Y, +Z, -Z)."""
        if not 0 <= face < len(_OMNI_DIRECTIONS):
            raise ValueError(f"cube face must be between 0 and 5, got {face}")
        return Matrix.look_at(
            self.position, self.position + _OMNI_DIRECTIONS[face], _OMNI_UPS[face]
        )

    def omni_projection(self) -> Matrix:
        """90 degree perspective projection; stores the near and far planes."""
        return self._cube_projection()

    def _cube_projection(self) -> Matrix:
        self.near = SHADOW_NEAR_PLANE
        self.far = self.range
        return Matrix.perspective(math.radians(90.0), 1.0, self.near, self.far)