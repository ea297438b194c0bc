# r3dkit

The CPU-side math of a 3D renderer, in plain Python with no third-party
dependencies: vectors, matrices, view-frustum culling, light volumes and
shadow matrices, billboards, draw-call visibility and ordering, half-precision
floats and a small DDS texture reader.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `r3dkit.geometry`

- `Vector3(x, y, z)`: an immutable vector with `+`, `-`, `*` by a number,
  unary `-`, `dot`, `cross`, `length`, `length_sqr` and `normalized`. A zero
  vector comes back unchanged from `normalized`.
- `BoundingBox(min, max)`: an axis-aligned box with `center()` and
  `corners()`. The corners come x fastest, then y, then z.
- `Matrix`: an immutable 4x4 matrix of sixteen floats `m0` .. `m15`, where
  `m12, m13, m14` hold the translation. It has these constructors:
  `Matrix.identity()`, `Matrix.translate(x, y, z)`, `Matrix.scale(x, y, z)`,
  `Matrix.look_at(eye, target, up)`,
  `Matrix.ortho(left, right, bottom, top, near, far)` and
  `Matrix.perspective(fovy, aspect, near, far)`, where `fovy` is in radians.
  Instances have these operations:
  - `a @ b` composes two transforms, applying `a` first and then `b`, so a
    model-view-projection matrix is written `model @ view @ projection`.
  - `inverted()` raises `ValueError` for a singular matrix.
  - `transposed()`.
  - `transform_point(point)` applies the matrix without a perspective divide.
  - `axis(i)` returns a basis column.
  - The `translation` property.
  - `is_identity()` is an exact test; a negative zero does not count.

### `r3dkit.half`

- `float_to_half(value)` and `half_to_float(half)` convert between Python
  floats and 16-bit half values.
- `float_bits_to_half(bits)` and `half_to_float_bits(half)` work on raw bit
  patterns.

The conversions round as follows:

- Values below the smallest normal half flush to zero.
- Overflow becomes infinity.
- Every NaN becomes a quiet NaN when encoding.
- Denormal halves decode to zero.

### `r3dkit.dds`

`load_dds(data)` and `load_dds_file(path)` read the base level of an
uncompressed two-channel float DDS texture and return a `DdsImage`. The image
has `width`, `height`, `format_size`, `dxgi_format` and the raw pixel `data`.

- RG16F and RG32F are supported through a DX10 header
  (`DXGI_FORMAT_R16G16_FLOAT`, `DXGI_FORMAT_R32G32_FLOAT`).
- RG16F is also recognised from the classic pixel-format bit masks.
- Malformed, truncated or unsupported data raises `DdsError`, a subclass of
  `ValueError`.

### `r3dkit.billboard`

`billboard_front(model, inv_view)` aligns a model matrix with the camera.
`billboard_y(model, inv_view)` turns it about its own Y axis toward the camera
position. Both keep the model's scale and translation and return a new matrix.

### `r3dkit.frustum`

`Frustum.from_matrix(view_projection)` extracts six normalised, inward-facing
`Plane`s. It tests against them with these methods:

- `contains_point`
- `contains_any_point`
- `contains_sphere`
- `contains_aabb`
- `contains_obb(aabb, transform)`

`frustum_bounding_box(view_projection)` returns the world-space box around the
frustum. It raises `ValueError` if the matrix cannot be inverted.

### `r3dkit.light`

`Light(type)` describes a light. Its `type` is one of `LightType.DIR`,
`LightType.SPOT` or `LightType.OMNI`. New lights get default colour, range,
cut-offs and per-type shadow softness and bias. It provides:

- **Shadow scheduling.** `process_shadow_update(frame_time)` advances the
  schedule by one frame, and `indicate_shadow_update()` records a redraw. Both
  follow `ShadowUpdateMode.MANUAL`, `INTERVAL` or `CONTINUOUS`, set in
  `light.shadow.update_config`.
- **Bounds.** `bounding_box()` returns the region the light reaches:
  - an unbounded box for directional lights;
  - a cube of its range for omni lights;
  - a sampled cone for spot lights.
- **Shadow-map matrices.**
  - `directional_view_projection(scene_bounds)` returns a `(view, projection)`
    pair fitted to the scene. It also moves the light and stores `near` and
    `far`.
  - `spot_view()` and `spot_projection()`.
  - `omni_view(face)` for cube faces 0-5; any other face raises `ValueError`.
  - `omni_projection()`.

### `r3dkit.drawcall`

`DrawCall` holds one mesh (`Mesh`) or sprite with its transform,
`GeometryType`, `RenderMode`, `BlendMode`, optional skeletal animation
(`ModelAnimation`) and instancing data. Its methods are:

- `is_visible(frustum)` tests the mesh box, or the sprite quad corners.
- `instanced_is_visible(frustum)` tests the box around all instances. It
  reports visible when no finite box is given.
- `update_model_animation()` writes `offset @ pose` for each bone of the
  current frame into `mesh.bone_matrices`. Frames past the end wrap around.

### `r3dkit.sorting`

Given a list of draw calls and a view matrix, each sort function returns a new
ordered list:

- `sort_front_to_back` puts the nearest centre first.
- `sort_back_to_front` puts the farthest corner first. Ties fall back to the
  centre distance, then to the later call first.
- `sort_mixed_forward` puts opaque calls first (front to back), then the
  others (back to front).

`center_distance_sqr` and `max_distance_sqr` expose the distances used.

## Example

```python
from r3dkit.geometry import Matrix, Vector3, BoundingBox
from r3dkit.frustum import Frustum

view = Matrix.look_at(Vector3(0, 2, 5), Vector3(0, 0, 0), Vector3(0, 1, 0))
proj = Matrix.perspective(1.0472, 16 / 9, 0.05, 100.0)
frustum = Frustum.from_matrix(view @ proj)

box = BoundingBox(Vector3(-1, -1, -1), Vector3(1, 1, 1))
print(frustum.contains_aabb(box))
```

## What it does not do

This package only does the math. It does not:

- open a window;
- talk to a GPU;
- compile shaders;
- create shadow-map framebuffers or issue draw commands;
- load models, meshes or animations from files.

Feed its results to whatever graphics layer you use.