[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "r3dkit"
version = "0.1.0"
description = "Pure-Python math for a 3D renderer: vectors, matrices, frustum culling, light volumes, billboards, draw-call sorting, half floats and DDS loading."
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "rendering", "frustum", "culling", "matrix", "dds", "half-float", "lighting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["r3dkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
