[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boxdetect"
version = "0.1.0"
description = "Object detection post-processing: box geometry, proposal decoding, NMS and model/pipeline registries"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["object-detection", "yolox", "yolov8", "picodet", "nms", "bounding-box"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["boxdetect"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
