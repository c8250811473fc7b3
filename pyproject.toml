[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "auxcv"
version = "0.3.6"
description = "Pre- and post-processing helpers for YOLO, RTMPose and AlphaPose inference pipelines"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["computer-vision", "yolo", "nms", "pose-estimation", "letterbox", "preprocessing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["auxcv"]

[tool.pytest.ini_options]
addopts = "-ra"
