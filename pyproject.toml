[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lux"
version = "0.1.0"
description = "Extract downloadable video, audio and image streams from web pages"
requires-python = ">=3.10"
keywords = ["video", "audio", "image", "extractor", "streams", "media"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "requests",
    "beautifulsoup4",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["lux"]

[tool.pytest.ini_options]
addopts = "-ra"
