[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stripaster"
version = "0.1.0"
description = "Fetch PNG image strips concurrently and paste them into one PNG, with small PNG, CRC and zlib helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["png", "image", "strips", "producer-consumer", "crc", "zlib"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
paster2 = "stripaster.paster:main"
pnginfo = "stripaster.pnginfo:main"
fetch-fragment = "stripaster.fetch:main"
stack-demo = "stripaster.stack:main"

[tool.hatch.build.targets.wheel]
packages = ["stripaster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
