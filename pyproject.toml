[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "objectstore"
version = "0.1.0"
description = "Versioned object storage domain: objects split into checksummed blocks, with metadata and explorer services"
requires-python = ">=3.10"
dependencies = []
keywords = ["object storage", "blocks", "versioning", "metadata", "crc32"]
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
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
objectstore-upload = "objectstore.upload_cli:main"

[tool.setuptools.packages.find]
include = ["objectstore*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
