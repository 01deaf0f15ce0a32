[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "crdgen"
version = "0.1.0"
description = "Build CustomResourceDefinition objects and OpenAPI v3 validation schemata from type descriptions and markers."
requires-python = ">=3.10"
dependencies = []
keywords = ["kubernetes", "crd", "openapi", "jsonschema", "code-generation"]
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
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["crdgen", "crdgen.*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
