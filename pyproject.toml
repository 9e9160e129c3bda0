[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rdfxmlio"
version = "0.1.0"
description = "Streaming RDF/XML parser and formatter"
requires-python = ">=3.10"
dependencies = []
keywords = ["rdf", "rdf/xml", "xml", "semantic web", "linked data", "parser", "serializer"]
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
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rdfxmlio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
