[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cdmkit"
version = "1.0.0"
description = "A common document model for word processors: builder, style normalizer and RTF renderer"
requires-python = ">=3.10"
dependencies = []
keywords = ["document", "rtf", "word-processor", "document-model", "normalizer"]
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
    "Topic :: Text Editors :: Word Processors",
    "Topic :: Text Processing :: Markup",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cdmkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
