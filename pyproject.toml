[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adac"
version = "0.1.0"
description = "Authenticated Debug Access Control certificates, TLV framing and token-session signing helpers"
requires-python = ">=3.10"
keywords = [
    "adac",
    "debug",
    "authentication",
    "certificate",
    "pkcs11",
    "ecdsa",
    "eddsa",
    "rsa-pss",
]
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Embedded Systems",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["adac"]

[tool.hatch.build.targets.sdist]
include = ["adac", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
