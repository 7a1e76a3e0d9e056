[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gsmmap"
version = "0.1.0"
description = "Encode and decode GSM MAP short-message operations (SRI-for-SM, MT-ForwardSM, MO-ForwardSM) as ASN.1 DER"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "gsm",
    "map",
    "sms",
    "asn1",
    "der",
    "tbcd",
    "tpdu",
    "telecom",
    "ss7",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gsmmap = "gsmmap.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gsmmap"]

[tool.hatch.build.targets.sdist]
include = ["gsmmap", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
