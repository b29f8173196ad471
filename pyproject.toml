[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cosmokit"
version = "1.0.0"
description = "Matter power spectra, Eisenstein & Hu transfer functions, NFW halo profiles and numerical helpers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cosmology",
    "power spectrum",
    "transfer function",
    "NFW",
    "dark matter halos",
    "correlation function",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cosmokit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
