"""Geopotential artifacts package setup file."""
# Third Party Imports
import setuptools

setuptools.setup(
    name="geopotential-artifacts",
    description="Convert spherical harmonic gravity coefficient files into memory-mappable binary artifacts",
    version="1.0.0",
    packages=setuptools.find_packages("src"),
    package_dir={"": "src"},
    package_data={
        "geopotential_artifacts.common": [
            "default_behavior.config",
        ],
        "geopotential_artifacts.config": [
            "model_metadata.json",
        ],
    },
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.19",
        "pydantic>=2.0",
    ],
    extras_require={
        "dev": [
            # Linting
            "ruff==0.1.1",
            "pylint==3.0.0",
            # Type Checking
            "mypy==1.6.0",
            "typing_extensions>=4.1.1",
            # Formatters
            "black==23.9.1",
            "isort[colors]==5.12.0",
            # Pre-commit stuff
            "pre-commit==3.5.0",
        ],
        "test": [
            "pytest>=7.4.2",
            "pytest-datafiles>=3.0.0",
            "pytest-randomly>=3.15.0",
            "coverage[toml]>=7.3.2",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "geopotential-artifacts=geopotential_artifacts:main",
        ]
    },
    zip_safe=False,
)
