#!/usr/bin/env python3

"""Setup script for the structure ingestion and annotation package."""

from setuptools import setup, find_packages

setup(
    name="proteinlens",
    version="0.1.0",
    description="Molecular structure ingestion, identifier resolution and annotation",
    author="Adam",
    author_email="adam@example.com",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.20.0",
        "biopython>=1.79",
        "httpx>=0.24.0",
        "pydantic>=2.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "proteinlens-parse=proteinlens.presentation.cli.parse_structure:main",
            "proteinlens-annotate=proteinlens.presentation.cli.annotate_structures:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
