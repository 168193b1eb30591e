#!/usr/bin/env python3
"""Setup script for anoint-seal-tools package."""

from setuptools import setup, find_packages

setup(
    name="anoint-seal-tools",
    version="0.1.0",
    description="Sacred seal compositing engine for the ANOINT Array",
    author="ANOINT Project",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[
        "click>=8.0.0",
        "Pillow>=10.1.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0.0",
        "jsonschema>=4.0",
        "cairosvg>=2.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "anoint=anoint.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
