#!/usr/bin/env python3
"""
Setup script for meshparts (connected-component decomposition of OBJ meshes)
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "numpy>=1.20.0",
    "trimesh>=3.15.0",
    "networkx>=2.6",
    "matplotlib>=3.5.0",
]

setup(
    name="meshparts",
    version="0.1.0",
    description="Mesh container and toolkit for splitting OBJ surface meshes into connected components",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["meshparts", "meshparts.*"]),
    package_data={"meshparts": ["data/mesh/*.obj"]},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Visualization",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov",
            "black",
            "flake8",
            "mypy",
        ],
        "test": [
            "pytest>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "meshparts=meshparts.cli:main",
        ],
    },
)
