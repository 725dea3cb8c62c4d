"""
Setup script for crossarea_mc package.

Installation:
    pip install -e .
"""

from setuptools import setup, find_packages

setup(
    name="crossarea_mc",
    version="0.1.0",
    description="Monte Carlo collision cross sections of rigid molecular structures",
    packages=find_packages(include=["crossarea_mc", "crossarea_mc.*"]),
    package_data={"crossarea_mc": ["data/*.lib"]},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "matplotlib>=3.7",
        "numba>=0.58",
        "h5py>=3.8",
        "pyyaml>=6.0",
        "tqdm>=4.65",
    ],
    extras_require={
        "dev": ["pytest>=7.3", "black>=23.0", "mypy>=1.3", "ipython>=8.12"],
        "all": ["pytest>=7.3"],
    },
    entry_points={
        "console_scripts": [
            "crossarea=crossarea_mc.cli:main",
        ],
    },
)
