# setup.py - Pure Python package
from setuptools import setup, find_packages

setup(
    name="granular",
    version="0.1.0",
    description="Granularity-aware addressing for data varying by named categorical dimensions",
    packages=find_packages(include=["granular", "granular.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.19.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
