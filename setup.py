"""
Setup script for the sensorsim package.

Allows `pip install -e .` so firmware test rigs can import `sensorsim`
without path manipulation.
"""

from setuptools import setup, find_packages

setup(
    name="sensorsim",
    version="1.0.0",
    description="Simulated temperature, humidity and light sensors for firmware testing",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "scipy>=1.11.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
