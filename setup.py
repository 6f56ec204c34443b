"""setup.py for mat5 — MATLAB Level-5 MAT-file parser.

Pure Python; numpy is used to expose decoded values as arrays.
"""

from setuptools import find_packages, setup

setup(
    name="mat5",
    version="0.1.0",
    description="Parser for MATLAB Level-5 MAT-files (numeric, sparse and struct arrays)",
    python_requires=">=3.8",
    packages=find_packages(include=["mat5", "mat5.*"]),
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
