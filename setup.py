# setup.py
from setuptools import setup, find_packages

setup(
    name="crossing_solver",
    version="0.1.0",
    description="Minimal-move solver for river-crossing constraint puzzles",
    packages=find_packages(include=["crossing_solver", "crossing_solver.*"]),
    python_requires=">=3.10",
    install_requires=[
        "matplotlib",
        "pillow",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "crossing-solver = crossing_solver.cli:main",
        ],
    },
)
