"""Setup script for permshell Python package."""

from setuptools import setup, find_packages

setup(
    name="permshell",
    version="0.1.0",
    description="Interactive file explorer with simulated Unix permissions",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": ["pytest", "black", "mypy"],
    },
    entry_points={
        "console_scripts": [
            "permshell=permshell.cli:main",
        ],
    },
)
