#!/usr/bin/env python3
"""Setup script for Release Checker."""

from setuptools import setup, find_packages
from pathlib import Path

# Read version from package
version = {}
with open("release_checker/__init__.py") as f:
    exec(f.read(), version)

# Read long description from README
readme = Path("README.md").read_text(encoding="utf-8")

# Read requirements
requirements = Path("release_checker/requirements.txt").read_text().strip().split("\n")

setup(
    name="release-checker",
    version=version["__version__"],
    description="Check a GitHub release feed for a newer stable or pre-release version",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Release Checker Contributors",
    author_email="",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"release_checker": ["requirements.txt"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "tests": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "release-checker=release_checker.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries",
        "Topic :: System :: Software Distribution",
    ],
    keywords="release update-check semver github pre-release",
)
