#!/usr/bin/env python

from setuptools import find_packages, setup

setup(
    name="eloratings",
    version="0.0.1",
    author="Various",
    description="Elo rating calculator with match replay analysis tooling.",
    long_description=__doc__,
    packages=find_packages(exclude=("analysis", "analysis.*", "unit_tests", "unit_tests.*")),
    install_requires=[
        "filelock",
        "python-dateutil",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    python_requires=">=3.8",
    zip_safe=True,
    license="MIT",
)
