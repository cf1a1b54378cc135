#!/usr/bin/env python

from setuptools import setup

setup(
    name="xcintegrator",
    version="0.1.0",
    packages=[
        "xcintegrator",
        "xcintegrator.details",
        "xcintegrator.details.targets",
        "xcintegrator.integrator",
        "xcintegrator.project",
    ],
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
)
