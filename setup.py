#!/usr/bin/env python3
import os

from setuptools import find_packages, setup


def read_version():
    here = os.path.dirname(os.path.realpath(__file__))
    with open(os.path.join(here, "src", "curesurv", "_version.py")) as f:
        for line in f:
            if line.startswith("version"):
                return line.split("=")[1].strip().strip("\"'")
    raise RuntimeError("unable to find version string")


setup(
    name="curesurv",
    version=read_version(),
    description="Mixture and non-mixture cure models on top of any base survival distribution",
    long_description="",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "numba",
        "numpy",
        "scipy",
        "colorlog",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    zip_safe=False,
)
