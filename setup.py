#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="hydrofreq",
    version="0.1.0",
    description="Univariate distributions, estimators and bootstrap uncertainty for flood-frequency analysis",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # finds hydrofreq/ and its subpackages, but not tests or docs
    packages=find_packages(exclude=["tests*", "docs*", "notebooks*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.22",
        "scipy>=1.9",
    ],
    extras_require={
        "dev": [
            "pytest",
            "sphinx",
            "black",
            "flake8",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
