#!/usr/bin/env python
import setuptools
from setuptools import setup

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("./gcorrect/VERSION", "r") as vf:
    version = vf.read().strip()

setup(
    name="gcorrect",
    version=version,

    python_requires="~=3.10",
    install_requires=[
        "orjson>=3.9.15,<4",
        "pysam>=0.19,<0.24",
        "numpy>=1.23.4,<3",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },

    description="Correction of additional-G artifacts in CAGE transcription start site counts.",
    long_description=long_description,
    long_description_content_type="text/markdown",

    license="GPLv3",
    classifiers=[
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX",
    ],

    packages=setuptools.find_packages(include=["gcorrect", "gcorrect.*"]),
    package_data={"gcorrect": ["VERSION"]},
    include_package_data=True,

    entry_points={
        "console_scripts": ["gcorrect=gcorrect.entry:main"],
    },
)
