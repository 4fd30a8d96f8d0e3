#!/usr/bin/env python3

from setuptools import setup

setup(
    name="pass-gen",
    version="1.0.0",
    description="Random passphrase generator with entropy report",
    python_requires=">=3.8",
    packages=["passgen"],
    package_data={"passgen": ["words.txt"]},
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["pass-gen = passgen.main:main"]},
)
