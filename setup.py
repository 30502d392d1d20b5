#!/usr/bin/python
from setuptools import setup, find_packages
import sys

install_requires = ["pyusb>=1.2"]

exclusions = []
if 'test' not in sys.argv:
    # only ship the tests package when we are testing
    exclusions += ["*.tests"]

setup(
    name = "dbi-backend",
    version = "0.1",
    packages = find_packages(exclude=exclusions),
    install_requires = install_requires,
    test_suite = "dbibackend.tests",
    scripts = ["dbi-backend"],
    python_requires = ">=3.6",
)
