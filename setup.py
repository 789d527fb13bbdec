#!/usr/bin/env python3
"""
Redis-Mock Setup Script
=======================
Allows installation of the redis-mock-conn package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # With test dependencies
"""

from setuptools import setup, find_packages

setup(
    name="redis-mock-conn",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
)
