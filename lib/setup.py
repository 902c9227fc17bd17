#!/usr/bin/env python3

# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Setup configuration for the artlink package.

This library provides the core of the certificate tag pairing workflow:
- Catalog fetching from the upstream certification service
- Listing and certificate extraction from HTML markup
- In-memory artwork catalog
- NFC device adapters (simulated and nfcpy-backed)
- Pairing state machine and async session
"""

from setuptools import find_packages, setup

setup(
    name="artlink",
    version="0.1.0",
    description="Artwork certificate catalog extraction and NFC tag pairing",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        # Scraping dependencies
        "httpx>=0.27.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
    ],
    extras_require={
        # Hardware reader support
        "nfc": [
            "nfcpy>=1.0.4",
            "ndeflib>=0.3.3",
        ],
        "test": [
            "pytest>=8.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "artlink=artlink.cli:main",
        ],
    },
    author="Development Team",
    license="MIT-0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
)
