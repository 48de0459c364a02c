#!/usr/bin/env python3
"""
Setup script for ARP Warden
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="arpwarden",
    version="1.0.0",
    author="Security Research Team",
    description="ARP Warden: ARP neighbor table monitor for spoofing and scan detection",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/example/arpwarden",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["demo"],
    package_data={"config": ["*.yaml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: No Input/Output (Daemon)",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Security",
        "Topic :: System :: Networking :: Monitoring",
    ],
    python_requires=">=3.8",
    install_requires=[
        "netifaces>=0.11.0",
        "pyyaml>=6.0.0",
        "colorama>=0.4.6",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "arpwarden=orchestration.cli:main",
            "arpwarden-demo=demo:main",
        ],
    },
)
