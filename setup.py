#!/usr/bin/env python
"""
Setup script for the penguin_paradox package.
"""

from setuptools import setup, find_packages

# Core dependencies required for the package
requirements = [
    "pandas>=1.0.0",
    "numpy>=1.18.0",
    "matplotlib>=3.1.0",
    "seaborn>=0.11.0",
    "scipy>=1.4.0",
    "jinja2>=2.11.0",
    "pyyaml>=5.1.0",
    "python-pptx>=0.6.18",
    "Pillow>=7.0.0",
    "tabulate>=0.8.0",
]

setup(
    name="penguin_paradox",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*", "notebooks"]),
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=6.0.0", "pytest-cov>=2.10.0", "black>=20.8b1"],
    },
    entry_points={
        "console_scripts": [
            "penguin-paradox=penguin_paradox.cli:main",
        ],
    },
    package_data={
        "penguin_paradox": ["data/*.csv", "configs/*.yaml"],
    },
    description="Simpson's Paradox narrative on the Palmer Penguins measurements",
    author="Analytics Team",
    author_email="analytics@example.com",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
    ],
    python_requires=">=3.8",
    include_package_data=True,
)
