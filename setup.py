#!/usr/bin/env python3
"""The setup script."""

from setuptools import setup, find_packages

with open("README.rst") as readme_file:
    readme = readme_file.read()

with open("HISTORY.rst") as history_file:
    history = history_file.read()

requirements = [
    "Click>=7",
    "attrs>=18.1.0",
    "construct>=2.10",
]

test_requirements = ["pytest>=4"]

setup(
    author="txdecode developers",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
    ],
    description="Annotated decoder for raw Bitcoin transactions",
    entry_points={"console_scripts": ["txdecode=txdecode.cli:main"]},
    install_requires=requirements,
    extras_require={"test": test_requirements},
    license="GNU General Public License v3",
    long_description=readme + "\n\n" + history,
    include_package_data=True,
    keywords="txdecode bitcoin transaction",
    name="txdecode",
    packages=find_packages("src", include=["txdecode", "txdecode.*"]),
    package_dir={"": "src"},
    python_requires=">=3.6",
    version="0.1.0",
    zip_safe=False,
)
