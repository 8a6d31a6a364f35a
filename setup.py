"""Setup script for the eltakoms package."""

from setuptools import find_packages, setup

setup(
    name="eltakoms",
    version="0.1.0",
    description="Decoder and interval logger for the Eltako Multisensor RS485 datastream",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pyserial",
        "pyyaml",
        "python-dotenv",
        "rich",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "eltakoms=eltakoms.collector:main",
            "eltakoms-display=eltakoms.display:main",
            "eltakoms-rollup=eltakoms.rollup:main",
        ],
    },
)
