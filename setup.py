"""Setup script for dlog-groups-py package."""

from setuptools import setup, find_packages

setup(
    name="dlog-groups-py",
    version="0.1.0",
    description="Discrete-log groups over interchangeable big-integer engines",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.8",
    install_requires=[
        "gmpy2>=2.1",
        "pycryptodome>=3.15",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    include_package_data=True,
)
