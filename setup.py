# setup.py
from setuptools import setup, find_packages

setup(
    name="robofinder",
    version="0.1.0",
    description="Find paths and sitemaps in archived robots.txt files via the Wayback Machine",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.0",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    entry_points={
        "console_scripts": [
            "robofinder=robofinder.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
