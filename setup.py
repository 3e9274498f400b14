#!/usr/bin/env python
"""Setup script for the Wasteland Survivor MCP Server."""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="wasteland-survivor",
    version="1.0.0",
    author="Wasteland Survivor Project",
    description="MCP server for building zombie-apocalypse survivors and tracking their progression",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(where=".", include=["wasteland*", "config*"]),
    package_dir={"": "."},
    python_requires=">=3.9",
    install_requires=[
        # Core MCP dependencies
        "mcp>=1.0.0,<2",

        # Utilities
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "returns>=0.22.0",

        # Logging
        "structlog>=23.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
            "mypy>=1.4.0",
            "isort>=5.12.0",
        ],
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wasteland-server=wasteland.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment :: Role-Playing",
    ],
    keywords="zombie survival rpg character-builder mcp",
)
