#!/usr/bin/env python3
"""
Setup script for PromptIDE

Install with:
    pip install -e .

With test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

# Workspace core + service dependencies
requirements = [
    "fastapi>=0.110.0",
    "uvicorn>=0.27.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "httpx>=0.26.0",
    "anthropic>=0.18.0,<1.0.0",
    "aiofiles>=23.2.1",
]

# CLI dependencies
cli_requirements = [
    "rich>=13.7.0",
    "prompt-toolkit>=3.0.43",
]

setup(
    name="promptide",
    version="1.0.0",
    description="PromptIDE - prompt-driven coding workspace with a virtual file system",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PromptIDE Team",
    license="MIT",
    package_dir={"promptide": "backend/promptide", "cli": "cli"},
    packages=(
        ["promptide"]
        + [f"promptide.{pkg}" for pkg in find_packages(where="backend/promptide")]
        + ["cli"]
    ),
    python_requires=">=3.9",
    install_requires=requirements + cli_requirements,
    extras_require={
        "cli": cli_requirements,
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "promptide=cli.main:main",
            "promptide-server=promptide.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development",
        "Topic :: Software Development :: Code Generators",
    ],
    keywords="ide code-generation virtual-file-system fastapi developer-tools",
)
