"""
Setup script for the mandate-engine package.

Installs the turn-resolution engine for the national-mandate board game,
its SQLite schema and the bundled decision-card catalog.
"""

from setuptools import setup, find_packages

setup(
    name="mandate-engine",
    version="1.0.0",
    description="Mandate Engine - Turn resolution for the multiplayer national-mandate board game",
    author="Mandate Engine Team",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4",
            "build",
            "wheel",
        ],
    },
    package_data={
        "mandate_engine._store": ["schema.sql"],
        "mandate_engine": ["data/*.json"],
    },
    entry_points={
        "console_scripts": [
            "mandate-engine=mandate_engine.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment :: Board Games",
    ],
)
