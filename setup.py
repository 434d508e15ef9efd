"""
Setup script for drillkit.

drillkit is a content-agnostic drill engine for quiz-style practice over
kana, kanji and vocabulary. It provides:

1. Content adapters - one per content domain, behind a single protocol
2. Session engine - question sequencing, options, grading, completion
3. Event bus - gameplay decoupled from statistics and achievements

The 'drill' command is a terminal driver for playing sessions.
"""

from setuptools import find_packages, setup

setup(
    name="drillkit",
    version="1.0.0",
    description="Content-agnostic drill engine for kana, kanji and vocabulary practice",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["drillkit", "drillkit.*"]),
    py_modules=["config"],
    package_data={"drillkit.content": ["data/*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "drill=drillkit.cli.drill_cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning flashcards drill kana kanji vocabulary cli education",
)
