"""
Setup script for evm-testkit package

Handles package dependencies and installation configuration.
"""

from setuptools import setup, find_packages

setup(
    name="evm-testkit",
    version="0.1",
    description="Async helpers for smart-contract test suites on EVM test nodes",
    author="Neal Zhu",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "web3>=7.0.0",
        "pydantic>=2.0.0",
        "loguru>=0.7.0",
        "tomli>=2.0.0",
        "aiohttp>=3.9.0",
        "pytest-asyncio>=0.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "evm-testkit=evm_testkit.cli:main",
        ],
        "pytest11": [
            "evm_testkit=evm_testkit.pytest_plugin",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: Pytest",
        "Topic :: Software Development :: Testing",
    ],
)
