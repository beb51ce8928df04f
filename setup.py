# setup.py
from setuptools import setup, find_packages

setup(
    name="audit_scout",
    version="0.1.0",
    description="Bounded, SSRF-safe site crawler feeding website content audits",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "yarl>=1.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "audit-scout=audit_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
