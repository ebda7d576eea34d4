# setup.py
from setuptools import setup, find_packages

setup(
    name="privacy_scout",
    version="0.1.0",
    description="Асинхронный поиск privacy-страниц и контактных адресов сайтов",
    packages=find_packages(include=["privacy_scout", "privacy_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "privacy-scout=privacy_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
