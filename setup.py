# setup.py
from setuptools import setup, find_packages

setup(
    name="site_binder",
    version="0.1.0",
    description="Асинхронный обходчик сайта со сборкой статей в PDF",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "reportlab>=4.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-binder=site_binder.cli:main",
        ],
    },
    python_requires=">=3.11",
)
