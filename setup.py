#!/usr/bin/env python3
"""
Setup script for the Portfolio Service.

The service bundles the portfolio content API, regional news aggregation,
file and text encryption, PDF and image tools, Nepali transliteration and
the authenticated private area, together with the shared common module
(logging and caching).
"""

import os

from setuptools import find_packages, setup


# Read the README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), "README.md")
    if os.path.exists(readme_path):
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return ""


# Read requirements from requirements.txt
def read_requirements():
    req_path = os.path.join(os.path.dirname(__file__), "requirements.txt")
    if os.path.exists(req_path):
        with open(req_path, "r", encoding="utf-8") as f:
            return [
                line.strip()
                for line in f.readlines()
                if line.strip() and not line.strip().startswith("#")
            ]
    return [
        "fastapi>=0.115.0",
        "uvicorn[standard]>=0.30.0",
        "python-multipart>=0.0.9",
        "pydantic>=2.11.7",
        "pydantic-settings>=2.10.1",
        "dependency-injector>=4.46.0",
        "colorama>=0.4.6",
        "slowapi>=0.1.9",
        "aiohttp>=3.9.0",
        "feedparser>=6.0.11",
        "python-dateutil>=2.9.0",
        "motor>=3.5.0",
        "pymongo>=4.8.0",
        "cryptography>=42.0.0",
        "Pillow>=10.0.0",
        "PyPDF2[crypto]>=3.0.1",
        "indic-transliteration>=2.3.0",
    ]


setup(
    name="portfolio-service",
    version="1.0.0",
    description="Portfolio API with news aggregation, file tools and a private area",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    author="Portfolio Team",
    packages=find_packages(include=["portfolio_service*", "common*"]),
    package_data={"portfolio_service": ["data/*.json"]},
    python_requires=">=3.10",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=8.4.1",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.28.1",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "portfolio-service=portfolio_service.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Framework :: FastAPI",
    ],
    include_package_data=True,
    zip_safe=False,
)
