from setuptools import setup, find_packages

setup(
    name="novel-ingestion",
    version="1.0.0",
    description="Chapter text and navigation extraction engine for novel hosting sites",
    packages=find_packages(exclude=["tests*"]),
    install_requires=[
        "httpx>=0.25.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "playwright>=1.40.0",
        "opencc-python-reimplemented>=0.1.7",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "structlog>=23.0.0",
        "fastapi>=0.104.0",
        "uvicorn>=0.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "mypy>=1.5.0",
            "black>=23.7.0",
            "flake8>=6.0.0",
            "isort>=5.12.0",
        ],
        "test": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "novel-ingestion-api=novel_ingestion.main:run",
        ],
    },
    python_requires=">=3.9",
)
