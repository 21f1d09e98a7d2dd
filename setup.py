from setuptools import setup, find_packages

setup(
    name="aflscraper",
    version="1.0.0",
    packages=find_packages(include=["aflscraper", "aflscraper.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.25.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pandas>=1.3.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "aflscraper=aflscraper.cli:main",
        ],
    },
    description="AFL Tables match and season statistics scraper",
)
