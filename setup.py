from setuptools import setup, find_packages

setup(
    name="roster",
    version="0.1.0",
    packages=find_packages(include=["roster", "roster.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.7",
        "sqlalchemy[asyncio]>=2.0.25",
        "asyncpg>=0.29",
        "aiosqlite>=0.19",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.26",
        ],
    },
    entry_points={
        "console_scripts": ["roster=roster.__main__:main"],
    },
)
