from setuptools import setup, find_packages

setup(
    name="timer-registry",
    version="0.1.0",
    description="Timer Registry Service - CRUD registry of timer descriptions",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "fastapi>=0.109.0",
        "uvicorn>=0.27.0",
        "pymongo>=4.6.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "loguru>=0.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.23.0",
            "httpx>=0.27.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "timer-registry=timer_registry.main:main",
        ],
    },
)
