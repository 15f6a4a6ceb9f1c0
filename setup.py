"""Setup configuration for contract-fuzzer."""

from setuptools import setup, find_packages

setup(
    name="contract-fuzzer",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "rich>=14.0.0",
        "pydantic>=2.0.0",
        "httpx>=0.27.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=1.0.0",
        ],
    },
    python_requires=">=3.9",
)
