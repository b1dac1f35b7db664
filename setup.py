"""
Setup script for sigterm-capture
"""

from setuptools import setup, find_packages
import pathlib

# Read the README file
HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text(encoding="utf-8")

# Basic setup configuration
setup(
    name="sigterm-capture",
    version="1.0.0",
    description="Termination hook that captures diagnostics when an ECS task fails",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sigterm_capture", "sigterm_capture.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "boto3>=1.34.0",
        "fastapi>=0.115.0",
        "httpx>=0.27.0",
        "pydantic>=2.11.0",
        "pydantic-settings>=2.12.0",
        "structlog>=24.1.0",
        "uvicorn>=0.34.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "sigterm-capture=sigterm_capture.main:entry_point",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: POSIX :: Linux",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="ecs sigterm shutdown diagnostics",
)
