"""Setup script for the Tiation Python SDK."""

from setuptools import setup, find_packages
import os

# Read README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Python client for the Tiation platform API"

# Read requirements
def read_requirements():
    requirements_path = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(requirements_path):
        with open(requirements_path, 'r') as f:
            lines = f.readlines()
        
        # Filter out comments and development dependencies
        requirements = []
        for line in lines:
            line = line.strip()
            if line and not line.startswith('#') and not any(dev in line.lower() for dev in ['pytest', 'black', 'isort', 'mypy']):
                requirements.append(line)
        
        return requirements
    return []

setup(
    name="tiation-sdk",
    version="1.0.0",
    author="Tiation Team",
    author_email="dev@example.com",
    description="Python client for the Tiation platform API",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    url="https://github.com/tiation/tiation-sdk-python",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Internet :: WWW/HTTP",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
    install_requires=read_requirements() or [
        "requests>=2.31.0",
        "python-dotenv>=1.0.0",
        "backoff>=2.2.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.5.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "tiation=tiation_sdk.main:main",
        ],
    },
    include_package_data=True,
    keywords="tiation, sdk, api client, analytics, automation, cms, webhooks",
    project_urls={
        "Bug Reports": "https://github.com/tiation/tiation-sdk-python/issues",
        "Source": "https://github.com/tiation/tiation-sdk-python",
    },
)
