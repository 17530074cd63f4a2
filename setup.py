"""Setup script for the Survey Analyzer."""

from setuptools import setup, find_packages
import os

# Read README file
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "AI-powered qualitative analysis of open-ended survey responses"

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
    name="survey-analyzer",
    version="1.0.0",
    author="Survey Analysis Team",
    author_email="dev@example.com",
    description="AI-powered qualitative analysis of open-ended survey responses",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.1.0",
            "httpx",
        ]
    },
    entry_points={
        "console_scripts": [
            "survey-analyzer=survey_analyzer.main:main",
        ],
    },
    include_package_data=True,
    keywords="survey analysis, qualitative analysis, open-ended responses, AI, NLP",
)
