from setuptools import setup, find_packages

# Read the README file for a long description.
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read core requirements from requirements.txt
with open('requirements.txt') as f:
    install_requires = [line for line in f.read().splitlines() if line and not line.startswith('#')]

# Define development dependencies
extras_require = {
    'dev': [
        'pytest>=6.0',
        'pytest-cov',
        'flake8',
        'black',
        'mypy',
        'setuptools',
        'wheel',
    ],
}

setup(
    name="mathkit",
    version="0.1.0",
    author="mathkit developers",
    description="Least-squares fitting and binary space partitioning for Euclidean geometry.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
