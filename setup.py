import os

from setuptools import find_packages, setup


# Extract version number from package/__init__.py, taken from pip setup.py
def read(rel_path: str) -> str:
    here = os.path.abspath(os.path.dirname(__file__))
    # intentionally *not* adding an encoding option to open, See:
    #   https://github.com/pypa/virtualenv/issues/201#issuecomment-3145690
    with open(os.path.join(here, rel_path)) as fp:
        return fp.read()


def get_version(rel_path: str) -> str:
    for line in read(rel_path).splitlines():
        if line.startswith("__version__"):
            # __version__ = "0.1.0"
            delim = '"' if '"' in line else "'"
            return line.split(delim)[1]
    raise RuntimeError("Unable to find version string.")


version = get_version("knapsack_optimization/__init__.py")

# get long description from readme
long_description = read("README.md")

# requirements for testing
tests_require = ["pytest", "pytest-cov"]


# setup arguments
setup(
    name="knapsack-optimization",
    version=version,
    packages=find_packages(include=["knapsack_optimization", "knapsack_optimization.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
    ],
    tests_require=tests_require,
    extras_require={"test": tests_require},
    entry_points={
        "console_scripts": [
            "knapsack-optimization=knapsack_optimization.cli:main",
        ],
    },
    license="MIT",
    description="Exact and approximate solvers for knapsack and subset sum problems",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Intended Audience :: Science/Research",
        "Intended Audience :: Education",
        "Intended Audience :: Developers",
        "Development Status :: 4 - Beta",
        "Topic :: Software Development",
        "Topic :: Scientific/Engineering",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
