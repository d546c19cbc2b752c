import os

from setuptools import find_namespace_packages, setup

if os.path.exists("MANIFEST"):
    os.remove("MANIFEST")

with open("README.md") as file:
    long_description = file.read()

# keep in sync with ytunits/_version.py
VERSION = "0.1.0"

install_requires = [
    "more-itertools>=8.4",
    "numpy>=1.19.3",
    "packaging>=20.9",
    "tomli>=1.2.3;python_version < '3.11'",
    "tomli-w>=0.4.0",
]

extras_require = {
    "h5py": ["h5py>=3.1.0"],
    "test": ["pytest>=6.1", "h5py>=3.1.0"],
}


if __name__ == "__main__":
    setup(
        name="ytunits",
        version=VERSION,
        description=(
            "Unit-aware arrays and data containers for the analysis "
            "of volumetric data"
        ),
        long_description=long_description,
        long_description_content_type="text/markdown",
        license="BSD 3-Clause",
        classifiers=[
            "Development Status :: 3 - Alpha",
            "Intended Audience :: Science/Research",
            "License :: OSI Approved :: BSD License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Topic :: Scientific/Engineering :: Astronomy",
            "Topic :: Scientific/Engineering :: Physics",
        ],
        keywords="astronomy astrophysics units simulation analysis",
        python_requires=">=3.9",
        packages=find_namespace_packages(include=["ytunits*"]),
        install_requires=install_requires,
        extras_require=extras_require,
        zip_safe=False,
    )
