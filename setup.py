from setuptools import setup, find_packages

import os

install_requires = [
    "colorama",
    "python-dateutil",
    "tomlkit>=0.11.0",
    "typeguard>=3.0.0",
]

extras_require = {"test": ["pytest"]}

# Get the package version from the VERSION file.
version_file = os.path.join(os.path.dirname(__file__), "VERSION")
with open(version_file) as f:
    slsa_provenance_version = f.read().strip()

with open(os.path.join(os.path.dirname(__file__), "README.md")) as f:
    long_description = f.read()

setup(
    name="slsa-provenance",
    version=slsa_provenance_version,
    license="GPLv3",
    description="Model, validate and serialize SLSA provenance v1 predicates",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Security",
        "Topic :: Software Development :: Build Tools",
    ],
    python_requires=">=3.9",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"slsa_provenance": ["py.typed"]},
    install_requires=install_requires,
    extras_require=extras_require,
)
