"""Package metadata specification."""

import os

from setuptools import find_packages, setup

PACKAGE_VERSION_NAME = os.getenv("PACKAGE_VERSION_NAME", "0.1.0")


def read(file_name):
    """Get the contents of a file at the root of the package.

    Args:
        file_name (str): The name of the file at the root of the package
            to get the contents of.

    Returns:
        str: The contents of the file.

    """
    with open(file_name) as file_:
        contents = file_.read()
    return contents


project_name = read("PROJECT").strip()

setup(
    name="logic-graph",
    version=PACKAGE_VERSION_NAME,
    description="In-memory node/port/edge graph core with spatial indexing and change events.",
    long_description=read("README.md"),
    long_description_content_type="text/markdown",
    # Package contents
    python_requires=">=3.8",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={project_name: ["config/defaults/*.yaml"]},
    include_package_data=True,
    classifiers=[
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
    ],
    entry_points={
        "console_scripts": [
            "logicgraph = logicgraph.cli.main:main",
        ],
    },
    # Package dependencies
    install_requires=[
        "pydantic>=2",
        "PyYAML",
        "rich",
    ],
    extras_require={
        # packages required to run the tests go in the "test" extra
        "test": [
            "pytest>4",
            "pytest-cov",
        ],
    },
)
