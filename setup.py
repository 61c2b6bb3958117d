# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
"""Setup script for hivetree."""
import re

import setuptools

with open("hivetree/_version.py", "r", encoding="utf-8") as fd:
    v_match = re.search(r'^VERSION\s*=\s*[\'"]([^\'"]*)[\'"]', fd.read(), re.MULTILINE)
    __version__ = v_match.group(1) if v_match else "no version"

with open("requirements.txt", "r", encoding="utf-8") as fh:
    INSTALL_REQUIRES = fh.readlines()

with open("requirements-dev.txt", "r", encoding="utf-8") as fh:
    INSTALL_DEV_REQUIRES = fh.readlines()

with open("README.md", "r", encoding="utf-8") as fh:
    LONG_DESC = fh.read()

# Extras definitions
EXTRAS = {
    "dev": INSTALL_DEV_REQUIRES,
    "test": INSTALL_DEV_REQUIRES,
}


if __name__ == "__main__":
    setuptools.setup(
        name="hivetree",
        version=__version__,
        description="Windows Registry hive to attribute tree for forensic analysis",
        long_description=LONG_DESC,
        long_description_content_type="text/markdown",
        license="MIT License",
        python_requires=">=3.9",
        packages=setuptools.find_packages(include=["hivetree", "hivetree.*"]),
        package_data={"hivetree": ["hivetreeconfig.yaml"]},
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS,
        classifiers=[
            "Programming Language :: Python :: 3",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Topic :: Security",
        ],
    )
