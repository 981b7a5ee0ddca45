#!/usr/bin/env python3
"""Installation script for the pngsvg library.

Package metadata is read from the [pngsvg] section of ./pngsvg/config/pngsvg.ini.
"""
__author__ = "The pngsvg developers"
__since__ = "2024/05/02"

import os
import importlib
import configparser
from setuptools import setup, find_packages

setup_package_list = ["setuptools", "wheel"]

for module_name in setup_package_list:
    try:
        importlib.import_module(module_name)
    except (ModuleNotFoundError, ImportError) as ex:
        raise ModuleNotFoundError(
            f"\n\n{'@' * 80}\n"
            f"{'@' * 80}\n"
            "\n"
            f"Package {module_name} needs to be installed in your python environment "
            f"to be able to install pngsvg.\n"
            f"The full list of pre-installation requirements is: "
            f"{', '.join(setup_package_list)}.\n\n"
            f"Please run `pip install {' '.join(setup_package_list)}` "
            f"before installing pngsvg\n\n"
            f"{'@' * 80}\n"
            f"{'@' * 80}\n"
            "\n") from ex

setup_dir = os.path.dirname(os.path.abspath(__file__))

# Read the configuration from ./pngsvg/config/pngsvg.ini, section "pngsvg"
pngsvg_options = configparser.ConfigParser()
pngsvg_options.read(os.path.join(setup_dir, "pngsvg", "config", "pngsvg.ini"), encoding="utf-8")
pngsvg_options = pngsvg_options["pngsvg"]

with open(os.path.join(setup_dir, "README.md"), "r", encoding="utf-8") as readme_file:
    setup(
        # Metadata about the project
        name=pngsvg_options["name"],
        version=pngsvg_options["version"],
        url=pngsvg_options["url"],
        download_url=pngsvg_options["download_url"],
        license=pngsvg_options["license"],
        author=pngsvg_options["author"],
        author_email=pngsvg_options["author_email"],
        description=pngsvg_options["description"],
        long_description=readme_file.read(),
        long_description_content_type="text/markdown",
        platforms=pngsvg_options["platforms"],
        python_requires=pngsvg_options["python_requires"],
        classifiers=[
            "Programming Language :: Python",
            f"Development Status :: {pngsvg_options['development_status']}",
            "Natural Language :: English",
            "Intended Audience :: Developers",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Topic :: Multimedia :: Graphics :: Graphics Conversion",
        ],

        # Dependencies
        setup_requires=setup_package_list,

        install_requires=["appdirs", "jinja2>=3.1.2", "numpy", "rich"],
        extras_require={
            "test": ["numpngw", "imageio"],
        },

        # The ini configuration and the SVG templates are installed with the package
        packages=[p for p in find_packages() if p.startswith("pngsvg")],
        package_data={"pngsvg": ["config/*.ini", "templates/*.svg"]},
        include_package_data=True)
