# -*- coding: utf-8 -*-
"""Define project metadata
"""

__title__ = "fstash"
__summary__ = "Stash directory trees by name and expand them back, with templates."
__url__ = ""

__version__ = "0.3.0"

__install_requires__ = ["fs>=2.4.16", "setuptools<81", "jinja2>=3.0", "click>=8.0"]
__tests_require__ = ["pytest", "tox"]

__author__ = "fstash contributors"
__email__ = ""

__license__ = "MIT License"
