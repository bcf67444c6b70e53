# Sphinx configuration for the promise-relay API reference.

import os
import sys

sys.path.insert(0, os.path.abspath("../src"))

project = "promise-relay"
release = "0.1.0"

# Docstrings are Google style ("Args:", "Returns:", "Raises:").
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]
napoleon_numpy_docstring = False

autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
}

html_theme = "sphinx_rtd_theme"
