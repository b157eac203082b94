# Sphinx configuration for lazystream
import importlib.metadata
from datetime import datetime

project = "lazystream"
author = "lazystream contributors"
copyright = f"{datetime.now():%Y}, {author}"

try:
    release = version = importlib.metadata.version("lazystream")
except importlib.metadata.PackageNotFoundError:
    release = version = "0.0.0"

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]

autodoc_default_options = {
    "members": True,
    "inherited-members": True,
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False

exclude_patterns = ["_build"]

html_theme = "furo"
