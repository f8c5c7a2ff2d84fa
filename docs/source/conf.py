import datetime

import consoletools

# -- Project information -----------------------------------------------------

project = "ConsoleTools"
copyright = f"{datetime.date.today().year}, ConsoleTools authors"
author = "ConsoleTools authors"
release = version = consoletools.__version__


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3/", None),
}
nitpick_ignore_regex = [(r"py:class", r"(.*\.)?([A-Z]{1,2}|[A-Z]+_co|[A-Z]+_contra)")]
autodoc_typehints_format = "short"
autodoc_member_order = "bysource"

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
