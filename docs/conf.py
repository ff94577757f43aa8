"""docs/conf.py

Sphinx configuration for the escposlink documentation (MyST pages plus
autodoc for the engine, transports and daemon).
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from escposlink import __version__  # noqa: E402

project = "escposlink"
author = "escposlink contributors"
copyright = f"{datetime.now(timezone.utc).year}, {author}"
version = release = __version__

extensions = [
    "myst_parser",
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",
]

autosummary_generate = True
autodoc_member_order = "bysource"
autodoc_typehints = "description"
autodoc_default_options = {
    "members": True,
    "show-inheritance": True,
}
# hardware and messaging libraries are not needed to render the API pages
autodoc_mock_imports = ["serial_asyncio", "zmq"]

exclude_patterns: list[str] = ["_build"]

html_theme = "alabaster"
html_title = f"escposlink {release}"

myst_enable_extensions = ["colon_fence"]
myst_heading_anchors = 2

source_suffix = {".md": "markdown"}
master_doc = "index"
