"""transglyph — a translating text-shaping extension.

Intercepts a run of characters before glyph mapping, rewrites complete
sentences through an encoder-decoder translation model, and re-emits a
glyph sequence whose cluster indices still point into the original input.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ---------------------------------------------------------------------------
# Package version — read from pyproject.toml via importlib.metadata.
#
# When the package is installed (``pip install -e .``), importlib.metadata
# resolves the version from the distribution metadata that pip wrote.  If
# the package is imported without being installed we fall back to the
# version pinned here so the library can still start.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("transglyph")
except PackageNotFoundError:
    __version__ = "0.1.0"
