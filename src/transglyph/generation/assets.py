"""Model asset reader.

Weights, tokenizer definition, and model configuration are each loaded
as raw bytes from a *location*, which is either a filesystem path or an
``http://`` / ``https://`` URL.  URLs are fetched with a synchronous
``requests.get`` bounded by a timeout.

Every failure is reported as ``ModelLoadError`` so the session loader
has a single exception type to handle.
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from transglyph.errors import ModelLoadError

logger = logging.getLogger(__name__)

_URL_SCHEMES = ("http://", "https://")


def is_url(location: str) -> bool:
    """Return ``True`` when ``location`` should be fetched over HTTP."""
    return location.lower().startswith(_URL_SCHEMES)


def read_asset(location: str, *, timeout_seconds: float = 30.0) -> bytes:
    """Read one model asset.

    Args:
        location:        Filesystem path or HTTP(S) URL.
        timeout_seconds: Request timeout for URLs; ignored for paths.

    Returns:
        The asset's bytes.

    Raises:
        ModelLoadError: If the location is empty, missing, or unreachable.
    """
    if not location:
        raise ModelLoadError("No location configured for model asset")

    if not is_url(location):
        try:
            return Path(location).expanduser().read_bytes()
        except OSError as exc:
            raise ModelLoadError(f"Failed to read {location}: {exc}") from exc

    try:
        response = requests.get(location, timeout=timeout_seconds)
        response.raise_for_status()
    except requests.exceptions.Timeout as exc:
        raise ModelLoadError(
            f"Timed out after {timeout_seconds:.1f}s fetching {location}"
        ) from exc
    except requests.exceptions.ConnectionError as exc:
        raise ModelLoadError(f"Cannot connect to fetch {location}") from exc
    except requests.exceptions.RequestException as exc:
        raise ModelLoadError(f"Failed to fetch {location}: {exc}") from exc

    logger.debug("read_asset: fetched %d byte(s) from %s", len(response.content), location)
    return response.content
