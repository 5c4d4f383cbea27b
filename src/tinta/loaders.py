"""Loading syntax profile resources.

A profile resource exposes one mapping of token type names to rule values.

Supported formats:
    .py    Python module exporting ``SYNTAX`` (or ``default``); values may be
           compiled patterns, keyword lists, scanner callables, or None
    .json  Top-level object; strings are patterns, arrays are keyword
           lists, ``{"scanner": "php"}`` selects a built-in scanner,
           null is inert
    .toml  Same forms as JSON; ``false`` is inert (TOML has no null)

Remote resources (``http://``, ``https://``) are fetched with urllib and
must use a data format; remote Python is never executed.

All failures raise ProfileLoadError. Loading is blocking; the registry runs
it on a worker thread.
"""

from __future__ import annotations

import importlib.util
import json
import re
import tomllib
import urllib.error
import urllib.request
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from tinta.errors import ProfileLoadError
from tinta.utils.logger import get_logger

logger = get_logger(__name__)

_PATH_LIKE = re.compile(r"\A(?:https?:|\.|/)")
_MODULE_EXPORTS = ("SYNTAX", "default")
FETCH_TIMEOUT = 10.0


def is_path_like(identifier: str) -> bool:
    """True for identifiers used verbatim as a location (./x, /x, http...)."""
    return bool(_PATH_LIKE.match(identifier))


def is_remote(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_profile_resource(location: str, identifier: str | None = None) -> Mapping[str, object]:
    """Load the raw profile mapping stored at location.

    Args:
        location: Filesystem path or http(s) URL
        identifier: Profile identifier for error messages (defaults to location)

    Returns:
        Mapping of token type name -> raw rule value, in authoring order

    Raises:
        ProfileLoadError: If the resource is missing, unreadable, in an
            unsupported format, or does not export a mapping
    """
    identifier = identifier or location

    if is_remote(location):
        suffix = PurePosixPath(urlsplit(location).path).suffix.lower()
        if suffix == ".py":
            raise ProfileLoadError(identifier, "remote Python profiles are not executed", location)
        text = _fetch(location, identifier)
        return _parse_data(text, suffix, identifier, location)

    path = Path(location)
    if not path.is_file():
        raise ProfileLoadError(identifier, "resource not found", location)

    suffix = path.suffix.lower()
    if suffix == ".py":
        return _load_module(path, identifier)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileLoadError(identifier, f"cannot read resource: {e}", location) from e
    return _parse_data(text, suffix, identifier, location)


def _load_module(path: Path, identifier: str) -> Mapping[str, object]:
    module_name = "_tinta_profile_" + re.sub(r"\W", "_", path.stem)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ProfileLoadError(identifier, "not an importable module", str(path))

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ProfileLoadError(
            identifier, f"module raised {type(e).__name__}: {e}", str(path)
        ) from e

    for export in _MODULE_EXPORTS:
        value = getattr(module, export, None)
        if value is not None:
            return _require_mapping(value, identifier, str(path))

    names = " or ".join(_MODULE_EXPORTS)
    raise ProfileLoadError(identifier, f"module defines no {names}", str(path))


def _parse_data(text: str, suffix: str, identifier: str, location: str) -> Mapping[str, object]:
    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix == ".toml":
            data = tomllib.loads(text)
        else:
            raise ProfileLoadError(identifier, f"unsupported profile format {suffix!r}", location)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ProfileLoadError(identifier, f"invalid {suffix[1:]}: {e}", location) from e
    return _require_mapping(data, identifier, location)


def _require_mapping(value: object, identifier: str, location: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise ProfileLoadError(
            identifier, f"export is {type(value).__name__}, expected a mapping", location
        )
    return value


def _fetch(url: str, identifier: str) -> str:
    logger.debug("Fetching syntax profile %s", url)
    try:
        with urllib.request.urlopen(url, timeout=FETCH_TIMEOUT) as response:
            charset = response.headers.get_content_charset() or "utf-8"
            return response.read().decode(charset)
    except (urllib.error.URLError, OSError, UnicodeDecodeError) as e:
        raise ProfileLoadError(identifier, f"fetch failed: {e}", url) from e


__all__ = [
    "is_path_like",
    "is_remote",
    "load_profile_resource",
]
