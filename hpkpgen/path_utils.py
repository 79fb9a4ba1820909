import os
import pathlib
import re
from typing import Union
from urllib.parse import unquote, urlparse

_WIN_DRIVE = re.compile(r"^/([A-Za-z]:/.*)$")

PathLike = Union[str, "os.PathLike[str]"]


def parse_file_uri(uri_or_path: str) -> pathlib.Path:
    if not uri_or_path.startswith("file://"):
        return pathlib.Path(uri_or_path)
    path = unquote(urlparse(uri_or_path).path or "")
    m = _WIN_DRIVE.match(path) if os.name == "nt" else None
    return pathlib.Path(m.group(1) if m else path)


def resolve_path(path_like: PathLike) -> pathlib.Path:
    return parse_file_uri(os.fspath(path_like)).expanduser().resolve(strict=False)


def file_name(path_like: PathLike) -> str:
    """Final path component, with file:// URIs decoded first."""
    return parse_file_uri(os.fspath(path_like)).name
