import enum
import logging
from dataclasses import dataclass

from .errors import UnknownExtension
from .path_utils import file_name

log = logging.getLogger(__name__)


class DocumentKind(enum.Enum):
    CERTIFICATE = "certificate"
    CERTIFICATE_REQUEST = "certificate-request"
    PRIVATE_KEY = "private-key"
    UNKNOWN = "unknown"


_EXTENSIONS = {
    "crt": DocumentKind.CERTIFICATE,
    "cert": DocumentKind.CERTIFICATE,
    "pem": DocumentKind.CERTIFICATE,
    "csr": DocumentKind.CERTIFICATE_REQUEST,
    "key": DocumentKind.PRIVATE_KEY,
    # deprecated synonym, undocumented in usage text
    "u": DocumentKind.PRIVATE_KEY,
}
_LEGACY_EXTENSIONS = frozenset({"u"})

KNOWN_EXTENSIONS = tuple(e for e in _EXTENSIONS if e not in _LEGACY_EXTENSIONS)


@dataclass(frozen=True)
class InputFile:
    path: str
    kind: DocumentKind


def extension_of(path: str) -> str:
    return file_name(path).rsplit(".", 1)[-1]


def kind_for_extension(ext: str) -> DocumentKind:
    return _EXTENSIONS.get(ext, DocumentKind.UNKNOWN)


def classify(path: str) -> InputFile:
    ext = extension_of(path)
    kind = kind_for_extension(ext)
    if kind is DocumentKind.UNKNOWN:
        raise UnknownExtension(
            f"unknown file extension {ext!r} (expected one of: {', '.join(KNOWN_EXTENSIONS)})",
            path=path,
        )
    if ext in _LEGACY_EXTENSIONS:
        log.warning("%s: extension %r is deprecated, rename the file to .key", path, ext)
    log.debug("%s classified as %s", path, kind.value)
    return InputFile(path=path, kind=kind)
