import logging
from typing import Callable, List, Optional, Sequence

from .errors import ExtractionFailed, MissingDependency
from .file_kind import DocumentKind, InputFile, classify
from .header import HeaderConfig, HeaderValue, assemble
from .path_utils import resolve_path
from .pins import Pin, compute_pin

log = logging.getLogger(__name__)

SpkiParser = Callable[[DocumentKind, bytes], bytes]


def default_parser() -> SpkiParser:
    try:
        from .extract import extract_spki
    except ImportError as exc:
        raise MissingDependency(
            f"the 'cryptography' and 'pyasn1-modules' packages are required to read key files ({exc})"
        ) from exc
    return extract_spki


def _read(input_file: InputFile) -> bytes:
    try:
        return resolve_path(input_file.path).read_bytes()
    except OSError as exc:
        raise ExtractionFailed(f"cannot read file: {exc.strerror or exc}", path=input_file.path) from exc


def pin_bytes(input_file: InputFile, data: bytes, parser: Optional[SpkiParser] = None) -> Pin:
    parser = parser or default_parser()
    try:
        spki = parser(input_file.kind, data)
    except ExtractionFailed as exc:
        if exc.path is None:
            exc.path = input_file.path
        raise
    pin = compute_pin(spki, source=input_file.path)
    log.debug("%s: pin-sha256=%s", input_file.path, pin.value, extra={"path": input_file.path})
    return pin


def pin_file(input_file: InputFile, parser: Optional[SpkiParser] = None) -> Pin:
    return pin_bytes(input_file, _read(input_file), parser)


def collect_pins(paths: Sequence[str], parser: Optional[SpkiParser] = None) -> List[Pin]:
    """
    Compute one pin per path, in input order.

    Every path is classified before any file is read, so an unknown extension
    aborts the run without touching the filesystem.
    """
    inputs = [classify(str(p)) for p in paths]
    parser = parser or default_parser()
    return [pin_file(f, parser) for f in inputs]


def build_header(
    paths: Sequence[str],
    config: Optional[HeaderConfig] = None,
    parser: Optional[SpkiParser] = None,
) -> HeaderValue:
    config = config or HeaderConfig()
    pins = collect_pins(paths, parser)
    value = assemble(config.with_pins(pins))
    log.info("assembled header with %d pin(s)", len(pins))
    return value

