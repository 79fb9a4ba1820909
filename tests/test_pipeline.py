import sys

import pytest

from _util import expected_pin
from hpkpgen.errors import ExtractionFailed, InsufficientPins, MissingDependency, UnknownExtension
from hpkpgen.file_kind import DocumentKind
from hpkpgen.header import HeaderConfig
from hpkpgen.pipeline import build_header, collect_pins


class FakeParser:
    """Returns the file bytes as the SPKI and records every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, kind, data):
        self.calls.append((kind, data))
        if data == b"bad":
            raise ExtractionFailed("unparseable")
        return data


@pytest.fixture
def files(tmp_path):
    out = {}
    for name, data in (("a.crt", b"one"), ("b.key", b"two"), ("c.csr", b"three"), ("bad.key", b"bad")):
        p = tmp_path / name
        p.write_bytes(data)
        out[name] = str(p)
    return out


def test_pins_follow_input_order(files):
    parser = FakeParser()
    pins = collect_pins([files["c.csr"], files["a.crt"], files["b.key"]], parser)
    assert [k for k, _ in parser.calls] == [
        DocumentKind.CERTIFICATE_REQUEST,
        DocumentKind.CERTIFICATE,
        DocumentKind.PRIVATE_KEY,
    ]
    assert [p.source for p in pins] == [files["c.csr"], files["a.crt"], files["b.key"]]


def test_unknown_extension_fails_before_reading(files, tmp_path):
    parser = FakeParser()
    with pytest.raises(UnknownExtension):
        collect_pins([files["a.crt"], str(tmp_path / "notes.txt")], parser)
    assert parser.calls == []


def test_extraction_failure_carries_path(files):
    with pytest.raises(ExtractionFailed) as ei:
        collect_pins([files["a.crt"], files["bad.key"]], FakeParser())
    assert ei.value.path == files["bad.key"]


def test_missing_file_is_extraction_failure(tmp_path):
    with pytest.raises(ExtractionFailed) as ei:
        collect_pins([str(tmp_path / "gone.crt"), str(tmp_path / "gone.key")], FakeParser())
    assert "gone.crt" in str(ei.value)


def test_single_file_is_insufficient(files):
    with pytest.raises(InsufficientPins):
        build_header([files["a.crt"]], parser=FakeParser())


def test_build_header_with_fake_parser(files):
    value = build_header([files["a.crt"], files["b.key"]], HeaderConfig(max_age=7), FakeParser())
    assert value.text.count("pin-sha256=") == 2
    assert value.directives[-1] == "max-age=7"


def test_same_key_material_yields_same_pin(key_files):
    pins = collect_pins([key_files.cert, key_files.key, key_files.csr, key_files.key_pkcs1, key_files.cert_der])
    assert len({p.value for p in pins}) == 1
    assert pins[0].value == expected_pin(key_files.primary_key)


def test_build_header_is_idempotent(key_files):
    paths = [key_files.cert, key_files.backup_csr]
    assert build_header(paths) == build_header(paths)


def test_missing_crypto_backend(files, monkeypatch):
    monkeypatch.setitem(sys.modules, "hpkpgen.extract", None)
    with pytest.raises(MissingDependency, match="cryptography"):
        collect_pins([files["a.crt"], files["b.key"]])


def test_unknown_extension_wins_over_missing_backend(files, tmp_path, monkeypatch):
    monkeypatch.setitem(sys.modules, "hpkpgen.extract", None)
    with pytest.raises(UnknownExtension):
        collect_pins([files["a.crt"], str(tmp_path / "notes.txt")])
