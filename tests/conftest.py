from __future__ import annotations
import logging
from dataclasses import dataclass
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization

from _util import csr_for, key_pem, new_ec_key, new_rsa_key, self_signed_cert, write


@dataclass
class KeyFiles:
    primary_key: object
    backup_key: object
    cert: str
    cert_der: str
    key: str
    key_pkcs1: str
    csr: str
    backup_key_file: str
    backup_csr: str


@pytest.fixture(scope="session")
def key_files(tmp_path_factory) -> KeyFiles:
    d: Path = tmp_path_factory.mktemp("keys")
    primary = new_rsa_key()
    backup = new_ec_key()
    cert = self_signed_cert(primary)
    return KeyFiles(
        primary_key=primary,
        backup_key=backup,
        cert=write(d / "site.crt", cert.public_bytes(serialization.Encoding.PEM)),
        cert_der=write(d / "site.cert", cert.public_bytes(serialization.Encoding.DER)),
        key=write(d / "site.key", key_pem(primary)),
        key_pkcs1=write(d / "site-rsa.key", key_pem(primary, serialization.PrivateFormat.TraditionalOpenSSL)),
        csr=write(d / "site.csr", csr_for(primary).public_bytes(serialization.Encoding.PEM)),
        backup_key_file=write(d / "backup.key", key_pem(backup)),
        backup_csr=write(d / "backup.csr", csr_for(backup).public_bytes(serialization.Encoding.PEM)),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("HPKPGEN_LOG_LEVEL", "HPKPGEN_MAX_AGE", "HPKPGEN_LOG_JSON"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers[:]:
        if h not in handlers:
            root.removeHandler(h)
    root.setLevel(level)
    if hasattr(root, "_hpkpgen_handler"):
        delattr(root, "_hpkpgen_handler")
