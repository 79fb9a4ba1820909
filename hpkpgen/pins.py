import base64
import hashlib
from dataclasses import dataclass
from typing import Optional


def sha256_b64(data: bytes) -> str:
    return base64.b64encode(hashlib.sha256(data).digest()).decode("ascii")


@dataclass(frozen=True)
class Pin:
    value: str
    source: Optional[str] = None

    @property
    def directive(self) -> str:
        return f'pin-sha256="{self.value}"'


def compute_pin(spki: bytes, source: Optional[str] = None) -> Pin:
    """Hash the exact DER bytes of a SubjectPublicKeyInfo into a padded base64 pin."""
    return Pin(value=sha256_b64(spki), source=source)
