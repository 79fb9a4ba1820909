from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .errors import InsufficientPins
from .pins import Pin

HEADER_NAME = "Public-Key-Pins"
DEFAULT_MAX_AGE = 5184000  # 60 days
MIN_PINS = 2


class OutputMode(enum.Enum):
    PLAIN = "plain"
    NGINX = "nginx"
    APACHE = "apache"


@dataclass(frozen=True)
class HeaderConfig:
    pins: Tuple[Pin, ...] = field(default_factory=tuple)
    max_age: int = DEFAULT_MAX_AGE
    include_subdomains: bool = False
    report_uri: Optional[str] = None
    output_mode: OutputMode = OutputMode.PLAIN
    quiet: bool = False

    def __post_init__(self) -> None:
        if self.max_age < 0:
            raise ValueError(f"max-age must be >= 0, got {self.max_age}")
        # accept any sequence from callers but store an immutable one
        object.__setattr__(self, "pins", tuple(self.pins))

    def with_pins(self, pins: Sequence[Pin]) -> "HeaderConfig":
        return HeaderConfig(
            pins=tuple(pins),
            max_age=self.max_age,
            include_subdomains=self.include_subdomains,
            report_uri=self.report_uri,
            output_mode=self.output_mode,
            quiet=self.quiet,
        )


@dataclass(frozen=True)
class HeaderValue:
    directives: Tuple[str, ...]

    @property
    def text(self) -> str:
        return "; ".join(self.directives)

    @property
    def line(self) -> str:
        return f"{HEADER_NAME}: {self.text}"

    def __str__(self) -> str:
        return self.line


def assemble(config: HeaderConfig) -> HeaderValue:
    if len(config.pins) < MIN_PINS:
        raise InsufficientPins(
            f"{len(config.pins)} pin(s) computed, at least {MIN_PINS} are required "
            "(one of them must be a backup key not yet in use)"
        )
    directives = [p.directive for p in config.pins]
    directives.append(f"max-age={config.max_age}")
    if config.include_subdomains:
        directives.append("includeSubDomains")
    if config.report_uri is not None:
        directives.append(f'report-uri="{config.report_uri}"')
    return HeaderValue(directives=tuple(directives))
