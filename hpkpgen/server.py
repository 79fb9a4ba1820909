import base64
import binascii
from pathlib import Path
from typing import Annotated, List, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from .errors import HpkpError
from .extract import describe_spki, extract_spki
from .file_kind import classify
from .header import DEFAULT_MAX_AGE, HeaderConfig, OutputMode, assemble
from .mcp_contracts import HeaderResult, PinSummary
from .path_utils import resolve_path
from .pins import compute_pin
from .pipeline import collect_pins
from .render import render

mcp = FastMCP(
    name="hpkpgen",
    instructions=(
        "Purpose: compute HTTP Public Key Pinning (HPKP) pins and assemble a Public-Key-Pins header "
        "from certificate (.crt/.cert/.pem), CSR (.csr) and unencrypted private key (.key) files. "
        "No network access, no file writes.\n\n"
        "How to call:\n"
        "- One local file → `pin_from_local_path(path=...)`.\n"
        "- One base64 file → `pin_from_b64_string(filename=..., content_b64=...)`; the filename extension "
        "selects how the bytes are parsed.\n"
        "- Full header → `generate_header(paths=[...], max_age=?, include_subdomains=?, report_uri=?, "
        "output_mode=?)`. At least two files are required: HPKP needs a backup pin.\n\n"
        "Safety: read-only and idempotent; private key material is never returned, only the pin of its public half."
    ),
)


def _pin_summary(filename: str, data: bytes) -> dict:
    input_file = classify(filename)
    try:
        spki = extract_spki(input_file.kind, data)
    except HpkpError as exc:
        exc.path = exc.path or filename
        raise
    return {
        "kind": input_file.kind.value,
        "pin": compute_pin(spki).value,
        "key": describe_spki(spki),
    }


@mcp.tool()
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Compute the pin-sha256 value of a local certificate, CSR or private key file. "
        "Read-only and idempotent."
    ),
    tags={"hpkp", "pin", "filesystem"},
    annotations={
        "title": "Pin local file",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def pin_from_local_path(
    path: Annotated[Path, Field(description="Local path to a .crt/.cert/.pem/.csr/.key file.")],
) -> dict:
    p = resolve_path(str(path))
    try:
        summary = _pin_summary(str(p), p.read_bytes())
    except HpkpError as exc:
        raise ToolError(str(exc)) from exc
    except OSError as exc:
        raise ToolError(f"{p}: cannot read file: {exc.strerror or exc}") from exc
    return PinSummary(path=str(p), **summary).model_dump(exclude_none=True)


@mcp.tool(
    description=(
        "Compute the pin-sha256 value of a file provided as base64. "
        "The filename extension decides whether it is read as certificate, CSR or private key."
    ),
    tags={"hpkp", "pin", "binary"},
    annotations={
        "title": "Pin base64 content",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def pin_from_b64_string(
    filename: Annotated[
        str,
        Field(description="Original filename (its extension selects the parser; nothing is read from disk)."),
    ],
    content_b64: Annotated[str, Field(description="RFC 4648 raw base64-encoded bytes of the file")],
) -> dict:
    try:
        data = base64.b64decode(content_b64, validate=True)
    except binascii.Error as exc:
        raise ToolError(f"content_b64 is not valid base64: {exc}") from exc
    try:
        summary = _pin_summary(filename, data)
    except HpkpError as exc:
        raise ToolError(str(exc)) from exc
    return PinSummary(filename=filename, **summary).model_dump(exclude_none=True)


@mcp.tool(
    description=(
        "Assemble a Public-Key-Pins header from two or more local files and render it "
        "as a plain header line or an nginx/Apache configuration directive."
    ),
    tags={"hpkp", "header", "filesystem"},
    annotations={
        "title": "Generate HPKP header",
        "readOnlyHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
def generate_header(
    paths: Annotated[List[str], Field(description="Two or more key-bearing files, primary key first.")],
    max_age: Annotated[int, Field(ge=0, description="max-age directive in seconds.")] = DEFAULT_MAX_AGE,
    include_subdomains: Annotated[bool, Field(description="Add includeSubDomains.")] = False,
    report_uri: Annotated[Optional[str], Field(description="Optional report-uri, embedded verbatim.")] = None,
    output_mode: Annotated[
        Literal["plain", "nginx", "apache"], Field(description="Rendering of the header line.")
    ] = "plain",
) -> dict:
    mode = OutputMode(output_mode)
    config = HeaderConfig(
        max_age=max_age,
        include_subdomains=include_subdomains,
        report_uri=report_uri,
        output_mode=mode,
    )
    try:
        pins = collect_pins(paths)
        value = assemble(config.with_pins(pins))
    except HpkpError as exc:
        raise ToolError(str(exc)) from exc
    return HeaderResult(
        header=value.line,
        rendered=render(value, mode),
        output_mode=mode.value,
        pins=[p.value for p in pins],
    ).model_dump()


@mcp.prompt(
    name="deploy_pins",
    description="Walk through deploying an HPKP header for a primary and a backup key.",
    tags={"hpkp", "prompt"},
)
def deploy_pins(
    primary: Annotated[str, Field(description="Certificate or key currently served.")],
    backup: Annotated[str, Field(description="Backup key or CSR kept offline.")],
) -> str:
    return (
        "Task: produce an HPKP deployment snippet.\n\n"
        "1) Call the MCP tool `generate_header` with the following JSON arguments:\n"
        "```json\n"
        "{\n"
        f'  "paths": ["{primary}", "{backup}"],\n'
        '  "output_mode": "nginx"\n'
        "}\n"
        "```\n\n"
        "2) Show the `rendered` line, then explain in at most three bullets that the backup key "
        "must stay offline and that a short max-age should be tried first.\n"
        "If the tool call fails, output ERROR: <message> and stop. Do not invent pins.\n"
    )


if __name__ == "__main__":
    mcp.run()
