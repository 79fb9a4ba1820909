from typing import Union

from .header import HEADER_NAME, HeaderValue, OutputMode

_INTRO = {
    OutputMode.PLAIN: "Send the following HTTP header with every HTTPS response:",
    OutputMode.NGINX: "Add the following directive to the server block of your nginx configuration:",
    OutputMode.APACHE: "Add the following directive to your Apache virtual host (requires mod_headers):",
}

_OUTRO = (
    "Keep the backup key offline and away from the production server. If every\n"
    "pinned key is lost, clients that saw this header will refuse to connect\n"
    "until max-age has expired."
)


def _directives_of(value: Union[HeaderValue, str]) -> str:
    line = value.line if isinstance(value, HeaderValue) else value
    # drop the leading "Public-Key-Pins:" token
    return line.partition(" ")[2]


def render(value: Union[HeaderValue, str], mode: OutputMode = OutputMode.PLAIN) -> str:
    if mode is OutputMode.NGINX:
        return f"add_header {HEADER_NAME} '{_directives_of(value)}';"
    if mode is OutputMode.APACHE:
        escaped = _directives_of(value).replace('"', '\\"')
        return f'Header always set {HEADER_NAME} "{escaped}"'
    return value.line if isinstance(value, HeaderValue) else value


def frame(line: str, mode: OutputMode = OutputMode.PLAIN, quiet: bool = False) -> str:
    """Return the text written to stdout: the bare line when quiet, otherwise with a banner."""
    if quiet:
        return line + "\n"
    return f"{_INTRO[mode]}\n\n{line}\n\n{_OUTRO}\n"
