"""Command line interface: build an HPKP header from certificate, CSR and key files."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import click

from .errors import HpkpError
from .header import DEFAULT_MAX_AGE, MIN_PINS, HeaderConfig, OutputMode
from .logging_conf import setup_logging
from .pipeline import build_header
from .render import frame, render
from .settings import Settings

log = logging.getLogger(__name__)

_EPILOG = (
    "Recognized extensions: .crt, .cert and .pem (certificate), .csr (certificate "
    "signing request), .key (unencrypted private key). At least two files are "
    "required, one of them for a backup key."
)


def _output_mode(nginx: bool, apache: bool) -> OutputMode:
    if nginx and apache:
        raise click.UsageError("-n and -a are mutually exclusive.")
    if nginx:
        return OutputMode.NGINX
    if apache:
        return OutputMode.APACHE
    return OutputMode.PLAIN


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EPILOG,
)
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, path_type=str))
@click.option(
    "-m",
    "--max-age",
    type=click.IntRange(min=0),
    default=None,
    help=f"Value of the max-age directive in seconds [default: {DEFAULT_MAX_AGE}].",
)
@click.option("-n", "--nginx", is_flag=True, help="Print an nginx add_header directive.")
@click.option("-a", "--apache", is_flag=True, help="Print an Apache 'Header always set' directive.")
@click.option("-r", "--report-uri", type=str, default=None, help="Add a report-uri directive.")
@click.option("-s", "--include-subdomains", is_flag=True, help="Add the includeSubDomains directive.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the header line.")
@click.version_option(package_name="hpkpgen")
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    max_age: Optional[int],
    nginx: bool,
    apache: bool,
    report_uri: Optional[str],
    include_subdomains: bool,
    quiet: bool,
) -> None:
    """Generate an HTTP Public Key Pinning header for FILES."""

    if "?" in files:
        click.echo(ctx.get_help())
        ctx.exit(0)

    settings = Settings.from_env()
    setup_logging(settings)

    mode = _output_mode(nginx, apache)
    if len(files) < MIN_PINS:
        raise click.UsageError(
            f"at least {MIN_PINS} files are required, got {len(files)}; "
            "HPKP needs a backup pin."
        )

    config = HeaderConfig(
        max_age=settings.MAX_AGE if max_age is None else max_age,
        include_subdomains=include_subdomains,
        report_uri=report_uri,
        output_mode=mode,
        quiet=quiet,
    )

    try:
        value = build_header(files, config)
    except HpkpError as exc:
        log.debug("header generation aborted", exc_info=True)
        raise click.ClickException(str(exc)) from exc

    click.echo(frame(render(value, config.output_mode), config.output_mode, config.quiet), nl=False)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return the process exit code; usage errors exit with 1."""

    try:
        rv = cli.main(args=list(argv) if argv is not None else None, prog_name="hpkpgen", standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return 1
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return rv if isinstance(rv, int) else 0


if __name__ == "__main__":
    raise SystemExit(main())
