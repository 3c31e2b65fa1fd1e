# === FILE: robofinder/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for RoboFinder.

Looks up the archived copies of <url>/robots.txt in the Wayback Machine and
prints every path and sitemap URL they ever listed.

Options:
  -u, --url URL        Target, scheme://domain.tld (required)
  -d, --delay SEC      Pause before each snapshot request (default: 0.5)
  -l, --limit INT      Number of captures; negative for the most recent (default: 10)
  -p, --paths          Print robots.txt paths
  -sm, --sitemaps      Print robots.txt sitemaps
  -s, --silent         Print nothing but the findings
  -v, --verbose        Print debug lines
  --timeout SEC        Per-request timeout, 0 disables it (default: 30)
  --verify-tls         Verify TLS certificates
  -c, --config PATH    YAML/JSON file with defaults for the options above
  -o, --json PATH      Save a JSON report
  --log-file PATH      Also write log lines to a rotating file

Example:
  robofinder -u https://example.com -p -sm -l -20
"""
import asyncio
import sys
from pathlib import Path

import click
from click.core import ParameterSource
from pydantic import ValidationError

from robofinder import __version__
from robofinder.config import load_config
from robofinder.engine import find_robots
from robofinder.errors import ArchiveError, OptionsError
from robofinder.logger import init_logging, logger
from robofinder.report.json_report import render_json

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def print_error(message: str):
    click.secho(f"[-] {message}", fg='red', err=True)
    sys.exit(1)


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'options'}: {err['msg']}" for err in exc.errors()
    )


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='RoboFinder, version %(version)s')
@click.option('-u', '--url', 'url', default='', help='Target URL, scheme://domain.tld')
@click.option(
    '-d', '--delay', 'delay',
    type=float, default=0.5, show_default=True,
    help='Amount of delay between each request (seconds)'
)
@click.option(
    '-l', '--limit', 'limit',
    type=int, default=10, show_default=True,
    help='Limit for timestamps (negative numbers select the most recent results)'
)
@click.option('-p', '--paths', 'paths', is_flag=True, help='Show robots.txt paths')
@click.option('-sm', '--sitemaps', 'sitemaps', is_flag=True, help='Show robots.txt sitemaps')
@click.option('-s', '--silent', 'silent', is_flag=True, help='Silent output messages')
@click.option('-v', '--verbose', 'verbose', is_flag=True, help='Show debug level messages')
@click.option(
    '--timeout', 'timeout',
    type=float, default=30.0, show_default=True,
    help='Timeout for a single request (seconds, 0 = no timeout)'
)
@click.option('--verify-tls', 'verify_tls', is_flag=True, help='Verify TLS certificates of the archive')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='YAML/JSON file with default option values'
)
@click.option(
    '--json', '-o', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save a JSON report to this file'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Also write log lines to this file'
)
@click.pass_context
def cli(ctx, config_path, json_output, log_file, **options):
    """Find paths and sitemaps in archived robots.txt files."""
    overrides = {
        name: value
        for name, value in options.items()
        if ctx.get_parameter_source(name) is not ParameterSource.DEFAULT
    }
    try:
        cfg = load_config(config_path, overrides)
    except OptionsError as e:
        print_error(str(e))
    except ValidationError as e:
        print_error(f'Invalid options: {_describe(e)}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Could not load config: {e}')

    init_logging(silent=cfg.silent, verbose=cfg.verbose, log_file=log_file)

    try:
        report = asyncio.run(find_robots(cfg, on_path=click.echo, on_sitemap=click.echo))
    except ArchiveError as e:
        logger.error("Could not fetch timestamps from the archive: %s", e)
        logger.debug("Index lookup failed for %s", cfg.page_url)
        sys.exit(1)

    if json_output:
        try:
            saved_json = render_json(report, json_output)
        except OSError as e:
            logger.error("Could not save JSON report: %s", e)
            sys.exit(1)
        logger.info("JSON report: %s", saved_json)


if __name__ == "__main__":
    cli()
