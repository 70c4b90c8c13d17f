"""Click commands exposing the text patching primitives."""

import os
import sys

import click

from bvdb_installer.patch_cmd.text_patcher import (
    SECURITY_BEGIN,
    SECURITY_END,
    replace_string,
    set_key_value,
    strip_block,
)


def _require_file(file_path):
    if not os.path.isfile(file_path):
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        raise SystemExit(1)


@click.group("patch")
def patch_group():
    """Line-oriented edits to config and .env files."""


@patch_group.command("strip-security")
@click.argument("file_path")
@click.option("--begin", "begin_marker", default=SECURITY_BEGIN, show_default=True)
@click.option("--end", "end_marker", default=SECURITY_END, show_default=True)
def strip_security_cmd(file_path, begin_marker, end_marker):
    """Remove the marked security block(s) from FILE_PATH."""
    _require_file(file_path)
    if strip_block(file_path, begin_marker, end_marker):
        click.echo(f"Removed security block from {file_path}")
    else:
        print(f"Note: No security block found in {file_path}", file=sys.stderr)


@patch_group.command("replace")
@click.argument("file_path")
@click.argument("search")
@click.argument("replacement")
def replace_cmd(file_path, search, replacement):
    """Replace every occurrence of SEARCH with REPLACEMENT."""
    _require_file(file_path)
    if not search:
        raise click.UsageError("SEARCH must not be empty")
    count = replace_string(file_path, search, replacement)
    if count:
        click.echo(f"Replaced {count} occurrence(s) in {file_path}")
    else:
        print(f"Note: {search!r} not found in {file_path}", file=sys.stderr)


@patch_group.command("set-env")
@click.argument("file_path")
@click.argument("key")
@click.argument("value")
def set_env_cmd(file_path, key, value):
    """Set KEY=VALUE in an .env file, appending the key if absent."""
    _require_file(file_path)
    if set_key_value(file_path, key, value):
        click.echo(f"Updated {key} in {file_path}")
    else:
        click.echo(f"Added {key} to {file_path}")
