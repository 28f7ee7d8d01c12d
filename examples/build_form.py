#!/usr/bin/env python3
"""
Build a multipart/form-data body from scalar fields and local files.

The transport is left to the caller; this prints the headers and a
summary of every part that would be sent.
"""

import sys
from pathlib import Path

import click
from loguru import logger

from formsniff import FormData, FormSniffError


def main(paths: list[str]) -> None:
    logger.enable("formsniff")
    fields = {
        "title": "Example upload",
        "public": True,
        "files": paths or [__file__],
    }
    try:
        form = FormData(fields)
    except FormSniffError as e:
        click.secho(f"Could not build form: {e}", fg="red")
        sys.exit(1)

    for name, value in form.headers().items():
        click.secho(f"{name}: {value}", fg="cyan")
    for field in form.fields:
        click.echo(f"  {field}")
    click.secho(f"Body: {len(form)} bytes", fg="green")


if __name__ == "__main__":
    main([str(Path(p)) for p in sys.argv[1:]])
