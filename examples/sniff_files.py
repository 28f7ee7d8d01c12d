#!/usr/bin/env python3
"""Print the sniffed content type of every file in a directory."""

import sys
from pathlib import Path

import click

from formsniff import DEFAULT_MIME_TYPE, sniff


def main(directory: Path) -> None:
    for path in sorted(p for p in directory.iterdir() if p.is_file()):
        mime = sniff(path)
        color = "yellow" if mime == DEFAULT_MIME_TYPE else "green"
        click.secho(f"{mime:<45} {path.name}", fg=color)


if __name__ == "__main__":
    main(Path(sys.argv[1] if len(sys.argv) > 1 else "."))
