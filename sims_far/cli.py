"""sims-far CLI."""

import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__


@click.group()
@click.version_option(version=__version__)
def main():
    """sims-far - Inspect and extract The Sims FAR archives.

    \b
    info:    show header fields and totals
    list:    list archived files
    extract: write every archived file to a directory
    """
    pass


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def info(archive: Path):
    """Show the header of a FAR archive."""
    from .exceptions import FarError
    from .far import FAR_SIGNATURE, FAR_VERSION, parse_far

    try:
        far = parse_far(archive)
    except FarError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    total_size = sum(entry.length_primary for entry in far.entries)

    click.echo(f"Archive:         {archive}")
    click.echo(f"Signature:       {far.signature}")
    click.echo(f"Version:         {far.version}")
    click.echo(f"Manifest offset: {far.manifest_offset}")
    click.echo(f"Files:           {far.entry_count}")
    click.echo(f"Total size:      {total_size:,} bytes")

    if not far.is_valid_signature:
        click.echo(f"Warning: signature is not {FAR_SIGNATURE!r}", err=True)
    if not far.is_supported_version:
        click.echo(f"Warning: version is not {FAR_VERSION}", err=True)


@main.command(name="list")
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-l",
    "--long",
    "long_format",
    is_flag=True,
    help="Show lengths and body offsets",
)
def list_files(archive: Path, long_format: bool):
    """List files in a FAR archive."""
    from .exceptions import FarError
    from .far import parse_far

    try:
        far = parse_far(archive)
    except FarError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for entry in far.entries:
        if long_format:
            click.echo(
                f"{entry.length_primary:>10} {entry.length_secondary:>10} "
                f"0x{entry.body_offset:08X}  {entry.name}"
            )
        else:
            click.echo(entry.name)


@main.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory (default: <archive_name>_extracted)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Refuse archives whose signature or version is unexpected",
)
def extract(archive: Path, output: Optional[Path], strict: bool):
    """Extract all files from a FAR archive."""
    from .far import FarReader

    click.echo(f"Opening: {archive}")

    try:
        reader = FarReader(archive, strict=strict)

        if output is None:
            output = archive.parent / f"{archive.stem}_extracted"

        click.echo(f"Output:  {output}")
        click.echo()

        extracted_count = 0
        with click.progressbar(
            length=len(reader.entries),
            label="Extracting",
        ) as bar:
            for _filename, _path in reader.extract_all(output):
                extracted_count += 1
                bar.update(1)

        click.echo()
        click.echo(f"Extracted: {extracted_count} files")

    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
