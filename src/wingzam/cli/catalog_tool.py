r"""Bird catalog CLI.

Checks a precomputed catalog file and tries name lookups against it.

Usage:
    wingzam-catalog validate data/birds.json
    wingzam-catalog match data/birds.json "blue jay"
"""

import sys
from pathlib import Path

import click

from wingzam.catalog.catalog import BirdCatalog, CatalogLoadError
from wingzam.catalog.matcher import NameMatcher


def _load_or_exit(catalog_file: Path) -> BirdCatalog:
    try:
        return BirdCatalog.load(catalog_file)
    except CatalogLoadError as e:
        click.echo(click.style(f"✗ {e}", fg="red"), err=True)
        sys.exit(1)


@click.group()
def cli() -> None:
    """Wingzam bird catalog tools."""
    pass


@cli.command()
@click.argument("catalog_file", type=click.Path(path_type=Path))
def validate(catalog_file: Path) -> None:
    """Validate a catalog file and report its size."""
    catalog = _load_or_exit(catalog_file)
    alias_count = sum(len(bird.aliases) for bird in catalog)
    click.echo(
        click.style(
            f"✓ {catalog_file}: {len(catalog)} birds, {alias_count} aliases", fg="green"
        )
    )


@cli.command()
@click.argument("catalog_file", type=click.Path(path_type=Path))
@click.argument("name")
def match(catalog_file: Path, name: str) -> None:
    """Look up NAME the way a spoken transcript is matched."""
    catalog = _load_or_exit(catalog_file)
    bird = NameMatcher(catalog).match(name)
    if bird is None:
        click.echo(f'no bird "{name.strip().lower()}"', err=True)
        sys.exit(1)

    click.echo(f"{bird.common_name} ({bird.scientific_name})")
    if bird.wingspan is not None:
        click.echo(f"Wingspan: {bird.wingspan:g} cm")
    if bird.recording is not None:
        click.echo(f"Recording: {bird.recording.file}")


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
