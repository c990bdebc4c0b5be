from collections.abc import Callable

import click
from rich.console import Console

from ...identifiers import (
    validate_dpid,
    validate_ean,
    validate_isrc,
    validate_iswc,
    validate_upc,
)

console = Console()

CHECKS: dict[str, Callable[[str], bool]] = {
    "upc": validate_upc,
    "ean": validate_ean,
    "isrc": validate_isrc,
    "iswc": validate_iswc,
    "dpid": validate_dpid,
}


@click.command()
@click.argument("kind", type=click.Choice(sorted(CHECKS), case_sensitive=False))
@click.argument("value")
def check_id_command(kind: str, value: str) -> None:
    """Check one identifier value.

    Exits with status 1 when the value is not valid for KIND.

    Examples:

    \b
        ddex-ern check-id upc 036000291452
        ddex-ern check-id isrc US-RC1-76-07839
    """
    kind = kind.lower()
    if CHECKS[kind](value):
        console.print(f"[green]✓[/green] {value} is a valid {kind.upper()}")
        return
    console.print(f"[red]✗[/red] {value} is not a valid {kind.upper()}")
    raise click.exceptions.Exit(1)
