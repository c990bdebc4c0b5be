import click

from .commands.check_id import check_id_command
from .commands.example import example_command


@click.group()
def app() -> None:
    pass


app.add_command(example_command, name="example")
app.add_command(check_id_command, name="check-id")
__all__ = ["app"]
