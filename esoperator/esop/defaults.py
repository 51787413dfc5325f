""" esop defaults command. """

import click
from rich import box
from rich.console import Console
from rich.table import Table
from esoperator.config import defaults_table


@click.command(name='defaults')
def click_defaults() -> None:
    """ Show the defaults used to resolve nodes. """
    console = Console()
    table = Table(title="Resolution defaults", title_justify="left", box=box.HORIZONTALS)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", justify="left")

    for name, value in sorted(defaults_table().items()):
        table.add_row(name, "" if value is None else str(value))

    console.print(table)
