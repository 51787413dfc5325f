""" esop nodes command. """

import click
from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text
from esoperator.kube.claim_store import DryRunClaimStore
from esoperator.node_resolver import resolve_nodes
from esoperator.schemas.nodes import get_nodes_from_config_file


@click.command(name='nodes')
@click.argument('nodes_file', type=click.Path(exists=True, dir_okay=False))
def click_nodes(nodes_file: str) -> None:
    """ Summarize the resolution of the nodes described in NODES_FILE, without contacting a cluster. """
    nodes = get_nodes_from_config_file(nodes_file)
    if nodes is None:
        raise click.ClickException(f"Invalid node description file {nodes_file}")

    resolutions = resolve_nodes(nodes, DryRunClaimStore())

    console = Console()
    table = Table(title="Elasticsearch nodes", title_justify="left", box=box.HORIZONTALS, show_lines=True)
    table.add_column("Node", style="cyan", no_wrap=True)
    table.add_column("Role", justify="left")
    table.add_column("CPU", justify="left")
    table.add_column("Memory", justify="left")
    table.add_column("Storage", justify="left")
    table.add_column("Secure", justify="left")

    for name, descriptor in nodes.items():
        resolution = resolutions.get(name)
        if resolution is None:
            table.add_row(name, descriptor.role.value, "", "", Text("FAILED", style="bold red"), "")
            continue
        limits = resolution.container.resources.limits
        kind = descriptor.spec.storage.kind()
        storage = Text(kind.value) if kind else Text("NONE", style="bold red")
        table.add_row(
            name,
            descriptor.role.value,
            limits["cpu"],
            limits["memory"],
            storage,
            "yes" if descriptor.secure else "no",
        )

    console.print(table)
