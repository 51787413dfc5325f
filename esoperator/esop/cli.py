""" esop command line interface group. """

import click
from esoperator.esop.render import click_render
from esoperator.esop.defaults import click_defaults
from esoperator.esop.nodes import click_nodes


@click.group()
def cli() -> None:
    """ Resolve Elasticsearch node descriptions into Kubernetes artifacts. """
    pass


cli.add_command(click_render)
cli.add_command(click_defaults)
cli.add_command(click_nodes)
