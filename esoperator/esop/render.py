""" esop render command. """

import json
import click
import yaml
from esoperator.exceptions import KubeAccessError
from esoperator.kube.claim_store import DryRunClaimStore, KubeClaimStore
from esoperator.kube.kube_access_layer import kal
from esoperator.node_resolver import resolve_nodes, serialize
from esoperator.schemas.nodes import get_nodes_from_config_file


@click.command(name='render')
@click.argument('nodes_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--apply', 'apply_claims', is_flag=True, default=False,
              help='Create or update the PersistentVolumeClaims of claim template storage on the cluster.')
@click.option('--output', '-o', type=click.Choice(['yaml', 'json']), default='yaml', show_default=True,
              help='Output format.')
def click_render(nodes_file: str, apply_claims: bool, output: str) -> None:
    """
    Render the pod artifacts of the nodes described in NODES_FILE.

    Without --apply, the claims that would be provisioned are listed instead of being created.
    """
    nodes = get_nodes_from_config_file(nodes_file)
    if nodes is None:
        raise click.ClickException(f"Invalid node description file {nodes_file}")

    if apply_claims:
        try:
            kal.connect()
        except KubeAccessError as err:
            raise click.ClickException(str(err))
        store = KubeClaimStore()
    else:
        store = DryRunClaimStore()

    resolutions = resolve_nodes(nodes, store)
    document = {"nodes": [resolution.to_dict() for resolution in resolutions.values()]}
    if isinstance(store, DryRunClaimStore):
        document["claims"] = serialize(store.claims)

    if output == 'json':
        click.echo(json.dumps(document, indent=2))
    else:
        click.echo(yaml.safe_dump(document, sort_keys=False), nl=False)

    if len(resolutions) != len(nodes):
        raise click.ClickException(f"{len(nodes) - len(resolutions)} node(s) could not be resolved")
