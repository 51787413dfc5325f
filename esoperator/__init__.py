""" esoperator package. """
from importlib.metadata import version

from esoperator.node_resolver import NodeResolver, NodeResolution, resolve_nodes


try:
    __version__ = version('esoperator')
except Exception:
    __version__ = "unknown"
