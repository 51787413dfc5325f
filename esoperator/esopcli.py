"""
esoperator Command Line Interface.

Usage: esop [OPTIONS] COMMAND [ARGS]...
Help: esop --help


Becomes available after installing esoperator like

> pip install .

or (during development)

> pip install -e .
"""

from esoperator.esop.cli import cli


def main():
    """ Command line interface of esoperator. """
    cli()


if __name__ == '__main__':
    main()
