"""Top-level Click group for the bvdb CLI."""

import click

from bvdb_installer.patch_cmd.cli import patch_group
from bvdb_installer.provision.cli import install_cmd


@click.group()
def main():
    """bvdb - bootstrap a WordPress project from the BvdB setup archive."""


main.add_command(install_cmd)
main.add_command(patch_group)
