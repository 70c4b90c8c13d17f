"""Click command for the provisioning run."""

import os
import sys

import click

from bvdb_installer.provision.answers import ClickAnswerProvider, DefaultAnswerProvider
from bvdb_installer.provision.errors import ProvisionError
from bvdb_installer.provision.pipeline import ProvisionDeps, run_provisioning
from bvdb_installer.provision.provision_config import CONFIG_FILE_NAME, load_provision_config
from bvdb_installer.provision.remote_fetcher import RemoteFetcher


@click.command("install")
@click.option("--project-dir", default=".", show_default=True,
              type=click.Path(file_okay=False), help="Project root to provision.")
@click.option("--config", "config_path", default=None,
              help="Composer-style JSON file with extra.bvdb (default: <project-dir>/composer.json).")
@click.option("--setup-url", default=None, help="Override the configured setup archive URL.")
@click.option("--non-interactive", is_flag=True, help="Answer every .env question with its default.")
def install_cmd(project_dir, config_path, setup_url, non_interactive):
    """Download the setup archive and install it into the project."""
    config_path = config_path or os.path.join(project_dir, CONFIG_FILE_NAME)
    answer_provider = DefaultAnswerProvider() if non_interactive else ClickAnswerProvider()
    deps = ProvisionDeps(fetcher=RemoteFetcher(), answer_provider=answer_provider)

    try:
        config = load_provision_config(config_path)
        if setup_url:
            config = config.with_setup_url(setup_url)
        run_provisioning(project_dir, config, deps)
    except (ProvisionError, OSError) as err:
        print(f"Error: {err}", file=sys.stderr)
        raise SystemExit(1)
