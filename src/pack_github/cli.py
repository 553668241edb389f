"""pack-github command line interface."""

import logging
import sys
from typing import NoReturn
from pathlib import Path

import click

from . import __version__
from .client import GithubClient
from .config import DEFAULT_META_FOLDER
from .config import ClientConfig
from .config import MetadataConfig
from .exceptions import PackGithubError
from .installer import install_from_github
from .pack import Pack
from .schema import load_record
from .updater import check_for_update


def _fail(error: PackGithubError) -> NoReturn:
    click.echo(error.message)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub API token (or GITHUB_TOKEN)")
@click.option("--timeout", default=30.0, show_default=True, help="HTTP timeout in seconds")
@click.pass_context
def main(ctx: click.Context, verbose: bool, token: str | None, timeout: float) -> None:
    """Add projects from GitHub releases to a pack."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ClientConfig.from_env(token=token, timeout=timeout)


@click.command()
@click.argument("url", required=False, default="")
@click.option("--pack-file", default="pack.toml", show_default=True, type=click.Path(path_type=Path), help="Pack manifest")
@click.option("--meta-folder", default=DEFAULT_META_FOLDER, show_default=True, help="Folder for metadata files")
@click.option(
    "--meta-folder-base",
    default=None,
    type=click.Path(path_type=Path),
    help="Base folder for --meta-folder (default: pack root)",
)
@click.option("--branch", default="", help="Prefer releases targeting this branch")
@click.pass_obj
def add(
    client_config: ClientConfig,
    url: str,
    pack_file: Path,
    meta_folder: str,
    meta_folder_base: Path | None,
    branch: str,
) -> None:
    """Add a project from a GitHub repository URL or owner/repo slug."""
    try:
        pack = Pack.load(pack_file)
    except PackGithubError as e:
        _fail(e)

    config = MetadataConfig(meta_folder=meta_folder, meta_folder_base=meta_folder_base)
    try:
        with GithubClient(client_config) as client:
            result = install_from_github(url, pack, client, config=config, branch=branch)
    except PackGithubError as e:
        _fail(e)

    click.echo(f"Installed {result.asset.name} from release {result.release.tag_name}")


main.add_command(add, name="add")
main.add_command(add, name="install")
main.add_command(add, name="get")


@main.command()
@click.argument("meta_files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_obj
def check(client_config: ClientConfig, meta_files: tuple[Path, ...]) -> None:
    """Check metadata files for newer GitHub releases."""
    try:
        with GithubClient(client_config) as client:
            for meta_file in meta_files:
                result = check_for_update(client, load_record(meta_file))
                if result.has_update:
                    click.echo(f"{result.name}: {result.current_tag} -> {result.latest_tag}")
                else:
                    click.echo(f"{result.name}: up to date ({result.current_tag})")
    except PackGithubError as e:
        _fail(e)


if __name__ == "__main__":
    main()
