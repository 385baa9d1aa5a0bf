"""Command-line interface for igem_uploader."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
from dotenv import load_dotenv

from igem_uploader import IgemClient, IgemError
from igem_uploader.config import get_config
from igem_uploader.path import RemotePath


def credential_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --team/--username/--password options shared by every command."""
    func = click.option(
        "--password", "-p", envvar="IGEM_PASSWORD", help="iGEM account password"
    )(func)
    func = click.option(
        "--username", "-u", envvar="IGEM_USERNAME", help="iGEM account username"
    )(func)
    func = click.option(
        "--team", "-t", type=int, envvar="IGEM_TEAM_ID", help="iGEM team id"
    )(func)
    return func


def get_client(team: int | None, username: str | None, password: str | None) -> IgemClient:
    """Create an IgemClient, prompting for whatever credentials are missing."""
    try:
        config = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    team = team if team is not None else config.team_id
    username = username or config.username
    password = password or config.password
    if team is None:
        team = click.prompt("Team id", type=int)
    if not username:
        username = click.prompt("Username")
    if not password:
        password = click.prompt("Password", hide_input=True)
    return IgemClient(
        team,
        username,
        password,
        api_url=config.api_url,
        timeout=config.timeout,
    )


def _fail(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="igem-uploader")
@click.option("--verbose", "-v", is_flag=True, help="Log every request")
def main(verbose: bool) -> None:
    """iGEM upload tool CLI - Manage your team's wiki files."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@main.command("ls")
@click.argument("path", default="")
@credential_options
def list_directory(
    path: str, team: int | None, username: str | None, password: str | None
) -> None:
    """List a remote directory.

    PATH: Remote directory (default: the team's root)

    Examples:

        igem-upload ls

        igem-upload ls wiki/images
    """
    try:
        with get_client(team, username, password) as client:
            listing = client.list_directory(path)

        if not listing.folders and not listing.files:
            click.echo(f"(empty folder: /{RemotePath.of(path)})")
            return
        for folder in listing.folders:
            click.echo(click.style(f"  {folder.name}/", fg="blue"))
        for item in listing.files:
            click.echo(f"  {item.name}  ({_format_size(item.size)})  {item.url or ''}".rstrip())
    except IgemError as e:
        _fail(f"Error: {e}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--folder", "-f", default="", help="Remote directory (default: root)")
@credential_options
def upload(
    file: Path,
    folder: str,
    team: int | None,
    username: str | None,
    password: str | None,
) -> None:
    """Upload a single file.

    Examples:

        igem-upload upload logo.png --folder wiki/images
    """
    try:
        with get_client(team, username, password) as client:
            url = client.upload_file(folder, file.parent, file.name)
        click.echo(click.style("✓ ", fg="green") + f"{file.name} -> {url}")
    except IgemError as e:
        _fail(f"Error: {e}")


@main.command("upload-dir")
@click.argument(
    "directory", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option("--folder", "-f", default="", help="Remote directory (default: root)")
@credential_options
def upload_dir(
    directory: Path,
    folder: str,
    team: int | None,
    username: str | None,
    password: str | None,
) -> None:
    """Upload a directory tree, keeping its structure.

    Examples:

        igem-upload upload-dir ./build --folder wiki
    """
    try:
        with get_client(team, username, password) as client:
            results = client.upload_directory(folder, directory)
    except IgemError as e:
        _fail(f"Error: {e}")
        return

    success_count = 0
    for result in results:
        if result.success:
            click.echo(
                click.style("✓ ", fg="green") + f"{result.local_file_path} -> {result.url}"
            )
            success_count += 1
        else:
            click.echo(
                click.style("✗ ", fg="red") + f"{result.local_file_path}: {result.error}",
                err=True,
            )

    total = len(results)
    if success_count == total:
        click.echo(click.style(f"\nAll {total} file(s) uploaded successfully!", fg="green"))
    else:
        click.echo(f"\n{success_count}/{total} file(s) uploaded.", err=True)
        sys.exit(1)


@main.command("rm")
@click.argument("remote_file")
@credential_options
def remove(
    remote_file: str, team: int | None, username: str | None, password: str | None
) -> None:
    """Delete one remote file.

    REMOTE_FILE: Path of the file, e.g. wiki/images/logo.png
    """
    target = RemotePath.of(remote_file)
    if target.is_root:
        _fail("Error: a file name is required")
        return
    directory = RemotePath(target.segments[:-1])
    try:
        with get_client(team, username, password) as client:
            client.delete_file(directory, target.name)
        click.echo(click.style(f"Deleted: /{target}", fg="green"))
    except IgemError as e:
        _fail(f"Error: {e}")


@main.command()
@click.argument("path", default="")
@click.option("--recursive", "-r", is_flag=True, help="Also purge every subdirectory")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@credential_options
def purge(
    path: str,
    recursive: bool,
    yes: bool,
    team: int | None,
    username: str | None,
    password: str | None,
) -> None:
    """Delete every file in a remote directory.

    Examples:

        igem-upload purge wiki/old

        igem-upload purge wiki --recursive --yes
    """
    target = f"/{RemotePath.of(path)}"
    if not yes:
        click.confirm(
            f"Delete all files in {target}{' and its subdirectories' if recursive else ''}?",
            abort=True,
        )
    try:
        with get_client(team, username, password) as client:
            client.purge_directory(path, recursive=recursive)
        click.echo(click.style(f"Purged {target}", fg="green"))
    except IgemError as e:
        _fail(f"Error: {e}")


def _format_size(size_bytes: int) -> str:
    """Format file size in human-readable form."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}" if unit != "B" else f"{size_bytes} {unit}"
        size_bytes /= 1024  # type: ignore[assignment]
    return f"{size_bytes:.1f} TB"


if __name__ == "__main__":
    main()
