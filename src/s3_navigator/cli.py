"""Command-line interface for s3-navigator.

Commands:
    - list: Show one page of a folder, with optional search
    - export: Download selected entries of a folder as a zip archive
    - buckets: Manage saved bucket configurations
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .browser import BrowserSession, FolderItem, display_name
from .core import settings
from .core.exceptions import NavigatorError
from .objectstorage import S3ArchiveBuilder, S3ClientManager, S3PrefixLister
from .repository import JsonBucketRepository
from .schemas import BucketConfig

app = typer.Typer(
    name="s3-navigator",
    help="Browse S3-compatible buckets as folders and export selections.",
    no_args_is_help=True,
)
buckets_app = typer.Typer(help="Manage saved bucket configurations.")
app.add_typer(buckets_app, name="buckets")


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"s3-navigator {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    S3-Navigator: folder-style browsing of S3-compatible object storage.
    """
    pass


AccessKeyOption = Annotated[
    Optional[str], typer.Option("--access-key-id", help="AWS access key ID")
]
SecretKeyOption = Annotated[
    Optional[str], typer.Option("--secret-access-key", help="AWS secret access key")
]
SessionTokenOption = Annotated[
    Optional[str], typer.Option("--session-token", help="AWS session token")
]
RegionOption = Annotated[
    Optional[str], typer.Option("--region", help="AWS region name")
]
EndpointOption = Annotated[
    Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
]
ProfileOption = Annotated[
    Optional[str], typer.Option("--aws-profile", help="AWS CLI profile name")
]
RootFolderOption = Annotated[
    Optional[str],
    typer.Option("--root-folder", help="Restrict browsing to this folder"),
]
StoreOption = Annotated[
    Optional[Path],
    typer.Option("--store", help="Bucket store file (default from settings)"),
]
UserOption = Annotated[
    str, typer.Option("--user", help="Username owning the bucket entries")
]


def format_bytes(size: int) -> str:
    """Human-readable size."""
    if size >= 1024**3:
        return f"{size / (1024**3):.2f} GB"
    elif size >= 1024**2:
        return f"{size / (1024**2):.2f} MB"
    elif size >= 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size} bytes"


def _folder_prefix(prefix: str) -> str:
    if prefix and not prefix.endswith("/"):
        return f"{prefix}/"
    return prefix


def _create_bucket_config(
    s3_path: str,
    root_folder: Optional[str],
    access_key_id: Optional[str],
    secret_access_key: Optional[str],
    session_token: Optional[str],
    region_name: Optional[str],
    endpoint_url: Optional[str],
    aws_profile: Optional[str],
) -> tuple[BucketConfig, str]:
    """Build a bucket configuration and folder prefix from an s3:// path."""
    bucket, prefix = S3ClientManager.parse_s3_path(s3_path)
    config = BucketConfig(
        name=bucket,
        bucket=bucket,
        region=region_name or settings.default_region,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
        endpoint_url=endpoint_url,
        aws_profile=aws_profile,
        root_folder=root_folder,
    )
    prefix = _folder_prefix(prefix) or config.root_prefix
    return config, prefix


def _create_session(config: BucketConfig) -> BrowserSession:
    client_manager = S3ClientManager(config)
    return BrowserSession(
        config,
        store_client=S3PrefixLister(config, client_manager),
        archive_builder=S3ArchiveBuilder(),
    )


async def _open_folder(session: BrowserSession, prefix: str) -> None:
    if prefix == session.current_prefix:
        await session.open()
    else:
        await session.enter_folder(prefix)
    if session.last_error is not None:
        raise session.last_error


@app.command("list")
def list_cmd(
    path: Annotated[str, typer.Argument(help="Folder to list, s3://bucket/prefix")],
    search: Annotated[
        str, typer.Option("--search", "-s", help="Filter entries by name")
    ] = "",
    page: Annotated[int, typer.Option("--page", help="Page number")] = 1,
    page_size: Annotated[
        int, typer.Option("--page-size", help="Entries per page: 10, 25, 50 or 100")
    ] = settings.default_page_size,
    root_folder: RootFolderOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    List one page of a folder.

    Examples:
        s3-navigator list s3://bucket/docs/ --search report
        s3-navigator list s3://bucket/ --page 2 --page-size 25 --aws-profile dev
    """
    try:
        config, prefix = _create_bucket_config(
            path,
            root_folder,
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        session = _create_session(config)
        session.set_page_size(page_size)
        asyncio.run(_open_folder(session, prefix))
        session.set_search_query(search)
        session.go_to_page(page)
        view = session.view()

        typer.echo(
            f"s3://{view.bucket}: "
            + " / ".join(crumb.label for crumb in view.breadcrumbs)
        )
        if not view.items:
            if view.search_query:
                typer.echo(f'No results for "{view.search_query}"')
            else:
                typer.echo("This folder is empty.")
            return

        for item in view.items:
            name = display_name(item, view.prefix)
            if isinstance(item, FolderItem):
                typer.echo(f"  [DIR]  {name}/")
            else:
                modified = (
                    item.last_modified.isoformat(timespec="seconds")
                    if item.last_modified
                    else "-"
                )
                typer.echo(f"  {format_bytes(item.size):>12}  {modified}  {name}")

        info = view.page
        typer.echo(
            f"Showing {info.first_item} to {info.last_item} of "
            f"{info.total_items} items (page {info.page_index} of "
            f"{info.total_pages})"
        )

    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command("export")
def export_cmd(
    path: Annotated[str, typer.Argument(help="Folder holding the entries")],
    names: Annotated[
        list[str],
        typer.Argument(help="Entries to export, by name or full key"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Archive file to write"),
    ] = None,
    root_folder: RootFolderOption = None,
    access_key_id: AccessKeyOption = None,
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    region_name: RegionOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
) -> None:
    """
    Export entries of a folder as one zip archive. Folders are included
    with all their contents.

    Example:
        s3-navigator export s3://bucket/docs/ report.pdf img -o docs.zip
    """
    try:
        config, prefix = _create_bucket_config(
            path,
            root_folder,
            access_key_id,
            secret_access_key,
            session_token,
            region_name,
            endpoint_url,
            aws_profile,
        )
        session = _create_session(config)
        asyncio.run(_open_folder(session, prefix))

        by_name = {}
        for item in session.items:
            by_name[item.key] = item
            by_name[display_name(item, prefix)] = item
        for name in names:
            item = by_name.get(name) or by_name.get(name.rstrip("/"))
            if item is None:
                raise NavigatorError(f"No entry named '{name}' in {path}")
            session.select(item.key, True)

        result = asyncio.run(session.export_selection())
        target = output or Path(result.filename)
        target.write_bytes(result.archive)
        typer.echo(
            f"Exported {result.item_count} items "
            f"({format_bytes(result.byte_count)}) to {target}"
        )

    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@buckets_app.command("add")
def buckets_add_cmd(
    name: Annotated[str, typer.Option("--name", help="Alias for the bucket")],
    bucket: Annotated[str, typer.Option("--bucket", help="S3 bucket name")],
    region_name: RegionOption = None,
    root_folder: RootFolderOption = None,
    endpoint_url: EndpointOption = None,
    aws_profile: ProfileOption = None,
    access_key_id: AccessKeyOption = None,
    user: UserOption = "admin",
    store: StoreOption = None,
) -> None:
    """Save a bucket configuration. Secret keys are never stored."""
    try:
        repository = JsonBucketRepository(store)
        repository.load()
        config = repository.add(
            BucketConfig(
                name=name,
                bucket=bucket,
                region=region_name or settings.default_region,
                root_folder=root_folder,
                endpoint_url=endpoint_url,
                aws_profile=aws_profile,
                access_key_id=access_key_id,
            ),
            owner=user,
        )
        repository.save()
        typer.echo(f"Added bucket '{config.name}' ({config.id})")
    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@buckets_app.command("list")
def buckets_list_cmd(user: UserOption = "admin", store: StoreOption = None) -> None:
    """List saved bucket configurations visible to a user."""
    try:
        repository = JsonBucketRepository(store)
        repository.load()
        configs = repository.list_for(user)
    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not configs:
        typer.echo("No buckets configured.")
        return
    for config in configs:
        location = f"s3://{config.bucket}/{config.root_prefix}"
        typer.echo(f"{config.id}  {config.name}  {location}  [{config.status}]")


@buckets_app.command("remove")
def buckets_remove_cmd(
    name: Annotated[str, typer.Argument(help="Bucket alias or id")],
    user: UserOption = "admin",
    store: StoreOption = None,
) -> None:
    """Remove a saved bucket configuration."""
    try:
        repository = JsonBucketRepository(store)
        repository.load()
        config = repository.find(name, user)
        repository.delete(config.id)
        repository.save()
        typer.echo(f"Removed bucket '{config.name}'")
    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@buckets_app.command("test")
def buckets_test_cmd(
    name: Annotated[str, typer.Argument(help="Bucket alias or id")],
    secret_access_key: SecretKeyOption = None,
    session_token: SessionTokenOption = None,
    user: UserOption = "admin",
    store: StoreOption = None,
) -> None:
    """Check that a saved bucket is reachable and record the result."""
    try:
        repository = JsonBucketRepository(store)
        repository.load()
        config = repository.find(name, user)
        runtime = config.model_copy(
            update={
                "secret_access_key": secret_access_key,
                "session_token": session_token,
            }
        )
        try:
            S3ClientManager(runtime).test_connection()
        except NavigatorError:
            repository.set_status(config.id, "failed")
            repository.save()
            raise
        repository.set_status(config.id, "connected")
        repository.save()
        typer.echo(f"✓ Connected to s3://{config.bucket}")
    except NavigatorError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
