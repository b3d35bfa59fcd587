"""videoupload CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    DownloadColumn,
    TransferSpeedColumn,
)
from rich.table import Table

app = typer.Typer(
    name="videoupload",
    help="Chunked video uploads to api.video",
    add_completion=False
)
console = Console()

MB = 1024 * 1024


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def format_size(size: int) -> str:
    for unit in ('B', 'KiB', 'MiB', 'GiB'):
        if size < 1024 or unit == 'GiB':
            return f"{size:.1f} {unit}" if unit != 'B' else f"{size} B"
        size /= 1024


def video_table(video) -> Table:
    """Render an upload response as a two-column table."""
    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Video ID", video.video_id)
    if video.title:
        table.add_row("Title", video.title)
    if video.created_at:
        table.add_row("Created", video.created_at.isoformat())
    if video.is_public is not None:
        table.add_row("Public", "yes" if video.is_public else "no")
    if video.assets:
        for name in ('player', 'hls', 'iframe', 'thumbnail', 'mp4'):
            value = getattr(video.assets, name)
            if value:
                table.add_row(name.upper() if name == 'hls' else name.capitalize(), value)
    return table


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Video file to upload", exists=True, dir_okay=False),
    upload_token: Optional[str] = typer.Option(
        None, "--upload-token", "-u", envvar="APIVIDEO_UPLOAD_TOKEN", help="Delegated upload token"
    ),
    access_token: Optional[str] = typer.Option(
        None, "--access-token", envvar="APIVIDEO_ACCESS_TOKEN", help="Bearer access token"
    ),
    refresh_token: Optional[str] = typer.Option(
        None, "--refresh-token", envvar="APIVIDEO_REFRESH_TOKEN", help="Refresh token for --access-token"
    ),
    api_key: Optional[str] = typer.Option(
        None, "--api-key", "-k", envvar="APIVIDEO_API_KEY", help="API key"
    ),
    video_id: Optional[str] = typer.Option(None, "--video-id", help="Existing video to upload into"),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", "-c", help="Chunk size in MiB (5-128)"),
    retries: Optional[int] = typer.Option(None, "--retries", "-r", help="Retries per chunk"),
    api_host: Optional[str] = typer.Option(None, "--api-host", help="API host, e.g. sandbox.api.video"),
    wait_playable: bool = typer.Option(False, "--wait-playable", "-w", help="Wait until the video is playable"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Upload a video file."""
    from videouploader import VideoUploader, APIConfig, UploaderException, setup_logging

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
        setup_logging(logging.DEBUG)

    config_options = {'log_level': logging.DEBUG if verbose else logging.INFO}
    if api_host:
        config_options['api_host'] = api_host
    config = APIConfig(**config_options)

    try:
        uploader = VideoUploader(
            file_path,
            upload_token=upload_token,
            access_token=access_token,
            refresh_token=refresh_token,
            api_key=api_key,
            video_id=video_id,
            chunk_size=chunk_size * MB if chunk_size is not None else None,
            retries=retries,
            config=config,
        )
    except UploaderException as e:
        console.print(f"[red]Invalid options: {e}[/red]")
        raise typer.Exit(1)

    async def do_upload():
        async with uploader:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=uploader.file_size or 1)

                def on_progress(event):
                    progress.update(
                        task,
                        completed=event.uploaded_bytes if event.total_bytes else 1,
                        description=f"Uploading {file_path.name} [{event.current_chunk}/{event.chunks_count}]"
                    )

                uploader.on_progress(on_progress)
                video = await uploader.upload()

            console.print(f"[green]Uploaded:[/green] {file_path.name}")
            console.print(video_table(video))

            if wait_playable:
                with console.status("Waiting for the video to be playable..."):
                    await uploader.wait_for_playable(video)
                console.print("[green]Video is playable[/green]")

    try:
        run_async(do_upload())
    except UploaderException as e:
        console.print(f"[red]Upload failed: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def plan(
    file_path: Path = typer.Argument(..., help="Video file", exists=True, dir_okay=False),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", "-c", help="Chunk size in MiB (5-128)"),
):
    """Show how a file would be split into chunks."""
    from videouploader.core.upload import ChunkPlanner
    from videouploader import ConfigurationError

    try:
        planner = ChunkPlanner(chunk_size * MB if chunk_size is not None else None)
    except ConfigurationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    chunk_plan = planner.plan(file_path.stat().st_size)

    table = Table(title=f"{file_path.name} ({format_size(chunk_plan.file_size)})")
    table.add_column("Part", justify="right", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Size", justify="right")

    for chunk in chunk_plan:
        table.add_row(
            f"{chunk.ordinal}/{chunk_plan.count}",
            f"{chunk.start:,}",
            f"{chunk.end:,}",
            format_size(chunk.size),
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
