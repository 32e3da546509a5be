import asyncio
import json
import logging
from typing import Optional

import httpx
import typer
import uvicorn
from tortoise import Tortoise

from ..core import logging_config  # noqa: F401
from ..core.config import SEED_DATA_URL, SEED_TIMEOUT_SECONDS, TORTOISE_ORM_CONFIG
from ..core.exceptions import ProductQueryError, SeedError
from ..features.products import service as product_service
from ..features.products.seed import seed_products
from ..features.products.store import ProductStore

logger = logging.getLogger(__name__)

app = typer.Typer(name="salesboard-cli", help="CLI for seeding and inspecting Salesboard data.")


# Shared async context manager for database connection
class DBConnection:
    def __init__(self, config: Optional[dict] = None):
        self.config = config or TORTOISE_ORM_CONFIG

    async def __aenter__(self) -> ProductStore:
        await Tortoise.init(config=self.config)
        await Tortoise.generate_schemas(safe=True) # Generate schema if it doesn't exist
        return ProductStore("default")

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await Tortoise.close_connections()


@app.command("seed")
def seed_command(
    url: str = typer.Option(SEED_DATA_URL, help="URL of the JSON dataset to load."),
):
    """Replaces all stored records with the dataset at URL."""
    asyncio.run(_seed(url))


async def _seed(url: str):
    async with DBConnection() as store:
        typer.echo(f"Fetching {url}...")
        async with httpx.AsyncClient(timeout=SEED_TIMEOUT_SECONDS, follow_redirects=True) as client:
            try:
                result = await seed_products(store, client, url)
            except SeedError as e:
                typer.secho(f"Seeding failed: {e.message}. See the log for details.", fg=typer.colors.RED)
                raise typer.Exit(code=1)
        record_count = await store.count()
        typer.secho(f"{result.message} ({record_count} records).", fg=typer.colors.GREEN)


@app.command("stats")
def stats_command(
    month: str = typer.Argument(..., help="Month number, 1-12."),
):
    """Prints the statistics, bar chart and pie chart for MONTH as JSON."""
    asyncio.run(_stats(month))


async def _stats(month: str):
    async with DBConnection() as store:
        try:
            report = await product_service.generate_combined_report(store, month)
        except ProductQueryError as e:
            typer.secho(f"Error: {e.message}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        typer.echo(json.dumps(report.model_dump(by_alias=True), indent=2))


@app.command("test-db-connection")
def test_db_connection_command_sync():
    """Tests the database connection and counts stored records."""
    asyncio.run(test_db_connection_command())


async def test_db_connection_command():
    async with DBConnection() as store:
        typer.echo("Successfully connected to the database.")
        record_count = await store.count()
        typer.echo(f"Found {record_count} product record(s) in the database.")
        if record_count > 0:
            first_record = await store.all().order_by("id").first()
            typer.echo(f"First record: {first_record}")


@app.command("serve")
def serve_command(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Restart on code changes."),
):
    """Runs the API with uvicorn."""
    uvicorn.run("salesboard.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
