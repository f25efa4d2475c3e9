"""A command line interface for orcid_client."""

import json

import click
from tqdm.auto import tqdm

from orcid_client.api import Record
from orcid_client.client import ApiError, Client

__all__ = ["main"]


@click.group()
def main() -> None:
    """Query the ORCID public API."""


@main.command()
@click.argument("orcids", nargs=-1, required=True)
@click.option("--base-url", help="The root of the ORCID API, if not the public v3.0 API")
def record(orcids: tuple[str, ...], base_url: str | None) -> None:
    """Get records, written as one JSON object per line."""
    client = Client(base_url=base_url)
    if len(orcids) == 1:
        try:
            res = client.fetch_record(orcids[0])
        except ApiError as e:
            raise click.ClickException(str(e)) from e
        click.echo(res.model_dump_json(exclude_defaults=True))
        return

    for orcid in tqdm(orcids, unit="record", desc="Getting records"):
        try:
            res = client.fetch_record(orcid)
        except ApiError as e:
            tqdm.write(f"[{e.identifier}] {e.message}")
            continue
        click.echo(res.model_dump_json(exclude_defaults=True))


@main.command()
@click.argument("query")
@click.option("--doi", is_flag=True, help="Search for the query as an external identifier")
@click.option("--rows", type=int, help="The maximum number of results")
@click.option("--base-url", help="The root of the ORCID API, if not the public v3.0 API")
def search(query: str, doi: bool, rows: int | None, base_url: str | None) -> None:
    """Search for ORCID identifiers."""
    client = Client(base_url=base_url)
    if doi:
        orcids = client.search_external_id(query, rows=rows)
    else:
        orcids = client.search(query, rows=rows)
    for orcid in orcids:
        click.echo(orcid)


@main.command()
def schema() -> None:
    """Write the JSON schema for records."""
    click.echo(json.dumps(Record.model_json_schema(), indent=2))


if __name__ == "__main__":
    main()
