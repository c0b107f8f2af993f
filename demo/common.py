"""Common utilities for the emulator example sequences."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from google.api_core.exceptions import Conflict
from google.cloud import bigquery

from transport import DISCOVERY_PATH

logger = logging.getLogger(__name__)


class RowInsertError(Exception):
    """Exception raised when the emulator rejects inserted rows."""

    def __init__(self, message: str, errors: list | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


@dataclass
class TableConfig:
    """Schema and sample rows for a table to be created and filled."""

    name: str
    schema: list[bigquery.SchemaField]
    rows: list[dict] = field(default_factory=list)


def get_or_create_dataset(
    client: bigquery.Client, dataset_id: str, location: str = "US"
) -> bigquery.Dataset:
    """Create a dataset, or fetch it if it already exists."""
    dataset = bigquery.Dataset(f"{client.project}.{dataset_id}")
    dataset.location = location

    logger.info(f"Creating dataset: {dataset_id}")
    try:
        created = client.create_dataset(dataset)
    except Conflict:
        logger.info(f"Dataset {dataset_id} already exists")
        return client.get_dataset(dataset.reference)

    logger.info(f"Dataset {dataset_id} created successfully")
    return created


def get_or_create_table(
    client: bigquery.Client, dataset: bigquery.Dataset, table_config: TableConfig
) -> bigquery.Table:
    """Create a table, or fetch it if it already exists."""
    table_ref = f"{dataset.project}.{dataset.dataset_id}.{table_config.name}"
    table = bigquery.Table(table_ref, schema=table_config.schema)

    logger.info(f"Creating table: {table_config.name}")
    try:
        created = client.create_table(table)
    except Conflict:
        logger.info(f"Table {table_config.name} already exists")
        return client.get_table(table.reference)

    logger.info(f"Table {table_config.name} created successfully")
    return created


def insert_rows(client: bigquery.Client, table: bigquery.Table, rows: list[dict]) -> None:
    """Stream rows into a table."""
    logger.info(f"Inserting {len(rows)} rows into {table.table_id}")
    errors = client.insert_rows_json(table, rows)
    if errors:
        logger.error(f"Errors inserting into {table.table_id}: {errors}")
        raise RowInsertError(f"Failed to insert rows into {table.table_id}", errors)
    logger.info(f"Inserted {len(rows)} rows into {table.table_id}")


def run_query(client: bigquery.Client, query: str) -> list[dict]:
    """Submit a query job, wait for it and return its rows as dicts."""
    logger.info(f"Executing query:\n{query}")
    job = client.query(query)
    return [dict(row.items()) for row in job.result()]


def log_troubleshooting_tips(emulator_url: str, extra_tips: Iterable[str] = ()) -> None:
    """Log the checklist for a failed emulator run."""
    tips = [
        "Make sure Docker is running",
        "Check if the emulator is running: docker compose ps",
        f"Verify the port is accessible: curl {emulator_url}{DISCOVERY_PATH}",
        "Check the emulator URL uses http://, the emulator does not serve https",
        *extra_tips,
    ]
    logger.info("Troubleshooting tips:")
    for number, tip in enumerate(tips, start=1):
        logger.info(f"{number}. {tip}")


def run_example(
    name: str,
    sequence: Callable[[], object],
    emulator_url: str,
    extra_tips: Iterable[str] = (),
) -> int:
    """
    Run an example sequence and turn its outcome into a process exit code.

    Args:
        name: Example name used in log messages
        sequence: Callable performing the example's calls
        emulator_url: Emulator base URL, shown in troubleshooting tips
        extra_tips: Additional troubleshooting lines

    Returns:
        0 if the sequence completed, 1 if it raised
    """
    logger.info(f"Running {name} against {emulator_url}")
    try:
        sequence()
    except Exception as e:
        logger.error(f"{name} failed: {e}", exc_info=True)
        log_troubleshooting_tips(emulator_url, extra_tips)
        return 1

    logger.info(f"{name} completed successfully")
    return 0


__all__ = [
    "RowInsertError",
    "TableConfig",
    "get_or_create_dataset",
    "get_or_create_table",
    "insert_rows",
    "log_troubleshooting_tips",
    "run_example",
    "run_query",
]
