"""Dataset, table, insert and query round trip on a small table."""

import logging
from datetime import UTC, datetime

from google.cloud import bigquery

from demo.common import (
    TableConfig,
    get_or_create_dataset,
    get_or_create_table,
    insert_rows,
    run_query,
)

logger = logging.getLogger(__name__)

DATASET_ID = "test_dataset"

TEST_TABLE = TableConfig(
    name="test_table",
    schema=[
        bigquery.SchemaField("id", "INTEGER", mode="REQUIRED"),
        bigquery.SchemaField("name", "STRING", mode="REQUIRED"),
        bigquery.SchemaField("created_at", "TIMESTAMP", mode="REQUIRED"),
    ],
)


def sample_rows() -> list[dict]:
    now = datetime.now(UTC).isoformat()
    return [
        {"id": 1, "name": "Alice", "created_at": now},
        {"id": 2, "name": "Bob", "created_at": now},
        {"id": 3, "name": "Charlie", "created_at": now},
    ]


def run_basic_example(client: bigquery.Client) -> dict:
    """
    Create ``test_dataset.test_table``, fill it and query it back.

    Returns:
        The aggregation row with ``total`` and ``max_id``
    """
    dataset = get_or_create_dataset(client, DATASET_ID)
    table = get_or_create_table(client, dataset, TEST_TABLE)
    insert_rows(client, table, sample_rows())

    rows = run_query(
        client,
        f"""
        SELECT id, name, created_at
        FROM `{dataset.dataset_id}.{TEST_TABLE.name}`
        ORDER BY id
        """,
    )
    logger.info("Query results:")
    for row in rows:
        logger.info(f"  ID: {row['id']}, Name: {row['name']}, Created: {row['created_at']}")

    (aggregation,) = run_query(
        client,
        f"""
        SELECT COUNT(*) AS total, MAX(id) AS max_id
        FROM `{dataset.dataset_id}.{TEST_TABLE.name}`
        """,
    )
    logger.info(f"Total rows: {aggregation['total']}, Max ID: {aggregation['max_id']}")
    return aggregation
