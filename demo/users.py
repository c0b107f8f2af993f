"""User table examples: filtered selects and aggregate statistics."""

import json
import logging

from google.cloud import bigquery

from demo.common import (
    TableConfig,
    get_or_create_dataset,
    get_or_create_table,
    insert_rows,
    run_query,
)

logger = logging.getLogger(__name__)

DATASET_ID = "override_test_dataset"

USERS_TABLE = TableConfig(
    name="users_table",
    schema=[
        bigquery.SchemaField("user_id", "INTEGER", mode="REQUIRED"),
        bigquery.SchemaField("username", "STRING", mode="REQUIRED"),
        bigquery.SchemaField("email", "STRING", mode="NULLABLE"),
        bigquery.SchemaField("age", "INTEGER", mode="NULLABLE"),
        bigquery.SchemaField("is_active", "BOOLEAN", mode="REQUIRED"),
        bigquery.SchemaField("registration_date", "TIMESTAMP", mode="REQUIRED"),
        bigquery.SchemaField("metadata", "JSON", mode="NULLABLE"),
    ],
    rows=[
        {
            "user_id": 1,
            "username": "alice_wonder",
            "email": "alice@example.com",
            "age": 28,
            "is_active": True,
            "registration_date": "2023-01-15T00:00:00Z",
            "metadata": json.dumps({"role": "admin", "team": "engineering"}),
        },
        {
            "user_id": 2,
            "username": "bob_builder",
            "email": "bob@example.com",
            "age": 35,
            "is_active": True,
            "registration_date": "2023-02-20T00:00:00Z",
            "metadata": json.dumps({"role": "developer", "team": "platform"}),
        },
        {
            "user_id": 3,
            "username": "charlie_chocolate",
            "email": None,
            "age": None,
            "is_active": False,
            "registration_date": "2023-03-10T00:00:00Z",
            "metadata": None,
        },
    ],
)

SIMPLE_USERS_TABLE = TableConfig(
    name="simple_users",
    schema=[
        bigquery.SchemaField("user_id", "INTEGER", mode="REQUIRED"),
        bigquery.SchemaField("username", "STRING", mode="REQUIRED"),
        bigquery.SchemaField("email", "STRING", mode="NULLABLE"),
        bigquery.SchemaField("is_active", "BOOLEAN", mode="REQUIRED"),
    ],
    rows=[
        {"user_id": 1, "username": "alice", "email": "alice@example.com", "is_active": True},
        {"user_id": 2, "username": "bob", "email": "bob@example.com", "is_active": True},
        {"user_id": 3, "username": "charlie", "email": None, "is_active": False},
    ],
)


def _load_table(client: bigquery.Client, table_config: TableConfig) -> str:
    dataset = get_or_create_dataset(client, DATASET_ID)
    table = get_or_create_table(client, dataset, table_config)
    insert_rows(client, table, table_config.rows)
    return f"{dataset.dataset_id}.{table_config.name}"


def _log_active_users(rows: list[dict]) -> None:
    logger.info("Active users:")
    for row in rows:
        line = f"  ID: {row['user_id']}, Username: {row['username']}"
        line += f", Email: {row['email'] or 'N/A'}"
        if "age" in row:
            line += f", Age: {row['age'] or 'N/A'}"
        logger.info(line)


def run_users_example(client: bigquery.Client) -> dict:
    """
    Load ``users_table`` and run a filtered select and a statistics query.

    Returns:
        The statistics row
    """
    table_path = _load_table(client, USERS_TABLE)

    active_users = run_query(
        client,
        f"""
        SELECT user_id, username, email, age, is_active
        FROM `{table_path}`
        WHERE is_active = true
        ORDER BY user_id
        """,
    )
    _log_active_users(active_users)

    (stats,) = run_query(
        client,
        f"""
        SELECT
          COUNT(*) AS total_users,
          COUNT(DISTINCT email) AS unique_emails,
          AVG(age) AS avg_age,
          SUM(CASE WHEN is_active THEN 1 ELSE 0 END) AS active_users
        FROM `{table_path}`
        """,
    )
    avg_age = f"{stats['avg_age']:.1f}" if stats["avg_age"] is not None else "N/A"
    logger.info("User statistics:")
    logger.info(f"  Total users: {stats['total_users']}")
    logger.info(f"  Unique emails: {stats['unique_emails']}")
    logger.info(f"  Average age: {avg_age}")
    logger.info(f"  Active users: {stats['active_users']}")
    return stats


def run_simple_users_example(client: bigquery.Client) -> list[dict]:
    """Load ``simple_users`` and return the active users."""
    table_path = _load_table(client, SIMPLE_USERS_TABLE)

    active_users = run_query(
        client,
        f"""
        SELECT user_id, username, email, is_active
        FROM `{table_path}`
        WHERE is_active = true
        ORDER BY user_id
        """,
    )
    _log_active_users(active_users)
    return active_users
