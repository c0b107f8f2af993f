"""Verify the BigQuery emulator is reachable and answers queries.

Uses the connection approach selected by BQ_EMULATOR_AUTH_MODE.
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bigquery import create_bigquery_client  # noqa: E402
from config import Config  # noqa: E402
from demo.common import run_example  # noqa: E402
from demo.connection import check_connection, probe_emulator  # noqa: E402
from transport import EmulatorTransport  # noqa: E402

logging.basicConfig(level=logging.INFO)


def main():
    """Main entry point for the connection check."""
    config = Config()

    def sequence():
        probe_emulator(EmulatorTransport(config.emulator_url))
        check_connection(create_bigquery_client(config))

    sys.exit(run_example("Connection check", sequence, config.emulator_url))


if __name__ == "__main__":
    main()
