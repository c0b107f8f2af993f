"""Connect to the BigQuery emulator through BIGQUERY_EMULATOR_HOST.

Clears credential environment variables, points the client at the emulator
with the environment variable and runs the basic dataset/table/query
example.
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bigquery import create_environment_client  # noqa: E402
from config import Config  # noqa: E402
from demo.basic import run_basic_example  # noqa: E402
from demo.common import run_example  # noqa: E402

logging.basicConfig(level=logging.INFO)


def main():
    """Main entry point for the environment variable example."""
    config = Config()
    exit_code = run_example(
        "Environment variable example",
        lambda: run_basic_example(create_environment_client(config)),
        config.emulator_url,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
