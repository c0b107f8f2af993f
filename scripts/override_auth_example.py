"""Connect to the BigQuery emulator by overriding the client's HTTP session.

The client keeps building cloud API URLs; the session rewrites them to the
emulator and placeholder credentials stand in for real ones.
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bigquery import create_override_client  # noqa: E402
from config import Config  # noqa: E402
from demo.common import run_example  # noqa: E402
from demo.users import run_users_example  # noqa: E402

logging.basicConfig(level=logging.INFO)


def main():
    """Main entry point for the override example."""
    config = Config()
    exit_code = run_example(
        "Override transport example",
        lambda: run_users_example(create_override_client(config)),
        config.emulator_url,
    )
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
