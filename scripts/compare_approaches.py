"""Compare the environment-variable-only client with the override client."""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config import Config  # noqa: E402
from demo.common import log_troubleshooting_tips  # noqa: E402
from demo.connection import compare_approaches  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    """Main entry point for the comparison."""
    config = Config()
    outcomes = compare_approaches(config)

    for name, succeeded in outcomes.items():
        logger.info(f"{name}: {'succeeded' if succeeded else 'failed'}")

    if not any(outcomes.values()):
        log_troubleshooting_tips(config.emulator_url)
        sys.exit(1)


if __name__ == "__main__":
    main()
