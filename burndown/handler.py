"""
Scheduled entrypoint for the sprint burndown job

Invoked once a day (Lambda schedule, CI cron or `python -m burndown.handler`).
"""

import asyncio
import logging
from typing import Dict, Any, Optional

from burndown.config.settings import settings
from burndown.jobs.daily_burndown import run_daily_burndown

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def lambda_handler(event: Optional[Dict[str, Any]], context: Any) -> Dict[str, Any]:
    """
    Run the daily burndown.

    Optional event overrides:
    - {"include_weekends": "false"}
    - {"output_dir": "/tmp/out"}

    Args:
        event: Event payload from the scheduler
        context: Lambda context object

    Returns:
        Dictionary with statusCode and the run report
    """
    payload = event or {}
    logger.info(f"Burndown invoked with overrides: {sorted(payload)}")

    try:
        result = asyncio.run(
            run_daily_burndown(
                include_weekends=payload.get("include_weekends"),
                output_dir=payload.get("output_dir"),
            )
        )
    except Exception as e:
        logger.error(f"Burndown execution failed: {e}", exc_info=True)
        return {
            "statusCode": 500,
            "error": str(e),
        }

    if not result.get("success", False):
        logger.error(f"Burndown run reported errors: {result.get('errors')}")
        return {
            "statusCode": 500,
            "result": result,
        }

    logger.info(f"Burndown completed for sprint {result.get('sprint')}: {result.get('charts')}")
    return {
        "statusCode": 200,
        "result": result,
    }


# Allow local runs via `python -m burndown.handler`
if __name__ == "__main__":
    print("=" * 60)
    print(f"{settings.APP_NAME} - Local Run")
    print("=" * 60)

    result = lambda_handler({}, None)

    print("\nResult:")
    print(result)
    print("=" * 60)
