"""dayprism library usage example.

Requires an Alpha Vantage API key in ``DAYPRISM_ALPHA_VANTAGE_API_KEY``.
"""

import asyncio

from loguru import logger

import dayprism
from dayprism.core.exceptions import ConfigurationError, UpstreamError


def print_days(symbol, days):
    print(f"{symbol}: {len(days)} days")
    print(f"{'day':<12}{'lowAverage':>14}{'highAverage':>14}{'volume':>12}")
    for day in days:
        print(f"{day.day:<12}{day.low_average:>14.4f}{day.high_average:>14.4f}{day.volume:>12}")


def sync_example():
    logger.info("=== synchronous API ===")
    days = dayprism.get_daily_aggregates("IBM")
    print_days("IBM", days)


async def async_example():
    logger.info("=== asynchronous API ===")
    results = await asyncio.gather(
        dayprism.get_daily_aggregates_async("AAPL"),
        dayprism.get_daily_aggregates_async("MSFT"),
        return_exceptions=True,
    )
    for symbol, result in zip(("AAPL", "MSFT"), results):
        if isinstance(result, Exception):
            logger.error(f"{symbol} failed: {result}")
            continue
        print_days(symbol, result)


def main():
    try:
        sync_example()
        asyncio.run(async_example())
    except ConfigurationError as e:
        logger.error(f"configuration problem: {e.message}")
    except UpstreamError as e:
        logger.error(f"Alpha Vantage refused the request ({e.error_code}): {e.message}")


if __name__ == "__main__":
    main()
