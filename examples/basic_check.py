#!/usr/bin/env python3
"""
Basic URL check example
Checks a handful of URLs with screenshots and writes results.html
"""

import asyncio
import sys
import os

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from checkurl.checker import CheckerBuilder, summarize
from checkurl.monitoring import LogManager
from checkurl.storage import render_report, write_report


async def main():
    """Check a mixed list of bare hosts and full URLs"""
    print("🌿 Basic URL Check Example")
    print("=" * 50)

    urls = [
        'example.com',                 # Protocol resolved by probing https first
        'http://httpbin.org/redirect/1',  # Followed to its final location
        'https://nonexistent.invalid',   # Reported as inaccessible
    ]

    checker = (CheckerBuilder(urls)
               .concurrency(2)
               .max_retries(2)
               .timeout(60)
               .build())

    results = await checker.run()
    summary = summarize(results)

    await write_report('results.html', render_report(results, summary, order=urls))

    for key, value in summary.as_dict().items():
        print(f"  {key}: {value}")
    print("\n✅ Check completed!")


if __name__ == "__main__":
    LogManager(log_level="INFO")
    asyncio.run(main())
