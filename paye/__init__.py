"""
PAYE estimator package bootstrap.

The counter store talks to Redis through the asyncio client. On Windows the
default ProactorEventLoop trips up both redis-py and pytest-asyncio
("event loop is closed" on teardown), so select the Selector policy early.
"""
from __future__ import annotations

import asyncio
import sys

__version__ = "0.1.0"

if sys.platform.startswith("win"):
    try:
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    except AttributeError:
        pass
