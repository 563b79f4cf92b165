import logging
import os

import pytest

from logentries_hook.hook import new_logentries_hook


pytestmark = pytest.mark.live


def require_live() -> str:
    token = os.getenv("LIVE_LOGENTRIES_TOKEN")
    if os.getenv("RUN_LIVE_TESTS") != "1" or not token:
        pytest.skip("RUN_LIVE_TESTS=1 and LIVE_LOGENTRIES_TOKEN required for live tests")
    return token


def test_fire_reaches_collector() -> None:
    token = require_live()
    hook = new_logentries_hook(token)
    try:
        hook.fire(logging.makeLogRecord({"msg": "logentries-hook live test", "levelno": logging.INFO}))
    finally:
        hook.close()
