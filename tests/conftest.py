import os
import socket

import pytest

import logentries_hook.config as config


@pytest.fixture(autouse=True)
def clear_env():
    keys = [
        "LOGENTRIES_TOKEN",
        "LOGENTRIES_HOST",
        "LOGENTRIES_PORT",
        "LOGENTRIES_LOG_LEVEL",
        "LOGENTRIES_JSON_LOGS",
    ]
    original = {key: os.getenv(key) for key in keys}
    for key in keys:
        if key in os.environ:
            del os.environ[key]
    # Skip the repo-level .env during tests.
    config._ENV_LOADED = True
    yield
    for key, value in original.items():
        if value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = value


@pytest.fixture
def udp_collector():
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    yield sock
    sock.close()
