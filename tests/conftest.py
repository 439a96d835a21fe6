import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


SAMPLE_LOG = (
    "2024-06-03 14:30:25 ERROR Database connection timeout\n"
    "2024-06-03 14:30:20 WARN High memory usage\n"
    "2024-06-03 14:30:15 INFO User login ok\n"
)


@pytest.fixture
def sample_log() -> str:
    return SAMPLE_LOG


@pytest.fixture
def mixed_log() -> str:
    return "\n".join([
        "starting up without a header",
        "2024-06-03 09:58:00 INFO Service booted api.service.js:10",
        "2024-06-03 10:02:11 ERROR Request 1842 failed: timeout after 30s",
        "Traceback (most recent call last):",
        '  File "app/handlers.py", line 12, in handle',
        "ValueError: bad payload",
        "",
        "2024-06-03 10:15:40 WARN Slow query took 812 ms",
        "DEBUG cache warmed",
        "2024-06-03 10:47:02 ERROR Request 1907 failed: timeout after 45s",
        "2024-06-03 11:31:59 ERROR Disk /dev/sda1 is full",
        "[TRACE] heartbeat",
        "2024-06-03 11:40:00 Something without a level",
    ])
