"""Read-only queries against the running interpreter and the OS."""

import platform
import resource
import sys
import time
from datetime import datetime, timezone
from typing import Optional

from .models import MemoryUsage

_STARTED = time.monotonic()

ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def uptime() -> float:
    """Seconds since this module was first imported, on a monotonic clock."""
    return time.monotonic() - _STARTED


def runtime_version() -> str:
    return f"v{platform.python_version()}"


def arch() -> str:
    machine = platform.machine().lower()
    return ARCH_ALIASES.get(machine, machine)


def _current_rss() -> Optional[int]:
    # /proc is Linux only; elsewhere the peak figure is the best we have.
    try:
        with open("/proc/self/statm", encoding="ascii") as fh:
            resident_pages = int(fh.read().split()[1])
    except (OSError, IndexError, ValueError):
        return None
    return resident_pages * resource.getpagesize()


def memory_usage() -> MemoryUsage:
    usage = resource.getrusage(resource.RUSAGE_SELF)
    # ru_maxrss is bytes on macOS and kilobytes elsewhere
    max_rss = usage.ru_maxrss if sys.platform == "darwin" else usage.ru_maxrss * 1024
    rss = _current_rss()
    return MemoryUsage(
        rss=rss if rss is not None else max_rss,
        maxRss=max_rss,
        heapBlocks=sys.getallocatedblocks(),
    )


def platform_id() -> str:
    return sys.platform
