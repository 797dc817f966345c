"""The bundled helper tools and how to start them."""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass

_TOOL_KEYS = (
    "sysbro-startup-apps",
    "sysbro-file-shredder",
    "sysbro-network-test",
    "sysbro-screen-checker",
)

_TOOL_NAMES = {
    "sysbro-startup-apps": "App start-up management",
    "sysbro-file-shredder": "File Shredder",
    "sysbro-network-test": "网速测试",
    "sysbro-express": "快递查询助手",
    "sysbro-screen-checker": "Screen Checker",
    "sysbro-info": "Hardware Info",
}


@dataclass(frozen=True)
class Tool:
    """A helper tool: its executable name and its display name."""

    key: str
    name: str


def tool_name(key: str) -> str:
    """Display name of a tool, or an empty string if it is unknown."""
    return _TOOL_NAMES.get(key, "")


def available_tools() -> list[Tool]:
    """The tools offered on the tools page, in display order."""
    return [Tool(key=key, name=tool_name(key)) for key in _TOOL_KEYS]


def launch_tool(key: str) -> bool:
    """Start a tool detached from this process; return whether it started."""
    argv = shlex.split(key)
    if not argv:
        return False
    try:
        subprocess.Popen(
            argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError:
        return False
    return True