"""Reader and writer for key=value property files such as .desktop entries."""

from __future__ import annotations

import os


def _to_text(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class DesktopProperties:
    """Key/value properties of one group of a property file.

    Unlike INI parsers, ';' is kept as part of a value rather than read as a comment.
    """

    def __init__(self, file_name: str | os.PathLike = "", group: str = "") -> None:
        self._data: dict[str, object] = {}
        if file_name:
            self.load(file_name, group)

    def load(self, file_name: str | os.PathLike, group: str = "") -> bool:
        """Replace the properties with those of ``group`` in the file.

        With an empty group every assignment in the file is read. Returns False
        and keeps the current properties if the file cannot be opened.
        """
        try:
            with open(file_name, encoding="utf-8") as handle:
                lines = handle.read().split("\n")
        except OSError:
            return False

        self._data.clear()
        wanted = group.strip()
        in_group = not group
        for line in lines:
            stripped = line.strip()
            if not stripped:
                continue
            if group and stripped.startswith("["):
                in_group = wanted == stripped.replace("[", "").replace("]", "")
            key, sep, value = line.partition("=")
            if in_group and sep:
                self._data[key.strip()] = value.strip()
        return True

    def save(self, file_name: str | os.PathLike, group: str = "") -> bool:
        """Write the properties, sorted by key, under an optional group header."""
        lines = [f"[{group}]"] if group else []
        lines.extend(f"{key}={_to_text(self._data[key])}" for key in self.keys())
        try:
            with open(file_name, "w", encoding="utf-8") as handle:
                handle.write("".join(f"{line}\n" for line in lines))
        except OSError:
            return False
        return True

    def value(self, key: str, default=None):
        """The value stored under ``key``, or ``default``."""
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        """Store ``value`` under ``key``, replacing any earlier value."""
        self._data[key] = value

    def contains(self, key: str) -> bool:
        """Whether ``key`` is present."""
        return key in self._data

    def keys(self) -> list[str]:
        """All keys in sorted order."""
        return sorted(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data