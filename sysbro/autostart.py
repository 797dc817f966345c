"""Management of the user's autostart applications (XDG autostart .desktop files)."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from .desktop_properties import DesktopProperties

DESKTOP_GROUP = "Desktop Entry"


def default_autostart_path() -> Path:
    """The user's autostart directory below the configuration location."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "autostart"


def system_locale() -> str:
    """Locale name such as "zh_CN", taken from the environment, or "C"."""
    for variable in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(variable)
        if value:
            return value.split(".")[0].split("@")[0]
    return "C"


@dataclass(eq=False)
class DesktopInfo:
    """One autostart entry. Two entries are equal when they share a file path."""

    name: str = ""
    generic_name: str = ""
    icon_name: str = ""
    exec: str = ""
    file_path: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DesktopInfo):
            return NotImplemented
        return self.file_path == other.file_path

    def __hash__(self) -> int:
        return hash(self.file_path)


class AutoStartManager:
    """Keeps the list of autostart applications in step with the autostart directory."""

    def __init__(self, autostart_path: str | os.PathLike | None = None, locale: str | None = None) -> None:
        path = Path(autostart_path) if autostart_path is not None else default_autostart_path()
        self.path = path.absolute()
        self.locale = system_locale() if locale is None else locale
        self.path.mkdir(parents=True, exist_ok=True)
        self._apps: list[DesktopInfo] = []
        self._listeners: list[Callable[[], None]] = []
        self.load_apps()

    @property
    def apps(self) -> list[DesktopInfo]:
        """The current entries, in directory order."""
        return list(self._apps)

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` whenever the list of entries has been reloaded."""
        self._listeners.append(callback)

    def _desktop_files(self) -> list[Path]:
        try:
            entries = list(self.path.iterdir())
        except OSError:
            return []
        files = [entry for entry in entries if not entry.name.startswith(".") and entry.is_file()]
        return sorted(files, key=lambda entry: entry.name.lower())

    def load_apps(self) -> None:
        """Re-read the autostart directory, updating entries in place."""
        current: list[DesktopInfo] = []
        for file in self._desktop_files():
            if file.suffix != ".desktop":
                continue
            file_path = str(file)
            desktop = DesktopProperties(file_path, DESKTOP_GROUP)
            name = str(desktop.value(f"Name[{self.locale}]", "") or "")
            app_exec = str(desktop.value("Exec", "") or "")
            icon = str(desktop.value("Icon", "") or "")
            if not name:
                name = str(desktop.value("Name", "") or "")

            info = DesktopInfo(name=name, icon_name=icon, exec=app_exec, file_path=file_path)
            current.append(info)

            existing = next((app for app in self._apps if app == info), None)
            if existing is None:
                self._apps.append(info)
            else:
                existing.name = name
                existing.exec = app_exec
                existing.icon_name = icon

        present = set(current)
        self._apps = [app for app in self._apps if app in present]

        for callback in self._listeners:
            callback()

    def add_new_app(self, app_name: str, app_exec: str) -> str:
        """Create ``<app_name>.desktop`` for a command; return the file's path."""
        file_path = str(self.path / f"{app_name}.desktop")
        desktop = DesktopProperties(file_path, DESKTOP_GROUP)
        desktop.set("Name", app_name)
        desktop.set("Exec", app_exec)
        desktop.set("Icon", app_exec)
        desktop.set("Type", "Application")
        if not desktop.save(file_path, DESKTOP_GROUP):
            raise OSError(f"cannot write {file_path}")
        self.load_apps()
        return file_path

    def set_value(self, file_path: str | os.PathLike, key: str, value: str) -> None:
        """Set one key of an entry; a new Name also replaces the localized name."""
        desktop = DesktopProperties(file_path, DESKTOP_GROUP)
        desktop.set(key, value)
        if key == "Name":
            local_key = f"Name[{self.locale}]"
            if desktop.contains(local_key):
                desktop.set(local_key, value)
        if not desktop.save(file_path, DESKTOP_GROUP):
            raise OSError(f"cannot write {file_path}")
        self.load_apps()

    def edit_app(self, file_path: str | os.PathLike, app_name: str, app_icon: str, app_exec: str) -> None:
        """Replace the name, icon and command of an entry."""
        self.set_value(file_path, "Name", app_name)
        self.set_value(file_path, "Icon", app_icon)
        self.set_value(file_path, "Exec", app_exec)

    def remove_app(self, file_path: str | os.PathLike) -> None:
        """Delete an entry's file."""
        Path(file_path).unlink(missing_ok=True)
        self.load_apps()

    def delete_all_apps(self) -> None:
        """Delete every file in the autostart directory."""
        for file in self._desktop_files():
            file.unlink(missing_ok=True)
        self.load_apps()

    def import_files(self, file_names: Iterable[str | os.PathLike]) -> list[str]:
        """Copy the given .desktop files into the autostart directory.

        Files whose complete suffix is not "desktop" are skipped, and an existing
        file of the same name is never overwritten. Returns the new paths.
        """
        copied: list[str] = []
        for file_name in file_names:
            source = Path(file_name)
            _, _, complete_suffix = source.name.partition(".")
            if complete_suffix != "desktop":
                continue
            target = self.path / source.name
            if target.exists():
                continue
            try:
                shutil.copyfile(source, target)
            except OSError:
                continue
            copied.append(str(target))
        self.load_apps()
        return copied