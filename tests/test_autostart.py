from pathlib import Path

import pytest

from sysbro.autostart import (
    AutoStartManager,
    DesktopInfo,
    default_autostart_path,
    system_locale,
)
from sysbro.desktop_properties import DesktopProperties


def _write(path: Path, **entries: str) -> Path:
    lines = ["[Desktop Entry]"] + [f"{key}={value}" for key, value in entries.items()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def autostart_dir(tmp_path):
    directory = tmp_path / "autostart"
    directory.mkdir()
    return directory


def test_default_autostart_path_uses_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_autostart_path() == tmp_path / "autostart"


def test_system_locale_strips_encoding(monkeypatch):
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.delenv("LC_MESSAGES", raising=False)
    monkeypatch.setenv("LANG", "zh_CN.UTF-8")
    assert system_locale() == "zh_CN"


def test_desktop_info_equality_is_by_path():
    first = DesktopInfo(name="one", file_path="/x/a.desktop")
    second = DesktopInfo(name="two", file_path="/x/a.desktop")
    third = DesktopInfo(name="one", file_path="/x/b.desktop")
    assert first == second
    assert first != third


def test_creates_missing_directory(tmp_path):
    target = tmp_path / "config" / "autostart"
    manager = AutoStartManager(target, locale="C")
    assert target.is_dir()
    assert manager.apps == []


def test_loads_desktop_files_and_prefers_localized_name(autostart_dir):
    _write(autostart_dir / "foo.desktop", Name="Foo", **{"Name[zh_CN]": "Local Foo"}, Exec="foo", Icon="foo-icon")
    _write(autostart_dir / "bar.desktop", Name="Bar", Exec="bar")
    (autostart_dir / "notes.txt").write_text("Name=Ignored\n", encoding="utf-8")

    manager = AutoStartManager(autostart_dir, locale="zh_CN")
    apps = {app.exec: app for app in manager.apps}

    assert set(apps) == {"foo", "bar"}
    assert apps["foo"].name == "Local Foo"
    assert apps["foo"].icon_name == "foo-icon"
    assert apps["bar"].name == "Bar"
    assert apps["foo"].file_path == str(autostart_dir / "foo.desktop")


def test_add_new_app_writes_entry(autostart_dir):
    manager = AutoStartManager(autostart_dir, locale="C")
    path = manager.add_new_app("Editor", "editor-bin")

    props = DesktopProperties(path, "Desktop Entry")
    assert props.value("Name") == "Editor"
    assert props.value("Exec") == "editor-bin"
    assert props.value("Icon") == "editor-bin"
    assert props.value("Type") == "Application"
    assert [app.name for app in manager.apps] == ["Editor"]


def test_set_value_replaces_existing_localized_name(autostart_dir):
    path = _write(autostart_dir / "foo.desktop", Name="Foo", **{"Name[zh_CN]": "Old"}, Exec="foo")
    manager = AutoStartManager(autostart_dir, locale="zh_CN")
    manager.set_value(str(path), "Name", "Renamed")

    props = DesktopProperties(path, "Desktop Entry")
    assert props.value("Name") == "Renamed"
    assert props.value("Name[zh_CN]") == "Renamed"
    assert manager.apps[0].name == "Renamed"


def test_set_value_does_not_add_localized_name(autostart_dir):
    path = _write(autostart_dir / "foo.desktop", Name="Foo", Exec="foo")
    manager = AutoStartManager(autostart_dir, locale="zh_CN")
    manager.set_value(str(path), "Name", "Renamed")

    props = DesktopProperties(path, "Desktop Entry")
    assert not props.contains("Name[zh_CN]")


def test_edit_app_updates_in_place(autostart_dir):
    _write(autostart_dir / "a.desktop", Name="A", Exec="a")
    path = _write(autostart_dir / "b.desktop", Name="B", Exec="b")
    manager = AutoStartManager(autostart_dir, locale="C")
    before = manager.apps[1]

    manager.edit_app(str(path), "Bee", "bee-icon", "bee")

    after = manager.apps
    assert [app.file_path for app in after] == [str(autostart_dir / "a.desktop"), str(path)]
    assert after[1] is before
    assert (after[1].name, after[1].icon_name, after[1].exec) == ("Bee", "bee-icon", "bee")


def test_remove_app(autostart_dir):
    path = _write(autostart_dir / "foo.desktop", Name="Foo", Exec="foo")
    manager = AutoStartManager(autostart_dir, locale="C")
    manager.remove_app(str(path))
    assert not path.exists()
    assert manager.apps == []


def test_delete_all_apps_removes_every_file(autostart_dir):
    _write(autostart_dir / "foo.desktop", Name="Foo", Exec="foo")
    (autostart_dir / "other.txt").write_text("x", encoding="utf-8")
    manager = AutoStartManager(autostart_dir, locale="C")
    manager.delete_all_apps()
    assert list(autostart_dir.iterdir()) == []
    assert manager.apps == []


def test_import_files_only_copies_desktop_suffix(autostart_dir, tmp_path):
    source = tmp_path / "src"
    source.mkdir()
    good = _write(source / "tool.desktop", Name="Tool", Exec="tool")
    dotted = _write(source / "my.tool.desktop", Name="Dotted", Exec="dotted")
    text = source / "readme.txt"
    text.write_text("hello", encoding="utf-8")

    manager = AutoStartManager(autostart_dir, locale="C")
    copied = manager.import_files([good, dotted, text])

    assert copied == [str(autostart_dir / "tool.desktop")]
    assert [app.name for app in manager.apps] == ["Tool"]


def test_import_does_not_overwrite(autostart_dir, tmp_path):
    _write(autostart_dir / "tool.desktop", Name="Existing", Exec="old")
    other = _write(tmp_path / "tool.desktop", Name="New", Exec="new")
    manager = AutoStartManager(autostart_dir, locale="C")
    assert manager.import_files([other]) == []
    assert manager.apps[0].name == "Existing"


def test_listeners_are_notified(autostart_dir):
    manager = AutoStartManager(autostart_dir, locale="C")
    calls = []
    manager.subscribe(lambda: calls.append(len(manager.apps)))
    manager.add_new_app("Foo", "foo")
    assert calls == [1]