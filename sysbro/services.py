"""Start-up services managed by systemd: listing, descriptions and switching."""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .autostart import system_locale

Runner = Callable[[Sequence[str]], "tuple[int, str]"]

_SERVICE_LINE_RE = re.compile(r"[^@].service")

COLUMN_COUNT = 2
UNKNOWN_DESCRIPTION = "Unknown"
SERVICE_MANAGER = "sysbro-service-mgr"

DESCRIPTIONS: dict[str, str] = {
    "accounts-daemon": "账户服务",
    "acpid": "ACPI 事件守护进程",
    "binfmt-support": "启用对其他可执行二进制格式的支持",
    "bluetooth": "蓝牙服务",
    "console-getty": "控制台 getty 服务",
    "cron": "常规后台程序处理守护进程",
    "cups": "CUPS 打印系统调度",
    "dbus-org.bluez": "蓝牙服务",
    "dbus-org.freedesktop.miracle.wfd": "Miraclecast WIFI 显示服务",
    "dbus-org.freedesktop.miracle.wifi": "Miraclecast WIFI 守护进程",
    "dbus-org.freedesktop.ModemManager1": "调制解调器管理器",
    "dbus-org.freedesktop.network1": "网络服务",
    "dbus-org.freedesktop.resolve1": "网络名称解析",
    "dde-filemanager-daemon": "深度文件管理器守护进程",
    "deepin-accounts-daemon": "深度系统账户服务",
    "deepin-anything-monitor": "深度 anything 服务",
    "deepin-anything-tool": "深度 anything 工具服务",
    "deepin-login-sound": "深度系统登录声音",
    "deepin-shutdown-sound": "深度系统关机声音",
    "display-manager": "显示管理器",
    "dm-event": "设备映射事件守护进程",
    "driver-installer": "深度显卡驱动管理器安装程序",
    "laptop-mode": "笔记本模式工具",
    "lightdm": "lightdm 显示管理器",
    "lmt-poll": "笔记本模式工具 - 电池服务",
    "lvm2-lvmetad": "LVM2 元数据守护进程",
    "lvm2-lvmpolld": "LVM2 调查守护进程",
    "lvm2-monitor": "监视 LVM2 镜像, 快照等",
    "miracle-dispd": "Miraclecast WIFI 显示服务",
    "miracle-wifid": "Miraclecast WIFI 守护进程",
    "ModemManager": "调制解调管理器",
    "network-manager": "网络管理器",
    "networking": "提升网络接口",
    "nmbd": "Samba NMB 守护进程",
    "openvpn": "OpenVPN 服务",
    "smbd": "Samba SMB 守护进程",
    "sudo": "为特定用户提供有限的超级用户权限",
    "udisks2": "磁盘管理",
    "upower": "电源管理守护进程",
}

_HEADERS = {0: "Service Name", 1: "Status"}


@dataclass
class ServiceItem:
    """One systemd service unit and whether it is enabled."""

    name: str
    description: str
    status: bool

    @property
    def status_text(self) -> str:
        """"Enabled" or "Disabled"."""
        return "Enabled" if self.status else "Disabled"

    @property
    def toggle_label(self) -> str:
        """Label of the action that flips the status."""
        return "Disable" if self.status else "Enable"


def _run_command(argv: Sequence[str]) -> tuple[int, str]:
    try:
        completed = subprocess.run(list(argv), capture_output=True, text=True, check=False)
    except OSError:
        return 127, ""
    return completed.returncode, completed.stdout


def parse_unit_files(output: str) -> list[tuple[str, bool]]:
    """Read ``systemctl list-unit-files`` output into (name, enabled) pairs.

    Template units (``name@.service``) are skipped; the state is the last column.
    """
    services: list[tuple[str, bool]] = []
    for line in output.split("\n"):
        if not _SERVICE_LINE_RE.search(line):
            continue
        fields = line.split()
        name = fields[0].replace(".service", "")
        services.append((name, fields[-1] == "enabled"))
    return services


def parse_description(output: str) -> str:
    """The Description of a unit from ``systemctl cat`` output, or "Unknown"."""
    for line in output.split("\n"):
        if line.startswith("Description"):
            return line.split("=")[-1]
    return UNKNOWN_DESCRIPTION


def startup_items_message(number: int) -> str:
    """Headline telling how many start-up items the computer has."""
    return f"Your computer has {number} startup items"


class ServiceModel:
    """The enabled and disabled service units of the system."""

    def __init__(
        self,
        locale: str | None = None,
        runner: Runner | None = None,
        load: bool = True,
    ) -> None:
        self.locale = system_locale() if locale is None else locale
        self._run = runner or _run_command
        self._items: list[ServiceItem] = []
        self._listeners: list[Callable[[int], None]] = []
        if load:
            self.load_services()

    @property
    def items(self) -> list[ServiceItem]:
        """The services in the order systemctl lists them."""
        return list(self._items)

    def subscribe(self, callback: Callable[[int], None]) -> None:
        """Call ``callback`` with the number of start-up items after every change."""
        self._listeners.append(callback)

    def _notify(self) -> None:
        number = self.enabled_count() + 1
        for callback in self._listeners:
            callback(number)

    def load_services(self) -> None:
        """Query systemctl for service units and their descriptions."""
        _, output = self._run(
            ["systemctl", "list-unit-files", "-t", "service", "-a", "--state=enabled,disabled"]
        )
        self._items = [
            ServiceItem(name=name, description=self.description(name), status=status)
            for name, status in parse_unit_files(output)
        ]
        self._notify()

    def description(self, name: str) -> str:
        """Description of a unit, localized for zh_CN where one is known."""
        _, output = self._run(["systemctl", "cat", name])
        result = parse_description(output)
        if self.locale == "zh_CN" and name in DESCRIPTIONS:
            result = DESCRIPTIONS[name]
        return result

    def switch_status(self, name: str) -> bool:
        """Enable a disabled service or disable an enabled one, with privileges.

        Returns whether the change succeeded. Raises KeyError for an unknown service.
        """
        current = next((item for item in self._items if item.name == name), None)
        if current is None:
            raise KeyError(name)
        status = not current.status
        code, _ = self._run(
            ["pkexec", SERVICE_MANAGER, "enable" if status else "disable", name]
        )
        succeeded = code == 0
        if succeeded:
            for item in self._items:
                if item.name == name:
                    item.status = status
        self._notify()
        return succeeded

    def enabled_count(self) -> int:
        """Number of enabled services."""
        return sum(1 for item in self._items if item.status)

    def header(self, section: int) -> str | None:
        """Column title of a section, or None outside the columns."""
        return _HEADERS.get(section)

    def __len__(self) -> int:
        return len(self._items)