"""System information helpers: CPU, memory, disk, network, files and processes."""

from __future__ import annotations

import logging
import os
import platform
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

_UNITS = ("B", "KB", "MB", "GB", "TB")
_MOUNTS_PATH = Path("/proc/mounts")
_OS_RELEASE_PATHS = (Path("/etc/os-release"), Path("/usr/lib/os-release"))
_PSEUDO_ROOTS = ("/dev", "/proc", "/sys", "/var/run", "/var/lock")
_BOOT_TIME_RE = re.compile(r"\s=.*s")
_MOUNT_ESCAPE_RE = re.compile(r"\\([0-7]{3})")


@dataclass(frozen=True)
class CpuTime:
    """Aggregate CPU jiffies: time spent working and time overall."""

    work: int
    total: int


@dataclass(frozen=True)
class MemoryInfo:
    """Memory usage as a "used / total" text and a percentage."""

    text: str
    percent: float


@dataclass(frozen=True)
class DiskInfo:
    """Disk usage over all real mounted devices."""

    text: str
    percent: float


def format_bytes(num_bytes: int, space: bool = False) -> str:
    """Render a byte count with one decimal and a unit from B up to TB.

    Counts of 1024 TB or more give an empty string.
    """
    if num_bytes < 0:
        raise ValueError(f"byte count must not be negative: {num_bytes}")
    separator = " " if space else ""
    whole = num_bytes
    scaled = float(num_bytes)
    for unit in _UNITS:
        if whole < 1024:
            return f"{scaled:.1f}{separator}{unit}"
        whole //= 1024
        scaled /= 1024.0
    return ""


def file_content(path: str | os.PathLike) -> str:
    """Return the whole content of a file, or an empty string if it cannot be read."""
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def user_name() -> str:
    """Name of the current user from the environment."""
    return os.environ.get("USER") or os.environ.get("USERNAME", "")


def platform_name() -> str:
    """Kernel type and machine architecture, e.g. "Linux x86_64"."""
    try:
        info = os.uname()
    except (AttributeError, OSError):
        return " i386"
    return f"{info.sysname} {info.machine}"


def distribution() -> str:
    """Human readable name of the operating system distribution."""
    for path in _OS_RELEASE_PATHS:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            continue
        for line in text.splitlines():
            key, sep, value = line.partition("=")
            if sep and key.strip() == "PRETTY_NAME":
                return value.strip().strip('"').strip("'")
    return f"{platform.system()} {platform.release()}".strip()


def kernel_version() -> str:
    """Release string of the running kernel, or empty if unknown."""
    try:
        return os.uname().release
    except (AttributeError, OSError):
        return ""


def _system_locale() -> str:
    for variable in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(variable)
        if value:
            return value.split(".")[0].split("@")[0]
    return "C"


def parse_boot_time(output: str, locale: str = "") -> str:
    """Extract the boot duration from the first line of systemd-analyze output."""
    first_line = output.split("\n", 1)[0]
    match = _BOOT_TIME_RE.search(first_line)
    result = match.group(0).replace(" = ", "") if match else ""
    if locale == "zh_CN":
        result = result.replace("min", "分").replace("s", "秒")
    return result


def boot_time(locale: str | None = None) -> str:
    """Boot duration as reported by systemd-analyze."""
    try:
        completed = subprocess.run(
            ["systemd-analyze"], capture_output=True, text=True, check=False
        )
        output = completed.stdout
    except OSError:
        output = ""
    return parse_boot_time(output, _system_locale() if locale is None else locale)


def debian_version(path: str | os.PathLike = "/etc/debian_version") -> str:
    """Content of the Debian version file, e.g. "9.0"."""
    return file_content(path)


def parse_cpu_info(text: str) -> tuple[str, int]:
    """Return the CPU model (text after the first colon) and processor count."""
    lines = text.split("\n")
    models = [line for line in lines if line.startswith("model name")]
    if not models:
        raise ValueError("cpu info has no 'model name' entry")
    parts = models[0].split(":")
    if len(parts) < 2:
        raise ValueError(f"malformed model line: {models[0]!r}")
    cores = sum(1 for line in lines if line.startswith("processor"))
    return parts[1], cores


def cpu_info(path: str | os.PathLike = "/proc/cpuinfo") -> tuple[str, int]:
    """CPU model and processor count of this machine."""
    return parse_cpu_info(Path(path).read_text(encoding="utf-8", errors="replace"))


def parse_cpu_time(text: str) -> CpuTime:
    """Read the aggregate "cpu " line of /proc/stat."""
    for line in text.split("\n"):
        if line.startswith("cpu "):
            fields = line.split()
            break
    else:
        raise ValueError("stat text has no aggregate 'cpu' line")
    if len(fields) < 9:
        raise ValueError(f"too few fields in cpu line: {line!r}")
    user, nice, system, idle, iowait, irq, softirq, steal = (int(f) for f in fields[1:9])
    work = user + nice + system
    return CpuTime(work=work, total=work + idle + iowait + irq + softirq + steal)


def cpu_time(path: str | os.PathLike = "/proc/stat") -> CpuTime:
    """Current aggregate CPU times."""
    return parse_cpu_time(Path(path).read_text(encoding="utf-8"))


def parse_memory_info(text: str) -> MemoryInfo:
    """Compute memory usage from /proc/meminfo content."""
    fields: dict[str, str] = {}
    for line in text.split("\n"):
        parts = line.split()
        if len(parts) >= 2 and parts[0].endswith(":"):
            fields[parts[0][:-1]] = parts[1]
    try:
        total = int(fields["MemTotal"])
        available = int(fields["MemAvailable"])
    except KeyError as exc:
        raise ValueError(f"meminfo lacks {exc.args[0]}") from exc
    if total == 0:
        raise ValueError("MemTotal is zero")
    used = total - available
    text_value = f"{format_bytes(used * 1024)} / {format_bytes(total * 1024)}"
    return MemoryInfo(text=text_value, percent=used * 100.0 / total)


def memory_info(path: str | os.PathLike = "/proc/meminfo") -> MemoryInfo:
    """Current memory usage."""
    return parse_memory_info(Path(path).read_text(encoding="utf-8"))


def _unescape_mount(field: str) -> str:
    return _MOUNT_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 8)), field)


def _is_pseudo(device: str, mount_dir: str, fs_type: str) -> bool:
    if any(mount_dir == root or mount_dir.startswith(root + "/") for root in _PSEUDO_ROOTS):
        return True
    if fs_type == "tmpfs":
        return False
    if fs_type in ("rootfs", "rpc_pipefs"):
        return True
    return not device.startswith("/")


def _mounted_volumes():
    try:
        text = _MOUNTS_PATH.read_text(encoding="utf-8")
    except OSError:
        return
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 3:
            continue
        device, mount_dir, fs_type = (_unescape_mount(f) for f in fields[:3])
        if not _is_pseudo(device, mount_dir, fs_type):
            yield device, mount_dir


def disk_info() -> DiskInfo:
    """Usage summed over mounted volumes, each device counted once."""
    total = free = 0
    seen: set[str] = set()
    for device, mount_dir in _mounted_volumes():
        if device in seen:
            continue
        try:
            stats = os.statvfs(mount_dir)
        except OSError:
            continue
        seen.add(device)
        total += stats.f_blocks * stats.f_frsize
        free += stats.f_bfree * stats.f_frsize
    used = total - free
    percent = used * 100.0 / total if total else 0.0
    return DiskInfo(text=f"{format_bytes(used)} / {format_bytes(total)}", percent=percent)


def parse_network_bandwidth(text: str) -> tuple[int, int]:
    """Sum received and sent bytes over all interfaces except loopback."""
    received = sent = 0
    for line in text.split("\n")[2:]:
        fields = line.split()
        if not fields or fields[0] == "lo:":
            continue
        try:
            received += int(fields[1])
            sent += int(fields[9])
        except IndexError as exc:
            raise ValueError(f"malformed interface line: {line!r}") from exc
    return received, sent


def network_bandwidth(path: str | os.PathLike = "/proc/net/dev") -> tuple[int, int]:
    """Total received and sent bytes of this machine."""
    return parse_network_bandwidth(Path(path).read_text(encoding="utf-8"))


def parse_cpu_temperature(text: str) -> float:
    """Turn a thermal zone reading such as "45000" into degrees Celsius."""
    tokens = text.split()
    if not tokens or len(tokens[0]) < 2:
        raise ValueError(f"unreadable temperature: {text!r}")
    raw = tokens[0]
    return float(f"{raw[:2]}.{raw[2:]}")


def cpu_temperature(path: str | os.PathLike = "/sys/class/thermal/thermal_zone0/temp") -> float:
    """CPU temperature in degrees Celsius, or 0.0 if it cannot be read."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError:
        return 0.0
    return parse_cpu_temperature(text)


def file_size(path: str | os.PathLike) -> int:
    """Size of a file, or of all non-hidden files below a directory."""
    target = Path(path)
    if target.is_file():
        return target.stat().st_size
    if target.is_dir():
        try:
            entries = list(target.iterdir())
        except OSError:
            return 0
        return sum(file_size(entry) for entry in entries if not entry.name.startswith("."))
    return 0


def _list_entries(directory: str | os.PathLike, include_dirs: bool) -> list[Path]:
    try:
        entries = list(Path(directory).iterdir())
    except OSError:
        return []
    selected = [
        entry
        for entry in entries
        if not entry.name.startswith(".")
        and (entry.is_file() or (include_dirs and entry.is_dir()))
    ]
    return sorted(selected, key=lambda entry: entry.name.lower())


def dpkg_packages() -> list[Path]:
    """Downloaded package archives in the apt cache."""
    return _list_entries("/var/cache/apt/archives", include_dirs=False)


def crash_reports() -> list[Path]:
    """Files in the system crash report directory."""
    return _list_entries("/var/crash", include_dirs=False)


def app_logs() -> list[Path]:
    """Files and directories in the system log directory."""
    return _list_entries("/var/log", include_dirs=True)


def app_caches() -> list[Path]:
    """Files and directories in the user's cache directory."""
    return _list_entries(Path(home_path()) / ".cache", include_dirs=True)


def home_path() -> str:
    """The user's home directory."""
    return str(Path.home())


def sudo_exec(cmd: str, args) -> str:
    """Run a command through pkexec; return its trimmed output, or "" on failure."""
    try:
        completed = subprocess.run(
            ["pkexec", cmd, *args], capture_output=True, text=True, check=False
        )
    except OSError as exc:
        log.error("could not run pkexec %s: %s", cmd, exc)
        return ""
    if completed.returncode < 0:
        log.error("pkexec %s was killed by signal %d", cmd, -completed.returncode)
        return ""
    return completed.stdout.strip()


def task_pids() -> list[int]:
    """Process ids of all running tasks."""
    try:
        completed = subprocess.run(
            ["ps", "ax", "-weo", "pid", "--no-headings"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return []
    return [int(line) for line in (raw.strip() for raw in completed.stdout.split("\n")) if line]