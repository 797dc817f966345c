"""System information, autostart, systemd service and tool helpers for Linux desktops."""

__version__ = "1.0.0"

__all__ = ["__version__"]