"""Network connectivity queries.

Interface state is read from the kernel's sysfs network class directory
(``/sys/class/net`` by default).  An interface counts as connected when
its ``operstate`` is ``up``, or ``unknown`` with a carrier, which is how
point-to-point and tunnel links report themselves.  Entries that are
missing or unreadable count as not connected.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..env_settings import get_settings

LOOPBACK = "lo"


def _default_sysfs_root() -> Path:
    return Path(get_settings().net_sysfs_root)


@dataclass
class NetworkContext:
    """Where to look for network interface state."""

    sysfs_root: Path = field(default_factory=_default_sysfs_root)

    def interface_dir(self, name: str) -> Path:
        return Path(self.sysfs_root) / name


def _read_attr(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, ValueError):
        return None


def list_interfaces(context: Optional[NetworkContext] = None) -> List[str]:
    """Return the names of all non-loopback interfaces, sorted."""
    context = context or NetworkContext()
    root = Path(context.sysfs_root)
    try:
        names = [entry.name for entry in root.iterdir()]
    except OSError:
        return []
    return sorted(name for name in names if name != LOOPBACK)


def is_interface_connected(name: str, context: Optional[NetworkContext] = None) -> bool:
    context = context or NetworkContext()
    iface = context.interface_dir(name)
    state = _read_attr(iface / "operstate")
    if state == "up":
        return True
    if state == "unknown":
        return _read_attr(iface / "carrier") == "1"
    return False


def is_wireless(name: str, context: Optional[NetworkContext] = None) -> bool:
    context = context or NetworkContext()
    iface = context.interface_dir(name)
    return (iface / "wireless").exists() or (iface / "phy80211").exists()


def is_network_connected(context: Optional[NetworkContext] = None) -> bool:
    """Whether there is any network connected."""
    context = context or NetworkContext()
    return any(is_interface_connected(name, context) for name in list_interfaces(context))


def is_wifi_connected(context: Optional[NetworkContext] = None) -> bool:
    """Whether there is an active WiFi connection."""
    context = context or NetworkContext()
    return any(
        is_interface_connected(name, context)
        for name in list_interfaces(context)
        if is_wireless(name, context)
    )


__all__ = [
    "NetworkContext",
    "list_interfaces",
    "is_interface_connected",
    "is_wireless",
    "is_network_connected",
    "is_wifi_connected",
]
