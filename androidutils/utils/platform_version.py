"""Platform and Android API level predicates.

``ANDROIDUTILS_SDK_INT_OVERRIDE``, when set, is the API level.  Otherwise
on Android the level comes from the interpreter when it was built for
Android, or from ``/system/build.prop``.  Off-device the level is 0, so
every ``is_*_or_higher`` predicate is False on a plain desktop host.
"""

import os
import sys
from enum import IntEnum
from pathlib import Path
from typing import Optional

from ..env_settings import get_settings

BUILD_PROP = Path("/system/build.prop")
SDK_PROPERTY = "ro.build.version.sdk"


class VersionCode(IntEnum):
    """Android API levels the predicates below are named after."""

    FROYO = 8
    GINGERBREAD = 9
    HONEYCOMB = 11
    ICE_CREAM_SANDWICH = 14
    JELLY_BEAN = 16
    JELLY_BEAN_MR1 = 17
    KITKAT = 19


def get_platform() -> str:
    """Return ``"android"`` on Android, otherwise ``sys.platform``."""
    if sys.platform == "android" or hasattr(sys, "getandroidapilevel"):
        return "android"
    if "ANDROID_ROOT" in os.environ or "ANDROID_ARGUMENT" in os.environ:
        return "android"
    return sys.platform


def is_android() -> bool:
    return get_platform() == "android"


def _read_build_prop(path: Optional[Path] = None) -> int:
    path = path or BUILD_PROP
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError:
        return 0
    for line in lines:
        key, sep, value = line.partition("=")
        if sep and key.strip() == SDK_PROPERTY:
            try:
                return int(value.strip())
            except ValueError:
                return 0
    return 0


def sdk_int() -> int:
    """Return the Android API level of the running system, or 0.

    A configured ``sdk_int_override`` wins over whatever the system reports.
    """
    override = get_settings().sdk_int_override
    if override is not None:
        return override
    getter = getattr(sys, "getandroidapilevel", None)
    if getter is not None:
        return getter()
    return _read_build_prop()


def is_at_least(code: int) -> bool:
    """Return True if the running API level is ``code`` or newer."""
    return sdk_int() >= code


def is_kitkat_or_higher() -> bool:
    return is_at_least(VersionCode.KITKAT)


def is_jelly_bean_mr1_or_higher() -> bool:
    return is_at_least(VersionCode.JELLY_BEAN_MR1)


def is_jelly_bean_or_higher() -> bool:
    return is_at_least(VersionCode.JELLY_BEAN)


def is_ics_or_higher() -> bool:
    return is_at_least(VersionCode.ICE_CREAM_SANDWICH)


def is_honeycomb_or_higher() -> bool:
    return is_at_least(VersionCode.HONEYCOMB)


def is_gingerbread_or_higher() -> bool:
    return is_at_least(VersionCode.GINGERBREAD)


def is_froyo_or_higher() -> bool:
    return is_at_least(VersionCode.FROYO)


def external_storage_dir():
    """Return the configured external storage directory, or None."""
    return get_settings().external_storage or os.getenv("EXTERNAL_STORAGE")


def is_ext_storage_available() -> bool:
    """Whether external storage is mounted and both readable and writeable."""
    path = external_storage_dir()
    if not path:
        return False
    return os.path.isdir(path) and os.access(path, os.R_OK | os.W_OK)


__all__ = [
    "VersionCode",
    "get_platform",
    "is_android",
    "sdk_int",
    "is_at_least",
    "is_kitkat_or_higher",
    "is_jelly_bean_mr1_or_higher",
    "is_jelly_bean_or_higher",
    "is_ics_or_higher",
    "is_honeycomb_or_higher",
    "is_gingerbread_or_higher",
    "is_froyo_or_higher",
    "external_storage_dir",
    "is_ext_storage_available",
]
