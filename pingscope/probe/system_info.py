import os
import platform
import socket
from dataclasses import dataclass

OS_NAMES = {
    "Linux": "Linux",
    "Darwin": "macOS",
    "Windows": "Windows",
}


@dataclass(slots=True, frozen=True)
class SystemInfo:
    os_name: str
    privileged: bool
    privilege_status: str
    implementation: str


def has_privileged_access() -> bool:
    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None and geteuid() == 0:
        return True

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP):
            return True

    except OSError:
        return False


def system_info() -> SystemInfo:
    system = platform.system()
    os_name = OS_NAMES.get(system, system)
    privileged = has_privileged_access()

    if privileged:
        return SystemInfo(
            os_name=os_name,
            privileged=True,
            privilege_status="privileged (raw socket)",
            implementation=f"{os_name} raw socket",
        )

    return SystemInfo(
        os_name=os_name,
        privileged=False,
        privilege_status="unprivileged (DGRAM socket)",
        implementation=f"{os_name} DGRAM socket",
    )
