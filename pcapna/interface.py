"""Discovery and description of the host's network interfaces."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass, field

import psutil


class InterfaceFlag(enum.IntFlag):
    """Interface flags, using the capture library's bit values."""

    NONE = 0x00
    LOOPBACK = 0x01
    UP = 0x02
    RUNNING = 0x04
    WIRELESS = 0x08
    CONNECTED = 0x10
    DISCONNECTED = 0x20
    CONNECTION_STATUS = 0x30


STATUS_UNKNOWN = 0x00
STATUS_NOT_APPLICABLE = 0x30


@dataclass
class Device:
    """A capture-capable interface: name, description, addresses and flags.

    ``addresses`` holds ``(family, address)`` pairs, where family is
    ``socket.AF_INET``, ``socket.AF_INET6`` or ``psutil.AF_LINK``.
    """

    name: str
    description: str | None = None
    addresses: list[tuple[int, str]] = field(default_factory=list)
    flags: InterfaceFlag = InterfaceFlag.NONE


@dataclass(frozen=True)
class InterfaceInfo:
    """Printable summary of a device."""

    name: str
    description: str | None
    flags: str
    addresses: list[str]


def _device_flags(name: str, stats) -> InterfaceFlag:
    flags = InterfaceFlag.NONE
    if stats is None:
        return flags
    stat_flags = getattr(stats, "flags", "") or ""
    if "loopback" in stat_flags.split(",") or (not stat_flags and name.startswith("lo")):
        flags |= InterfaceFlag.LOOPBACK
    if stats.isup:
        flags |= InterfaceFlag.UP | InterfaceFlag.CONNECTED
        if not stat_flags or "running" in stat_flags.split(","):
            flags |= InterfaceFlag.RUNNING
    else:
        flags |= InterfaceFlag.DISCONNECTED
    return flags


def get_interfaces() -> list[Device]:
    """List every network interface on the host."""
    all_addresses = psutil.net_if_addrs()
    all_stats = psutil.net_if_stats()
    devices = []
    for name in sorted(set(all_addresses) | set(all_stats)):
        addresses = [
            (int(entry.family), entry.address)
            for entry in all_addresses.get(name, [])
            if entry.address
        ]
        devices.append(
            Device(
                name=name,
                addresses=addresses,
                flags=_device_flags(name, all_stats.get(name)),
            )
        )
    return devices


def get_interface(name: str, devices: list[Device]) -> Device | None:
    """Return the device called ``name``, or None when there is none."""
    return next((device for device in devices if device.name == name), None)


def _flags_text(flags: int) -> str:
    words = ["UP" if flags & InterfaceFlag.UP else "DOWN"]
    if flags & InterfaceFlag.LOOPBACK:
        words.append("LOOPBACK")
    if flags & InterfaceFlag.RUNNING:
        words.append("RUNNING")
    if flags & InterfaceFlag.WIRELESS:
        words.append("WIRELESS")
    status = flags & InterfaceFlag.CONNECTION_STATUS
    if status == InterfaceFlag.CONNECTED:
        tail = "status UP"
    elif status == InterfaceFlag.DISCONNECTED:
        tail = "status DOWN"
    elif status == STATUS_UNKNOWN:
        tail = "status UNKNOWN"
    else:
        tail = "\n"
    return f"<{','.join(words)}> {tail}"


def _address_text(family: int, address: str) -> str | None:
    if family == socket.AF_INET:
        return f"IPv4: {address}"
    if family == socket.AF_INET6:
        return f"IPv6: {address.split('%', 1)[0]}"
    if family == psutil.AF_LINK:
        return f"MAC: {address.lower().replace('-', ':')}" if address else None
    return None


def get_interface_infos(device: Device) -> InterfaceInfo:
    """Describe a device: its flags as text and its addresses, one per line."""
    addresses = [
        text
        for family, address in device.addresses
        if (text := _address_text(family, address)) is not None
    ]
    return InterfaceInfo(
        name=device.name,
        description=device.description,
        flags=_flags_text(device.flags),
        addresses=addresses,
    )