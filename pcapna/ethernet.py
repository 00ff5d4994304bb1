"""Ethernet (IEEE 802.3 / 802.1Q) header parsing."""

from __future__ import annotations

import struct
from dataclasses import dataclass

ETHER_HEADER_SIZE = 14
VLAN_TAG_SIZE = 4

ETHERTYPE_PUP = 0x0200
ETHERTYPE_IP = 0x0800
ETHERTYPE_ARP = 0x0806
ETHERTYPE_REVARP = 0x8035
ETHERTYPE_IPV6 = 0x86DD
ETHERTYPE_VLAN = 0x8100

_ETHERTYPE_NAMES = {
    ETHERTYPE_PUP: "PUP",
    ETHERTYPE_IP: "IP",
    ETHERTYPE_ARP: "ARP",
    ETHERTYPE_REVARP: "Reverse ARP",
    ETHERTYPE_IPV6: "IPv6",
    ETHERTYPE_VLAN: "VLAN",
}

_ETHER_HEADER = struct.Struct("!6s6sH")
_VLAN_TAG = struct.Struct("!HH")


@dataclass(frozen=True)
class EthernetHeader:
    """Decoded Ethernet header, with the 802.1Q tag when present."""

    src_mac: str
    dst_mac: str
    ethertype: int
    type_desc: str
    vlan_tagged: bool = False
    vlan_id: int = 0
    pcp: int = 0
    dei: int = 0
    type_vlan: int = 0
    type_desc_vlan: str = ""


def format_mac(raw: bytes) -> str:
    """Render a hardware address as colon-separated lower-case hex pairs."""
    return ":".join(f"{octet:02x}" for octet in bytes(raw))


def ethertype_description(ethertype: int, verbose: bool) -> str:
    """Return a human-readable description of an EtherType value."""
    name = _ETHERTYPE_NAMES.get(ethertype, "Unknown")
    if verbose:
        return f"Type: {name} (0x{ethertype:x})"
    return name


def parse_ethernet(packet: bytes, verbose: bool) -> EthernetHeader:
    """Parse the Ethernet header at the start of ``packet``.

    Raises ValueError when the packet is too short for the header.
    """
    data = bytes(packet)
    if len(data) < ETHER_HEADER_SIZE:
        raise ValueError(
            f"packet too short for an Ethernet header: {len(data)} bytes"
        )
    dst, src, ethertype = _ETHER_HEADER.unpack_from(data)
    header = EthernetHeader(
        src_mac=format_mac(src),
        dst_mac=format_mac(dst),
        ethertype=ethertype,
        type_desc=ethertype_description(ethertype, verbose),
    )
    if ethertype != ETHERTYPE_VLAN:
        return header

    if len(data) < ETHER_HEADER_SIZE + VLAN_TAG_SIZE:
        raise ValueError("packet too short for an 802.1Q tag")
    tci, inner_type = _VLAN_TAG.unpack_from(data, ETHER_HEADER_SIZE)
    return EthernetHeader(
        src_mac=header.src_mac,
        dst_mac=header.dst_mac,
        ethertype=ethertype,
        type_desc=header.type_desc,
        vlan_tagged=True,
        vlan_id=tci & 0x0FFF,
        dei=(tci >> 12) & 0x1,
        pcp=(tci >> 13) & 0x7,
        type_vlan=inner_type,
        type_desc_vlan=ethertype_description(inner_type, verbose),
    )