"""BOOTP (RFC 951) and DHCP option parsing."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field

from pcapna.ethernet import format_mac

PORT_BOOTPS = 67
PORT_BOOTPC = 68

BOOTREQUEST = 1
BOOTREPLY = 2

# DHCP option codes
DHCP_PAD = 0
DHCP_SUBNET_MASK = 1
DHCP_TIME_OFFSET = 2
DHCP_ROUTER = 3
DHCP_DNS = 6
DHCP_HOST_NAME = 12
DHCP_DOMAIN_NAME = 15
DHCP_BROADCAST_ADDRESS = 28
DHCP_NETBIOS_NAME_SERVER = 44
DHCP_NETBIOS_SCOPE = 47
DHCP_REQUESTED_IP_ADDRESS = 50
DHCP_IP_ADDRESS_LEASE_TIME = 51
DHCP_MESSAGE_TYPE = 53
DHCP_SERVER_IDENTIFIER = 54
DHCP_PARAMETER_REQUEST_LIST = 55
DHCP_CLIENT_IDENTIFIER = 61
DHCP_END = 0xFF

# DHCP message types
DHCPDISCOVER = 1
DHCPOFFER = 2
DHCPREQUEST = 3
DHCPDECLINE = 4
DHCPACK = 5
DHCPNAK = 6
DHCPRELEASE = 7

MAGIC_COOKIE = 0x63825363

# op, htype, hlen, hops, xid, secs, flags, ciaddr, yiaddr, siaddr, giaddr,
# chaddr, sname, file
_FIXED = struct.Struct("!BBBBIHH4s4s4s4s16s64s128s")
FIXED_SIZE = _FIXED.size  # 236
VENDOR_AREA_SIZE = 64
OPTIONS_OFFSET = FIXED_SIZE + 4  # the magic cookie precedes the options

_MESSAGE_TYPE_NAMES = {
    DHCPDISCOVER: "Discover",
    DHCPOFFER: "Offer",
    DHCPREQUEST: "Request",
    DHCPDECLINE: "Decline",
    DHCPACK: "ACK",
    DHCPNAK: "NAK",
    DHCPRELEASE: "Release",
}

_HARDWARE_TYPE_NAMES = {
    1: "Ethernet",
    6: "IEEE 802",
}

# How each known option's value is rendered.
_IPV4, _TEXT, _U32, _CODE_LIST, _MESSAGE = "ipv4", "text", "u32", "list", "message"

_OPTION_KINDS = {
    DHCP_MESSAGE_TYPE: ("DHCP Message Type", _MESSAGE),
    DHCP_SUBNET_MASK: ("Subnet Mask", _IPV4),
    DHCP_TIME_OFFSET: ("Time Offset", _U32),
    DHCP_ROUTER: ("Router", _IPV4),
    DHCP_DNS: ("DNS", _IPV4),
    DHCP_HOST_NAME: ("Host Name", _TEXT),
    DHCP_DOMAIN_NAME: ("Domain Name", _TEXT),
    DHCP_BROADCAST_ADDRESS: ("Broadcast Address", _IPV4),
    DHCP_NETBIOS_NAME_SERVER: ("NetBIOS Name Server", _IPV4),
    DHCP_NETBIOS_SCOPE: ("NetBIOS Scope", _TEXT),
    DHCP_REQUESTED_IP_ADDRESS: ("Requested IP Address", _IPV4),
    DHCP_IP_ADDRESS_LEASE_TIME: ("IP Address Lease Time", _U32),
    DHCP_SERVER_IDENTIFIER: ("Server Identifier", _IPV4),
    DHCP_PARAMETER_REQUEST_LIST: ("Parameter Request List", _CODE_LIST),
    DHCP_CLIENT_IDENTIFIER: ("Client Identifier", _TEXT),
}


@dataclass(frozen=True)
class DhcpOption:
    """One DHCP option: its code, length and decoded value."""

    code: int
    code_desc: str
    length: int
    value: int = 0
    value_desc: str = ""


@dataclass(frozen=True)
class BootpHeader:
    """Decoded BOOTP message, with its DHCP options in wire order."""

    op: int
    op_desc: str
    htype: int
    htype_desc: str
    hlen: int
    hops: int
    xid: int
    secs: int
    flags: int
    client_ip_address: str
    your_ip_address: str
    server_ip_address: str
    gateway_ip_address: str
    client_hardware_address: str
    server_host_name: str
    boot_file_name: str
    vendor_specific_area: bytes
    magic_cookie: int
    dhcp_options: list[DhcpOption] = field(default_factory=list)

    @property
    def message_type(self) -> DhcpOption | None:
        """The DHCP Message Type option, or None for plain BOOTP."""
        return next(
            (opt for opt in self.dhcp_options if opt.code == DHCP_MESSAGE_TYPE),
            None,
        )

    @property
    def broadcast(self) -> bool:
        """Whether the DHCP broadcast flag is set."""
        return bool(self.flags & 0x8000)


def ipv4_to_string(raw: bytes) -> str:
    """Render four bytes as a dotted IPv4 address; ``0.0.0.0`` if malformed."""
    data = bytes(raw)
    if len(data) < 4:
        return "0.0.0.0"
    return str(ipaddress.IPv4Address(data[:4]))


def bp_op_description(op: int, verbose: bool) -> str:
    """Describe a BOOTP operation code."""
    name = {BOOTREQUEST: "BOOTREQUEST", BOOTREPLY: "BOOTREPLY"}.get(op)
    if name is None:
        return f"Operation: Unknown ({op})" if verbose else f"Unknown ({op})"
    return f"Operation: {name} ({op})" if verbose else name


def dhcp_message_type_description(message_type: int, verbose: bool) -> str:
    """Describe a DHCP message type; unknown types give an empty string."""
    name = _MESSAGE_TYPE_NAMES.get(message_type)
    if name is None:
        return ""
    return f"{name} ({message_type})" if verbose else name


def _hardware_type_description(htype: int, verbose: bool) -> str:
    name = _HARDWARE_TYPE_NAMES.get(htype, "Unknown")
    return f"{name} ({htype})" if verbose else name


def _c_string(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("latin-1")


def _decode_option(code: int, value: bytes, verbose: bool) -> DhcpOption:
    name, kind = _OPTION_KINDS.get(code, ("Unknown", None))
    code_desc = f"{name} ({code})"
    length = len(value)
    if kind == _MESSAGE:
        message = value[0] if value else 0
        return DhcpOption(
            code, code_desc, length, message,
            dhcp_message_type_description(message, verbose),
        )
    if kind == _IPV4:
        # Only the first address of a list is shown.
        return DhcpOption(code, code_desc, length, 0, ipv4_to_string(value))
    if kind == _TEXT:
        return DhcpOption(code, code_desc, length, 0, value.decode("latin-1"))
    if kind == _U32:
        number = int.from_bytes(value[:4], "big") if len(value) >= 4 else 0
        return DhcpOption(code, code_desc, length, number, "")
    if kind == _CODE_LIST:
        return DhcpOption(code, code_desc, length, 0, ",".join(str(b) for b in value))
    return DhcpOption(code, code_desc, length, 0, "")


def parse_dhcp_options(options: bytes, verbose: bool) -> list[DhcpOption]:
    """Decode DHCP options until an end (0xFF) or pad (0) byte, or the data ends.

    Raises ValueError when an option runs past the end of the data.
    """
    data = bytes(options)
    parsed = []
    pos = 0
    while pos < len(data) and data[pos] not in (DHCP_END, DHCP_PAD):
        code = data[pos]
        if pos + 1 >= len(data):
            raise ValueError(f"DHCP option {code} is missing its length")
        length = data[pos + 1]
        start = pos + 2
        if start + length > len(data):
            raise ValueError(f"DHCP option {code} is truncated")
        parsed.append(_decode_option(code, data[start:start + length], verbose))
        pos = start + length
    return parsed


def parse_bootp(packet: bytes, verbose: bool) -> BootpHeader:
    """Parse a BOOTP/DHCP message starting at the beginning of ``packet``.

    Raises ValueError when the packet is shorter than the fixed header
    and magic cookie.
    """
    data = bytes(packet)
    if len(data) < OPTIONS_OFFSET:
        raise ValueError(f"packet too short for a BOOTP message: {len(data)} bytes")
    (op, htype, hlen, hops, xid, secs, flags, ciaddr, yiaddr, siaddr, giaddr,
     chaddr, sname, boot_file) = _FIXED.unpack_from(data)

    vendor = data[FIXED_SIZE:FIXED_SIZE + VENDOR_AREA_SIZE]
    return BootpHeader(
        op=op,
        op_desc=bp_op_description(op, verbose),
        htype=htype,
        htype_desc=_hardware_type_description(htype, verbose),
        hlen=hlen,
        hops=hops,
        xid=xid,
        secs=secs,
        flags=flags,
        client_ip_address=ipv4_to_string(ciaddr) if op == BOOTREQUEST else "",
        your_ip_address=ipv4_to_string(yiaddr),
        server_ip_address=ipv4_to_string(siaddr) if op == BOOTREPLY else "",
        gateway_ip_address=ipv4_to_string(giaddr) if any(giaddr) else "",
        client_hardware_address=format_mac(chaddr[:6]),
        server_host_name=_c_string(sname),
        boot_file_name=_c_string(boot_file),
        vendor_specific_area=vendor,
        magic_cookie=int.from_bytes(vendor[:4], "big"),
        dhcp_options=parse_dhcp_options(data[OPTIONS_OFFSET:], verbose),
    )