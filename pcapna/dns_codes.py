"""Descriptions of DNS header fields and record codes (RFC 1035)."""

from __future__ import annotations

PORT_DNS = 53

DNS_NAME_MAX_SIZE = 255
DNS_LABEL_MAX_SIZE = 63
RDATA_MAX_SIZE = 512

# QR values
QR_QUERY = 0
QR_RESPONSE = 1

# OPCODE values
OP_QUERY = 0
OP_IQUERY = 1
OP_STATUS = 2

# RCODE values
RCODE_NO_ERROR = 0
RCODE_FORMAT_ERROR = 1
RCODE_SERVER_FAILURE = 2
RCODE_NAME_ERROR = 3
RCODE_NOT_IMPLEMENTED = 4
RCODE_REFUSED = 5

# TYPE/QTYPE values
TYPE_A = 1
TYPE_NS = 2
TYPE_CNAME = 5
TYPE_SOA = 6
TYPE_WKS = 11
TYPE_PTR = 12
TYPE_HINFO = 13
TYPE_MINFO = 14
TYPE_MX = 15
TYPE_TXT = 16
TYPE_HTTPS = 65

# CLASS/QCLASS values
CLASS_IN = 1
CLASS_CH = 3
CLASS_HS = 4

_QR = {
    QR_QUERY: ("Query", "QUERY"),
    QR_RESPONSE: ("Response", "RESPONSE"),
}

_OPCODES = {
    OP_QUERY: ("Standard query", "op: QUERY"),
    OP_IQUERY: ("Inverse query", "op: IQUERY"),
    OP_STATUS: ("Server status request", "op: STATUS"),
}

_RCODES = {
    RCODE_NO_ERROR: ("No error", "res: 0 !"),
    RCODE_FORMAT_ERROR: ("Format error", "res: format !"),
    RCODE_SERVER_FAILURE: ("Server failure", "res: server !"),
    RCODE_NAME_ERROR: ("Name error", "res: name !"),
    RCODE_NOT_IMPLEMENTED: ("Not implemented", "res: !impl"),
    RCODE_REFUSED: ("Refused", "res: X"),
}

_CLASSES = {
    CLASS_IN: ("IN", "the Internet"),
    CLASS_CH: ("CH", "the CHAOS class"),
    CLASS_HS: ("HS", "Hesiod"),
}

# TYPE_WKS is deliberately absent: it is reported as unknown.
_TYPES = {
    TYPE_A: ("A", "host address"),
    TYPE_NS: ("NS", "authoritative name server"),
    TYPE_CNAME: ("CNAME", "canonical name"),
    TYPE_SOA: ("SOA", "zone of authority"),
    TYPE_PTR: ("PTR", "domain name pointer"),
    TYPE_HINFO: ("HINFO", "host information"),
    TYPE_MINFO: ("MINFO", "mailbox or mail list information"),
    TYPE_MX: ("MX", "mail exchange"),
    TYPE_TXT: ("TXT", "text strings"),
    TYPE_HTTPS: ("HTTPS", "Specific Service Endpoints"),
}


def _flag_description(value: int, verbose_name: str, terse: str, verbose: bool) -> str:
    if value != 1:
        return ""
    return f"{verbose_name} ({value})" if verbose else terse


def qr_description(qr: int, verbose: bool) -> str:
    """Describe the QR bit; values other than 0 and 1 give an empty string."""
    names = _QR.get(qr)
    if names is None:
        return ""
    verbose_name, terse = names
    return f"{verbose_name} ({qr})" if verbose else terse


def opcode_description(opcode: int, verbose: bool) -> str:
    """Describe a DNS opcode."""
    verbose_name, terse = _OPCODES.get(opcode, ("Unknown", "op: ?"))
    return f"Message has: {verbose_name} ({opcode})" if verbose else terse


def rcode_description(rcode: int, verbose: bool) -> str:
    """Describe a DNS response code."""
    verbose_name, terse = _RCODES.get(rcode, ("Unknown", "res: ?"))
    return f"{verbose_name} ({rcode})" if verbose else terse


def aa_description(aa: int, verbose: bool) -> str:
    """Describe the Authoritative Answer bit; empty when it is clear."""
    return _flag_description(aa, "Authoritative", "Auth", verbose)


def tc_description(tc: int, verbose: bool) -> str:
    """Describe the TrunCation bit; empty when it is clear."""
    return _flag_description(tc, "Truncated", "Trunc", verbose)


def rd_description(rd: int, verbose: bool) -> str:
    """Describe the Recursion Desired bit; empty when it is clear."""
    return _flag_description(rd, "Recursion desired", "Recursion", verbose)


def ra_description(ra: int, verbose: bool) -> str:
    """Describe the Recursion Available bit; empty when it is clear."""
    return _flag_description(ra, "Recursion available", "Rec", verbose)


def class_description(data_class: int, verbose: bool) -> str:
    """Describe a CLASS/QCLASS value."""
    names = _CLASSES.get(data_class)
    if names is None:
        return f"class: Unknown ({data_class})" if verbose else "class: ?"
    name, meaning = names
    return f"{name} ({data_class}) {meaning}" if verbose else name


def type_description(rr_type: int, verbose: bool) -> str:
    """Describe a TYPE/QTYPE value."""
    names = _TYPES.get(rr_type)
    if names is None:
        return f"qtype: Unknown ({rr_type})" if verbose else "qtype: ?"
    name, meaning = names
    return f"{name} ({rr_type}) {meaning}" if verbose else name