"""DNS message parsing (RFC 1035): header, questions and resource records."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from pcapna.dns_codes import (
    DNS_LABEL_MAX_SIZE,
    DNS_NAME_MAX_SIZE,
    aa_description,
    class_description,
    opcode_description,
    qr_description,
    ra_description,
    rcode_description,
    rd_description,
    tc_description,
    type_description,
)

HEADER_SIZE = 12

_HEADER = struct.Struct("!HBBHHHH")
_QUESTION_TAIL = struct.Struct("!HH")
_RECORD_TAIL = struct.Struct("!HHIH")

_POINTER_MASK = 0xC0


class DnsError(ValueError):
    """Raised when a DNS message is malformed or truncated."""


@dataclass(frozen=True)
class Question:
    """One entry of the question section."""

    qname: str
    qtype: int
    qtype_desc: str
    qclass: int
    qclass_desc: str


@dataclass(frozen=True)
class ResourceRecord:
    """One resource record of the answer, authority or additional section."""

    name: str
    rr_type: int
    type_desc: str
    data_class: int
    class_desc: str
    ttl: int
    rdlength: int
    rdata: bytes
    rdata_desc: str


@dataclass(frozen=True)
class DnsHeader:
    """Decoded DNS message: header fields and the four sections."""

    transaction_id: int
    qr: int
    qr_desc: str
    opcode: int
    opcode_desc: str
    aa: int
    aa_desc: str
    tc: int
    tc_desc: str
    rd: int
    rd_desc: str
    ra: int
    ra_desc: str
    z: int
    rcode: int
    rcode_desc: str
    qdcount: int
    ancount: int
    nscount: int
    arcount: int
    questions: list[Question] = field(default_factory=list)
    answers: list[ResourceRecord] = field(default_factory=list)
    authorities: list[ResourceRecord] = field(default_factory=list)
    additionals: list[ResourceRecord] = field(default_factory=list)


def process_rdata(rdata: bytes) -> str:
    """Render record data as text, replacing unprintable bytes with '.'."""
    return "".join(chr(b) if 0x20 <= b <= 0x7E else "." for b in bytes(rdata))


def read_name(data: bytes, offset: int) -> tuple[str, int]:
    """Read a domain name at ``offset``, following compression pointers.

    Returns the dotted name and the offset just past the name as it is
    stored at ``offset``. Raises DnsError on a malformed name.
    """
    data = bytes(data)
    labels: list[str] = []
    end: int | None = None
    pos = offset
    encoded = 0
    visited: set[int] = set()
    while True:
        if pos >= len(data):
            raise DnsError("DNS name runs past the end of the message")
        length = data[pos]
        if length & _POINTER_MASK == _POINTER_MASK:
            if pos + 1 >= len(data):
                raise DnsError("DNS name pointer is truncated")
            target = ((length & 0x3F) << 8) | data[pos + 1]
            if end is None:
                end = pos + 2
            if target in visited:
                raise DnsError("DNS name pointers form a loop")
            visited.add(target)
            pos = target
            continue
        if length == 0:
            break
        if length > DNS_LABEL_MAX_SIZE:
            raise DnsError(f"Invalid label length in DNS name: {length}")
        encoded += length + 1
        if encoded > DNS_NAME_MAX_SIZE:
            raise DnsError("Name exceeds maximum allowed size")
        label = data[pos + 1:pos + 1 + length]
        if len(label) < length:
            raise DnsError("DNS label runs past the end of the message")
        labels.append(label.decode("latin-1"))
        pos += length + 1
    if end is None:
        end = pos + 1
    return ".".join(labels), end


def _read_question(data: bytes, offset: int, verbose: bool) -> tuple[Question, int]:
    qname, pos = read_name(data, offset)
    if pos + _QUESTION_TAIL.size > len(data):
        raise DnsError("DNS question is truncated")
    qtype, qclass = _QUESTION_TAIL.unpack_from(data, pos)
    question = Question(
        qname=qname,
        qtype=qtype,
        qtype_desc=type_description(qtype, verbose),
        qclass=qclass,
        qclass_desc=class_description(qclass, verbose),
    )
    return question, pos + _QUESTION_TAIL.size


def _read_record(data: bytes, offset: int, verbose: bool) -> tuple[ResourceRecord, int]:
    name, pos = read_name(data, offset)
    if pos + _RECORD_TAIL.size > len(data):
        raise DnsError("DNS resource record is truncated")
    rr_type, data_class, ttl, rdlength = _RECORD_TAIL.unpack_from(data, pos)
    pos += _RECORD_TAIL.size
    rdata = data[pos:pos + rdlength]
    if len(rdata) < rdlength:
        raise DnsError("DNS record data runs past the end of the message")
    record = ResourceRecord(
        name=name,
        rr_type=rr_type,
        type_desc=type_description(rr_type, verbose),
        data_class=data_class,
        class_desc=class_description(data_class, verbose),
        ttl=ttl,
        rdlength=rdlength,
        rdata=rdata,
        rdata_desc=process_rdata(rdata),
    )
    return record, pos + rdlength


def _read_records(data: bytes, offset: int, count: int, verbose: bool):
    records = []
    for _ in range(count):
        record, offset = _read_record(data, offset, verbose)
        records.append(record)
    return records, offset


def parse_dns(packet: bytes, verbose: bool) -> DnsHeader:
    """Parse a DNS message starting at the beginning of ``packet``.

    Raises DnsError when the message is malformed or truncated.
    """
    data = bytes(packet)
    if len(data) < HEADER_SIZE:
        raise DnsError(f"packet too short for a DNS header: {len(data)} bytes")
    xid, flags_hi, flags_lo, qdcount, ancount, nscount, arcount = _HEADER.unpack_from(data)

    qr = (flags_hi & 0x80) >> 7
    opcode = (flags_hi & 0x78) >> 3
    aa = (flags_hi & 0x04) >> 2
    tc = (flags_hi & 0x02) >> 1
    rd = flags_hi & 0x01
    ra = (flags_lo & 0x80) >> 7
    z = (flags_lo & 0x70) >> 4
    rcode = flags_lo & 0x0F

    offset = HEADER_SIZE
    questions = []
    for _ in range(qdcount):
        question, offset = _read_question(data, offset, verbose)
        questions.append(question)
    answers, offset = _read_records(data, offset, ancount, verbose)
    authorities, offset = _read_records(data, offset, nscount, verbose)
    additionals, offset = _read_records(data, offset, arcount, verbose)

    return DnsHeader(
        transaction_id=xid,
        qr=qr,
        qr_desc=qr_description(qr, verbose),
        opcode=opcode,
        opcode_desc=opcode_description(opcode, verbose),
        aa=aa,
        aa_desc=aa_description(aa, verbose),
        tc=tc,
        tc_desc=tc_description(tc, verbose),
        rd=rd,
        rd_desc=rd_description(rd, verbose),
        ra=ra,
        ra_desc=ra_description(ra, verbose),
        z=z,
        rcode=rcode,
        rcode_desc=rcode_description(rcode, verbose),
        qdcount=qdcount,
        ancount=ancount,
        nscount=nscount,
        arcount=arcount,
        questions=questions,
        answers=answers,
        authorities=authorities,
        additionals=additionals,
    )