import pytest

from pcapna.dns import DnsError, parse_dns, process_rdata, read_name

SIMPLE_PACKET = bytes([
    0x01, 0x9f, 0x01, 0x00, 0x00, 0x01, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x02, 0x39, 0x35, 0x01,
    0x36, 0x03, 0x31, 0x39, 0x32, 0x02, 0x31, 0x30,
    0x07, 0x69, 0x6e, 0x2d, 0x61, 0x64, 0x64, 0x72,
    0x04, 0x61, 0x72, 0x70, 0x61, 0x00, 0x00, 0x0c,
    0x00, 0x01,
])

COMPLEX_PACKET = bytes([
    0x4e, 0x0f, 0x81, 0x80, 0x00, 0x01, 0x00, 0x02,
    0x00, 0x01, 0x00, 0x00, 0x05, 0x76, 0x61, 0x6c,
    0x69, 0x64, 0x05, 0x61, 0x70, 0x70, 0x6c, 0x65,
    0x03, 0x63, 0x6f, 0x6d, 0x00, 0x00, 0x41, 0x00,
    0x01, 0xc0, 0x0c, 0x00, 0x05, 0x00, 0x01, 0x00,
    0x00, 0x17, 0x54, 0x00, 0x23, 0x05, 0x76, 0x61,
    0x6c, 0x69, 0x64, 0x0c, 0x6f, 0x72, 0x69, 0x67,
    0x69, 0x6e, 0x2d, 0x61, 0x70, 0x70, 0x6c, 0x65,
    0x03, 0x63, 0x6f, 0x6d, 0x06, 0x61, 0x6b, 0x61,
    0x64, 0x6e, 0x73, 0x03, 0x6e, 0x65, 0x74, 0x00,
    0xc0, 0x2d, 0x00, 0x05, 0x00, 0x01, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x1b, 0x0b, 0x76, 0x61, 0x6c,
    0x69, 0x64, 0x2d, 0x61, 0x70, 0x70, 0x6c, 0x65,
    0x01, 0x67, 0x07, 0x61, 0x61, 0x70, 0x6c, 0x69,
    0x6d, 0x67, 0x03, 0x63, 0x6f, 0x6d, 0x00, 0x01,
    0x67, 0x07, 0x61, 0x61, 0x70, 0x6c, 0x69, 0x6d,
    0x67, 0x03, 0x63, 0x6f, 0x6d, 0x00, 0x00, 0x06,
    0x00, 0x01, 0x00, 0x00, 0x01, 0x21, 0x00, 0x3e,
    0x01, 0x61, 0x04, 0x67, 0x73, 0x6c, 0x62, 0x07,
    0x61, 0x61, 0x70, 0x6c, 0x69, 0x6d, 0x67, 0x03,
    0x63, 0x6f, 0x6d, 0x00, 0x0a, 0x68, 0x6f, 0x73,
    0x74, 0x6d, 0x61, 0x73, 0x74, 0x65, 0x72, 0x05,
    0x61, 0x70, 0x70, 0x6c, 0x65, 0x03, 0x63, 0x6f,
    0x6d, 0x00, 0x66, 0x88, 0xe1, 0x1f, 0x00, 0x00,
    0x07, 0x08, 0x00, 0x00, 0x01, 0x2c, 0x00, 0x00,
    0xec, 0x40, 0x00, 0x00, 0x01, 0x2c,
])


def test_parse_dns_simple_header():
    header = parse_dns(SIMPLE_PACKET, False)
    assert header.transaction_id == 0x019F
    assert header.qr == 0
    assert header.qr_desc == "QUERY"
    assert header.opcode == 0
    assert header.opcode_desc == "op: QUERY"
    assert header.aa == 0
    assert header.tc == 0
    assert header.rd == 1
    assert header.rd_desc == "Recursion"
    assert header.ra == 0
    assert header.z == 0
    assert header.rcode == 0
    assert (header.qdcount, header.ancount, header.nscount, header.arcount) == (1, 0, 0, 0)


def test_parse_dns_simple_question():
    header = parse_dns(SIMPLE_PACKET, False)
    assert len(header.questions) == 1
    question = header.questions[0]
    assert question.qname == "95.6.192.10.in-addr.arpa"
    assert question.qtype == 12
    assert question.qtype_desc == "PTR"
    assert question.qclass == 1
    assert question.qclass_desc == "IN"


def test_parse_dns_complex_header():
    header = parse_dns(COMPLEX_PACKET, False)
    assert header.transaction_id == 0x4E0F
    assert header.qr == 1
    assert header.qr_desc == "RESPONSE"
    assert header.opcode == 0
    assert header.opcode_desc == "op: QUERY"
    assert header.aa == 0
    assert header.tc == 0
    assert header.rd == 1
    assert header.rd_desc == "Recursion"
    assert header.ra == 1
    assert header.ra_desc == "Rec"
    assert header.z == 0
    assert header.rcode == 0
    assert header.rcode_desc == "res: 0 !"
    assert (header.qdcount, header.ancount, header.nscount, header.arcount) == (1, 2, 1, 0)


def test_parse_dns_complex_question():
    question = parse_dns(COMPLEX_PACKET, False).questions[0]
    assert question.qname == "valid.apple.com"
    assert question.qtype == 65
    assert question.qtype_desc == "HTTPS"
    assert question.qclass == 1
    assert question.qclass_desc == "IN"


def test_parse_dns_complex_answers():
    header = parse_dns(COMPLEX_PACKET, False)
    assert len(header.answers) == 2
    first, second = header.answers

    assert first.rr_type == 5
    assert first.type_desc == "CNAME"
    assert first.data_class == 1
    assert first.class_desc == "IN"
    assert first.ttl == 5972
    assert first.rdlength == 35
    assert first.rdata_desc == ".valid.origin-apple.com.akadns.net."

    assert second.rr_type == 5
    assert second.type_desc == "CNAME"
    assert second.data_class == 1
    assert second.class_desc == "IN"
    assert second.ttl == 0
    assert second.rdlength == 27
    assert second.rdata_desc == ".valid-apple.g.aaplimg.com."


def test_parse_dns_complex_answer_names_follow_pointers():
    header = parse_dns(COMPLEX_PACKET, False)
    assert header.answers[0].name == "valid.apple.com"
    assert header.answers[1].name == "valid.origin-apple.com.akadns.net"


def test_parse_dns_complex_authority():
    header = parse_dns(COMPLEX_PACKET, False)
    assert len(header.authorities) == 1
    authority = header.authorities[0]
    assert authority.name == "g.aaplimg.com"
    assert authority.rr_type == 6
    assert authority.type_desc == "SOA"
    assert authority.data_class == 1
    assert authority.class_desc == "IN"
    assert authority.ttl == 289
    assert authority.rdlength == 62
    assert authority.rdata_desc == (
        ".a.gslb.aaplimg.com..hostmaster.apple.com.f..........,...@...,"
    )
    assert header.additionals == []


def test_parse_dns_verbose_descriptions():
    header = parse_dns(COMPLEX_PACKET, True)
    assert header.qr_desc == "Response (1)"
    assert header.opcode_desc == "Message has: Standard query (0)"
    assert header.rd_desc == "Recursion desired (1)"
    assert header.ra_desc == "Recursion available (1)"
    assert header.rcode_desc == "No error (0)"
    assert header.questions[0].qclass_desc == "IN (1) the Internet"
    assert header.answers[0].type_desc == "CNAME (5) canonical name"


def test_rdata_length_matches_bytes():
    header = parse_dns(COMPLEX_PACKET, False)
    for record in header.answers + header.authorities:
        assert len(record.rdata) == record.rdlength
        assert len(record.rdata_desc) == record.rdlength


def test_process_rdata_replaces_unprintable():
    assert process_rdata(b"\x03abc\x00~\x7f ") == ".abc.~. "


def test_read_name_inline():
    data = b"\x03www\x07example\x03com\x00rest"
    assert read_name(data, 0) == ("www.example.com", 17)


def test_read_name_pointer_consumes_two_bytes():
    assert read_name(COMPLEX_PACKET, 33) == ("valid.apple.com", 35)


def test_read_name_label_then_pointer():
    data = b"\x03com\x00\x07example\xc0\x00"
    assert read_name(data, 5) == ("example.com", 15)


def test_read_name_root():
    assert read_name(b"\x00", 0) == ("", 1)


def test_read_name_pointer_loop_raises():
    with pytest.raises(DnsError):
        read_name(b"\xc0\x00", 0)


def test_read_name_label_too_long_raises():
    data = bytes([64]) + b"a" * 64 + b"\x00"
    with pytest.raises(DnsError):
        read_name(data, 0)


def test_read_name_too_long_raises():
    data = (bytes([63]) + b"a" * 63) * 5 + b"\x00"
    with pytest.raises(DnsError):
        read_name(data, 0)


def test_read_name_truncated_raises():
    with pytest.raises(DnsError):
        read_name(b"\x05ab", 0)


def test_parse_dns_short_header_raises():
    with pytest.raises(DnsError):
        parse_dns(b"\x00" * 11, False)


def test_parse_dns_truncated_record_raises():
    with pytest.raises(DnsError):
        parse_dns(COMPLEX_PACKET[:-5], False)


def test_dns_error_is_value_error():
    with pytest.raises(ValueError):
        parse_dns(SIMPLE_PACKET[:20], False)