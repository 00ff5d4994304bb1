# pcapna

Decoders for the headers found in captured network traffic (Ethernet,
BOOTP/DHCP and DNS), and a helper that describes the machine's network
interfaces.

## Installation

```
pip install .
```

## Decoders

Every parser takes the raw bytes of the header and a `verbose` flag. With
`verbose=False` descriptions are short, such as `"IP"` or `"PTR"`; with
`verbose=True` they are longer, such as `"Type: IP (0x800)"` or
`"PTR (12) domain name pointer"`. Results are frozen dataclasses.

### Ethernet — `pcapna.ethernet`

- `parse_ethernet(packet, verbose)` returns an `EthernetHeader` with
  `src_mac`, `dst_mac`, `ethertype` and `type_desc`. For 802.1Q frames
  (EtherType `0x8100`) it also sets `vlan_tagged`, `vlan_id`, `pcp`, `dei`,
  `type_vlan` and `type_desc_vlan`. A packet too short for the header or the
  VLAN tag raises `ValueError`.
- `format_mac(raw)` renders bytes as `aa:bb:cc:...`.
- `ethertype_description(ethertype, verbose)` names an EtherType.

```python
from pcapna.ethernet import parse_ethernet

frame = bytes.fromhex("001122334455" "66778899aabb" "0800")
header = parse_ethernet(frame, verbose=False)
print(header.src_mac, ">", header.dst_mac, header.type_desc)
# 66:77:88:99:aa:bb > 00:11:22:33:44:55 IP
```

### BOOTP / DHCP — `pcapna.dhcp_bootp`

- `parse_bootp(packet, verbose)` returns a `BootpHeader`: operation, hardware
  type and length, hops, transaction id, seconds, flags, client / "your" /
  server / gateway addresses, client hardware address, server host name, boot
  file name, the 64-byte vendor area, the magic cookie and `dhcp_options`.
  The client address is filled only for requests, the server address only for
  replies, and the gateway address only when it is non-zero; otherwise they
  are empty strings. The `message_type` property gives the DHCP Message Type
  option (or `None`), and `broadcast` tells whether the broadcast flag is set.
  A packet shorter than the fixed header and magic cookie raises `ValueError`.
- `parse_dhcp_options(options, verbose)` decodes options until an end or pad
  byte, returning `DhcpOption` entries (`code`, `code_desc`, `length`, `value`,
  `value_desc`). A truncated option raises `ValueError`.
- `ipv4_to_string(raw)`, `bp_op_description(op, verbose)` and
  `dhcp_message_type_description(message_type, verbose)` are helpers.

### DNS — `pcapna.dns` and `pcapna.dns_codes`

- `parse_dns(packet, verbose)` returns a `DnsHeader` with the transaction id,
  the QR / opcode / AA / TC / RD / RA / Z / RCODE fields and their
  descriptions, the four section counts, and `questions` (`Question`) and
  `answers`, `authorities`, `additionals` (`ResourceRecord`). Compressed names
  are followed. Malformed or truncated messages raise `DnsError`, a subclass
  of `ValueError`.
- `read_name(data, offset)` reads one domain name and returns it with the
  offset just past it.
- `process_rdata(rdata)` renders record data as text, unprintable bytes as `.`.
- `pcapna.dns_codes` holds the field constants and the description functions
  `qr_description`, `opcode_description`, `rcode_description`,
  `aa_description`, `tc_description`, `rd_description`, `ra_description`,
  `class_description` and `type_description`.

## Network interfaces — `pcapna.interface`

- `get_interfaces()` lists the local interfaces as `Device` objects (name,
  addresses as `(family, address)` pairs, and `InterfaceFlag` flags).
- `get_interface(name, devices)` returns the device with that name, or `None`.
- `get_interface_infos(device)` returns an `InterfaceInfo` whose `flags` is a
  summary such as `"<UP,LOOPBACK> status UP"` and whose `addresses` are lines
  such as `"IPv4: 127.0.0.1"`, `"IPv6: ::1"` or `"MAC: ..."`.

## What it does not do

The package only decodes bytes it is given and lists interfaces. It does not
capture packets, read capture files, apply packet filters or provide a
command-line program, and it has no decoders for IPv4, IPv6, ARP, ICMP, TCP
or UDP headers.

## Running the tests

```
pip install ".[test]"
pytest
```