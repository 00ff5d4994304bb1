"""Decoders for Ethernet, BOOTP/DHCP and DNS packets, and network interface listing."""

__version__ = "0.0.1"

__all__ = ["dhcp_bootp", "dns", "dns_codes", "ethernet", "interface"]