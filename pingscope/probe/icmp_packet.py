import struct

ICMP_ECHO_REQUEST_V4 = 8
ICMP_ECHO_REPLY_V4 = 0
ICMP_ECHO_REQUEST_V6 = 128
ICMP_ECHO_REPLY_V6 = 129

ICMP_HEADER = struct.Struct("!BBHHH")


def checksum(data: bytes) -> int:
    """RFC 1071 ones' complement sum over 16-bit words."""
    if len(data) % 2:
        data += b"\x00"

    total = sum(struct.unpack(f"!{len(data) // 2}H", data))

    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)

    return ~total & 0xFFFF


def build_echo_request(
    identifier: int,
    sequence: int,
    payload: bytes,
    ip_version: int = 4,
) -> bytes:
    identifier &= 0xFFFF
    sequence &= 0xFFFF

    if ip_version == 6:
        # The kernel fills in the ICMPv6 checksum.
        return (
            ICMP_HEADER.pack(ICMP_ECHO_REQUEST_V6, 0, 0, identifier, sequence)
            + payload
        )

    header = ICMP_HEADER.pack(ICMP_ECHO_REQUEST_V4, 0, 0, identifier, sequence)

    return (
        ICMP_HEADER.pack(
            ICMP_ECHO_REQUEST_V4,
            0,
            checksum(header + payload),
            identifier,
            sequence,
        )
        + payload
    )


def parse_echo_reply(
    data: bytes,
    ip_version: int = 4,
    has_ip_header: bool = False,
) -> tuple[int, int] | None:
    """
    Return ``(identifier, sequence)`` for an echo reply, or None for any
    other ICMP message. Raw IPv4 sockets deliver the IP header too.
    """
    if has_ip_header and ip_version == 4 and len(data) > 0:
        data = data[(data[0] & 0x0F) * 4 :]

    if len(data) < ICMP_HEADER.size:
        return None

    icmp_type, _, _, identifier, sequence = ICMP_HEADER.unpack_from(data)

    expected = ICMP_ECHO_REPLY_V6 if ip_version == 6 else ICMP_ECHO_REPLY_V4
    if icmp_type != expected:
        return None

    return identifier, sequence
