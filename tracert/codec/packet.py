# tracert/codec/packet.py
"""
ICMP echo-request encoding and validation of raw IPv4 responses.

A raw ICMP socket hands back the whole IP datagram, so every read starts by
walking the outer IP header (IHL field), and for time-exceeded messages the
quoted inner IP header as well (its own IHL field).
"""
import struct

from tracert.codec import checksum
from tracert.schemas import Classification, EchoReply, TimeExceeded, Unrecognized

ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8
ICMP_TIME_EXCEEDED = 11

ICMP_HEADER_LEN = 8
MIN_IP_HEADER_LEN = 20


def probe_sequence(ttl: int, probes_per_hop: int, probe_index: int) -> int:
    """Sequence number unique to (ttl, probe_index) for the whole run."""
    return (ttl * probes_per_hop + probe_index) & 0xFFFF


def encode_echo_request(identifier: int, sequence: int) -> bytes:
    """Build an 8-byte echo request: type 8, code 0, checksum, identifier, sequence."""
    header = bytearray(struct.pack("!BBHHH", ICMP_ECHO_REQUEST, 0, 0, identifier, sequence))
    struct.pack_into("!H", header, 2, checksum.compute(header))
    return bytes(header)


def _ihl_len(view: memoryview, offset: int) -> int:
    return (view[offset] & 0x0F) * 4


def _id_seq(view: memoryview, icmp_start: int) -> tuple[int, int]:
    return struct.unpack_from("!HH", view, icmp_start + 4)


def classify(buffer: bytes, received_length: int | None = None) -> Classification:
    """
    Classify a raw IPv4+ICMP buffer and pull out the probe identity it carries.

    Only the first `received_length` bytes are considered (defaults to the
    whole buffer). Anything truncated or of another ICMP type is Unrecognized.
    """
    if received_length is None:
        received_length = len(buffer)
    received_length = min(received_length, len(buffer))
    view = memoryview(buffer).toreadonly()[:received_length]

    if received_length < 1:
        return Unrecognized("empty")

    outer_len = _ihl_len(view, 0)
    if received_length < outer_len + ICMP_HEADER_LEN:
        return Unrecognized("shorter than outer header + icmp header")

    msg_type = view[outer_len]

    if msg_type == ICMP_ECHO_REPLY:
        ident, seq = _id_seq(view, outer_len)
        return EchoReply(identifier=ident, sequence=seq)

    if msg_type == ICMP_TIME_EXCEEDED:
        inner_start = outer_len + ICMP_HEADER_LEN
        if received_length < inner_start + MIN_IP_HEADER_LEN + ICMP_HEADER_LEN:
            return Unrecognized("time exceeded too short for quoted header")
        inner_len = _ihl_len(view, inner_start)
        quoted_icmp = inner_start + inner_len
        if received_length < quoted_icmp + ICMP_HEADER_LEN:
            return Unrecognized("time exceeded too short for quoted icmp header")
        ident, seq = _id_seq(view, quoted_icmp)
        return TimeExceeded(embedded_identifier=ident, embedded_sequence=seq)

    return Unrecognized(f"icmp type {msg_type}")


def decode_and_validate(buffer: bytes, received_length: int,
                        expected_identifier: int, expected_sequence: int) -> bool:
    """True iff the buffer answers the probe (expected_identifier, expected_sequence)."""
    result = classify(buffer, received_length)
    if isinstance(result, EchoReply):
        return (result.identifier, result.sequence) == (expected_identifier, expected_sequence)
    if isinstance(result, TimeExceeded):
        return ((result.embedded_identifier, result.embedded_sequence)
                == (expected_identifier, expected_sequence))
    return False


# --- synthetic responses (scripted transport, tests) ---

def _ip_header(ihl: int, src: str = "0.0.0.0", dst: str = "0.0.0.0") -> bytes:
    length = ihl * 4
    src_b = bytes(int(o) for o in src.split("."))
    dst_b = bytes(int(o) for o in dst.split("."))
    header = bytearray(length)
    header[0] = 0x40 | (ihl & 0x0F)
    header[8] = 64      # ttl
    header[9] = 1       # protocol: icmp
    header[12:16] = src_b
    header[16:20] = dst_b
    return bytes(header)


def echo_reply_buffer(identifier: int, sequence: int, ihl: int = 5,
                      src: str = "0.0.0.0") -> bytes:
    """IP header + echo reply, as a raw socket would deliver it."""
    icmp = bytearray(struct.pack("!BBHHH", ICMP_ECHO_REPLY, 0, 0, identifier, sequence))
    struct.pack_into("!H", icmp, 2, checksum.compute(icmp))
    return _ip_header(ihl, src=src) + bytes(icmp)


def time_exceeded_buffer(identifier: int, sequence: int, outer_ihl: int = 5,
                         inner_ihl: int = 5, src: str = "0.0.0.0") -> bytes:
    """IP header + time exceeded message quoting an inner IP header and the original echo request."""
    quoted = _ip_header(inner_ihl) + encode_echo_request(identifier, sequence)
    icmp = bytearray(struct.pack("!BBHI", ICMP_TIME_EXCEEDED, 0, 0, 0)) + quoted
    struct.pack_into("!H", icmp, 2, checksum.compute(icmp))
    return _ip_header(outer_ihl, src=src) + bytes(icmp)
