# tracert/codec/checksum.py


def compute(buffer: bytes) -> int:
    """
    RFC 1071 internet checksum.
    Odd-length buffers are padded with a trailing zero byte; an empty buffer gives 0xFFFF.
    """
    total = 0
    end = len(buffer) - (len(buffer) % 2)
    for i in range(0, end, 2):
        total += (buffer[i] << 8) + buffer[i + 1]
    if end < len(buffer):
        total += buffer[end] << 8

    # fold carries back into the low 16 bits
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)

    return ~total & 0xFFFF
