import logging

from tiny_dns_parser.buffer import BytePacketBuffer, CompressionLoopLimit

MAX_JUMPS = 5

logger = logging.getLogger(__name__)


def read_qname(buffer: BytePacketBuffer) -> str:
    """
    Read a possibly compressed domain name starting at the buffer's cursor.

    Labels reached through compression pointers are fetched with peeks, so the
    cursor only moves past the name's own bytes: after the terminating zero for
    a plain name, or after the first pointer for a compressed one.
    """
    pos = buffer.pos
    jumped = False
    jumps = 0
    labels = []

    while True:
        length = buffer.peek_u8(pos)

        if length & 0xC0 == 0xC0:
            if not jumped:
                buffer.seek(pos + 2)

            b2 = buffer.peek_u8(pos + 1)
            pos = ((length ^ 0xC0) << 8) | b2
            jumped = True
            jumps += 1
            if jumps > MAX_JUMPS:
                raise CompressionLoopLimit(MAX_JUMPS)
            logger.debug("Following compression pointer to offset %d (jump %d)", pos, jumps)
            continue

        pos += 1
        if length == 0:
            break

        # latin-1 maps every byte to one character
        labels.append(buffer.peek_range(pos, length).decode("latin-1"))
        pos += length

    if not jumped:
        buffer.seek(pos)

    return ".".join(labels)
