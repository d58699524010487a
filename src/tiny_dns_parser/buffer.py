PACKET_SIZE = 512


class PacketError(Exception):
    pass


class BufferOverrun(PacketError):
    def __init__(self, offset: int, length: int = 1):
        self.offset = offset
        self.length = length
        super().__init__(f"End of buffer: cannot read {length} byte(s) at offset {offset}")


class CompressionLoopLimit(PacketError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Limit of {limit} jumps exceeded")


class BytePacketBuffer:
    """
    Fixed 512 byte region with a read cursor.

    Only the bytes actually loaded are readable: a packet shorter than 512
    bytes ends where its data ends, so reading past it raises BufferOverrun
    instead of returning zero padding. Every read either succeeds completely
    or raises without moving the cursor.
    """

    def __init__(self, data: bytes = b""):
        self.buf = bytearray(PACKET_SIZE)
        self.size = 0
        self.pos = 0
        if data:
            self.load(data)

    def load(self, data: bytes):
        if len(data) > PACKET_SIZE:
            raise ValueError(f"Packet is {len(data)} bytes, at most {PACKET_SIZE} allowed")
        self.buf[:] = bytes(PACKET_SIZE)
        self.buf[: len(data)] = data
        self.size = len(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return max(self.size - self.pos, 0)

    # No bound validation here, the next read checks the cursor
    def step(self, steps: int):
        self.pos += steps

    def seek(self, pos: int):
        self.pos = pos

    def _check(self, start: int, length: int):
        if start < 0 or length < 0 or start + length > self.size:
            raise BufferOverrun(start, length)

    def read_u8(self) -> int:
        self._check(self.pos, 1)
        value = self.buf[self.pos]
        self.pos += 1
        return value

    def read_u16(self) -> int:
        self._check(self.pos, 2)
        return (self.read_u8() << 8) | self.read_u8()

    def read_u32(self) -> int:
        self._check(self.pos, 4)
        return (self.read_u16() << 16) | self.read_u16()

    def read_range(self, length: int) -> bytes:
        data = self.peek_range(self.pos, length)
        self.pos += length
        return data

    def peek_u8(self, at: int) -> int:
        self._check(at, 1)
        return self.buf[at]

    def peek_range(self, start: int, length: int) -> bytes:
        self._check(start, length)
        return bytes(self.buf[start : start + length])
