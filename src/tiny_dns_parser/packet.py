import logging
from dataclasses import dataclass, field
from enum import IntEnum
from ipaddress import IPv4Address, IPv6Address
from typing import List, Optional, Union

from tiny_dns_parser.buffer import BytePacketBuffer
from tiny_dns_parser.names import read_qname

CLASS_IN = 1

logger = logging.getLogger(__name__)


class _OpenIntEnum(IntEnum):
    """IntEnum that keeps values outside the closed set as UNKNOWN pseudo-members."""

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, int):
            return None
        member = int.__new__(cls, value)
        member._name_ = "UNKNOWN"
        member._value_ = value
        return member

    @property
    def is_unknown(self) -> bool:
        return self._name_ == "UNKNOWN"


class ResultCode(_OpenIntEnum):
    NOERROR = 0
    FORMERR = 1
    SERVFAIL = 2
    NXDOMAIN = 3
    NOTIMP = 4
    REFUSED = 5


class QueryType(_OpenIntEnum):
    A = 1
    NS = 2
    CNAME = 5
    MX = 15
    AAAA = 28


@dataclass
class DNSHeader:
    id: int = 0
    recursion_desired: bool = False
    truncated_message: bool = False
    authoritative_answer: bool = False
    opcode: int = 0
    response: bool = False
    rescode: ResultCode = ResultCode.NOERROR
    checking_disabled: bool = False
    authed_data: bool = False
    z: bool = False
    recursion_available: bool = False
    num_questions: int = 0
    num_answers: int = 0
    num_authorities: int = 0
    num_additionals: int = 0

    @classmethod
    def read(cls, buffer: BytePacketBuffer) -> "DNSHeader":
        id_ = buffer.read_u16()
        flags = buffer.read_u16()

        return cls(
            id=id_,
            response=bool(flags >> 15 & 1),
            opcode=(flags >> 11) & 0xF,
            authoritative_answer=bool(flags >> 10 & 1),
            truncated_message=bool(flags >> 9 & 1),
            recursion_desired=bool(flags >> 8 & 1),
            recursion_available=bool(flags >> 7 & 1),
            z=bool(flags >> 6 & 1),
            authed_data=bool(flags >> 5 & 1),
            checking_disabled=bool(flags >> 4 & 1),
            rescode=ResultCode(flags & 0xF),
            num_questions=buffer.read_u16(),
            num_answers=buffer.read_u16(),
            num_authorities=buffer.read_u16(),
            num_additionals=buffer.read_u16(),
        )


@dataclass
class DNSQuestion:
    name: str
    type_: QueryType
    class_: int = CLASS_IN

    @classmethod
    def read(cls, buffer: BytePacketBuffer) -> "DNSQuestion":
        name = read_qname(buffer)
        type_ = QueryType(buffer.read_u16())
        class_ = buffer.read_u16()
        return cls(name, type_, class_)


@dataclass
class DNSRecord:
    name: str
    type_: QueryType
    class_: int
    ttl: int
    data_len: int
    addr: Optional[Union[IPv4Address, IPv6Address]] = None
    host: str = ""
    priority: int = 0
    # Raw rdata, only kept for types without a decoded payload
    data: bytes = b""

    @classmethod
    def read(cls, buffer: BytePacketBuffer) -> "DNSRecord":
        name = read_qname(buffer)
        type_ = QueryType(buffer.read_u16())
        class_ = buffer.read_u16()
        ttl = buffer.read_u32()
        data_len = buffer.read_u16()
        record = cls(name, type_, class_, ttl, data_len)

        if type_ == QueryType.A:
            record.addr = IPv4Address(buffer.read_range(4))
        elif type_ == QueryType.AAAA:
            record.addr = IPv6Address(buffer.read_range(16))
        elif type_ == QueryType.CNAME:
            record.host = read_qname(buffer)
        elif type_ == QueryType.MX:
            record.priority = buffer.read_u16()
            record.host = read_qname(buffer)
        else:
            # Skip the rdata so the next record starts at the right offset
            record.data = buffer.read_range(data_len)
            logger.debug("Skipped %d rdata bytes of %s record %r", data_len, type_.name, name)

        return record


@dataclass
class DNSPacket:
    header: DNSHeader
    questions: List[DNSQuestion] = field(default_factory=list)
    answers: List[DNSRecord] = field(default_factory=list)
    authorities: List[DNSRecord] = field(default_factory=list)
    additionals: List[DNSRecord] = field(default_factory=list)

    @classmethod
    def read(cls, buffer: BytePacketBuffer) -> "DNSPacket":
        header = DNSHeader.read(buffer)
        logger.debug("Parsed header %s", header)

        questions = [DNSQuestion.read(buffer) for _ in range(header.num_questions)]
        answers = [DNSRecord.read(buffer) for _ in range(header.num_answers)]
        authorities = [DNSRecord.read(buffer) for _ in range(header.num_authorities)]
        additionals = [DNSRecord.read(buffer) for _ in range(header.num_additionals)]

        return cls(header, questions, answers, authorities, additionals)

    @classmethod
    def from_bytes(cls, data: bytes) -> "DNSPacket":
        return cls.read(BytePacketBuffer(data))

    @classmethod
    def from_file(cls, path: str) -> "DNSPacket":
        with open(path, "rb") as f:
            return cls.from_bytes(f.read())
