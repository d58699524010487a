import logging
import sys

from tiny_dns_parser import config
from tiny_dns_parser.buffer import PacketError
from tiny_dns_parser.packet import DNSPacket


def main():
    level = logging.getLevelName(config.LOG_LEVEL)
    if not isinstance(level, int):
        print(f"Unknown log level: {config.LOG_LEVEL}")
        sys.exit(1)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if len(sys.argv) > 2:
        print("Usage: python -m tiny_dns_parser.main [packet-file]")
        sys.exit(1)

    path = sys.argv[1] if len(sys.argv) == 2 else config.PACKET_FILE
    try:
        packet = DNSPacket.from_file(path)
    except OSError as e:
        print(f"Failed to read file: {e}")
        sys.exit(1)
    except (PacketError, ValueError) as e:
        print(f"Failed to parse DNS packet: {e}")
        sys.exit(1)

    print(f"DNS Header: {packet.header}")
    for question in packet.questions:
        print(f"DNS Question: {question}")
    for section, records in (
        ("Answer", packet.answers),
        ("Authority", packet.authorities),
        ("Additional", packet.additionals),
    ):
        for record in records:
            print(f"DNS {section} Record: {record}")


if __name__ == "__main__":
    main()
