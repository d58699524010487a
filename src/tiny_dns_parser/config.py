# config.py

import os

from dotenv import find_dotenv, load_dotenv

# .env found from the current working directory upwards, never overriding
# the real environment
load_dotenv(find_dotenv(usecwd=True))

LOG_LEVEL = os.getenv("DNS_PARSER_LOG_LEVEL", "WARNING").upper()

# Raw packet read by the command line tool when no path is given
PACKET_FILE = os.getenv("DNS_PARSER_PACKET_FILE", "response_packet.txt")
