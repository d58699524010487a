import importlib
import sys

import pytest

from tiny_dns_parser import main as cli

PACKET = bytes.fromhex(
    "1234 8180 0001 0001 0000 0000"
    "03 777777 07 6578616d706c65 03 636f6d 00 0001 0001"
    "c00c 0001 0001 0000012c 0004 7f000001"
)


def test_prints_packet(tmp_path, monkeypatch, capsys):
    path = tmp_path / "packet.bin"
    path.write_bytes(PACKET)
    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser", str(path)])

    cli.main()

    out = capsys.readouterr().out
    assert "DNS Header: DNSHeader(id=4660" in out
    assert "name='www.example.com'" in out
    assert "DNS Answer Record:" in out
    assert "IPv4Address('127.0.0.1')" in out


def test_default_path_from_config(tmp_path, monkeypatch, capsys):
    path = tmp_path / "default.bin"
    path.write_bytes(PACKET)
    monkeypatch.setattr(cli.config, "PACKET_FILE", str(path))
    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser"])

    cli.main()

    assert "DNS Answer Record:" in capsys.readouterr().out


def test_missing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser", str(tmp_path / "nope.bin")])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Failed to read file" in capsys.readouterr().out


def test_malformed_packet(tmp_path, monkeypatch, capsys):
    path = tmp_path / "short.bin"
    path.write_bytes(PACKET[:20])
    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser", str(path)])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Failed to parse DNS packet" in capsys.readouterr().out


@pytest.fixture
def reload_config(monkeypatch):
    # register the variables so values loaded from .env are removed afterwards
    for name in ("DNS_PARSER_PACKET_FILE", "DNS_PARSER_LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)

    yield lambda: importlib.reload(cli.config)

    monkeypatch.undo()
    importlib.reload(cli.config)


def test_dotenv_in_working_directory(tmp_path, monkeypatch, capsys, reload_config):
    (tmp_path / ".env").write_text("DNS_PARSER_PACKET_FILE=pkt.bin\n")
    (tmp_path / "pkt.bin").write_bytes(PACKET)
    monkeypatch.chdir(tmp_path)

    reload_config()
    assert cli.config.PACKET_FILE == "pkt.bin"

    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser"])
    cli.main()
    assert "IPv4Address('127.0.0.1')" in capsys.readouterr().out


def test_environment_wins_over_dotenv(tmp_path, monkeypatch, reload_config):
    (tmp_path / ".env").write_text("DNS_PARSER_PACKET_FILE=pkt.bin\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DNS_PARSER_PACKET_FILE", "other.bin")

    reload_config()
    assert cli.config.PACKET_FILE == "other.bin"


def test_unknown_log_level(monkeypatch, capsys):
    monkeypatch.setattr(cli.config, "LOG_LEVEL", "VERBOSE")
    monkeypatch.setattr(sys, "argv", ["tiny-dns-parser"])
    with pytest.raises(SystemExit) as excinfo:
        cli.main()
    assert excinfo.value.code == 1
    assert "Unknown log level: VERBOSE" in capsys.readouterr().out
