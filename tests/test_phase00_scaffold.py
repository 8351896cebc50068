"""Sanity checks for baseline repository scaffolding."""

from pathlib import Path

from config import (
    LISTEN_ADDR,
    LISTEN_BACKLOG,
    LOOPBACK_ADDR,
    READ_CHUNK_SIZE,
    RECOGNIZED_LISTEN_ADDRS,
    WRITE_CHUNK_SIZE,
)

ROOT = Path(__file__).resolve().parent.parent



def test_core_files_exist() -> None:
    expected = [
        "server.py",
        "listener.py",
        "socket_handler.py",
        "request.py",
        "response.py",
        "file_reader.py",
        "router.py",
        "config.py",
        "utils.py",
        "handlers/__init__.py",
        "handlers/routes.py",
    ]
    for rel_path in expected:
        assert (ROOT / rel_path).exists()



def test_basic_config_values() -> None:
    assert LISTEN_ADDR == "0.0.0.0"
    assert LOOPBACK_ADDR == "127.0.0.1"
    assert RECOGNIZED_LISTEN_ADDRS == {"0.0.0.0", "127.0.0.1"}
    assert LISTEN_BACKLOG == 5
    assert READ_CHUNK_SIZE == 512
    assert WRITE_CHUNK_SIZE == 512
