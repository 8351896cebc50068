"""Configuration constants for the minimal HTTP/1.0 server."""

LISTEN_ADDR: str = "0.0.0.0"
LOOPBACK_ADDR: str = "127.0.0.1"
RECOGNIZED_LISTEN_ADDRS: frozenset[str] = frozenset({LISTEN_ADDR, LOOPBACK_ADDR})
PORT: int = 8080
LISTEN_BACKLOG: int = 5

REQUEST_READ_BYTES: int = 511
READ_CHUNK_SIZE: int = 512
WRITE_CHUNK_SIZE: int = 512

MAX_METHOD_LENGTH: int = 7
MAX_URL_LENGTH: int = 127
MAX_FILE_NAME_LENGTH: int = 63
MAX_STATIC_PATH_LENGTH: int = 94

SERVER_NAME: str = "httpd.py"
STATIC_ROUTE_PREFIX: str = "/img/"
WEBPAGE_PATH: str = "/app/webpage"
STATIC_CONTENT_TYPE: str = "image/png"

SERVER_ENGINE: str = "fork"
ACCEPT_POLL_SECS: float = 0.2
ACCEPT_RETRY_BACKOFF_SECS: float = 0.0
LOG_FORMAT: str = "plain"
