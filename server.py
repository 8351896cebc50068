"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import json
import logging
import os
import socket
import sys
import threading
import time

from config import (
    ACCEPT_POLL_SECS,
    ACCEPT_RETRY_BACKOFF_SECS,
    LISTEN_ADDR,
    LOG_FORMAT,
    PORT,
    SERVER_ENGINE,
    STATIC_ROUTE_PREFIX,
    WEBPAGE_PATH,
)
from file_reader import StaticFileReadError
from handlers.routes import not_found, serve_image, webpage
from listener import (
    AcceptError,
    ClientAddress,
    ListenerError,
    accept_connection,
    open_listener,
)
from request import HTTPRequest, HTTPRequestParseError
from router import RouteOutcome, Router
from socket_handler import HTTPReadError, ResponseWriteError, read_request_line

logger = logging.getLogger(__name__)

ENGINES = ("fork", "thread")


class HTTPServer:
    def __init__(
        self,
        host: str = LISTEN_ADDR,
        port: int = PORT,
        router: Router | None = None,
        *,
        engine: str = SERVER_ENGINE,
        accept_backoff_secs: float = ACCEPT_RETRY_BACKOFF_SECS,
        log_format: str = LOG_FORMAT,
    ) -> None:
        if engine not in ENGINES:
            raise ValueError(f"Unsupported engine: {engine}")
        if accept_backoff_secs < 0:
            raise ValueError("accept_backoff_secs cannot be negative")

        self.host = host
        self.port = port
        self.router = router or self._build_default_router()
        self.engine = engine
        self.accept_backoff_secs = accept_backoff_secs
        self.log_format = log_format

        self._server_socket: socket.socket | None = None
        self._children: set[int] = set()
        self._threads: set[threading.Thread] = set()
        self._next_connection_id = 0
        self._running = False

    def _build_default_router(self) -> Router:
        router = Router()
        router.add_route("GET", STATIC_ROUTE_PREFIX, serve_image, prefix=True)
        router.add_route("GET", WEBPAGE_PATH, webpage)
        return router

    def start(self) -> None:
        """Listen and hand every accepted client to its own worker.

        Raises ``ListenerError`` if the listening socket cannot be set up.
        Returns only after ``stop()``.
        """
        server_socket = open_listener(self.port, self.host)
        with server_socket:
            self._server_socket = server_socket
            server_socket.settimeout(ACCEPT_POLL_SECS)
            self.port = server_socket.getsockname()[1]
            logger.info("Listening on %s:%s (engine=%s)", self.host, self.port, self.engine)

            self._running = True
            try:
                self._accept_loop(server_socket)
            finally:
                self._running = False
                self._server_socket = None
                self._reap_workers()

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _accept_loop(self, server_socket: socket.socket) -> None:
        while self._running:
            try:
                client_socket, address = accept_connection(server_socket)
            except socket.timeout:
                self._reap_workers()
                continue
            except AcceptError as exc:
                if not self._running:
                    break
                logger.error("%s", exc)
                if self.accept_backoff_secs:
                    time.sleep(self.accept_backoff_secs)
                continue

            logger.debug("Incoming connection from %s:%s", address[0], address[1])
            if self.engine == "fork":
                self._spawn_process(client_socket, address)
            else:
                self._spawn_thread(client_socket, address)

    def _spawn_process(self, client_socket: socket.socket, address: ClientAddress) -> None:
        try:
            pid = os.fork()
        except OSError as exc:
            logger.error("fork failed for %s:%s: %s", address[0], address[1], exc)
            client_socket.close()
            return

        if pid == 0:
            exit_code = 0
            try:
                if self._server_socket is not None:
                    self._server_socket.close()
                self._handle_client(client_socket, address)
            except BaseException:
                logger.exception("Connection worker crashed")
                exit_code = 1
            finally:
                logging.shutdown()
                os._exit(exit_code)

        self._children.add(pid)
        client_socket.close()
        self._reap_workers()

    def _spawn_thread(self, client_socket: socket.socket, address: ClientAddress) -> None:
        self._next_connection_id += 1
        worker = threading.Thread(
            target=self._handle_client,
            args=(client_socket, address),
            name=f"http-conn-{self._next_connection_id}",
            daemon=True,
        )
        self._threads.add(worker)
        worker.start()
        self._reap_workers()

    @property
    def active_workers(self) -> int:
        """Connections still being served by a child process or thread."""
        self._reap_workers()
        return len(self._children) + len(self._threads)

    def join_workers(self, timeout: float | None = None) -> bool:
        """Wait for in-flight thread workers; True once none are left.

        Forked children are only reaped, never waited on.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for worker in list(self._threads):
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)
        self._reap_workers()
        return not self._threads

    def _reap_workers(self) -> None:
        self._threads = {worker for worker in self._threads if worker.is_alive()}
        for pid in list(self._children):
            try:
                finished, _status = os.waitpid(pid, os.WNOHANG)
            except ChildProcessError:
                finished = pid
            if finished:
                self._children.discard(pid)

    def _handle_client(self, client_socket: socket.socket, address: ClientAddress) -> None:
        with client_socket:
            started_at = time.perf_counter()
            try:
                raw_request = read_request_line(client_socket)
            except HTTPReadError as exc:
                logger.warning("client=%s %s", address[0], exc)
                return

            try:
                request = HTTPRequest.from_bytes(raw_request)
            except HTTPRequestParseError as exc:
                logger.warning("client=%s malformed request: %s", address[0], exc)
                return

            try:
                outcome = self._dispatch(client_socket, request)
            except (StaticFileReadError, ResponseWriteError) as exc:
                logger.warning(
                    "client=%s method=%s url=%s aborted: %s",
                    address[0],
                    request.method,
                    request.url,
                    exc,
                )
                return
            except Exception:
                logger.exception("Unhandled error in route handler")
                return

            self._record_and_log(
                address=address,
                request=request,
                outcome=outcome,
                started_at=started_at,
            )

    def _dispatch(self, client_socket: socket.socket, request: HTTPRequest) -> RouteOutcome:
        handler = self.router.resolve(request.method, request.url)
        if handler is None:
            handler = not_found
        return handler(client_socket, request)

    def _record_and_log(
        self,
        *,
        address: ClientAddress,
        request: HTTPRequest,
        outcome: RouteOutcome,
        started_at: float,
    ) -> None:
        duration_ms = (time.perf_counter() - started_at) * 1000
        event = {
            "client": address[0],
            "method": request.method,
            "url": request.url,
            "status": outcome.status_code,
            "engine": self.engine,
            "pid": os.getpid(),
            "bytes_out": outcome.bytes_sent,
            "duration_ms": round(duration_ms, 3),
        }
        if self.log_format == "json":
            logger.info(json.dumps(event, sort_keys=True))
            return

        logger.info(
            (
                "client=%s method=%s url=%s status=%s engine=%s pid=%s "
                "bytes_out=%s duration_ms=%.2f"
            ),
            event["client"],
            event["method"],
            event["url"],
            event["status"],
            event["engine"],
            event["pid"],
            event["bytes_out"],
            duration_ms,
        )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the minimal HTTP/1.0 server")
    parser.add_argument("port", type=int, help="listening TCP port")
    parser.add_argument("--engine", choices=ENGINES, default=SERVER_ENGINE)
    parser.add_argument("--log-format", choices=["plain", "json"], default=LOG_FORMAT)
    parser.add_argument(
        "--accept-backoff",
        type=float,
        default=ACCEPT_RETRY_BACKOFF_SECS,
        help="seconds to wait after a failed accept before retrying",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    server = HTTPServer(
        port=args.port,
        engine=args.engine,
        accept_backoff_secs=args.accept_backoff,
        log_format=args.log_format,
    )
    try:
        server.start()
    except ListenerError as exc:
        logger.error("%s", exc)
        return -1
    except KeyboardInterrupt:
        server.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
