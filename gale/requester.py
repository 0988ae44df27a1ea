"""HTTP/1.1 keep-alive request workers that hammer a single target."""

from __future__ import annotations

import http.client
import socket
import ssl
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import BinaryIO

from gale.results import Result


@dataclass(frozen=True)
class RequestTarget:
    """Where and for how long to send requests. ``duration`` is in nanoseconds."""

    host: str
    scheme: str
    target: str
    path: str
    duration: int


class _HandshakeError(Exception):
    """The TLS handshake with the server failed."""


class _SharedReader:
    """Hands the same buffered reader to every response on one connection."""

    def __init__(self, reader: BinaryIO) -> None:
        self._reader = reader

    def makefile(self, *_args: object, **_kwargs: object) -> BinaryIO:
        return self._reader


def build_request(target: RequestTarget) -> bytes:
    """The raw bytes of the keep-alive GET request sent over and over."""
    lines = [
        f"GET {target.path} HTTP/1.1",
        f"Host: {target.host}",
        "Connection: keep-alive",
        "Accept-Encoding: gzip, deflate, br",
        "",
        "",
    ]
    return "\r\n".join(lines).encode("utf-8")


def response_size(
    proto: str, status: str, headers: Mapping[str, Sequence[str]], body: bytes
) -> int:
    """Approximate wire size of a response: status line, headers and body."""
    header_size = sum(
        len(key) + 2 + sum(len(value) for value in values) + 2
        for key, values in headers.items()
    )
    return len(body) + 2 + header_size + len(f"{proto} {status}\r\n")


def _address(target: str) -> tuple[str, int]:
    host, sep, port = target.rpartition(":")
    if not sep:
        raise ConnectionError(f"dial tcp {target}: missing port in address")
    host = host.removeprefix("[").removesuffix("]")
    return host, int(port) if port.isdigit() else socket.getservbyname(port, "tcp")


def open_connection(target: RequestTarget) -> socket.socket:
    """Open a TCP connection to the target, wrapped in TLS for https."""
    sock = socket.create_connection(_address(target.target))
    if target.scheme != "https":
        return sock
    context = ssl.create_default_context()
    context.set_alpn_protocols(["http/1.1"])
    try:
        return context.wrap_socket(sock, server_hostname=target.host)
    except (OSError, ValueError) as exc:
        sock.close()
        raise _HandshakeError(str(exc)) from exc


def _grouped_headers(response: http.client.HTTPResponse) -> dict[str, list[str]]:
    headers: dict[str, list[str]] = {}
    for key, value in response.getheaders():
        headers.setdefault(key.lower(), []).append(value.strip(" \t"))
    if any(v.lower() == "chunked" for v in headers.get("transfer-encoding", [])):
        headers.pop("transfer-encoding")
        headers.pop("content-length", None)
    return headers


def make_requests(result: Result, target: RequestTarget) -> None:
    """Send requests over one connection until the test duration runs out.

    A failure to connect propagates; protocol and I/O errors afterwards end
    the loop after printing the error.
    """
    request = build_request(target)
    try:
        connection = open_connection(target)
    except _HandshakeError as exc:
        print(exc)
        return

    with connection, connection.makefile("rb") as reader:
        source = _SharedReader(reader)
        deadline = time.monotonic_ns() + target.duration
        while time.monotonic_ns() < deadline:
            start = time.perf_counter_ns()
            try:
                connection.sendall(request)
            except OSError:
                break
            try:
                response = http.client.HTTPResponse(source, method="GET")  # type: ignore[arg-type]
                response.begin()
                latency = time.perf_counter_ns() - start
                body = response.read()
            except (OSError, http.client.HTTPException) as exc:
                print(exc)
                break
            proto = f"HTTP/{response.version // 10}.{response.version % 10}"
            status = f"{response.status} {response.reason}"
            size = response_size(proto, status, _grouped_headers(response), body)
            result.record(latency, size, response.status)