"""How the language server talks to its client: a TCP socket or stdio."""

from __future__ import annotations

import asyncio
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["TransportKind", "Transport"]

LOCALHOST = "127.0.0.1"


class TransportKind(Enum):
    """The kind of transport."""

    STDIO = "stdio"
    SOCKET = "socket"


@dataclass(frozen=True)
class Transport:
    """A transport; sockets connect to a port on the local machine."""

    kind: TransportKind = TransportKind.STDIO
    port: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is TransportKind.SOCKET:
            if self.port is None or not 0 <= self.port <= 0xFFFF:
                raise ValueError(f"invalid port {self.port!r}")
        elif self.port is not None:
            raise ValueError("stdio transport takes no port")

    @classmethod
    def stdio(cls) -> Transport:
        return cls(TransportKind.STDIO)

    @classmethod
    def socket(cls, port: int) -> Transport:
        return cls(TransportKind.SOCKET, port)

    def __str__(self) -> str:
        if self.kind is TransportKind.SOCKET:
            return f"Socket({self.port})"
        return "Stdio"

    async def open_streams(self) -> tuple[asyncio.StreamReader, asyncio.StreamWriter]:
        """Connect and return a reader and writer for the transport."""
        if self.kind is TransportKind.SOCKET:
            return await asyncio.open_connection(LOCALHOST, self.port)

        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader()
        await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)
        write_transport, write_protocol = await loop.connect_write_pipe(
            asyncio.streams.FlowControlMixin, sys.stdout
        )
        writer = asyncio.StreamWriter(write_transport, write_protocol, reader, loop)
        return reader, writer