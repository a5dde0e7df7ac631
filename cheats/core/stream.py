"""
In-memory output channel for the shell.

A ``Stream`` is a growable FIFO of bytes. Codes write to it while they are
invoked and the host drains it afterwards; every read removes the bytes it
returns from the front of the buffer.
"""

"""
Copyright (c) 2025 Firefly Software Solutions Inc.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at:

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import io

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class ReadWrite(Protocol):
    """A byte stream that can be both written to and read from."""

    def read(self, size: int = -1) -> bytes: ...

    def write(self, data: bytes) -> int: ...


class Stream(io.RawIOBase):
    """A stream to use as output and input for the game shell."""

    def __init__(self, initial: bytes = b""):
        super().__init__()
        self._buffer = bytearray(initial)

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        count = min(len(buffer), len(self._buffer))
        buffer[:count] = self._buffer[:count]
        del self._buffer[:count]
        return count

    def readall(self) -> bytes:
        data = bytes(self._buffer)
        self._buffer.clear()
        return data

    def write(self, data) -> int:
        if self.closed:
            raise ValueError("write to closed stream")
        view = memoryview(data)
        self._buffer.extend(view)
        return view.nbytes

    @property
    def pending(self) -> int:
        """Number of bytes waiting to be read."""
        return len(self._buffer)

    def __repr__(self) -> str:
        return f"Stream(pending={len(self._buffer)})"


def drain(stream: ReadWrite, encoding: str = "utf-8") -> str:
    """
    Read everything pending in a channel and decode it.

    Args:
        stream: Channel to drain
        encoding: Text encoding of the channel content

    Returns:
        Decoded content, empty string when nothing was written
    """
    data = stream.read()
    if not data:
        return ""
    return data.decode(encoding, errors="replace")
