"""Signal-aware output writing for the dir2md CLI."""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from dir2md.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes UTF-8 text to a file descriptor or a file, stopping on interruption.

    Surrogate escapes in the text (undecodable bytes read from a file) are written
    back as the original bytes.

    A path is opened for writing (truncating any existing file) when the writer is
    created; a file descriptor such as stdout's is used as is and left open.

    Attributes:
        file: The file descriptor or path given to the constructor.
        fd: The file descriptor being written to.
        bytes_written: Number of bytes written so far.

    Example:
        >>> with SafeWriter(Path("tree.md")) as writer:  # doctest: +SKIP
        ...     writer.write("└── project\\n")
    """

    def __init__(self, file: Union[int, str, os.PathLike]):
        """Initialize the safe writer.

        Args:
            file: A file descriptor, or a path to create or overwrite.

        Raises:
            TypeError: If file is neither an int nor path-like.
            OSError: If the path cannot be opened for writing.
        """
        self.file = file
        self.bytes_written = 0
        self._closed = False

        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: str) -> None:
        """Write data, raising BrokenPipeError once the output has gone away.

        Args:
            data: Text to write.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is broken.
            OSError: If another I/O error occurs.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = data.encode("utf-8", "surrogateescape")
        view = memoryview(payload)
        try:
            while view:
                written = os.write(self.fd, view)
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise
        self.bytes_written += len(payload)

    def close(self) -> None:
        """Close the file if this writer opened it.

        The writer counts as closed even when closing fails with a broken pipe.
        """
        if self._closed:
            return

        try:
            if self._file_obj is not None:
                self._file_obj.close()
        except OSError as e:
            if e.errno != errno.EPIPE:
                raise
        finally:
            self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes priority over one from close()
            if exc_type is None:
                raise
