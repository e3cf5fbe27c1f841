"""Byte stream and file copy helpers.

:func:`copy` moves everything from a readable binary stream into a
writable one through a fixed 8 KiB chunk, so memory use stays bounded
no matter how large the source is.  :func:`copy_file` copies whole
files, letting the kernel do the transfer where it can.

Neither helper opens or closes the caller's streams, retries, or wraps
errors: a failing ``read`` or ``write`` ends the copy with the original
exception.

>>> import io
>>> sink = io.BytesIO()
>>> copy(io.BytesIO(b"hello"), sink)
5
"""

import errno
import logging
import os
import shutil
import sys
from typing import BinaryIO, Union

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 8192

# sendfile() between two regular files is only supported by the Linux kernel.
_SENDFILE_PLATFORMS = ("linux", "android")
_SENDFILE_BLOCK_SIZE = 8 * 1024 * 1024

PathLike = Union[str, "os.PathLike[str]"]


def copy(source: BinaryIO, sink: BinaryIO) -> int:
    """Copy ``source`` into ``sink`` using an 8 KiB buffer.

    Parameters
    ----------
    source:
        An open, blocking binary stream supporting ``read(n)``.  Reading
        stops at the first empty result.  A ``None`` read (no data ready
        on a non-blocking stream) raises :class:`BlockingIOError`.
    sink:
        An open binary stream supporting ``write(b)``.

    Returns
    -------
    int
        The number of bytes copied.  An empty source yields ``0`` and
        ``sink`` is never written to.
    """
    count = 0
    while True:
        chunk = source.read(DEFAULT_BUFFER_SIZE)
        if chunk is None:
            raise BlockingIOError(
                errno.EAGAIN, "source has no data ready; copy() needs a blocking stream"
            )
        if not chunk:
            break
        sink.write(chunk)
        count += len(chunk)
    return count


def _supports_file_sendfile() -> bool:
    return hasattr(os, "sendfile") and sys.platform.startswith(_SENDFILE_PLATFORMS)


def _sendfile_copy(fsrc: BinaryIO, fdst: BinaryIO) -> int:
    infd = fsrc.fileno()
    outfd = fdst.fileno()
    try:
        size = os.fstat(infd).st_size
    except OSError:
        size = 0
    blocksize = max(size, _SENDFILE_BLOCK_SIZE)

    offset = 0
    while True:
        try:
            sent = os.sendfile(outfd, infd, offset, blocksize)
        except OSError as e:
            # Nothing written yet, so any refusal (EINVAL, ESPIPE for pipes,
            # ENOTSUP, ...) can fall back. A full disk is a real failure.
            if offset == 0 and e.errno != errno.ENOSPC:
                logger.debug("sendfile unavailable (%s), using buffered copy", e)
                return copy(fsrc, fdst)
            raise
        if sent == 0:
            break
        offset += sent
    return offset


def copy_file(src: PathLike, dst: PathLike) -> int:
    """Copy the contents of file ``src`` to ``dst``.

    ``dst`` is created or truncated.  Both files are closed on every exit
    path.  Returns the number of bytes copied; raises :class:`OSError`
    if either file cannot be opened or the transfer fails, and
    :class:`shutil.SameFileError` (an :class:`OSError`) if both paths name
    the same file, before anything is truncated.
    """
    if os.path.exists(dst) and os.path.samefile(src, dst):
        raise shutil.SameFileError(f"{src!r} and {dst!r} are the same file")

    with open(src, "rb") as fsrc, open(dst, "wb") as fdst:
        if _supports_file_sendfile():
            return _sendfile_copy(fsrc, fdst)
        return copy(fsrc, fdst)


__all__ = ["DEFAULT_BUFFER_SIZE", "copy", "copy_file"]
