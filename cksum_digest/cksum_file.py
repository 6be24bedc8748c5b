"""
Checksum of files addressed by path.

The file is opened for binary reading, consumed once from start to
end-of-stream and closed exactly once on every exit path.
"""

import logging
from contextlib import contextmanager

import colored_logging as cl

from .cksum_util import ALGORITHM, DEFAULT_CHUNK_SIZE, compute
from .exit_codes import DigestFailure, ReleaseFailure, SourceUnavailable

logger = logging.getLogger(__name__)


def _release(file, filename: str, failure: BaseException = None):
    try:
        file.close()
    except OSError as e:
        release_failure = ReleaseFailure(
            f"Unable to calculate the {ALGORITHM} hashcode for {filename}: {e}",
            filename=filename,
            cause=e
        )

        if failure is None:
            raise release_failure from e

        # the earlier failure is the one reported
        logger.warning(f"unable to close {cl.file(filename)} after failure: {e}")

        if isinstance(failure, DigestFailure):
            failure.release_failure = release_failure


@contextmanager
def open_source(filename: str, opener=open):
    """
    Open a byte source for reading and guarantee it is released.

    :param filename: path of the byte source
    :param opener: callable taking (filename, mode) and returning a binary file object
    :raises SourceUnavailable: if the source cannot be opened
    :raises ReleaseFailure: if closing the source fails after a successful read
    """
    try:
        file = opener(filename, 'rb')
    except (OSError, ValueError) as e:
        # ValueError for paths the OS cannot represent, such as embedded NUL
        raise SourceUnavailable(f"Unable to read {filename}: {e}", filename=filename, cause=e) from e

    try:
        yield file
    except BaseException as failure:
        _release(file, filename, failure)
        raise

    _release(file, filename)


def cksum_file(filename: str, chunk_size: int = DEFAULT_CHUNK_SIZE, opener=open) -> str:
    """
    Calculate the POSIX cksum of a file.

    :param filename: path of the file
    :param chunk_size: number of bytes read at a time
    :param opener: callable used to open the file, defaults to the built-in open
    :return: checksum as an unsigned decimal string, as printed by cksum
    """
    with open_source(filename, opener=opener) as file:
        checksum = compute(file, chunk_size=chunk_size, filename=filename)

    logger.info(f"{ALGORITHM} checksum of {cl.file(filename)}: {cl.val(checksum)}")

    return checksum
