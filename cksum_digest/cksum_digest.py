import argparse
import logging
import sys
from os.path import join, abspath, dirname

import colored_logging as cl

from .cksum_file import cksum_file
from .cksum_util import DEFAULT_CHUNK_SIZE, compute
from .exit_codes import SUCCESS_EXIT_CODE, UNCLASSIFIED_FAILURE_EXIT_CODE, DigestFailure

with open(join(abspath(dirname(__file__)), "version.txt")) as f:
    version = f.read().strip()

__version__ = version

STDIN_FILENAME = "-"

logger = logging.getLogger(__name__)


def cksum_digest(filename: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Print the POSIX cksum of a file, or of standard input for "-".

    :param filename: path of the file to checksum
    :param chunk_size: number of bytes read at a time
    :return: exit code number
    """
    exit_code = SUCCESS_EXIT_CODE

    try:
        if filename == STDIN_FILENAME:
            checksum = compute(sys.stdin.buffer, chunk_size=chunk_size, filename=filename)
        else:
            checksum = cksum_file(filename, chunk_size=chunk_size)

        print(checksum)
    except DigestFailure as exception:
        logger.error(exception)
        exit_code = exception.exit_code
    except Exception as exception:
        logger.exception(exception)
        exit_code = UNCLASSIFIED_FAILURE_EXIT_CODE

    return exit_code


def log_to_stderr():
    """Move console log handlers off stdout, which carries only the checksum."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.StreamHandler) and handler.stream is sys.stdout:
            handler.setStream(sys.stderr)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="cksum-digest",
        description="Print the POSIX cksum CRC of a file as an unsigned decimal number."
    )

    parser.add_argument(
        "filename",
        type=str,
        help=f'File to checksum, or "{STDIN_FILENAME}" for standard input.',
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Number of bytes read at a time. Defaults to {DEFAULT_CHUNK_SIZE}.",
        metavar="BYTES"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write log messages to this file.",
        metavar="PATH"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show program's version number and exit.",
    )

    args = parser.parse_args(argv)

    if args.chunk_size <= 0:
        parser.error(f"invalid chunk size: {args.chunk_size}")

    log_filename = abspath(args.log_file) if args.log_file is not None else None
    cl.configure(filename=log_filename)
    log_to_stderr()

    return cksum_digest(filename=args.filename, chunk_size=args.chunk_size)


if __name__ == "__main__":
    sys.exit(main())
