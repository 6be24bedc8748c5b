from .cksum_util import ALGORITHM, CRC_TABLE, DEFAULT_CHUNK_SIZE, POLYNOMIAL, CksumDigest, cksum, compute
from .cksum_file import cksum_file, open_source
from .exit_codes import *
from .cksum_digest import __version__, main
