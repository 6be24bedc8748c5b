"""
POSIX-compliant cksum implementation

This module implements the CRC used by the Unix cksum command. The checksum
is computed with a precomputed table for the POSIX CRC-32 polynomial, folds
the input length in after the data and is reported as an unsigned decimal
string, exactly as cksum prints it.
"""

from typing import Iterable, Union

from .exit_codes import ReadFailure

ALGORITHM = "Cksum"
POLYNOMIAL = 0x04C11DB7  # POSIX CRC-32 polynomial
DEFAULT_CHUNK_SIZE = 65536

# CRC contribution of each index value, as signed 32-bit integers
CRC_TABLE = (
    0, 79764919, 159529838, 222504665, 319059676, 398814059,
    445009330, 507990021, 638119352, 583659535, 797628118, 726387553,
    890018660, 835552979, 1015980042, 944750013, 1276238704, 1221641927,
    1167319070, 1095957929, 1595256236, 1540665371, 1452775106, 1381403509,
    1780037320, 1859660671, 1671105958, 1733955601, 2031960084, 2111593891,
    1889500026, 1952343757, -1742489888, -1662866601, -1851683442, -1788833735,
    -1960329156, -1880695413, -2103051438, -2040207643, -1104454824, -1159051537,
    -1213636554, -1284997759, -1389417084, -1444007885, -1532160278, -1603531939,
    -734892656, -789352409, -575645954, -646886583, -952755380, -1007220997,
    -827056094, -898286187, -231047128, -151282273, -71779514, -8804623,
    -515967244, -436212925, -390279782, -327299027, 881225847, 809987520,
    1023691545, 969234094, 662832811, 591600412, 771767749, 717299826,
    311336399, 374308984, 453813921, 533576470, 25881363, 88864420,
    134795389, 214552010, 2023205639, 2086057648, 1897238633, 1976864222,
    1804852699, 1867694188, 1645340341, 1724971778, 1587496639, 1516133128,
    1461550545, 1406951526, 1302016099, 1230646740, 1142491917, 1087903418,
    -1398421865, -1469785312, -1524105735, -1578704818, -1079922613, -1151291908,
    -1239184603, -1293773166, -1968362705, -1905510760, -2094067647, -2014441994,
    -1716953613, -1654112188, -1876203875, -1796572374, -525066777, -462094256,
    -382327159, -302564546, -206542021, -143559028, -97365931, -17609246,
    -960696225, -1031934488, -817968335, -872425850, -709327229, -780559564,
    -600130067, -654598054, 1762451694, 1842216281, 1619975040, 1682949687,
    2047383090, 2127137669, 1938468188, 2001449195, 1325665622, 1271206113,
    1183200824, 1111960463, 1543535498, 1489069629, 1434599652, 1363369299,
    622672798, 568075817, 748617968, 677256519, 907627842, 853037301,
    1067152940, 995781531, 51762726, 131386257, 177728840, 240578815,
    269590778, 349224269, 429104020, 491947555, -248556018, -168932423,
    -122852000, -60002089, -500490030, -420856475, -341238852, -278395381,
    -685261898, -739858943, -559578920, -630940305, -1004286614, -1058877219,
    -845023740, -916395085, -1119974018, -1174433591, -1262701040, -1333941337,
    -1371866206, -1426332139, -1481064244, -1552294533, -1690935098, -1611170447,
    -1833673816, -1770699233, -2009983462, -1930228819, -2119160460, -2056179517,
    1569362073, 1498123566, 1409854455, 1355396672, 1317987909, 1246755826,
    1192025387, 1137557660, 2072149281, 2135122070, 1912620623, 1992383480,
    1753615357, 1816598090, 1627664531, 1707420964, 295390185, 358241886,
    404320391, 483945776, 43990325, 106832002, 186451547, 266083308,
    932423249, 861060070, 1041341759, 986742920, 613929101, 542559546,
    756411363, 701822548, -978770311, -1050133554, -869589737, -924188512,
    -693284699, -764654318, -550540341, -605129092, -475935807, -413084042,
    -366743377, -287118056, -257573603, -194731862, -114850189, -35218492,
    -1984365303, -1921392450, -2143631769, -2063868976, -1698919467, -1635936670,
    -1824608069, -1744851700, -1347415887, -1418654458, -1506661409, -1561119128,
    -1129027987, -1200260134, -1254728445, -1309196108,
)


def _signed_byte(byte: int) -> int:
    # bytes enter the index computation sign-extended, as a signed char would
    return (byte ^ 0x80) - 0x80


def _update(crc: int, byte: int) -> int:
    index = ((crc >> 24) ^ _signed_byte(byte)) & 0xFF
    return ((crc << 8) ^ CRC_TABLE[index]) & 0xFFFFFFFF


class CksumDigest:
    """
    Streaming POSIX cksum digest.

    Bytes are fed in order with update(); checksum() and decimal() may be
    called at any time and do not disturb the running state.

    Examples:
        >>> digest = CksumDigest(b'hello ')
        >>> digest.update(b'world')
        >>> digest.decimal()
        '1135714720'
    """

    name = ALGORITHM

    def __init__(self, data: Union[bytes, str] = None):
        self._crc = 0
        self._length = 0

        if data is not None:
            self.update(data)

    @property
    def length(self) -> int:
        """Number of bytes consumed so far."""
        return self._length

    def update(self, data: Union[bytes, bytearray, memoryview, str]):
        if isinstance(data, str):
            data = data.encode('utf-8')
        elif isinstance(data, int):
            # bytes(n) would be n zero bytes
            raise TypeError(f"object supporting the buffer API required, not {type(data).__name__}")

        data = bytes(data)
        crc = self._crc

        for byte in data:
            crc = _update(crc, byte)

        self._crc = crc
        self._length += len(data)

    def checksum(self) -> int:
        """
        Finalize a copy of the running state.

        Returns:
            int: The checksum as an unsigned 32-bit integer
        """
        crc = self._crc
        length = self._length

        # the length is appended least significant byte first
        while length != 0:
            crc = _update(crc, length & 0xFF)
            length >>= 8

        return ~crc & 0xFFFFFFFF

    def decimal(self) -> str:
        return str(self.checksum())

    def copy(self) -> "CksumDigest":
        other = CksumDigest()
        other._crc = self._crc
        other._length = self._length

        return other

    def __repr__(self):
        return f"<{self.__class__.__name__} length={self._length} checksum={self.checksum()}>"


def _chunks(byte_source, chunk_size: int) -> Iterable[bytes]:
    if isinstance(byte_source, (bytes, bytearray, memoryview, str)):
        yield byte_source
    elif hasattr(byte_source, 'read'):
        while True:
            chunk = byte_source.read(chunk_size)

            if not chunk:
                break

            yield chunk
    else:
        yield from byte_source


def _read_failure(filename: str, cause: Exception) -> ReadFailure:
    return ReadFailure(
        f"Unable to calculate the {ALGORITHM} hashcode for {filename}: {cause}",
        filename=filename,
        cause=cause
    )


def compute(byte_source, chunk_size: int = DEFAULT_CHUNK_SIZE, filename: str = None) -> str:
    """
    Calculate the POSIX cksum of a byte source as a decimal string.

    The source is consumed exactly once, in order, until end-of-stream.

    Args:
        byte_source: bytes or string data, a binary file object with a read()
            method, or an iterable of byte chunks
        chunk_size: number of bytes requested per read() from file objects
        filename: identifier of the source reported on failure, defaults to
            the name attribute of file objects

    Returns:
        str: The unsigned checksum in base 10, as printed by cksum

    Raises:
        ReadFailure: if the source fails or is closed while being read
        TypeError: if the source yields integers instead of byte chunks
    """
    if chunk_size <= 0:
        raise ValueError(f"invalid chunk size: {chunk_size}")

    digest = CksumDigest()

    if filename is None:
        filename = getattr(byte_source, 'name', None)

    try:
        for chunk in _chunks(byte_source, chunk_size):
            digest.update(chunk)
    except OSError as e:
        raise _read_failure(filename, e) from e
    except ValueError as e:
        # reading a closed file raises ValueError
        if not getattr(byte_source, 'closed', False):
            raise

        raise _read_failure(filename, e) from e

    return digest.decimal()


def cksum(file_obj_or_data) -> int:
    """
    Calculate POSIX cksum checksum.

    Args:
        file_obj_or_data: Either a file object with a read() method, or bytes/string data

    Returns:
        int: The checksum as an unsigned 32-bit integer

    Examples:
        >>> with open('file.txt', 'rb') as f:
        ...     checksum = cksum(f)
        >>> checksum = cksum(b'hello world')
        >>> checksum = cksum('hello world')
    """
    result = int(compute(file_obj_or_data))

    if hasattr(file_obj_or_data, 'seek'):
        file_obj_or_data.seek(0)  # Reset file pointer for potential reuse

    return result
