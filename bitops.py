from typing import Iterable, List, Optional


class BitWriter:
    """Packs bits MSB-first into bytes.

    :ivar buffer: Completed bytes.
    :type buffer: bytearray
    :ivar bit_buffer: Pending bits of the byte being filled.
    :type bit_buffer: int
    :ivar bit_count: Number of pending bits in ``bit_buffer`` (0-7).
    :type bit_count: int
    :ivar bits_written: Total number of bits written, padding excluded.
    :type bits_written: int
    """

    def __init__(self):
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0
        self.bits_written = 0

    def write_bit(self, bit: int):
        """Append a single bit.

        :param int bit: ``0`` or ``1`` (any truthy value counts as ``1``).
        """
        self.bit_buffer = (self.bit_buffer << 1) | (1 if bit else 0)
        self.bit_count += 1
        self.bits_written += 1
        if self.bit_count == 8:
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def write_bits(self, value: int, nbits: int):
        """Append the lowest ``nbits`` of ``value``, most significant first.

        :param int value: Integer to take bits from.
        :param int nbits: How many bits to write.
        """
        for i in range(nbits - 1, -1, -1):
            self.write_bit((value >> i) & 1)

    def write_bytes(self, data: bytes):
        """Pad to a byte boundary, then append ``data`` verbatim."""
        self._align()
        self.buffer.extend(data)
        self.bits_written += 8 * len(data)

    def flush(self) -> bytes:
        """Zero-pad the last partial byte and return everything written.

        :returns: Packed output.
        :rtype: bytes
        """
        self._align()
        return bytes(self.buffer)

    def _align(self):
        if self.bit_count > 0:
            self.buffer.append(self.bit_buffer << (8 - self.bit_count))
            self.bit_buffer = 0
            self.bit_count = 0


class BitReader:
    """Reads bits MSB-first from a bytes-like object.

    :ivar data: Source bytes.
    :type data: bytes
    :ivar pos: Index of the next unread byte in ``data``.
    :type pos: int
    :ivar bit_buffer: Byte currently being consumed.
    :type bit_buffer: int
    :ivar bit_count: Unread bits left in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def read_bit(self) -> int:
        """Read one bit.

        :raises EOFError: If no bits are left.
        """
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.bit_buffer >> self.bit_count) & 1

    def read_bits(self, nbits: int) -> int:
        """Read ``nbits`` bits as an unsigned integer, MSB first.

        :param int nbits: Number of bits to read.
        :rtype: int
        :raises EOFError: If the data ends before ``nbits`` bits were read.
        """
        result = 0
        for _ in range(nbits):
            result = (result << 1) | self.read_bit()
        return result

    def read_bytes(self, nbytes: int) -> bytes:
        """Drop any pending bits and read ``nbytes`` whole bytes.

        :returns: Up to ``nbytes`` bytes; shorter only at end of data.
        :rtype: bytes
        """
        self.bit_count = 0
        result = self.data[self.pos:self.pos + nbytes]
        self.pos += len(result)
        return result

    def bits_remaining(self) -> int:
        """Number of bits that can still be read."""
        return self.bit_count + 8 * (len(self.data) - self.pos)


def pack_bits(bits: Iterable[int]) -> bytes:
    """Pack a sequence of bits into bytes, zero padding the last byte.

    :param bits: Bits, MSB of the first byte first.
    :type bits: Iterable[int]
    :rtype: bytes
    """
    writer = BitWriter()
    for bit in bits:
        writer.write_bit(bit)
    return writer.flush()


def unpack_bits(data: bytes, nbits: Optional[int] = None) -> List[int]:
    """Unpack bytes into a list of bits.

    :param data: Packed bytes.
    :type data: bytes
    :param nbits: Number of bits to return; defaults to every bit of ``data``.
    :type nbits: Optional[int]
    :rtype: List[int]
    :raises EOFError: If ``data`` holds fewer than ``nbits`` bits.
    """
    reader = BitReader(data)
    if nbits is None:
        nbits = reader.bits_remaining()
    return [reader.read_bit() for _ in range(nbits)]
