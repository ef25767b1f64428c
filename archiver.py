from typing import Callable, Optional

from bitops import BitReader, BitWriter, pack_bits, unpack_bits
from codec import decode, encode
from huffman import build_tree, count_symbols


class Archiver:
    """Self-describing Huffman container for byte strings.

    Layout (big-endian bit fields)::

        version        8
        symbol count  32   (stream ends here when 0)
        table size    16
        table         (byte 8, count 32) * table size
        bit count     32
        payload       packed code bits, zero padded

    The frequency table is stored in counting order, so the decoder rebuilds
    exactly the tree the encoder used.

    :ivar VERSION: Format version of the encoder/decoder.
    :type VERSION: int
    :ivar CHUNK_SIZE: Input bytes encoded between progress reports.
    :type CHUNK_SIZE: int
    """

    VERSION = 1
    CHUNK_SIZE = 1 << 16

    def compress(
        self,
        data: bytes,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> bytes:
        """Compress ``data``.

        :param data: Input bytes.
        :type data: bytes
        :param on_progress: Optional callback ``on_progress(done, total)``
                            called with input bytes encoded so far.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Container bytes. Empty input gives a 5-byte header.
        :rtype: bytes
        """
        output = BitWriter()
        output.write_bits(self.VERSION, 8)
        output.write_bits(len(data), 32)
        if not data:
            return output.flush()

        freq = count_symbols(data)
        tree = build_tree(freq)

        output.write_bits(len(freq), 16)
        for symbol, count in freq.items():
            output.write_bits(symbol, 8)
            output.write_bits(count, 32)

        bits = []
        for start in range(0, len(data), self.CHUNK_SIZE):
            chunk = data[start:start + self.CHUNK_SIZE]
            bits.extend(encode(tree, chunk))
            if on_progress is not None:
                on_progress(start + len(chunk), len(data))

        output.write_bits(len(bits), 32)
        output.write_bytes(pack_bits(bits))
        return output.flush()

    def decompress(
        self,
        data: bytes,
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> bytes:
        """Decompress data produced by :meth:`compress`.

        :param data: Container bytes.
        :type data: bytes
        :param on_progress: Optional callback ``on_progress(done, total)``.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Original bytes.
        :rtype: bytes
        :raises ValueError: If the version is unsupported.
        :raises EOFError: If the header or table is cut short.
        :raises huffman.TruncatedStreamError: If the payload is cut short.
        """
        reader = BitReader(data)

        version = reader.read_bits(8)
        if version != self.VERSION:
            raise ValueError(f"Unsupported version: {version}")

        orig_size = reader.read_bits(32)
        if orig_size == 0:
            return b""

        freq = {}
        for _ in range(reader.read_bits(16)):
            symbol = reader.read_bits(8)
            freq[symbol] = reader.read_bits(32)
        tree = build_tree(freq)

        nbits = reader.read_bits(32)
        payload = reader.read_bytes((nbits + 7) // 8)
        bits = unpack_bits(payload, min(nbits, 8 * len(payload)))

        out = bytes(decode(tree, bits, count=orig_size))
        if on_progress is not None:
            on_progress(len(out), orig_size)
        return out
