import argparse
import sys

from archiver import Archiver
from codec import code_to_string
from huffman import EmptyInputError, build_tree, codes_from_tree, count_symbols

MAGIC = b"HUF1"  #: huffstream magic number
VERSION = Archiver.VERSION  #: Stream format version


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman coder for single files"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    compress = subparsers.add_parser(
        "compress", aliases=["c"], help="Huffman-encode a file"
    )
    compress.add_argument("input", help="File to compress")
    compress.add_argument(
        "-o", "--output", required=True, help="Output file path"
    )
    compress.add_argument(
        "-P",
        "--no-progress",
        action="store_true",
        help="Hide the progress line",
    )

    decompress = subparsers.add_parser(
        "decompress", aliases=["d"], help="Decode a compressed file"
    )
    decompress.add_argument("input", help="File to decompress")
    decompress.add_argument(
        "-o", "--output", required=True, help="Output file path"
    )
    decompress.add_argument(
        "-P",
        "--no-progress",
        action="store_true",
        help="Hide the progress line",
    )

    codes = subparsers.add_parser(
        "codes", aliases=["t"], help="Print the code table of a file"
    )
    codes.add_argument("input", help="File to build the code table from")

    return parser


def _print_progress(line: str) -> None:
    """Redraw the progress line in place.

    :param line: Text to display.
    :type line: str
    """
    sys.stdout.write("\r" + line)
    sys.stdout.flush()


def _fmt_pct(done: int, total: int) -> str:
    """Format a completion percentage string like ``12.34%``."""
    if total <= 0:
        return "0%"
    pct = 100.0 * (done / float(total))
    return f"{pct:6.2f}%"


def _fmt_bytes(n: int) -> str:
    """Format a byte count into a human-readable string."""
    for unit in ['', 'Ki', 'Mi', 'Gi', 'Ti']:
        if abs(n) < 1024:
            return f"{n:.2f} {unit}B"
        n /= 1024
    return f"{n:.2f} PiB"


def _fmt_symbol(symbol: int) -> str:
    """Printable form of a byte for the code table.

    :param int symbol: Byte value.
    :returns: The character itself when printable, else ``\\xNN``.
    :rtype: str
    """
    ch = chr(symbol)
    if ch.isprintable() and not ch.isspace() and symbol < 128:
        return ch
    return f"\\x{symbol:02x}"


class Progress:
    """Callable progress reporter that redraws only when the percent changes.

    :ivar label: Action label (e.g. ``"Compressing"``).
    :type label: str
    :ivar path: File name shown next to the label.
    :type path: str
    """

    def __init__(self, label: str, path: str) -> None:
        self.label = label
        self.path = path
        self._last_reported = -1

    def __call__(self, done: int, total: int) -> None:
        if total <= 0:
            return
        percent_bucket = int((done * 100) / total)
        if percent_bucket == self._last_reported:
            return
        self._last_reported = percent_bucket
        _print_progress(f"{self.label} {self.path}  {_fmt_pct(done, total)}")


def _read_input(path: str):
    """Read a whole file, reporting a missing one.

    :returns: File contents, or ``None`` if the file does not exist.
    :rtype: bytes | None
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        print(f"[!] Input file not found: {path}")
        return None


def compress_file(input_path: str, output_path: str, hide_progress: bool) -> None:
    """Compress ``input_path`` into ``output_path``.

    File layout: ``MAGIC`` followed by an :class:`archiver.Archiver` stream.

    :param input_path: File to compress.
    :type input_path: str
    :param output_path: Destination file.
    :type output_path: str
    :param hide_progress: Suppress the progress line.
    :type hide_progress: bool
    """
    data = _read_input(input_path)
    if data is None:
        return
    on_prog = None if hide_progress else Progress("Compressing", input_path)
    comp = Archiver().compress(data, on_progress=on_prog)
    with open(output_path, "wb") as out:
        out.write(MAGIC)
        out.write(comp)
    if on_prog is not None:
        sys.stdout.write("\n")
        sys.stdout.flush()
    total = len(MAGIC) + len(comp)
    print("Size before compression: ", _fmt_bytes(len(data)))
    print("Size after compression: ", _fmt_bytes(total))
    print(f"Compression ratio: {len(data) / total:.2f}")


def decompress_file(input_path: str, output_path: str, hide_progress: bool) -> None:
    """Restore a file written by :func:`compress_file`.

    :param input_path: Compressed file.
    :type input_path: str
    :param output_path: Destination file.
    :type output_path: str
    :param hide_progress: Suppress the progress line.
    :type hide_progress: bool
    :raises ValueError: If the file does not start with ``MAGIC`` or its
                        stream is corrupt.
    """
    data = _read_input(input_path)
    if data is None:
        return
    if data[:len(MAGIC)] != MAGIC:
        raise ValueError("Invalid file format (bad magic)")
    on_prog = None if hide_progress else Progress("Decompressing", input_path)
    out_data = Archiver().decompress(data[len(MAGIC):], on_progress=on_prog)
    with open(output_path, "wb") as out:
        out.write(out_data)
    if on_prog is not None:
        sys.stdout.write("\n")
        sys.stdout.flush()


def print_codes(input_path: str) -> None:
    """Print ``symbol<TAB>code`` for every byte occurring in ``input_path``.

    :param input_path: File to count.
    :type input_path: str
    """
    data = _read_input(input_path)
    if data is None:
        return
    try:
        tree = build_tree(count_symbols(data))
    except EmptyInputError:
        print(f"[!] Input file is empty: {input_path}")
        return
    codes = codes_from_tree(tree)
    for symbol in sorted(codes):
        print(f"{_fmt_symbol(symbol)}\t{code_to_string(codes[symbol])}")


def main():
    """Entry point for the CLI tool."""
    parser = get_parser()
    args = parser.parse_args()

    if args.cmd in ["compress", "c"]:
        compress_file(args.input, args.output, args.no_progress)
    elif args.cmd in ["decompress", "d"]:
        decompress_file(args.input, args.output, args.no_progress)
    elif args.cmd in ["codes", "t"]:
        print_codes(args.input)


if __name__ == "__main__":
    main()
