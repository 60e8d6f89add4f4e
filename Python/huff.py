# Bradford Arrington 2025
import heapq
import io
from itertools import count as sequence_numbers
from typing import List, Optional

from bitio import CompressorBitio, END_OF_DATA

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE
HUFF_NUMBER = 0xface8200
HUFF_TREE = HUFF_NUMBER | 1

COMPRESSION_NAME = "static order 0 model with Huffman tree header"
USAGE = "infile outfile [-d]\n\nSpecifying -d will dump the modeling data\n"


class HuffException(Exception):
    pass


class FormatError(HuffException):
    """Input does not start with the Huffman tree magic number."""


class TruncatedHeaderError(HuffException):
    """Input ended while the tree header was being read."""


class TruncatedBodyError(HuffException):
    """Input ended before the PSEUDO_EOF code was decoded."""


class MalformedTreeError(HuffException):
    """The tree header describes a tree that cannot decode anything."""


class HuffLeaf:
    __slots__ = ['value', 'weight']

    def __init__(self, value: int, weight: int = 0):
        self.value = value
        self.weight = weight

    def __repr__(self):
        return f"HuffLeaf({self.value}, {self.weight})"


class HuffInternal:
    __slots__ = ['left', 'right', 'weight']

    def __init__(self, left, right, weight: int = 0):
        self.left = left
        self.right = right
        self.weight = weight

    def __repr__(self):
        return f"HuffInternal({self.left!r}, {self.right!r}, {self.weight})"


class Code:
    __slots__ = ['code', 'code_bits']

    def __init__(self, code: int = 0, code_bits: int = 0):
        self.code = code
        self.code_bits = code_bits

    def __eq__(self, other):
        return isinstance(other, Code) and (self.code, self.code_bits) == (other.code, other.code_bits)

    def __repr__(self):
        return f"Code({self.code:0{self.code_bits}b})" if self.code_bits else "Code()"

    def __str__(self):
        return f"{self.code:0{self.code_bits}b}" if self.code_bits else ""


def compress_file(input_bit_file: CompressorBitio.BitFile, output_bit_file: CompressorBitio.BitFile,
                  args: Optional[list] = None):
    try:
        counts = count_bytes(input_bit_file)
        root_node = build_tree(counts)
        codes = make_codes(root_node)

        output_bit_file.write_bits(BITS_PER_INT, HUFF_TREE)
        write_header(root_node, output_bit_file)

        input_bit_file.reset()
        compress_data(codes, input_bit_file, output_bit_file)
    finally:
        output_bit_file.close()

    for arg in args or ():
        if arg == "-d":
            print_model(counts, codes)
        else:
            print(f"Unused argument: {arg}")


def expand_file(input_bit_file: CompressorBitio.BitFile, output_bit_file: CompressorBitio.BitFile,
                args: Optional[list] = None):
    try:
        magic = input_bit_file.read_bits(BITS_PER_INT)
        if magic != HUFF_TREE:
            if magic == END_OF_DATA:
                raise FormatError("input is too short to hold a Huffman header")
            raise FormatError(f"illegal header starts with {magic:#010x}")

        root_node = read_header(input_bit_file)
        expand_data(root_node, input_bit_file, output_bit_file)
    finally:
        output_bit_file.close()

    for arg in args or ():
        if arg == "-d":
            print_tree(root_node)
        else:
            print(f"Unused argument: {arg}")


def compress_bytes(data: bytes) -> bytes:
    output = io.BytesIO()
    compress_file(CompressorBitio.BitFile.wrap_input(io.BytesIO(data)),
                  CompressorBitio.BitFile.wrap_output(output))
    return output.getvalue()


def expand_bytes(data: bytes) -> bytes:
    output = io.BytesIO()
    expand_file(CompressorBitio.BitFile.wrap_input(io.BytesIO(data)),
                CompressorBitio.BitFile.wrap_output(output))
    return output.getvalue()


def count_bytes(input_bit_file: CompressorBitio.BitFile) -> List[int]:
    """Count every 8-bit symbol in the input, plus one PSEUDO_EOF.

    The input is rewound first and left at its end; compress_file rewinds
    it again for the encoding pass.
    """
    counts = [0] * (ALPH_SIZE + 1)

    input_bit_file.reset()
    while True:
        c = input_bit_file.read_bits(BITS_PER_WORD)
        if c == END_OF_DATA:
            break
        counts[c] += 1

    counts[PSEUDO_EOF] = 1
    return counts


def build_tree(counts: List[int]):
    """Greedy Huffman construction.

    Heap entries are (weight, sequence, node). Leaves take sequence numbers in
    ascending symbol order and merged nodes take the next free one, so equal
    weights always pop in insertion order and the same counts give the same
    tree.
    """
    order = sequence_numbers()
    heap = [(weight, next(order), HuffLeaf(value, weight))
            for value, weight in enumerate(counts) if weight > 0]
    if not heap:
        raise ValueError("build_tree needs at least one symbol with a positive count")
    heapq.heapify(heap)

    while len(heap) > 1:
        weight_0, _, child_0 = heapq.heappop(heap)
        weight_1, _, child_1 = heapq.heappop(heap)
        weight = weight_0 + weight_1
        heapq.heappush(heap, (weight, next(order), HuffInternal(child_0, child_1, weight)))

    return heap[0][2]


def make_codes(root_node) -> List[Optional[Code]]:
    codes: List[Optional[Code]] = [None] * (ALPH_SIZE + 1)
    convert_tree_to_code(codes, 0, 0, root_node)
    return codes


def convert_tree_to_code(codes, code_so_far, bits, node):
    if isinstance(node, HuffLeaf):
        codes[node.value] = Code(code_so_far, bits)
        return

    code_so_far <<= 1
    bits = bits + 1
    convert_tree_to_code(codes, code_so_far, bits, node.left)
    convert_tree_to_code(codes, code_so_far | 1, bits, node.right)


def write_header(node, output_bit_file: CompressorBitio.BitFile):
    if isinstance(node, HuffLeaf):
        output_bit_file.output_bit(1)
        output_bit_file.write_bits(BITS_PER_WORD + 1, node.value)
        return

    output_bit_file.output_bit(0)
    write_header(node.left, output_bit_file)
    write_header(node.right, output_bit_file)


def read_header(input_bit_file: CompressorBitio.BitFile, depth: int = 0):
    # A tree over ALPH_SIZE + 1 leaves is never deeper than ALPH_SIZE.
    if depth > ALPH_SIZE:
        raise MalformedTreeError(f"tree header nests deeper than {ALPH_SIZE} levels")

    bit = input_bit_file.read_bits(1)
    if bit == END_OF_DATA:
        raise TruncatedHeaderError("input ended inside the tree header")

    if bit == 0:
        left = read_header(input_bit_file, depth + 1)
        right = read_header(input_bit_file, depth + 1)
        return HuffInternal(left, right)

    value = input_bit_file.read_bits(BITS_PER_WORD + 1)
    if value == END_OF_DATA:
        raise TruncatedHeaderError("input ended inside a leaf value of the tree header")
    if value > PSEUDO_EOF:
        raise MalformedTreeError(f"leaf value {value} is outside the symbol range")
    return HuffLeaf(value)


def compress_data(codes, input_bit_file: CompressorBitio.BitFile, output_bit_file: CompressorBitio.BitFile):
    while True:
        c = input_bit_file.read_bits(BITS_PER_WORD)
        if c == END_OF_DATA:
            break
        write_code(codes, c, output_bit_file)

    write_code(codes, PSEUDO_EOF, output_bit_file)


def write_code(codes, symbol: int, output_bit_file: CompressorBitio.BitFile):
    code = codes[symbol]
    if code is None:
        raise HuffException(f"no Huffman code for symbol {symbol}")
    # A single-leaf tree gives a zero-length code; nothing is written for it.
    if code.code_bits:
        output_bit_file.output_bits(code.code, code.code_bits)


def expand_data(root_node, input_bit_file: CompressorBitio.BitFile, output_bit_file: CompressorBitio.BitFile):
    if isinstance(root_node, HuffLeaf):
        if root_node.value == PSEUDO_EOF:
            return
        raise MalformedTreeError(f"tree is a single leaf for symbol {root_node.value}, not PSEUDO_EOF")

    node = root_node
    while True:
        bit = input_bit_file.read_bits(1)
        if bit == END_OF_DATA:
            raise TruncatedBodyError("input ended before PSEUDO_EOF was decoded")

        node = node.right if bit else node.left

        if isinstance(node, HuffLeaf):
            if node.value == PSEUDO_EOF:
                break
            output_bit_file.write_bits(BITS_PER_WORD, node.value)
            node = root_node


def print_char(c):
    if c == PSEUDO_EOF:
        print("EOF", end="")
    elif 0x20 <= c < 127:
        print(f"'{chr(c)}'", end="")
    else:
        print(f"{c:3d}", end="")


def print_model(counts, codes):
    for i in range(ALPH_SIZE + 1):
        if counts[i] != 0:
            print("node=", end="")
            print_char(i)
            print(f"  count={counts[i]:3d}", end="")
            if codes is not None and codes[i] is not None:
                print(f"  Huffman code={codes[i]}", end="")
            print()


def print_tree(node, depth: int = 0):
    indent = "  " * depth
    if isinstance(node, HuffLeaf):
        print(f"{indent}leaf ", end="")
        print_char(node.value)
        print()
        return
    print(f"{indent}node")
    print_tree(node.left, depth + 1)
    print_tree(node.right, depth + 1)
