# Bradford Arrington 2025
import sys
from typing import BinaryIO

END_OF_DATA = -1


class CompressorBitio:
    PACIFIER_COUNT = 2047

    class BitFile:
        """MSB-first bit reader/writer over a binary stream.

        A BitFile is either an input or an output file, never both. Reads
        past the end return END_OF_DATA rather than raising, so callers can
        tell a clean end of input from a short one themselves.
        """

        def __init__(self, file_stream: BinaryIO, input_mode: bool, owns_stream: bool = True,
                     pacifier: bool = False):
            self.is_input = input_mode
            self.file_stream: BinaryIO = file_stream
            self.owns_stream = owns_stream
            self.pacifier = pacifier
            self.rack: int = 0
            self.mask: int = 0x80
            self.pacifier_counter: int = 0
            self.bits_read: int = 0
            self.bits_written: int = 0
            self.closed = False

        @staticmethod
        def open_output_bit_file(name: str, pacifier: bool = False) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(open(name, "wb"), False, True, pacifier)

        @staticmethod
        def open_input_bit_file(name: str, pacifier: bool = False) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(open(name, "rb"), True, True, pacifier)

        @staticmethod
        def wrap_output(stream: BinaryIO) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(stream, False, owns_stream=False)

        @staticmethod
        def wrap_input(stream: BinaryIO) -> 'CompressorBitio.BitFile':
            return CompressorBitio.BitFile(stream, True, owns_stream=False)

        def _tick(self):
            self.pacifier_counter += 1
            if self.pacifier and (self.pacifier_counter & CompressorBitio.PACIFIER_COUNT) == 0:
                sys.stdout.write(".")
                sys.stdout.flush()

        def _flush_rack(self):
            self.file_stream.write(bytes([self.rack]))
            self._tick()
            self.rack = 0
            self.mask = 0x80

        def close(self):
            if self.closed:
                return
            self.closed = True
            try:
                # Trailing bits of the last byte are already zero.
                if not self.is_input and self.mask != 0x80:
                    self._flush_rack()
                self.file_stream.flush()
            finally:
                if self.owns_stream:
                    self.file_stream.close()

        def reset(self):
            if not self.is_input:
                raise ValueError("reset() is only supported on input bit files")
            self.file_stream.seek(0)
            self.rack = 0
            self.mask = 0x80

        def output_bit(self, bit: int):
            if bit != 0:
                self.rack |= self.mask
            self.mask >>= 1
            self.bits_written += 1
            if self.mask == 0:
                self._flush_rack()

        def output_bits(self, code: int, count: int):
            if count <= 0:
                return
            mask_code: int = 1 << (count - 1)
            while mask_code != 0:
                if (mask_code & code) != 0:
                    self.rack |= self.mask
                self.mask >>= 1
                if self.mask == 0:
                    self._flush_rack()
                mask_code >>= 1
            self.bits_written += count

        def write_bits(self, bits: int, value: int):
            if not 1 <= bits <= 32:
                raise ValueError(f"write_bits: bit count must be in 1..32, got {bits}")
            self.output_bits(value & ((1 << bits) - 1), bits)

        def input_bit(self) -> int:
            if self.mask == 0x80:
                read = self.file_stream.read(1)
                if not read:
                    return END_OF_DATA
                self.rack = read[0]
                self._tick()
            value = self.rack & self.mask
            self.mask >>= 1
            if self.mask == 0:
                self.mask = 0x80
            self.bits_read += 1
            return 1 if value != 0 else 0

        def read_bits(self, bits: int) -> int:
            if not 1 <= bits <= 32:
                raise ValueError(f"read_bits: bit count must be in 1..32, got {bits}")
            return_value: int = 0
            while bits > 0:
                bit = self.input_bit()
                if bit == END_OF_DATA:
                    return END_OF_DATA
                return_value = (return_value << 1) | bit
                bits -= 1
            return return_value

        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc, tb):
            self.close()
            return False
