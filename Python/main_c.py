# Bradford Arrington 2025
import sys
from typing import List, Optional

from bitio import CompressorBitio
from huff import COMPRESSION_NAME, USAGE, HuffException, compress_file
from perf import discard_output, print_ratios, short_program_name, track_performance


def main(arguments: Optional[List[str]] = None) -> int:
    if arguments is None:
        arguments = sys.argv

    if len(arguments) < 3:
        print(f"\nUsage:  {short_program_name(arguments[0])} {USAGE}")
        return 0

    remaining_args = arguments[3:]
    print(f"\nCompressing {arguments[1]} to {arguments[2]}")
    print(f"Using {COMPRESSION_NAME}\n")
    try:
        input_file = CompressorBitio.BitFile.open_input_bit_file(arguments[1])
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1

    try:
        with input_file:
            output = track_performance("OpenBitFile", CompressorBitio.BitFile.open_output_bit_file,
                                       arguments[2], pacifier=True)
            track_performance("CompressFile", compress_file, input_file, output, remaining_args)
    except (HuffException, OSError) as e:
        print(f"Error: {e}")
        discard_output(arguments[2])
        return 1

    print(f"\nBits read:               {input_file.bits_read}")
    print(f"Bits written:            {output.bits_written}")
    print_ratios(arguments[1], arguments[2])
    return 0


if __name__ == '__main__':
    sys.exit(main())
