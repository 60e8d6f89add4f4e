# Bradford Arrington 2025
import sys
from typing import List, Optional

from bitio import CompressorBitio
from huff import COMPRESSION_NAME, USAGE, HuffException, expand_file
from perf import discard_output, short_program_name, track_performance


def main(arguments: Optional[List[str]] = None) -> int:
    if arguments is None:
        arguments = sys.argv

    if len(arguments) < 3:
        print(f"\nUsage:  {short_program_name(arguments[0])} {USAGE}")
        return 0

    remaining_args = arguments[3:]
    try:
        input_file = CompressorBitio.BitFile.open_input_bit_file(arguments[1])
    except FileNotFoundError:
        print(f"Error: Input file '{arguments[1]}' not found.")
        return 1
    except OSError as e:
        print(f"Error: {e}")
        return 1

    print(f"\nDecompressing {arguments[1]} to {arguments[2]}")
    print(f"Using {COMPRESSION_NAME}\n")
    try:
        with input_file:
            output_file = CompressorBitio.BitFile.open_output_bit_file(arguments[2], pacifier=True)
            track_performance("ExpandFile", expand_file, input_file, output_file, remaining_args)
    except (HuffException, OSError) as e:
        print(f"Error: {e}")
        discard_output(arguments[2])
        return 1

    print(f"\nBits read:               {input_file.bits_read}")
    print(f"Bits written:            {output_file.bits_written}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
