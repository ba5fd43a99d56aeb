"""

wavedump_bin_to_root.py

Simple file for converting the binary wavedump output to the standard root
format. Same as running `wavedecode-bin2root`.

"""
import sys

from wavedecode.convert import main

if __name__ == "__main__":
  sys.exit(main())
