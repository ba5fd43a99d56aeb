"""

config.py

Settings for a single decoding run: which file to read, which digitizer wrote
it, how much to print and, optionally, where to save the decoded events.

"""
from typing import List, Optional
from dataclasses import dataclass

import argparse
import enum

from .formats.digitizer import digitizer_kind
from .errors import ConfigurationError


class verbosity_level(enum.IntEnum):
  SILENT = 0  # Summary line only
  PER_EVENT = 1  # Extrema of every event
  PER_SAMPLE = 2  # Every sample value, on top of the event lines

  @classmethod
  def parse(cls, value) -> "verbosity_level":
    if isinstance(value, str) and not value.isdigit():
      try:
        return cls[value.strip().upper().replace('-', '_')]
      except KeyError:
        pass
    else:
      try:
        return cls(int(value))
      except (TypeError, ValueError):
        pass
    raise ConfigurationError(f'Unknown verbosity level {value!r}')


@dataclass
class decode_config:
  source_path: str
  digitizer: digitizer_kind = digitizer_kind.VME
  verbosity: verbosity_level = verbosity_level.SILENT
  output_path: Optional[str] = None

  def __post_init__(self):
    self.digitizer = digitizer_kind.parse(self.digitizer)
    self.verbosity = verbosity_level.parse(self.verbosity)

  @staticmethod
  def from_args(args: argparse.Namespace) -> 'decode_config':
    return decode_config(source_path=args.input,
                         digitizer=args.digitizer,
                         verbosity=args.verbosity,
                         output_path=args.output)


def make_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(
    description="Decoding a wavedump binary file, optionally saving the "
    "events to the standard root format.")
  parser.add_argument('input', type=str, help='input binary (.dat) file')
  parser.add_argument('-d',
                      '--digitizer',
                      type=str,
                      default='V',
                      help='digitizer that wrote the file: V(ME) or D(esktop)')
  parser.add_argument('-v',
                      '--verbosity',
                      type=str,
                      default='silent',
                      help='silent (0), per-event (1) or per-sample (2)')
  parser.add_argument('-o',
                      '--output',
                      type=str,
                      default=None,
                      help='output .root file')
  return parser


def parse_args(argv: Optional[List[str]] = None) -> decode_config:
  return decode_config.from_args(make_parser().parse_args(argv))
