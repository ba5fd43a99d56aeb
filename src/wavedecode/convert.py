"""

convert.py

Decoding a single wavedump binary file, printing the event information
requested by the verbosity level, and optionally saving the events to the
standard root format.

"""
import sys
from typing import List, Optional

from .config import decode_config, parse_args, verbosity_level
from .errors import ConfigurationError, FormatMismatchError, TruncatedRecordError
from .formats.digitizer import resolve
from .formats.event_tree import event_container
from .formats.wavedump import decode_session, decode_status, decoded_event

__exit_codes__ = {
  decode_status.CLEAN: 0,
  decode_status.FORMAT_MISMATCH: 1,
  decode_status.TRUNCATED: 2,
}
CONFIG_ERROR_EXIT = 3
IO_ERROR_EXIT = 4


def print_event(event: decoded_event, verbosity: verbosity_level) -> None:
  if verbosity >= verbosity_level.PER_SAMPLE:
    for idx, value in enumerate(event.samples):
      print(f' VDC({idx}) = {value:g}')

  if event.zero_crossing:
    print(f' Warning: pulse {event.index} is zero crossing')

  if verbosity >= verbosity_level.PER_EVENT:
    print()
    print(f' minVDC({event.index}) = {event.min_sample:g}')
    print(f' maxVDC({event.index}) = {event.max_sample:g}')


def process_binary_file(config: decode_config) -> decode_session:
  """
  Running the decoding for a single file. The returned session is closed, and
  carries the number of events and the terminal status.
  """
  profile = resolve(config.digitizer)
  print(f' The binary file is called {config.source_path}')

  events = []
  with decode_session.open(config.source_path, profile) as session:
    try:
      for event in session:
        print_event(event, config.verbosity)
        if config.output_path is not None:
          events.append(event)
    except FormatMismatchError as err:
      print(f' Error: {err}')
    except TruncatedRecordError as err:
      print(f' Warning: {err}')

  print(f' This file contains {session.n_events} events')

  if config.output_path is not None:
    container = event_container.from_events(events, profile, session.status)
    container.save_to_file(config.output_path)
    print(f' Saved {len(container)} events to {config.output_path}')

  return session


def main(argv: Optional[List[str]] = None) -> int:
  try:
    config = parse_args(argv)
  except ConfigurationError as err:
    print(f' Error: {err}')
    return CONFIG_ERROR_EXIT

  try:
    session = process_binary_file(config)
  except OSError as err:
    print(f' Error: {err}')
    return IO_ERROR_EXIT
  return __exit_codes__[session.status]


if __name__ == "__main__":
  sys.exit(main())
