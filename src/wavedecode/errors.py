"""

errors.py

Exceptions raised while configuring and decoding the digitizer readout.

"""


class DecodeError(RuntimeError):
    """
    Base class for all the errors raised by the wavedump decoder.
    """

    pass


class ConfigurationError(DecodeError, ValueError):
    """
    The requested digitizer (or other setting) is not one of the supported
    values. Raised before the input file is touched.
    """

    pass


class FormatMismatchError(DecodeError):
    """
    The first header of the file does not carry the magic number expected for
    the configured digitizer.
    """

    def __init__(self, expected: int, found: int, source: str = "<stream>"):
        self.expected = expected
        self.found = found
        self.source = source
        super().__init__(
            f"Digitizer choice does not match header info in {source}: "
            f"expected {expected}, found {found}"
        )


class TruncatedRecordError(DecodeError):
    """
    The input ended partway through the header or sample block of a record.
    """

    def __init__(
        self,
        event_index: int,
        expected_bytes: int,
        read_bytes: int,
        block: str,
        source: str = "<stream>",
    ):
        self.event_index = event_index
        self.expected_bytes = expected_bytes
        self.read_bytes = read_bytes
        self.block = block
        self.source = source
        super().__init__(
            f"Record {event_index} in {source} is truncated: {block} block has "
            f"{read_bytes} of {expected_bytes} bytes"
        )
