"""

wavedump.py

Decoding the binary readout written by the digitizer acquisition (wavedump).

The file has no global header. Events are written back to back, each event
being a block of 6 little-endian 4-byte integers followed by a fixed number of
samples. The number of samples and the sample encoding are fixed by the
digitizer (see `digitizer.py`):

- VME: 110 unsigned 2-byte integers, used as is.
- Desktop: 1024 4-byte floats.

Only the first word of the first event header is checked, against the magic
number of the configured digitizer. The remaining header words, and the headers
of all later events, are skipped.

"""

import enum
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Optional, Union

import numpy

from ..errors import DecodeError, FormatMismatchError, TruncatedRecordError
from .digitizer import digitizer_profile, resolve

logger = logging.getLogger(__name__)

HEADER_DTYPE = numpy.dtype("<i4")
HEADER_FIELDS = 6
HEADER_SIZE = HEADER_FIELDS * HEADER_DTYPE.itemsize


class decode_status(enum.Enum):
    RUNNING = "running"
    CLEAN = "clean"
    FORMAT_MISMATCH = "format mismatch"
    TRUNCATED = "truncated"


@dataclass(frozen=True)
class decoded_event:
    """
    A single decoded trigger. The samples array is read-only.
    """

    index: int
    samples: numpy.ndarray = field(repr=False, compare=False)
    min_sample: float
    max_sample: float
    zero_crossing: bool


def _read_block(stream: BinaryIO, size: int) -> bytes:
    """
    Reading exactly `size` bytes, or fewer only if the stream is exhausted.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def _make_event(index: int, raw: bytes, profile: digitizer_profile) -> decoded_event:
    samples = numpy.frombuffer(raw, dtype=profile.sample_dtype).astype(numpy.float32)
    samples.flags.writeable = False

    # Both extrema are updated for every sample, NaN samples are skipped
    min_sample = float(numpy.fmin.reduce(samples, initial=numpy.inf))
    max_sample = float(numpy.fmax.reduce(samples, initial=-numpy.inf))

    return decoded_event(
        index=index,
        samples=samples,
        min_sample=min_sample,
        max_sample=max_sample,
        zero_crossing=bool(min_sample < 0 and max_sample > 0),
    )


class decode_session:
    """
    State of a single pass over a wavedump stream.

    Iterating the session yields `decoded_event` objects in file order. The
    iteration stops at the end of the stream, or raises the FormatMismatchError
    or TruncatedRecordError that ended it. Either way `status` and `n_events`
    hold the final state of the session afterwards.

    Sessions created with `decode_session.open` own the file handle, and close
    it when used as a context manager.
    """

    def __init__(
        self,
        stream: BinaryIO,
        profile: digitizer_profile,
        source: Optional[str] = None,
        owns_stream: bool = False,
    ):
        self.stream = stream
        self.profile = profile
        self.source = source or getattr(stream, "name", "<stream>")
        self.owns_stream = owns_stream
        self.validated = False
        self.n_events = 0
        self.status = decode_status.RUNNING
        self.error: Optional[DecodeError] = None

    @classmethod
    def open(cls, filename: str, profile: Union[digitizer_profile, str]):
        if not isinstance(profile, digitizer_profile):
            profile = resolve(profile)
        return cls(open(filename, "rb"), profile, source=str(filename), owns_stream=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def close(self) -> None:
        if self.owns_stream and not self.stream.closed:
            self.stream.close()

    @property
    def finished(self) -> bool:
        return self.status is not decode_status.RUNNING

    def read_event(self) -> Optional[decoded_event]:
        """
        Decoding the next event. Returns None once the stream is cleanly
        exhausted.
        """
        if self.finished:
            return None
        try:
            event = self._read_event()
        except FormatMismatchError as err:
            self._finish(decode_status.FORMAT_MISMATCH, err)
            logger.error("%s", err)
            raise
        except TruncatedRecordError as err:
            self._finish(decode_status.TRUNCATED, err)
            logger.warning("%s", err)
            raise
        if event is None:
            self._finish(decode_status.CLEAN)
            logger.debug("Finished %s with %d events", self.source, self.n_events)
        return event

    def _read_event(self) -> Optional[decoded_event]:
        index = self.n_events + 1

        header = _read_block(self.stream, HEADER_SIZE)
        if not header:
            return None
        if len(header) < HEADER_SIZE:
            raise TruncatedRecordError(
                index, HEADER_SIZE, len(header), "header", self.source
            )

        if not self.validated:
            found = int(numpy.frombuffer(header, dtype=HEADER_DTYPE)[0])
            if found != self.profile.header_magic:
                raise FormatMismatchError(self.profile.header_magic, found, self.source)
            self.validated = True

        raw = _read_block(self.stream, self.profile.block_size)
        if len(raw) < self.profile.block_size:
            raise TruncatedRecordError(
                index, self.profile.block_size, len(raw), "sample", self.source
            )

        event = _make_event(index, raw, self.profile)
        self.n_events = index
        logger.debug(
            "Event %d: min=%g max=%g", index, event.min_sample, event.max_sample
        )
        return event

    def _finish(self, status: decode_status, error: Optional[DecodeError] = None):
        self.status = status
        self.error = error

    def __iter__(self) -> Iterator[decoded_event]:
        while True:
            event = self.read_event()
            if event is None:
                return
            yield event

    def read_all(self, strict: bool = True) -> List[decoded_event]:
        """
        Draining the session into a list. With `strict=False` the decoding
        error is only recorded in the session, and the events decoded before
        it are returned.
        """
        events = []
        try:
            for event in self:
                events.append(event)
        except DecodeError:
            if strict:
                raise
        return events

    def raise_for_status(self) -> None:
        if self.error is not None:
            raise self.error


def decode(stream: BinaryIO, profile: digitizer_profile) -> Iterator[decoded_event]:
    """
    Lazily decoding the events in a binary stream, see `decode_session`.
    """
    return iter(decode_session(stream, profile))
