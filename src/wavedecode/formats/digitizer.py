"""

digitizer.py

Fixed readout geometry of the supported digitizer families.

Each digitizer writes a fixed number of samples per event, with a fixed sample
encoding, and stamps the first word of every event header with a known value.
The value is used to check that the file was produced by the digitizer the
user asked for.

"""

import enum
from dataclasses import dataclass
from typing import Union

import numpy

from ..errors import ConfigurationError


class digitizer_kind(enum.Enum):
    VME = "V"
    DESKTOP = "D"

    @classmethod
    def parse(cls, value: Union["digitizer_kind", str]) -> "digitizer_kind":
        """
        Getting the digitizer kind from either the single character code used
        by the acquisition scripts ('V', 'D') or the name ('vme', 'desktop').
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for kind in cls:
                if key in (kind.value, kind.name):
                    return kind
        raise ConfigurationError(
            f"Unknown digitizer {value!r}, expected one of "
            + ", ".join(f"{k.name.lower()} ({k.value})" for k in cls)
        )


@dataclass(frozen=True)
class digitizer_profile:
    """
    Readout geometry for one digitizer kind
    """

    kind: digitizer_kind
    n_samples: int
    header_magic: int
    sample_dtype: str

    @property
    def sample_size(self) -> int:
        return numpy.dtype(self.sample_dtype).itemsize

    @property
    def block_size(self) -> int:
        """Number of bytes in the sample block of a single event"""
        return self.n_samples * self.sample_size


__profile_dict__ = {
    digitizer_kind.VME: digitizer_profile(
        kind=digitizer_kind.VME,
        n_samples=110,
        header_magic=244,
        sample_dtype="<u2",
    ),
    digitizer_kind.DESKTOP: digitizer_profile(
        kind=digitizer_kind.DESKTOP,
        n_samples=1024,
        header_magic=4120,
        sample_dtype="<f4",
    ),
}


def resolve(kind: Union[digitizer_kind, str]) -> digitizer_profile:
    """
    Getting the readout profile of a digitizer. String codes are accepted and
    parsed with `digitizer_kind.parse`, so an unknown code raises a
    ConfigurationError here rather than during decoding.
    """
    return __profile_dict__[digitizer_kind.parse(kind)]


def profile_from_magic(header_magic: int) -> digitizer_profile:
    for profile in __profile_dict__.values():
        if profile.header_magic == int(header_magic):
            return profile
    raise ConfigurationError(f"No digitizer uses the header value {header_magic}")
