"""

event_tree.py

Container for the decoded wavedump events.

The events are held as an awkward array, with one entry per trigger, so that
they can be handed to the numerical analysis tools or stored in the standard
root format used by the rest of the analysis chain. The container itself is a
thin wrapper: all the decoding rules live in `wavedump.py`.

"""

from typing import Iterable, Union
from dataclasses import dataclass

import awkward
import uproot
import numpy

from .digitizer import digitizer_profile, profile_from_magic
from .wavedump import decode_session, decode_status, decoded_event

__status_codes__ = {
    decode_status.RUNNING: -1,
    decode_status.CLEAN: 0,
    decode_status.FORMAT_MISMATCH: 1,
    decode_status.TRUNCATED: 2,
}


@dataclass
class event_container:
    profile: digitizer_profile
    status: decode_status
    events: awkward.Array

    def __len__(self) -> int:
        return len(self.events)

    @staticmethod
    def from_events(
        events: Iterable[decoded_event],
        profile: digitizer_profile,
        status: decode_status = decode_status.CLEAN,
    ):
        """
        Packing already decoded events into the columnar format.
        """
        events = list(events)
        samples = numpy.zeros((len(events), profile.n_samples), dtype=numpy.float32)
        for row, event in enumerate(events):
            samples[row] = event.samples

        data = awkward.zip(
            {
                "index": numpy.array([e.index for e in events], dtype=numpy.int64),
                "min_sample": numpy.array(
                    [e.min_sample for e in events], dtype=numpy.float32
                ),
                "max_sample": numpy.array(
                    [e.max_sample for e in events], dtype=numpy.float32
                ),
                "zero_crossing": numpy.array(
                    [e.zero_crossing for e in events], dtype=numpy.bool_
                ),
            }
        )
        data["samples"] = awkward.from_numpy(samples)
        return event_container(profile=profile, status=status, events=data)

    @staticmethod
    def from_session(session: decode_session):
        """
        Draining a decoding session. Events decoded before a format or
        truncation error are kept, the error is reflected in `status`.
        """
        events = session.read_all(strict=False)
        return event_container.from_events(events, session.profile, session.status)

    @staticmethod
    def from_binary(filename: str, digitizer: Union[digitizer_profile, str] = "V"):
        with decode_session.open(filename, digitizer) as session:
            return event_container.from_session(session)

    @staticmethod
    def from_root(filename: str):
        with uproot.open(filename) as f:
            run_info = f["run_info"].arrays()
            profile = profile_from_magic(run_info["header_magic"][0])
            status_code = int(run_info["status"][0])
            status = next(
                (s for s, c in __status_codes__.items() if c == status_code), None
            )
            if status is None:
                raise RuntimeError(
                    f"Unknown decoding status {status_code} in {filename}."
                )
            events = f["DataTree"].arrays()

            return event_container(profile=profile, status=status, events=events)

    def save_to_file(self, filename: str) -> None:
        """
        Saving the events to root.
        """
        with uproot.recreate(filename) as f:
            f["run_info"] = {
                "header_magic": numpy.array([self.profile.header_magic]),
                "n_samples": numpy.array([self.profile.n_samples]),
                "n_events": numpy.array([len(self.events)]),
                "status": numpy.array([__status_codes__[self.status]]),
            }
            branches = {
                "index": numpy.int64,
                "samples": numpy.dtype((numpy.float32, (self.profile.n_samples,))),
                "min_sample": numpy.float32,
                "max_sample": numpy.float32,
                "zero_crossing": numpy.bool_,
            }
            tree = f.mktree("DataTree", branches)
            if len(self.events) > 0:
                tree.extend(
                    {name: awkward.to_numpy(self.events[name]) for name in branches}
                )
