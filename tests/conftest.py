import io

import numpy
import pytest

from wavedecode.formats import digitizer


def make_record(samples, profile, magic=None):
    """Building the bytes of a single wavedump event"""
    header = numpy.zeros(6, dtype="<i4")
    header[0] = profile.header_magic if magic is None else magic
    samples = numpy.asarray(samples, dtype=profile.sample_dtype)
    assert len(samples) == profile.n_samples
    return header.tobytes() + samples.tobytes()


@pytest.fixture
def vme():
    return digitizer.resolve(digitizer.digitizer_kind.VME)


@pytest.fixture
def desktop():
    return digitizer.resolve(digitizer.digitizer_kind.DESKTOP)


@pytest.fixture
def make_record_fn():
    return make_record


@pytest.fixture
def make_stream():
    def _make(*records):
        return io.BytesIO(b"".join(records))

    return _make


@pytest.fixture
def write_file(tmp_path):
    def _write(*records, name="wave_0.dat"):
        path = tmp_path / name
        path.write_bytes(b"".join(records))
        return path

    return _write
