"""
Columnar container and root output
"""

import awkward
import numpy
import pytest
import uproot

from wavedecode.formats.event_tree import event_container
from wavedecode.formats.wavedump import decode_status


def test_from_binary(desktop, make_record_fn, write_file):
    path = write_file(
        make_record_fn(numpy.tile([-1.0, 2.0], 512), desktop),
        make_record_fn(numpy.full(1024, 0.5), desktop),
    )
    container = event_container.from_binary(str(path), "D")

    assert len(container) == 2
    assert container.status is decode_status.CLEAN
    assert container.profile is desktop
    assert awkward.to_list(container.events["index"]) == [1, 2]
    assert awkward.to_list(container.events["zero_crossing"]) == [True, False]
    assert awkward.to_numpy(container.events["samples"]).shape == (2, 1024)


def test_keeps_events_before_truncation(vme, make_record_fn, write_file):
    record = make_record_fn(numpy.full(110, 7), vme)
    path = write_file(record, record, record[:30])
    container = event_container.from_binary(str(path), vme)

    assert len(container) == 2
    assert container.status is decode_status.TRUNCATED


def test_save_and_load(vme, make_record_fn, write_file, tmp_path):
    path = write_file(
        make_record_fn(numpy.arange(110), vme),
        make_record_fn(numpy.full(110, 12), vme),
    )
    container = event_container.from_binary(str(path), vme)
    out = tmp_path / "wave_0.root"
    container.save_to_file(str(out))

    loaded = event_container.from_root(str(out))
    assert loaded.profile is vme
    assert loaded.status is decode_status.CLEAN
    assert len(loaded) == 2
    assert awkward.to_list(loaded.events["index"]) == [1, 2]
    assert awkward.to_list(loaded.events["min_sample"]) == [0.0, 12.0]
    assert awkward.to_list(loaded.events["max_sample"]) == [109.0, 12.0]
    numpy.testing.assert_array_equal(
        awkward.to_numpy(loaded.events["samples"])[0], numpy.arange(110)
    )


def test_save_without_events(desktop, make_record_fn, write_file, tmp_path):
    path = write_file(make_record_fn(numpy.zeros(1024), desktop, magic=244))
    container = event_container.from_binary(str(path), desktop)
    assert len(container) == 0
    assert container.status is decode_status.FORMAT_MISMATCH

    out = tmp_path / "empty.root"
    container.save_to_file(str(out))
    loaded = event_container.from_root(str(out))
    assert len(loaded) == 0
    assert loaded.status is decode_status.FORMAT_MISMATCH


def test_unknown_status_code(tmp_path):
    out = tmp_path / "bad_status.root"
    with uproot.recreate(str(out)) as f:
        f["run_info"] = {
            "header_magic": numpy.array([244]),
            "n_samples": numpy.array([110]),
            "n_events": numpy.array([0]),
            "status": numpy.array([9]),
        }

    with pytest.raises(RuntimeError, match="Unknown decoding status 9"):
        event_container.from_root(str(out))
