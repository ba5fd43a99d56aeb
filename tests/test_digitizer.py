"""
Digitizer profile lookup
"""

import pytest

from wavedecode.errors import ConfigurationError
from wavedecode.formats.digitizer import digitizer_kind, profile_from_magic, resolve


def test_vme_profile():
    profile = resolve(digitizer_kind.VME)
    assert profile.n_samples == 110
    assert profile.header_magic == 244
    assert profile.sample_size == 2
    assert profile.block_size == 220


def test_desktop_profile():
    profile = resolve(digitizer_kind.DESKTOP)
    assert profile.n_samples == 1024
    assert profile.header_magic == 4120
    assert profile.sample_size == 4
    assert profile.block_size == 4096


@pytest.mark.parametrize(
    "code, kind",
    [
        ("V", digitizer_kind.VME),
        ("vme", digitizer_kind.VME),
        ("D", digitizer_kind.DESKTOP),
        (" desktop ", digitizer_kind.DESKTOP),
        (digitizer_kind.DESKTOP, digitizer_kind.DESKTOP),
    ],
)
def test_parse_codes(code, kind):
    assert digitizer_kind.parse(code) is kind
    assert resolve(code) is resolve(kind)


@pytest.mark.parametrize("code", ["X", "", 86, None])
def test_unknown_digitizer(code):
    with pytest.raises(ConfigurationError):
        resolve(code)


def test_profile_from_magic():
    assert profile_from_magic(244).kind is digitizer_kind.VME
    assert profile_from_magic(4120).kind is digitizer_kind.DESKTOP
    with pytest.raises(ConfigurationError):
        profile_from_magic(0)
