"""Tests for the version string."""

from unittest.mock import patch

from keyviz import version
from keyviz.version import BuildInfo, get_version_string


def test_version_with_commit():
    info = BuildInfo(version="0.1.0", commit="0123456789abcdef", dirty=False)
    with patch.object(version, 'get_build_info', return_value=info):
        assert get_version_string() == "keyviz 0.1.0 (0123456)"


def test_dirty_checkout():
    info = BuildInfo(version="0.1.0", commit="0123456789abcdef", dirty=True)
    with patch.object(version, 'get_build_info', return_value=info):
        assert get_version_string() == "keyviz 0.1.0 (0123456-dirty)"


def test_unknown_everything():
    info = BuildInfo(version=None, commit=None, dirty=False)
    with patch.object(version, 'get_build_info', return_value=info):
        assert get_version_string() == "keyviz unknown"


def test_falls_back_to_embedded_commit():
    with patch.object(version, '_commit_from_checkout', return_value=(None, False)), \
            patch.object(version, '_commit_from_build', return_value="feedbeef"), \
            patch.object(version, '_installed_version', return_value="0.1.0"):
        assert version.get_build_info() == BuildInfo("0.1.0", "feedbeef", False)
