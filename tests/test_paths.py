import dataclasses

import pytest

from jcache import (
    paths,
    settings,
)


@pytest.mark.parametrize(
    "segment, expected",
    [
        ("", ""),
        ("plain", "plain"),
        ("a/b", "a_b"),
        ('a\\b?c%d*e:f|g"h<i>j', "a_b_c_d_e_f_g_h_i_j"),
        ("https://host/x?y=1", "https___host_x_y=1"),
    ],
)
def test_sanitize(segment, expected):
    assert paths.sanitize(segment) == expected
    assert len(paths.sanitize(segment)) == len(segment)


@pytest.mark.parametrize(
    "args, expected",
    [
        ((), "global"),
        (("",), "empty"),
        (("123",), "123"),
        ((42,), "global"),
        ((None,), "global"),
        (({"id": 1},), "global"),
        (("a", "b"), "a"),
    ],
)
def test_subfolder(args, expected):
    assert paths.subfolder(args) == expected


def test_resolve_argument_derived(config, tmp_path):
    location = paths.resolve(config, "apiCache", None, ("123",))
    assert location.subfolder == "123"
    assert location.directory == tmp_path / "cache" / "123"
    assert location.path == tmp_path / "cache" / "123" / "apiCache.json"


def test_resolve_is_deterministic(config):
    assert paths.resolve(config, "f", None, ("",)) == paths.resolve(
        config, "f", None, ("",)
    )


def test_resolve_slash_is_one_segment(config, tmp_path):
    location = paths.resolve(config, "f", None, ("a/b",))
    assert location.subfolder == "a/b"
    assert location.path == tmp_path / "cache" / "a_b" / "f.json"
    assert location.path.parent.parent == tmp_path / "cache"


def test_resolve_explicit_subfolder_wins(config, tmp_path):
    location = paths.resolve(config, "api", "api", ("arg1",))
    assert location.path == tmp_path / "cache" / "api" / "api.json"


def test_resolve_explicit_empty_subfolder_is_root(config, tmp_path):
    location = paths.resolve(config, "api", "", ("arg1",))
    assert location.directory == tmp_path / "cache"
    assert location.path == tmp_path / "cache" / "api.json"


def test_resolve_direct_mode(config, tmp_path):
    config = dataclasses.replace(config, derive_subfolder=False)
    location = paths.resolve(config, "api", None, ("arg1",))
    assert location.subfolder == ""
    assert location.path == tmp_path / "cache" / "api.json"


def test_resolve_folder_and_extension(config, tmp_path):
    config = dataclasses.replace(
        config,
        cache_folder=".jcache",
        cache_file_extension="jsont",
    )
    location = paths.resolve(config, "apiCache", None, (1,))
    assert location.path == tmp_path / ".jcache" / "global" / "apiCache.jsont"


def test_root_defaults_to_working_directory(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert settings.Config().root == tmp_path / "cache"
