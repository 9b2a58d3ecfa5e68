import pytest

from pathrouter.regex_generator import (
    generate_common_regex_str,
    generate_exact_match_regex,
    generate_prefix_match_regex,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/", ("/", [])),
        ("/api/v1/services/get_ip", ("/api/v1/services/get_ip", [])),
    ],
)
def test_common_regex_str_normal(path, expected):
    assert generate_common_regex_str(path) == expected


def test_common_regex_str_special_character():
    assert generate_common_regex_str("/users/user-data/view") == (r"/users/user\-data/view", [])


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/users/:username/data", (r"/users/([^/]+)/data", ["username"])),
        (
            "/users/:username/data/:attr/view",
            (r"/users/([^/]+)/data/([^/]+)/view", ["username", "attr"]),
        ),
        ("/users/:username", (r"/users/([^/]+)", ["username"])),
        (":username", (r"([^/]+)", ["username"])),
    ],
)
def test_common_regex_str_params(path, expected):
    assert generate_common_regex_str(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("*", (r"(.*)", ["*"])),
        ("/users/*", (r"/users/(.*)", ["*"])),
        ("/users/*/data", (r"/users/(.*)/data", ["*"])),
        ("/users/*/data/*", (r"/users/(.*)/data/(.*)", ["*", "*"])),
        ("/users/**", (r"/users/(.*)(.*)", ["*", "*"])),
    ],
)
def test_common_regex_str_star_glob(path, expected):
    assert generate_common_regex_str(path) == expected


def test_exact_match_regex_matches_whole_path_only():
    regex, names = generate_exact_match_regex("/users/:username/data")
    assert names == ["username"]
    match = regex.match("/users/john/data")
    assert match is not None
    assert match.group(1) == "john"
    assert regex.match("/users/john/data/extra") is None
    assert regex.match("/users/john/data\n") is None
    assert regex.match("/users/a/b/data") is None


def test_exact_match_regex_escapes_literal_dots():
    regex, _ = generate_exact_match_regex("/file.txt")
    assert regex.match("/file.txt") is not None
    assert regex.match("/fileXtxt") is None


def test_exact_match_star_spans_newlines_and_slashes():
    regex, names = generate_exact_match_regex("/*")
    assert names == ["*"]
    match = regex.match("/a/b\nc")
    assert match is not None
    assert match.group(1) == "a/b\nc"


def test_prefix_match_regex_allows_trailing_content():
    regex, names = generate_prefix_match_regex("/api/:version")
    assert names == ["version"]
    match = regex.match("/api/v1/users")
    assert match is not None
    assert match.group(1) == "v1"
    assert regex.match("/other/api/v1") is None