import pytest

from mediarefresh.paths import comparison_path, file_name, parent_dir, remap_path, show_folder_name


@pytest.mark.parametrize("path", [
    "/media/Show/ep1.mkv",
    "/mnt/other/Show/ep1.mkv",
    "relative/path.mkv",
])
def test_remap_leaves_paths_outside_source_root(path, log):
    assert remap_path(path, "/mnt/winroot", "/media", log=log) == path


@pytest.mark.parametrize("path,expected", [
    ("/mnt/winroot/Show (2019)/Season 01/ep1.mkv", "/media/Show (2019)/Season 01/ep1.mkv"),
    ("/MNT/WinRoot/Show/ep1.mkv", "/media/Show/ep1.mkv"),
])
def test_remap_swaps_prefix_keeping_remainder(path, expected, log):
    remapped = remap_path(path, "/mnt/winroot", "/media", log=log)
    assert remapped == expected
    assert remapped.startswith("/media")
    assert remapped[len("/media"):] == path[len("/mnt/winroot"):]


def test_remap_windows_root_keeps_separators_after_prefix(log):
    path = "Z:\\TV\\Show\\Season 01\\ep1.mkv"
    assert remap_path(path, "Z:\\TV", "/data/tv", log=log) == "/data/tv\\Show\\Season 01\\ep1.mkv"


@pytest.mark.parametrize("args", [
    ("", "/a", "/b"),
    (None, "/a", "/b"),
    ("/a/x.mkv", "", "/b"),
    ("/a/x.mkv", "/a", ""),
    ("/a/x.mkv", None, None),
])
def test_remap_is_noop_when_anything_is_missing(args, log):
    assert remap_path(*args, log=log) == args[0]


def test_comparison_path():
    assert comparison_path("C:\\Media\\Show\\EP1.MKV") == "c:/media/show/ep1.mkv"
    assert comparison_path(None) == ""


def test_file_name_handles_both_separators():
    assert file_name("/media/Show/ep1.mkv") == "ep1.mkv"
    assert file_name("C:\\Show\\ep1.mkv") == "ep1.mkv"
    assert file_name("ep1.mkv") == "ep1.mkv"


def test_parent_dir():
    assert parent_dir("/media/Show/Season 01/ep1.mkv") == "/media/Show/Season 01"
    assert parent_dir("C:\\Show\\ep1.mkv") == "C:\\Show"
    assert parent_dir("/ep1.mkv") == "/"
    assert parent_dir("ep1.mkv") == "ep1.mkv"


@pytest.mark.parametrize("path,expected", [
    ("/media/The Show (2019)/Season 01/ep1.mkv", "The Show (2019)"),
    ("/media/The Show (2019)/ep1.mkv", "The Show (2019)"),
    ("/media/The Show/Specials/sp1.mp4", "The Show"),
    ("/media/The Show/S02", "The Show"),
    ("/media/The Show/Season 01", "The Show"),
    ("/media/The Show/", "The Show"),
    ("D:\\TV\\Mr. Robot\\Season 4", "Mr. Robot"),
    ("", ""),
])
def test_show_folder_name(path, expected):
    assert show_folder_name(path) == expected


@pytest.mark.parametrize("path", [
    "/media/Show/Season 01/ep1.mpg",
    "/media/Show/Season 01/ep1.m2ts",
    "/media/Show/ep1.vob",
])
def test_show_folder_name_for_files_drops_any_file_name(path):
    assert show_folder_name(path, is_file=True) == "Show"


def test_show_folder_name_guesses_only_known_extensions():
    # A folder path keeps its last segment unless it looks like a video file
    assert show_folder_name("/media/Show/Season 01/ep1.mpg") == "ep1.mpg"
    assert show_folder_name("/media/Mr. Robot", is_file=False) == "Mr. Robot"
