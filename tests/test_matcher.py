from conftest import Capability

from mediarefresh.matcher import match_by_path, match_in_tree
from mediarefresh.models import RemoteEntity, Reply
from mediarefresh.plex import PlexNode


def test_filename_match_despite_different_roots(log):
    entity = RemoteEntity(1, "Pilot", path="/x/Show/S01E01.mkv")
    assert match_by_path([entity], "/y/Show/S01E01.mkv", log=log) is entity


def test_filename_match_ignores_case_and_separators(log):
    entity = RemoteEntity(1, "Pilot", path="D:\\TV\\Show\\s01e01.MKV")
    assert match_by_path([entity], "/tv/Show/S01E01.mkv", log=log) is entity


def test_path_suffix_match(log):
    # Filenames differ but one full path ends with the other
    entity = RemoteEntity(5, "Pilot", path="/tv/Show/Season 01/The Show - ep1.mkv")
    assert match_by_path([entity], "Show - EP1.mkv", log=log) is entity
    assert "by path suffix" in log.console.file.getvalue()


def test_entities_without_path_are_skipped(log):
    first = RemoteEntity(1, "No file")
    second = RemoteEntity(2, "Pilot", path="/tv/Show/ep1.mkv")
    assert match_by_path([first, second], "/media/Show/ep1.mkv", log=log) is second


def test_first_match_wins_in_listing_order(log):
    a = RemoteEntity(1, "A", path="/one/ep1.mkv")
    b = RemoteEntity(2, "B", path="/two/ep1.mkv")
    assert match_by_path([a, b], "/three/ep1.mkv", log=log) is a


def test_no_flat_match(log):
    entities = [RemoteEntity(1, "A", path="/tv/Show/ep2.mkv")]
    assert match_by_path(entities, "/tv/Show/ep1.mkv", log=log) is None
    assert match_by_path(entities, "", log=log) is None


def season(key):
    return PlexNode('Directory', {'ratingKey': key, 'type': 'season'})


def episode(key, *files):
    parts = [PlexNode('Part', {'file': f}) for f in files]
    return PlexNode('Video', {'ratingKey': key, 'type': 'episode'}, [PlexNode('Media', {}, parts)])


def test_tree_match_finds_episode_by_filename(log):
    children = Capability(by_arg={
        '10': Reply(True, [PlexNode('Directory', {'ratingKey': 'x', 'type': 'album'}), season('11'), season('12')]),
        '11': Reply(True, [episode('101', '/tv/Show/Season 01/ep1.mkv')]),
        '12': Reply(True, [episode('201', '/tv/Show/Season 02/other.mkv', '/tv/Show/Season 02/EP2.mkv')]),
    })
    assert match_in_tree('10', 'ep2.mkv', children, log=log) == '201'
    assert [c[0] for c in children.calls] == ['10', '11', '12']


def test_tree_seasons_are_fetched_lazily(log):
    children = Capability(by_arg={
        '10': Reply(True, [season('11'), season('12')]),
        '11': Reply(True, [episode('101', '/tv/Show/Season 01/ep1.mkv')]),
        '12': Reply(True, [episode('201', '/tv/Show/Season 02/ep2.mkv')]),
    })
    assert match_in_tree('10', 'ep1.mkv', children, log=log) == '101'
    assert [c[0] for c in children.calls] == ['10', '11']


def test_tree_skips_failed_seasons_and_non_episodes(log):
    children = Capability(by_arg={
        '10': Reply(True, [season('11'), season('12')]),
        '11': Reply(False, [], 500),
        '12': Reply(True, [PlexNode('Video', {'ratingKey': 'c', 'type': 'clip'}, [PlexNode('Part', {'file': '/ep1.mkv'})]),
                           episode('201', '/tv/Show/Season 02/ep1.mkv')]),
    })
    assert match_in_tree('10', 'ep1.mkv', children, log=log) == '201'


def test_tree_miss_returns_none(log):
    children = Capability(by_arg={
        '10': Reply(True, [season('11')]),
        '11': Reply(True, [episode('101', '/tv/Show/Season 01/ep1.mkv')]),
    })
    assert match_in_tree('10', 'ep9.mkv', children, log=log) is None
    assert match_in_tree('99', 'ep1.mkv', Capability(Reply(False, [], 404)), log=log) is None
