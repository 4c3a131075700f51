import pytest

from hlsstitch.playlist import DynamicPlaylist, Entry, HeaderAccessError, Playlist, parse_playlist
from tests.test_utils.hls import DISCONTINUITY, make_m3u8

EX1 = "http://example.com/1.ts"
EX2 = "http://example.com/2.ts"
OT1 = "http://other.com/1.ts"
OT2 = "http://other.com/2.ts"
OT3 = "http://other.com/3.ts"
OT4 = "http://other.com/4.ts"

D = DISCONTINUITY

# (accumulated, upstream snapshot, expected entries after one merge, is_source_switch)
STITCH_CASES = [
    pytest.param([EX1], [EX1, EX2], [EX1, EX2], False, id="continuity_new_segment"),
    pytest.param([EX1, EX2, OT1], [OT1, OT2], [EX1, EX2, OT1, OT2], False, id="continuity_overlap"),
    pytest.param(
        [EX1, EX2, D, OT3, OT4],
        [OT1, OT2, OT3, OT4],
        [EX1, EX2, D, OT3, OT4],
        False,
        id="continuity_nothing_new",
    ),
    pytest.param([EX1, EX2, D], [OT1, OT2], [EX1, EX2, D, OT1, OT2], False, id="continuity_no_overlap"),
    pytest.param([EX1, EX2], [OT1, OT2, OT3], [EX1, EX2, D, OT1, OT2, OT3], True, id="switch"),
    pytest.param(
        [EX1, EX2],
        [OT1, D, OT2, OT3],
        [EX1, EX2, D, OT1, D, OT2, OT3],
        True,
        id="switch_with_discontinuity",
    ),
]


def _playlist(items: list[str], media_sequence: int | None = 1) -> Playlist:
    return parse_playlist(make_m3u8(items, media_sequence=media_sequence))


def _locations(playlist: DynamicPlaylist) -> list[str]:
    return [DISCONTINUITY if entry.is_discontinuity else entry.location for entry in playlist.entries]


@pytest.mark.parametrize(("original", "stitched", "final", "is_source_switch"), STITCH_CASES)
def test_stitch(original: list[str], stitched: list[str], final: list[str], is_source_switch: bool) -> None:
    dynamic = DynamicPlaylist(_playlist(original, media_sequence=1))

    updated = dynamic.update(_playlist(stitched, media_sequence=2), is_source_switch=is_source_switch)

    assert updated is True
    assert dynamic.render() == make_m3u8(final, media_sequence=2, duration="10.000")


def test_seeded_sequence_is_published() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1], media_sequence=57))

    assert dynamic.outward_sequence == 1
    assert dynamic.last_observed_sequence == 57
    assert dynamic.header("EXT-X-MEDIA-SEQUENCE").as_int() == 1


def test_seed_is_copied() -> None:
    source = _playlist([EX1])
    dynamic = DynamicPlaylist(source)

    source.entries.append(Entry.segment(1, EX2))
    dynamic.update(_playlist([EX1, OT1], media_sequence=2))

    assert source.entries == [Entry.segment(10, EX1), Entry.segment(1, EX2)]
    assert _locations(dynamic) == [EX1, OT1]


def test_unchanged_sequence_is_a_noop() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1]))
    snapshot = _playlist([EX1, EX2], media_sequence=2)

    assert dynamic.update(snapshot) is True
    entries = dynamic.entries
    sequence = dynamic.outward_sequence

    assert dynamic.update(_playlist([EX1, EX2, OT1], media_sequence=2)) is False
    assert dynamic.entries == entries
    assert dynamic.outward_sequence == sequence


def test_seed_sequence_counts_as_observed() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1], media_sequence=5))

    assert dynamic.update(_playlist([EX1, EX2], media_sequence=5)) is False
    assert dynamic.outward_sequence == 1


def test_live_window() -> None:
    dynamic = DynamicPlaylist(_playlist(["seg0.ts"], media_sequence=0))

    for n in range(1, 30):
        snapshot = _playlist([f"seg{i}.ts" for i in range(max(n - 3, 0), n + 1)], media_sequence=n)
        dynamic.update(snapshot)
        assert len(dynamic.entries) <= 12

    assert _locations(dynamic) == [f"seg{i}.ts" for i in range(18, 30)]
    assert dynamic.outward_sequence == 30


def test_overlap_appends_only_new_tail() -> None:
    dynamic = DynamicPlaylist(_playlist(["a.ts", "L.ts"]))

    dynamic.update(_playlist(["a.ts", "L.ts", "X.ts", "Y.ts"], media_sequence=2))

    assert _locations(dynamic) == ["a.ts", "L.ts", "X.ts", "Y.ts"]


def test_overlap_keeps_discontinuities_in_new_tail() -> None:
    dynamic = DynamicPlaylist(_playlist(["L.ts"]))

    dynamic.update(_playlist(["L.ts", D, "X.ts"], media_sequence=2))

    assert _locations(dynamic) == ["L.ts", D, "X.ts"]


def test_overlap_matches_latest_occurrence() -> None:
    dynamic = DynamicPlaylist(_playlist(["L.ts"]))

    dynamic.update(_playlist(["L.ts", "X.ts", "L.ts", "Y.ts"], media_sequence=2))

    assert _locations(dynamic) == ["L.ts", "Y.ts"]


def test_continuity_into_empty_playlist() -> None:
    dynamic = DynamicPlaylist(Playlist.empty())

    assert dynamic.update(_playlist(["a.ts", "b.ts"], media_sequence=3)) is True
    assert _locations(dynamic) == ["a.ts", "b.ts"]
    assert dynamic.last_observed_sequence == 3


def test_continuity_missing_sequence() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1]))

    with pytest.raises(HeaderAccessError, match="EXT-X-MEDIA-SEQUENCE"):
        dynamic.update(_playlist([EX1, EX2], media_sequence=None))

    assert _locations(dynamic) == [EX1]
    assert dynamic.outward_sequence == 1


def test_continuity_bad_sequence() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1]))
    snapshot = parse_playlist("#EXTM3U\n#EXT-X-MEDIA-SEQUENCE:two\n#EXTINF:10.0,\na.ts\n")

    with pytest.raises(HeaderAccessError):
        dynamic.update(snapshot)

    assert _locations(dynamic) == [EX1]
    assert dynamic.last_observed_sequence == 1


def test_switch_always_advances_sequence() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1]))

    assert dynamic.update(Playlist.empty(), is_source_switch=True) is True
    assert dynamic.update(_playlist([OT1], media_sequence=None), is_source_switch=True) is True

    assert dynamic.outward_sequence == 3
    assert dynamic.header("EXT-X-MEDIA-SEQUENCE").as_int() == 3
    assert _locations(dynamic) == [EX1, D, D, OT1]


def test_switch_takes_tail_behind_one_discontinuity() -> None:
    dynamic = DynamicPlaylist(_playlist([EX1]))
    snapshot = _playlist([f"other{i}.ts" for i in range(6)])

    dynamic.update(snapshot, is_source_switch=True)

    assert _locations(dynamic) == [EX1, D, "other2.ts", "other3.ts", "other4.ts", "other5.ts"]


def test_switch_discontinuity_widens_tail() -> None:
    without = DynamicPlaylist(Playlist.empty(), discontinuity_tags=False)
    without.update(_playlist(["s1", "s2", "s3", "s4", "s5", "s6"]), is_source_switch=True)

    widened = DynamicPlaylist(Playlist.empty(), discontinuity_tags=False)
    widened.update(_playlist(["s1", "s2", "s3", D, "s4", "s5", "s6"]), is_source_switch=True)

    assert _locations(without) == ["s3", "s4", "s5", "s6"]
    assert _locations(widened) == ["s3", D, "s4", "s5", "s6"]


def test_switch_is_not_capped() -> None:
    dynamic = DynamicPlaylist(_playlist([f"seg{i}.ts" for i in range(12)]))

    dynamic.update(_playlist(["a.ts", "b.ts", "c.ts", "d.ts"]), is_source_switch=True)

    assert len(dynamic.entries) == 17


def test_render_prefix_and_no_end_list() -> None:
    dynamic = DynamicPlaylist(_playlist(["cam1-0.ts"]), "hls/")

    rendered = dynamic.render()

    assert "hls/cam1-0.ts\n" in rendered
    assert "#EXT-X-ENDLIST" not in rendered


def test_target_duration() -> None:
    dynamic = DynamicPlaylist(parse_playlist(make_m3u8([EX1], target_duration=6)))

    assert dynamic.target_duration() == 6.0

    with pytest.raises(HeaderAccessError, match="EXT-X-TARGETDURATION"):
        DynamicPlaylist(_playlist([EX1])).target_duration()
