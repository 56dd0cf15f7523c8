import pytest

from app.services.feed import FilterCriteria, filter_tracks


def _ids(tracks):
    return [t["id"] for t in tracks]


def test_empty_criteria_returns_input_in_order(tracks):
    out = filter_tracks(tracks, {})
    assert out == tracks
    assert out is not tracks


def test_none_criteria_and_none_values_are_no_constraint(tracks):
    assert filter_tracks(tracks, None) == tracks
    assert filter_tracks(tracks, {"min_length": None, "genres": None, "query": None}) == tracks


def test_min_length_is_inclusive_and_stable():
    tracks = [{"length": 3000}, {"length": 4000}, {"length": 3600}]
    assert filter_tracks(tracks, {"min_length": 3600}) == [{"length": 4000}, {"length": 3600}]


def test_max_length_is_inclusive(tracks):
    assert _ids(filter_tracks(tracks, {"max_length": 3600})) == [1, 3, 4]


def test_length_range(tracks):
    assert _ids(filter_tracks(tracks, {"min_length": 3000, "max_length": 3600})) == [3, 4]


def test_genres_membership():
    tracks = [{"genre": "rock"}, {"genre": "electronic"}, {"genre": "electronic"}]
    out = filter_tracks(tracks, {"genres": ["electronic"]})
    assert out == [tracks[1], tracks[2]]


def test_single_string_genre_is_accepted(tracks):
    assert _ids(filter_tracks(tracks, {"genres": "ambient"})) == [4]


def test_empty_genres_matches_nothing(tracks):
    assert filter_tracks(tracks, {"genres": []}) == []


def test_query_is_case_sensitive_by_default(tracks):
    assert _ids(filter_tracks(tracks, {"query": "Love"})) == [1, 2]
    assert filter_tracks(tracks, {"query": "love"}) == []


def test_query_case_insensitive(tracks):
    assert _ids(filter_tracks(tracks, {"query": "love", "case_sensitive": False})) == [1, 2]
    assert _ids(filter_tracks(tracks, {"query": "FIELD", "case_sensitive": False})) == [4]


def test_empty_query_matches_tracks_with_titles():
    tracks = [{"title": "a"}, {"title": None}, {}]
    assert filter_tracks(tracks, {"query": ""}) == [{"title": "a"}]


def test_min_length_and_genres_is_intersection(tracks):
    by_length = filter_tracks(tracks, {"min_length": 3600})
    by_genre = filter_tracks(tracks, {"genres": ["electronic", "rock"]})
    both = filter_tracks(tracks, {"min_length": 3600, "genres": ["electronic", "rock"]})
    assert _ids(both) == [t["id"] for t in by_length if t in by_genre]
    assert _ids(both) == [2, 3]


def test_missing_or_mistyped_fields_fail_closed():
    tracks = [
        {"id": "ok", "title": "Love", "length": 4000, "genre": "electronic"},
        {"id": "no-length", "title": "Love", "genre": "electronic"},
        {"id": "str-length", "title": "Love", "length": "4000", "genre": "electronic"},
        {"id": "bool-length", "title": "Love", "length": True, "genre": "electronic"},
        {"id": "no-genre", "title": "Love", "length": 4000},
        {"id": "int-title", "title": 42, "length": 4000, "genre": "electronic"},
        "not a track",
        None,
    ]
    criteria = {"min_length": 1, "genres": ["electronic"], "query": "Love"}
    assert [t["id"] for t in filter_tracks(tracks, criteria)] == ["ok"]


def test_float_lengths_compare_numerically():
    tracks = [{"length": 3599.5}, {"length": 3600.0}]
    assert filter_tracks(tracks, {"min_length": 3600}) == [{"length": 3600.0}]


def test_numeric_string_criteria_are_parsed(tracks):
    assert _ids(filter_tracks(tracks, {"min_length": "3600"})) == [2, 3]


@pytest.mark.parametrize(
    "criteria",
    [
        {"min_length": "long"},
        {"max_length": True},
        {"genres": [1, 2]},
        {"genres": 5},
        {"query": 5},
        {"query": "x", "case_sensitive": "no"},
    ],
)
def test_invalid_criteria_raise_value_error(tracks, criteria):
    with pytest.raises(ValueError):
        filter_tracks(tracks, criteria)


def test_unknown_criteria_keys_are_ignored(tracks):
    assert filter_tracks(tracks, {"sort": "desc"}) == tracks


def test_accepts_filter_criteria_object(tracks):
    criteria = FilterCriteria(max_length=300, query="Love")
    assert _ids(filter_tracks(tracks, criteria)) == [1]


def test_criteria_to_dict_only_has_set_values():
    c = FilterCriteria.from_mapping({"genres": ["rock", "ambient"], "query": "x"})
    assert c.to_dict() == {"genres": ["ambient", "rock"], "query": "x", "case_sensitive": True}
    assert FilterCriteria().is_empty()


@pytest.mark.parametrize("bound", ["nan", "inf", " -Infinity ", float("nan"), float("inf")])
def test_non_finite_length_bounds_are_rejected(tracks, bound):
    with pytest.raises(ValueError):
        filter_tracks(tracks, {"min_length": bound})
    with pytest.raises(ValueError):
        filter_tracks(tracks, {"max_length": bound})
