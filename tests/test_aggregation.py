"""
Tests for player update aggregation.
"""

from tracker.services.monitor.aggregation import (
    aggregate_player_updates,
    clean_name,
    to_int,
)


def row(**kw):
    base = {
        "id": 1,
        "server": "en101",
        "name": "Foo",
        "alliance": 10,
        "alliance_name": "Knights",
        "abp_delta": 0,
        "dbp_delta": 0,
        "towns_delta": 0,
        "points_delta": 0,
    }
    base.update(kw)
    return base


class TestCleanName:
    def test_strips_quotes(self):
        assert clean_name("'Foo'") == "Foo"

    def test_plain_name_unchanged(self):
        assert clean_name("Foo") == "Foo"

    def test_inner_quote_unchanged(self):
        assert clean_name("O'Brien") == "O'Brien"

    def test_only_leading_quote_is_checked(self):
        # one leading and one trailing character are removed
        assert clean_name("'Foo") == "Fo"

    def test_empty(self):
        assert clean_name(None) == ""
        assert clean_name("") == ""


class TestToInt:
    def test_values(self):
        assert to_int(5) == 5
        assert to_int("7") == 7
        assert to_int(None) == 0
        assert to_int("abc") == 0
        assert to_int(True) == 0


class TestAggregate:
    def test_example_sums_into_one_record(self):
        rows = [
            row(abp_delta=5, dbp_delta=0, towns_delta=1, points_delta=2),
            row(abp_delta=3, dbp_delta=0, towns_delta=0, points_delta=1),
        ]
        result = aggregate_player_updates(rows)
        assert list(result) == ["10"]
        assert result["10"] == [
            {
                "id": 1,
                "server": "en101",
                "name": "Foo",
                "alliance": 10,
                "alliance_name": "Knights",
                "abp_delta": 8,
                "dbp_delta": 0,
                "towns_delta": 1,
                "points_delta": 3,
            }
        ]

    def test_drops_rows_without_battle_points(self):
        rows = [
            row(id=1, abp_delta=0, dbp_delta=0, points_delta=50),
            row(id=2, abp_delta=-1, dbp_delta=0),
            row(id=3, abp_delta=0, dbp_delta=4),
        ]
        result = aggregate_player_updates(rows)
        assert [p["id"] for p in result["10"]] == [3]

    def test_noise_rows_do_not_contribute_to_sums(self):
        rows = [
            row(abp_delta=2, points_delta=10),
            row(abp_delta=0, dbp_delta=0, points_delta=99),
        ]
        assert aggregate_player_updates(rows)["10"][0]["points_delta"] == 10

    def test_alliance_with_only_noise_is_absent(self):
        rows = [row(alliance=10, abp_delta=1), row(id=2, alliance=20)]
        assert list(aggregate_player_updates(rows)) == ["10"]

    def test_groups_by_alliance_then_player(self):
        rows = [
            row(id=1, alliance=10, abp_delta=1),
            row(id=2, alliance=20, alliance_name="Pirates", dbp_delta=2),
            row(id=1, alliance=10, abp_delta=1),
            row(id=3, alliance=10, abp_delta=4),
        ]
        result = aggregate_player_updates(rows)
        assert list(result) == ["10", "20"]
        assert [p["id"] for p in result["10"]] == [1, 3]
        assert result["10"][0]["abp_delta"] == 2
        assert result["20"][0]["alliance_name"] == "Pirates"

    def test_one_record_per_player(self):
        rows = [row(abp_delta=1) for _ in range(5)]
        result = aggregate_player_updates(rows)
        assert len(result["10"]) == 1
        assert result["10"][0]["abp_delta"] == 5

    def test_first_row_is_template(self):
        rows = [
            row(name="'NewName'", abp_delta=1),
            row(name="OldName", abp_delta=1),
        ]
        assert aggregate_player_updates(rows)["10"][0]["name"] == "NewName"

    def test_missing_alliance(self):
        rows = [row(alliance=None, alliance_name=None, abp_delta=1)]
        result = aggregate_player_updates(rows)
        assert result["null"][0]["alliance_name"] == ""
        assert result["null"][0]["alliance"] is None

    def test_non_numeric_delta_counts_as_zero(self):
        rows = [row(abp_delta=3, towns_delta="x"), row(abp_delta=1, towns_delta=2)]
        assert aggregate_player_updates(rows)["10"][0]["towns_delta"] == 2

    def test_empty(self):
        assert aggregate_player_updates([]) == {}
