import pytest

from pagedview import PagedDataViewModel, ReadOnlyCollectionError, ViewSettings
from pagedview.columns import ColumnDefinitionError
from pagedview.models import SortDirection
from tests.factories import Player, make_nv_columns, make_nv_rows, make_player_columns, make_players


def _names(rows):
    return [r.name.split()[0] for r in rows]


def test_sort_and_paging_scenario():
    vm = PagedDataViewModel(make_nv_columns(), make_nv_rows(), page_size=2)
    vm.sort("v")
    assert [r["v"] for r in vm.filtered_items] == [1, 2, 3]
    assert vm.page == 1
    assert [r["v"] for r in vm.page_items] == [1, 2]
    vm.page = 2
    assert [r["v"] for r in vm.page_items] == [3]
    assert vm.num_pages == 2


def test_invalid_page_size_scenario():
    vm = PagedDataViewModel(make_nv_columns(), make_nv_rows(), page_size=0)
    assert vm.page_size == 0
    assert vm.num_pages == vm.max_pages == -1
    assert not vm.has_valid_page_size
    assert list(vm.page_items) == []
    vm.page = 2
    assert list(vm.page_items) == []


def test_search_without_matches_scenario():
    vm = PagedDataViewModel(make_nv_columns(), make_nv_rows())
    vm.search("xyz")
    assert list(vm.filtered_items) == []
    assert list(vm.page_items) == []
    assert vm.num_pages == 0
    assert vm.has_valid_page_size


def test_defaults_come_from_settings():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    assert vm.page_size == 25
    assert vm.page == 1
    custom = PagedDataViewModel(
        make_player_columns(),
        make_players(),
        settings=ViewSettings(default_page_size=2, default_page=3),
    )
    assert custom.page_size == 2
    assert custom.page == 3
    assert _names(custom.page_items) == ["Eve"]


def test_missing_columns_raise():
    with pytest.raises(ColumnDefinitionError):
        PagedDataViewModel(None)  # type: ignore[arg-type]


def test_column_accessors():
    vm = PagedDataViewModel(make_player_columns())
    assert [c.property_id for c in vm.column_infos] == ["name", "club", "rating", "note"]
    assert [c.property_id for c in vm.display_column_infos] == ["name", "club", "rating"]
    assert vm.get_display_column("Verein").property_id == "club"
    assert vm.get_display_column("nope") is None


def test_set_data_source_copies_and_accepts_none():
    players = make_players()
    vm = PagedDataViewModel(make_player_columns(), players)
    assert list(vm.original_collection) == players
    assert list(vm.all_items) == players
    players.append(Player("Zed", None, 1))
    assert len(vm.all_items) == 5
    vm.set_data_source(None)
    assert len(vm.original_collection) == 0
    assert len(vm.all_items) == 0
    assert len(vm.filtered_items) == 0
    assert vm.num_pages == 0
    assert vm.max_pages == 0


def test_alterations_are_sticky_and_compose():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    vm.search("brown")
    vm.filter(lambda p: p.rating is not None)
    assert _names(vm.filtered_items) == ["Alice"]
    vm.search(None)
    assert _names(vm.filtered_items) == ["Alice", "Bob", "Carla", "Eve"]
    vm.sort("Rating")
    assert _names(vm.filtered_items) == ["Bob", "Eve", "Alice", "Carla"]
    vm.clear_filter()
    assert _names(vm.filtered_items) == ["Dan", "Bob", "Eve", "Alice", "Carla"]


def test_null_filter_keeps_existing_filter():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    only_ost = lambda p: p.club == "SV Ost"  # noqa: E731
    vm.filter(only_ost)
    vm.filter(None)
    assert vm.pipeline_state.last_filter is only_ost
    assert _names(vm.filtered_items) == ["Bob", "Eve"]


def test_sort_cycle_over_three_calls():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    vm.multi_sort(lambda rows: list(rows))
    column = vm.get_display_column("Name")
    expected = [
        (SortDirection.ASCENDING, ["Alice", "Bob", "Carla", "Dan", "Eve"]),
        (SortDirection.DESCENDING, ["Eve", "Dan", "Carla", "Bob", "Alice"]),
        (SortDirection.ASCENDING, ["Alice", "Bob", "Carla", "Dan", "Eve"]),
    ]
    for direction, names in expected:
        vm.sort("Name")
        assert column.sort_direction is direction
        assert _names(vm.filtered_items) == names
        assert vm.pipeline_state.last_multi_sort is None


def test_multi_sort_same_reference_is_noop():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    calls = []

    def by_rating_desc(rows):
        calls.append(1)
        return sorted(rows, key=lambda p: p.rating or 0, reverse=True)

    vm.multi_sort(by_rating_desc)
    vm.multi_sort(by_rating_desc)
    assert len(calls) == 1
    assert _names(vm.filtered_items) == ["Carla", "Alice", "Eve", "Bob", "Dan"]
    vm.update_alterations()
    assert len(calls) == 2


def test_multi_sort_after_sort_clears_column():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    vm.sort("Rating")
    vm.multi_sort(lambda rows: sorted(rows, key=lambda p: p.name, reverse=True))
    assert vm.pipeline_state.last_sort_column is None
    assert vm.get_display_column("Rating").sort_direction is SortDirection.NONE
    assert _names(vm.filtered_items) == ["Eve", "Dan", "Carla", "Bob", "Alice"]


def test_direct_mutation_requires_refresh():
    vm = PagedDataViewModel(make_player_columns(), make_players(), page_size=2)
    vm.all_items.append(Player("Finn Brown", "SV Ost", 1200))
    assert len(vm.filtered_items) == 5
    assert vm.num_pages == 3
    assert vm.max_pages == 3
    assert len(vm.original_collection) == 5
    vm.update_alterations()
    assert len(vm.filtered_items) == 6
    assert vm.num_pages == 3


def test_derived_collections_are_read_only():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    with pytest.raises(ReadOnlyCollectionError):
        vm.filtered_items.append(Player("X", None, None))
    with pytest.raises(ReadOnlyCollectionError):
        del vm.page_items[0]
    with pytest.raises(ReadOnlyCollectionError):
        vm.original_collection.clear()


def test_page_size_resets_to_first_page():
    vm = PagedDataViewModel(make_player_columns(), make_players(), page_size=2, page=3)
    assert _names(vm.page_items) == ["Eve"]
    vm.page_size = 3
    assert vm.page == 1
    assert _names(vm.page_items) == ["Alice", "Bob", "Carla"]
    vm.page_size = -1
    assert vm.page_size == 3


def test_page_zero_shows_nothing_and_survives_page_size_change():
    vm = PagedDataViewModel(make_player_columns(), make_players(), page_size=2)
    vm.page = 0
    assert list(vm.page_items) == []
    vm.page_size = 4
    assert vm.page == 0
    assert list(vm.page_items) == []


def test_pagination_law_across_pages():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    for size in (1, 2, 3, 4, 5, 7):
        vm.page_size = size
        for page in range(1, 8):
            vm.page = page
            expected = min(size, max(0, len(vm.filtered_items) - size * (page - 1)))
            assert len(vm.page_items) == expected
        assert vm.num_pages == -(-len(vm.filtered_items) // size)


def test_reset_from_own_collections_keeps_records():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    vm.all_items.pop()
    vm.set_data_source(vm.original_collection)
    assert len(vm.all_items) == 5
    assert len(vm.original_collection) == 5
    assert len(vm.filtered_items) == 5
    vm.all_items.pop()
    vm.set_data_source(vm.all_items)
    assert _names(vm.original_collection) == ["Alice", "Bob", "Carla", "Dan"]
    assert _names(vm.filtered_items) == ["Alice", "Bob", "Carla", "Dan"]


def test_reapplying_same_filter_leaves_result_unchanged():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    only_ost = lambda p: p.club == "SV Ost"  # noqa: E731
    vm.filter(only_ost)
    first = list(vm.filtered_items)
    vm.filter(only_ost)
    assert list(vm.filtered_items) == first
    assert _names(first) == ["Bob", "Eve"]


def test_unknown_sort_column_leaves_order_untouched():
    vm = PagedDataViewModel(make_player_columns(), make_players())
    vm.sort("Rating")
    vm.sort("unknown")
    assert _names(vm.filtered_items) == ["Alice", "Bob", "Carla", "Dan", "Eve"]
    assert all(c.sort_direction is SortDirection.NONE for c in vm.column_infos)
