import pytest

from dicterm.services.store_selector import StoreSelector


class TestStoreSelector:

    def test_starts_on_first_store(self, fruit_store, colour_store):
        selector = StoreSelector([fruit_store, colour_store])
        assert selector.active is fruit_store
        assert selector.names == ("fruit", "colour")

    def test_left_from_first_lands_on_last(self, fruit_store, colour_store, big_store):
        selector = StoreSelector([fruit_store, colour_store, big_store])
        assert selector.cycle(-1) is big_store
        assert selector.index == 2

    def test_right_from_last_lands_on_first(self, fruit_store, colour_store, big_store):
        selector = StoreSelector([fruit_store, colour_store, big_store], index=2)
        assert selector.cycle(1) is fruit_store

    @pytest.mark.parametrize("steps", [[1] * 7, [-1] * 5, [1, -1, -1, 1, 1, 1]])
    def test_store_count_invariant(self, fruit_store, colour_store, big_store, steps):
        selector = StoreSelector([fruit_store, colour_store, big_store])
        for step in steps:
            selector.cycle(step)
            assert len(selector) == 3
            assert 0 <= selector.index < 3

    def test_single_store_stays_put(self, fruit_store):
        selector = StoreSelector([fruit_store])
        assert selector.cycle(1) is fruit_store
        assert selector.cycle(-1) is fruit_store

    def test_empty_selector(self):
        selector = StoreSelector([])
        assert selector.active is None
        assert selector.cycle(1) is None
