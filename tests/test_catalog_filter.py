from storefront.catalog_filter import brand_options, category_options, filter_catalog
from storefront.config import CatalogItem


def _catalog():
    return [
        CatalogItem(id="1", name="Cordless Drill", category_id="tools", brand_name="Bosch"),
        CatalogItem(id="2", name="Drill Bits", category_id="spares", brand_name="Makita"),
        CatalogItem(id="3", name="Garden Hose", category_id="outdoor"),
        CatalogItem(id="4", name="Hidden Drill", category_id="tools", brand_name="Bosch", is_active=False),
    ]


def test_filter_by_search_is_case_insensitive_substring():
    out = filter_catalog(_catalog(), search="  DRILL ")
    assert [i.id for i in out] == ["1", "2"]


def test_filter_by_category_and_brand():
    assert [i.id for i in filter_catalog(_catalog(), category="tools")] == ["1"]
    assert [i.id for i in filter_catalog(_catalog(), brand="Makita")] == ["2"]
    assert filter_catalog(_catalog(), category="tools", brand="Makita") == []


def test_filter_defaults_return_all_active():
    assert [i.id for i in filter_catalog(_catalog())] == ["1", "2", "3"]
    assert len(filter_catalog(_catalog(), active_only=False)) == 4


def test_options_are_distinct_in_first_seen_order():
    assert category_options(_catalog()) == ["tools", "spares", "outdoor"]
    assert brand_options(_catalog()) == ["Bosch", "Makita"]


def test_blank_brand_is_no_filter():
    assert [i.id for i in filter_catalog(_catalog(), brand="")] == ["1", "2", "3"]
    assert [i.id for i in filter_catalog(_catalog(), brand="  ")] == ["1", "2", "3"]
