import json

import pandas as pd
import pytest

from storefront.catalog_build import (
    CANONICAL_COLUMNS,
    _canonicalize_active,
    build_catalog_snapshot,
    load_catalog_snapshot,
    load_raw_catalog,
    normalize_catalog_df,
)


def test_canonicalize_active():
    assert _canonicalize_active(None) is True
    assert _canonicalize_active(float("nan")) is True
    assert _canonicalize_active("Yes") is True
    assert _canonicalize_active("TRUE") is True
    assert _canonicalize_active("inactive") is False
    assert _canonicalize_active("false") is False
    assert _canonicalize_active(False) is False
    assert _canonicalize_active(0) is False


def test_normalize_catalog_basic():
    raw = pd.DataFrame(
        {
            "productId": ["p1", "p2", "p2", ""],
            "productName": ["Drill  XL", "Chuck", "Chuck dup", "No id"],
            "description": ["A <b>great</b> drill!", None, None, None],
            "categoryId": ["tools", None, None, None],
            "brandName": ["Bosch", "  ", None, None],
            "isActive": ["true", "false", "true", "true"],
        }
    )

    df = normalize_catalog_df(raw)

    assert list(df.columns) == CANONICAL_COLUMNS
    assert list(df["id"]) == ["p1", "p2"]

    first = df.iloc[0]
    assert first["name"] == "Drill XL"
    assert first["description"] == "A great drill!"
    assert first["category_id"] == "tools"
    assert first["brand_name"] == "Bosch"
    assert bool(first["is_active"]) is True

    second = df.iloc[1]
    assert second["description"] is None
    assert second["category_id"] is None
    assert second["brand_name"] is None
    assert bool(second["is_active"]) is False


def test_normalize_catalog_defaults_optional_columns():
    raw = pd.DataFrame({"id": [1.0, 2.0], "name": ["A", "B"]})
    df = normalize_catalog_df(raw)
    assert list(df["id"]) == ["1", "2"]
    assert df["category_id"].tolist() == [None, None]
    assert df["is_active"].tolist() == [True, True]


def test_normalize_catalog_requires_id_and_name():
    with pytest.raises(ValueError):
        normalize_catalog_df(pd.DataFrame({"title_only": ["x"]}))


def test_load_raw_catalog_csv_keeps_ids_as_text(tmp_path):
    path = tmp_path / "catalog.csv"
    path.write_text("id,name,isActive\n007,Drill,yes\n", encoding="utf-8")
    df = normalize_catalog_df(load_raw_catalog(path))
    assert df.iloc[0]["id"] == "007"


def test_load_raw_catalog_json(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps([{"id": "a", "name": "Drill", "brandName": "Bosch", "isActive": False}]),
        encoding="utf-8",
    )
    df = normalize_catalog_df(load_raw_catalog(path))
    assert df.iloc[0]["brand_name"] == "Bosch"
    assert bool(df.iloc[0]["is_active"]) is False


def test_load_raw_catalog_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_raw_catalog(tmp_path / "missing.csv")
    bad = tmp_path / "catalog.txt"
    bad.write_text("x", encoding="utf-8")
    with pytest.raises(ValueError):
        load_raw_catalog(bad)


def test_snapshot_round_trip(tmp_path):
    raw = tmp_path / "catalog.csv"
    raw.write_text(
        "id,name,categoryId,brandName,isActive\n"
        "a,Drill,tools,Bosch,yes\n"
        "b,Hose,,,no\n",
        encoding="utf-8",
    )
    out = build_catalog_snapshot(raw, tmp_path / "snap" / "catalog.parquet")
    assert out.exists()

    df = load_catalog_snapshot(out)
    assert list(df["id"]) == ["a", "b"]
    assert df.iloc[1]["category_id"] is None
    assert bool(df.iloc[1]["is_active"]) is False


def test_load_catalog_snapshot_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog_snapshot(tmp_path / "nope.parquet")


def test_load_raw_catalog_json_nested_category(tmp_path):
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"id": "a", "name": "Drill", "category": {"id": "c1", "name": "Tools"}},
                {"id": "b", "name": "Hose", "category": None},
            ]
        ),
        encoding="utf-8",
    )
    df = normalize_catalog_df(load_raw_catalog(path))
    assert df.iloc[0]["category_id"] == "c1"
    assert df.iloc[1]["category_id"] is None


def test_snapshot_optional_nulls_load_as_none(tmp_path):
    raw = pd.DataFrame({"id": ["a"], "name": ["Drill"]})
    out = tmp_path / "catalog.parquet"
    normalize_catalog_df(raw).to_parquet(out, index=False)

    row = load_catalog_snapshot(out).iloc[0]
    assert row["description"] is None
    assert row["category_id"] is None
    assert row["brand_name"] is None
    assert bool(row["is_active"]) is True
