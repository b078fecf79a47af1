from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
from loguru import logger

from .config import CATALOG_RAW_DIR, CATALOG_SNAPSHOT_PATH, RAW_CATALOG_SUFFIXES
from .constants import ACTIVE_MARKERS, INACTIVE_MARKERS
from .normalize import basic_clean


CANONICAL_COLUMNS = [
    "id",
    "name",
    "description",
    "category_id",
    "brand_name",
    "is_active",
]


# ---------------------------
# Column detection / standardization
# ---------------------------

# Admin exports and API dumps name the same fields differently.
COLUMN_CANDIDATES: Dict[str, List[str]] = {
    "id": [
        "id",
        "productId",
        "product_id",
        "Product ID",
    ],
    "name": [
        "name",
        "productName",
        "product_name",
        "Product Name",
        "Title",
    ],
    "description": [
        "description",
        "Description",
        "Product Description",
        "details",
    ],
    "category_raw": [
        "categoryId",
        "category_id",
        "Category ID",
        "category",
        "Category",
    ],
    "brand_raw": [
        "brandName",
        "brand_name",
        "Brand Name",
        "brand",
        "Brand",
    ],
    "active_raw": [
        "isActive",
        "is_active",
        "Active",
        "active",
        "status",
        "Status",
    ],
}


def _standardize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Rename columns from a raw catalog export to the internal names:

    - id
    - name
    - description
    - category_raw
    - brand_raw
    - active_raw
    """
    col_map: Dict[str, str] = {}
    lower_to_original = {str(c).lower(): c for c in df.columns}

    for canon, candidates in COLUMN_CANDIDATES.items():
        for candidate in candidates:
            # Try exact, then case-insensitive
            if candidate in df.columns:
                col_map[candidate] = canon
                break
            cand_lower = candidate.lower()
            if cand_lower in lower_to_original:
                col_map[lower_to_original[cand_lower]] = canon
                break

    logger.info("Standardizing columns with map: {}", col_map)
    return df.rename(columns=col_map)


# ---------------------------
# Field parsing helpers
# ---------------------------

def _is_missing(value) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        # list-like values
        return False


def _canonicalize_id(value) -> str:
    """
    Coerce an id cell to a clean string. Whole floats (pandas reads integer
    columns with gaps as float) lose their trailing ``.0``.
    """
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _canonicalize_category(value) -> Optional[str]:
    """
    Category id from a cell. API dumps nest the category as an object;
    its ``id`` is used.
    """
    if isinstance(value, dict):
        value = value.get("id")
    return _canonicalize_id(value) or None


def _optional_text(value) -> Optional[str]:
    """Empty or missing cells become None."""
    if _is_missing(value):
        return None
    text = basic_clean(str(value))
    return text or None


def _canonicalize_active(value) -> bool:
    """
    Normalize an active flag to a bool.

    Missing values default to active; unknown strings also stay active but
    are logged so bad exports surface.
    """
    if _is_missing(value):
        return True

    if isinstance(value, str):
        v = value.strip().lower()
        if v in ACTIVE_MARKERS or v == "":
            return True
        if v in INACTIVE_MARKERS:
            return False
        logger.warning("Unknown active flag {!r}; treating as active", value)
        return True

    return bool(value)


# ---------------------------
# Catalog normalization
# ---------------------------

def normalize_catalog_df(df_raw: pd.DataFrame) -> pd.DataFrame:
    """
    Main normalization pipeline for a business product catalog.

    Input: raw DataFrame with unknown column names.
    Output: canonical schema:

    - id (str, unique, non-empty)
    - name (str)
    - description (str or None; HTML stripped)
    - category_id (str or None)
    - brand_name (str or None)
    - is_active (bool)

    Raises ValueError when no id or name column can be found.
    """
    logger.info("Normalizing catalog dataframe with {} raw rows", len(df_raw))

    df = _standardize_columns(df_raw.copy())

    missing = [c for c in ("id", "name") if c not in df.columns]
    if missing:
        raise ValueError(
            f"Raw catalog is missing required columns {missing}. Found: {list(df_raw.columns)}"
        )

    df["id"] = df["id"].apply(_canonicalize_id)
    empty = df["id"] == ""
    if empty.any():
        logger.warning("Dropping {} rows with an empty id", int(empty.sum()))
    df = df[~empty]

    dupes = df["id"].duplicated()
    if dupes.any():
        logger.warning("Dropping {} rows with a duplicate id", int(dupes.sum()))
    df = df[~dupes].reset_index(drop=True)

    df["name"] = df["name"].apply(lambda v: "" if _is_missing(v) else basic_clean(str(v)))

    optional_text = {"description": "description", "brand_name": "brand_raw"}
    for out_col, raw_col in optional_text.items():
        df[out_col] = df[raw_col].apply(_optional_text) if raw_col in df.columns else None

    if "category_raw" in df.columns:
        df["category_id"] = df["category_raw"].apply(_canonicalize_category)
    else:
        df["category_id"] = None

    if "active_raw" in df.columns:
        df["is_active"] = df["active_raw"].apply(_canonicalize_active)
    else:
        df["is_active"] = True

    df_out = df[CANONICAL_COLUMNS].astype({"is_active": bool})
    # None, not NaN, for absent optional strings
    df_out = df_out.astype(object).where(df_out.notna(), None)
    df_out["is_active"] = df_out["is_active"].astype(bool)

    logger.info("Catalog normalization complete. Final rows: {}", len(df_out))
    return df_out


# ---------------------------
# IO helpers
# ---------------------------

def _find_raw_catalog() -> Path:
    candidates = sorted(
        p for p in CATALOG_RAW_DIR.glob("*") if p.suffix.lower() in RAW_CATALOG_SUFFIXES
    )
    if not candidates:
        raise FileNotFoundError(
            f"No catalog export found under {CATALOG_RAW_DIR}. "
            f"Place a {'/'.join(RAW_CATALOG_SUFFIXES)} file there and re-run."
        )
    return candidates[0]


def load_raw_catalog(path: Optional[Path] = None) -> pd.DataFrame:
    """
    Load a raw catalog export (Excel, CSV or a JSON array of products).

    If no path is provided, we take the first supported file under
    data/catalog_raw.
    """
    if path is None:
        path = _find_raw_catalog()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    ext = path.suffix.lower()
    logger.info("Loading raw catalog from {}", path)
    # read cells as text; ids like "007" must survive and flags are parsed later
    if ext in {".xlsx", ".xls"}:
        df = pd.read_excel(path, dtype=str)
    elif ext == ".csv":
        df = pd.read_csv(path, encoding="utf-8", dtype=str)
    elif ext == ".json":
        df = pd.read_json(path, orient="records", dtype=False)
    else:
        raise ValueError(f"Unsupported catalog file type: {path.suffix}")

    logger.info("Loaded {} rows from raw catalog", len(df))
    return df


def build_catalog_snapshot(
    raw_path: Optional[Path] = None,
    output_path: Path = CATALOG_SNAPSHOT_PATH,
) -> Path:
    """
    End-to-end: load raw catalog → normalize → write Parquet snapshot.

    Returns the output path.
    """
    df_raw = load_raw_catalog(raw_path)
    df_norm = normalize_catalog_df(df_raw)

    logger.info("Writing catalog snapshot to {}", output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df_norm.to_parquet(output_path, index=False)
    logger.info("Catalog snapshot written with {} rows", len(df_norm))

    return output_path


def load_catalog_snapshot(path: Path = CATALOG_SNAPSHOT_PATH) -> pd.DataFrame:
    """
    Convenience helper to load the normalized catalog snapshot.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Catalog snapshot not found at {path}. Run `storefront build-snapshot` first."
        )
    logger.info("Loading catalog snapshot from {}", path)
    df = pd.read_parquet(path)
    # Parquet nulls come back as NaN under some pandas versions
    df = df.astype(object).where(df.notna(), None)
    df["is_active"] = df["is_active"].astype(bool)
    logger.info("Loaded catalog snapshot with {} rows", len(df))
    return df


if __name__ == "__main__":
    # python -m storefront.catalog_build
    build_catalog_snapshot()
