# storefront/_singletons.py
from functools import lru_cache
from pathlib import Path
from typing import Tuple

from .catalog_build import load_catalog_snapshot
from .config import CATALOG_SNAPSHOT_PATH, CatalogItem
from .mapping import map_rows_to_items

@lru_cache(maxsize=4)
def get_catalog_items(path: Path = CATALOG_SNAPSHOT_PATH) -> Tuple[CatalogItem, ...]:
    # tuple so cached callers cannot append to the shared catalog
    return tuple(map_rows_to_items(load_catalog_snapshot(path)))
