"""
Asset loading – map images and offense tables from the data directory.

A missing or unreadable asset is never fatal: images come back as None (the
map draws a flat placeholder) and tables come back as None (stats unavailable).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
from PIL import Image, UnidentifiedImageError

from drilldown.config import ASSET_ALIASES, DATA_DIR
from drilldown.region_stats import RegionStats, parse_frame
from drilldown.utils.exceptions import AssetLoadError
from drilldown.utils.logger_config import setup_logger

logger = setup_logger(__name__)


def _resolve(name: str, data_dir: Optional[Path] = None) -> Path:
    """Path of *name* under the data directory, falling back to its known aliases."""
    base = Path(data_dir or DATA_DIR)
    for candidate in (name, *ASSET_ALIASES.get(name, ())):
        path = base / candidate
        if path.exists():
            if candidate != name:
                logger.info(f'Using {candidate} for {name}')
            return path
    raise AssetLoadError(f'Missing asset: {base / name}')


def read_map_image(name: str, data_dir: Optional[Path] = None) -> Image.Image:
    """
    Raises:
        AssetLoadError: the file is missing or not an image Pillow can decode
    """
    path = _resolve(name, data_dir)
    try:
        with Image.open(path) as img:
            img.load()
            return img.convert('RGBA')
    except (OSError, UnidentifiedImageError) as e:
        raise AssetLoadError(f'Could not read image {path}: {str(e)}') from e


def read_offense_table(name: str, data_dir: Optional[Path] = None) -> pd.DataFrame:
    """
    Read a two-column offense CSV as strings; the first line is the header.

    Raises:
        AssetLoadError: the file is missing, empty or not parseable as CSV
    """
    path = _resolve(name, data_dir)
    try:
        return pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise AssetLoadError(f'Could not read table {path}: {str(e)}') from e


def load_map_image(name: str, data_dir: Optional[Path] = None) -> Optional[Image.Image]:
    try:
        return read_map_image(name, data_dir)
    except AssetLoadError as e:
        logger.warning(f'{str(e)} – using placeholder')
        return None


def load_region_stats(name: str, label: str, data_dir: Optional[Path] = None) -> Optional[RegionStats]:
    """Load and parse an offense table; None when it can't be read."""
    try:
        df = read_offense_table(name, data_dir)
    except AssetLoadError as e:
        logger.warning(f'{str(e)} – {label} stats unavailable')
        return None
    stats = parse_frame(df, label)
    logger.info(f'Loaded {label}: {len(stats.rows)} offenses, total {stats.total:,.0f}')
    return stats
