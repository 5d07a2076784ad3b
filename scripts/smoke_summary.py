#!/usr/bin/env python3
"""Generate a smoke summary CSV for the console's map images and offense tables.

Writes: reports/smoke_summary.csv
"""
from pathlib import Path
import pandas as pd
import sys

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / 'src'))

from drilldown.assets import read_map_image, read_offense_table
from drilldown.config import (
    DATA_DIR,
    NATIONAL_LABEL,
    NATIONAL_MAP_IMAGE,
    NATIONAL_TABLE,
    REGIONAL_LABEL,
    REGIONAL_MAP_IMAGE,
    REGIONAL_TABLE,
    REPORTS_DIR,
)
from drilldown.region_stats import parse_frame
from drilldown.utils.exceptions import AssetLoadError

OUT = REPORTS_DIR / 'smoke_summary.csv'


def scan_images(data_dir=DATA_DIR):
    rows = []
    for name in (NATIONAL_MAP_IMAGE, REGIONAL_MAP_IMAGE):
        try:
            img = read_map_image(name, data_dir)
            rows.append({
                'type': 'image',
                'name': name,
                'exists': True,
                'width': img.width,
                'height': img.height,
            })
        except AssetLoadError as e:
            rows.append({
                'type': 'image',
                'name': name,
                'exists': False,
                'error': str(e),
            })
    return rows


def scan_tables(data_dir=DATA_DIR):
    rows = []
    for name, label in ((NATIONAL_TABLE, NATIONAL_LABEL), (REGIONAL_TABLE, REGIONAL_LABEL)):
        try:
            df = read_offense_table(name, data_dir)
            stats = parse_frame(df, label)
            rows.append({
                'type': 'table',
                'name': name,
                'label': label,
                'exists': True,
                'raw_rows': len(df),
                'rows': len(stats.rows),
                'zero_rows': sum(1 for r in stats.rows if r.value == 0),
                'total': stats.total,
            })
        except AssetLoadError as e:
            rows.append({
                'type': 'table',
                'name': name,
                'label': label,
                'exists': False,
                'rows': None,
                'error': str(e),
            })
    return rows


def main(data_dir=DATA_DIR, out=OUT):
    all_rows = scan_images(data_dir) + scan_tables(data_dir)
    df = pd.DataFrame(all_rows)
    out.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    print('Wrote', out)
    if not df['exists'].any():
        print(f'No assets found under {data_dir}; nothing to report.', file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
