"""Settings for the drill-down console: asset names, region copy, geometry and news API."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv('DRILLDOWN_DATA_DIR', str(ROOT / 'data')))
LOG_DIR = os.getenv('DRILLDOWN_LOG_DIR', 'logs')
REPORTS_DIR = ROOT / 'reports'

# Logical asset names, resolved against DATA_DIR
NATIONAL_MAP_IMAGE = 'A_001.png'
REGIONAL_MAP_IMAGE = 'A_002.png'
NATIONAL_TABLE = 'California_2024.csv'
REGIONAL_TABLE = 'Alameda_2024.csv'
# Spellings the same asset has shipped under
ASSET_ALIASES = {
    REGIONAL_TABLE: ('Alemeda_2024.csv',),
}

NATIONAL_LABEL = 'California 2024'
REGIONAL_LABEL = 'Alameda County 2024'
NATIONAL_SHORT = 'CA'
REGIONAL_SHORT = 'Alameda'
HITBOX_TAG = 'California'

# Per-view side panel copy, keyed by View.value
VIEW_COPY: Dict[str, Dict[str, str]] = {
    'national': {
        'breadcrumb': 'USA (California focus)',
        'status': 'View: USA — hover California for CA stats; click California to zoom into Alameda.',
        'snapshot': 'California 2024 (CSV roll-up)',
    },
    'regional': {
        'breadcrumb': 'USA ▸ California ▸ Alameda County',
        'status': 'View: California ➜ Alameda — click the map to go back to USA.',
        'snapshot': 'Alameda County 2024 (CSV roll-up)',
    },
}
BREAKDOWN_LABEL = 'Top offenses by count'
SHARE_LABEL = f'{REGIONAL_SHORT} share of {NATIONAL_SHORT}'
BREAKDOWN_ROWS = 8

# Map frame, in the same pixel space the pointer events arrive in
FRAME_WIDTH = 960
FRAME_HEIGHT = 600
FRAME_MARGIN = 0.04  # of frame width, on every side
# Rough position of California on A_001.png as fractions of the inner map (x, y, w, h)
HITBOX_PROPORTIONS = (0.06, 0.42, 0.14, 0.34)
CLICK_GRID_STEP = 12

# GNews headline search
GNEWS_URL = os.getenv('GNEWS_URL', 'https://gnews.io/api/v4/search')
GNEWS_API_KEY = os.getenv('GNEWS_API_KEY')
NEWS_TIMEOUT = float(os.getenv('NEWS_TIMEOUT', '10'))
MAX_HEADLINES = 6
NEWS_QUERIES: Dict[str, str] = {
    'national': 'crime AND United States',
    'regional': 'crime AND Alameda County OR Oakland AND California',
}
NEWS_POLL_SECONDS = 1.0

# Plotly
PLOTLY_CONFIG = {
    'scrollZoom': False,
    'displaylogo': False,
    'modeBarButtonsToRemove': ['lasso2d', 'select2d', 'zoom2d', 'pan2d'],
}
BAR_COLOR = 'rgba(6,182,255,0.9)'
BAR_TRACK_COLOR = 'rgb(20,28,45)'
CARD_COLOR = 'rgb(9,12,32)'
PLACEHOLDER_COLOR = 'rgb(37,99,235)'
