import pytest
from pathlib import Path
import sys

from PIL import Image

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from drilldown.assets import load_map_image, load_region_stats, read_offense_table
from drilldown.charts import click_grid, hover_summary, national_map_figure, offense_bar_chart, regional_map_figure
from drilldown.config import BREAKDOWN_ROWS, REGIONAL_TABLE
from drilldown.region_stats import parse_stats
from drilldown.utils.exceptions import AssetLoadError
from drilldown.view_state import Hitbox, contains


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / 'California_2024.csv').write_text(
        'Offense,Value\n"Homicide",123\n"Robbery","1,000"\n"",50\n'
    )
    Image.new('RGB', (40, 20), color=(10, 20, 30)).save(tmp_path / 'A_001.png')
    (tmp_path / 'broken.png').write_bytes(b'not an image')
    return tmp_path


class TestAssets:
    def test_region_stats_from_csv(self, data_dir):
        stats = load_region_stats('California_2024.csv', 'California 2024', data_dir)
        assert stats.total == 1123
        assert [row.name for row in stats.rows] == ['Homicide', 'Robbery']

    def test_missing_table_is_unavailable(self, data_dir):
        assert load_region_stats('Nowhere.csv', 'Nowhere', data_dir) is None

    def test_empty_table_raises_internally(self, data_dir):
        (data_dir / 'empty.csv').write_text('')
        with pytest.raises(AssetLoadError):
            read_offense_table('empty.csv', data_dir)
        assert load_region_stats('empty.csv', 'Empty', data_dir) is None

    def test_image_loads(self, data_dir):
        img = load_map_image('A_001.png', data_dir)
        assert img.size == (40, 20)

    def test_regional_table_found_under_old_spelling(self, data_dir):
        (data_dir / 'Alemeda_2024.csv').write_text('Offense,Value\n"Robbery",30\n"Burglary",7\n')
        stats = load_region_stats(REGIONAL_TABLE, 'Alameda County 2024', data_dir)
        assert stats.total == 37

    def test_canonical_name_wins_over_alias(self, data_dir):
        (data_dir / 'Alemeda_2024.csv').write_text('Offense,Value\n"Robbery",30\n')
        (data_dir / REGIONAL_TABLE).write_text('Offense,Value\n"Robbery",4\n')
        assert load_region_stats(REGIONAL_TABLE, 'Alameda County 2024', data_dir).total == 4

    @pytest.mark.parametrize('name', ['missing.png', 'broken.png'])
    def test_bad_image_is_none(self, data_dir, name):
        assert load_map_image(name, data_dir) is None


class TestCharts:
    def test_bar_chart_scaled_to_max_of_all_rows(self):
        stats = parse_stats([(f'O{i}', str(v)) for i, v in enumerate([5, 3, 8, 1, 2, 4, 6, 7, 90])], 'x')
        fig = offense_bar_chart(stats, stats.head(8), 'x')
        assert tuple(fig.layout.xaxis.range) == (0, 90)
        assert len(fig.data[1].x) == 8
        assert 90 not in fig.data[1].x

    def test_bar_chart_all_zero_table(self):
        stats = parse_stats([('A', '0'), ('B', 'junk')], 'x')
        fig = offense_bar_chart(stats, stats.head(8), 'x')
        assert tuple(fig.layout.xaxis.range) == (0, 1)

    def test_hover_summary_lists_same_rows_as_bar_card(self):
        stats = parse_stats([(f'O{i}', str(i + 1)) for i in range(10)], 'California 2024')
        lines = hover_summary(stats).split('<br>')
        row_lines = [line for line in lines if line.startswith('O')]
        assert len(row_lines) == BREAKDOWN_ROWS
        assert row_lines[-1] == f'O{BREAKDOWN_ROWS - 1}: {BREAKDOWN_ROWS}'

    def test_click_grid_covers_frame(self):
        gx, gy = click_grid(120, 60, step=12)
        assert len(gx) == 10 * 5
        assert gx.min() > 0 and gx.max() < 120
        assert gy.min() > 0 and gy.max() < 60

    def test_national_map_with_image(self):
        hitbox = Hitbox.from_frame(960, 600)
        img = Image.new('RGBA', (10, 10))
        fig = national_map_figure(960, 600, hitbox, img, None)
        assert len(fig.layout.images) == 1
        inside_trace = fig.data[1]
        assert all(contains(x, y, hitbox) for x, y in zip(inside_trace.x, inside_trace.y))
        assert tuple(fig.layout.yaxis.range) == (600, 0)

    def test_national_map_placeholder(self):
        fig = national_map_figure(960, 600, Hitbox.from_frame(960, 600), None, None)
        assert len(fig.layout.images) == 0
        assert fig.layout.shapes[0].fillcolor == 'rgb(37,99,235)'

    def test_regional_map_every_point_clickable(self):
        fig = regional_map_figure(960, 600, None)
        assert len(fig.data) == 1
        assert fig.data[0].hoverinfo == 'none'
