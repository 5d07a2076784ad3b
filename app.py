from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import sys

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / 'src'
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from drilldown import DrilldownSession, GNewsClient, View
from drilldown.assets import load_map_image, load_region_stats
from drilldown.charts import national_map_figure, offense_bar_chart, regional_map_figure
from drilldown.config import (
    FRAME_HEIGHT,
    FRAME_WIDTH,
    NATIONAL_LABEL,
    NATIONAL_MAP_IMAGE,
    NATIONAL_TABLE,
    NEWS_POLL_SECONDS,
    PLOTLY_CONFIG,
    REGIONAL_LABEL,
    REGIONAL_MAP_IMAGE,
    REGIONAL_TABLE,
)
from drilldown.utils.logger_config import setup_logger

logger = setup_logger('drilldown.app')

SESSION_KEY = 'drill_session'


@st.cache_data(show_spinner=False)
def load_stats(name: str, label: str):
    return load_region_stats(name, label)


@st.cache_resource(show_spinner=False)
def load_image(name: str):
    return load_map_image(name)


@st.cache_resource
def news_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=2, thread_name_prefix='news')


def get_session(frame_size) -> DrilldownSession:
    if SESSION_KEY not in st.session_state:
        session = DrilldownSession(
            stats_national=load_stats(NATIONAL_TABLE, NATIONAL_LABEL),
            stats_regional=load_stats(REGIONAL_TABLE, REGIONAL_LABEL),
            frame_size=frame_size,
            news_source=GNewsClient().fetch,
            executor=news_executor(),
        )
        session.start()
        st.session_state[SESSION_KEY] = session
        st.session_state['map_clicks'] = 0
    return st.session_state[SESSION_KEY]


def clicked_point(selection_state):
    if not isinstance(selection_state, dict):
        return None
    points = selection_state.get('selection', {}).get('points', [])
    if not points:
        return None
    payload = points[0]
    if payload.get('x') is None or payload.get('y') is None:
        return None
    return float(payload['x']), float(payload['y'])


def render_map(session: DrilldownSession) -> None:
    width, height = session.frame_size
    if session.view is View.NATIONAL:
        fig = national_map_figure(width, height, session.hitbox, load_image(NATIONAL_MAP_IMAGE), session.stats_national)
    else:
        fig = regional_map_figure(width, height, load_image(REGIONAL_MAP_IMAGE))

    # a fresh key per handled click clears the previous selection
    event_key = f"drill-map-{session.view.value}-{st.session_state['map_clicks']}"
    selection_state = st.plotly_chart(
        fig,
        config=PLOTLY_CONFIG,
        key=event_key,
        on_select='rerun',
        selection_mode=('points',),
    )
    point = clicked_point(selection_state)
    if point is not None:
        session.pointer_down(*point)
        st.session_state['map_clicks'] += 1
        st.rerun()

    stats = session.stats_national if session.view is View.NATIONAL else session.stats_regional
    if stats is None:
        st.info('Offense table not available for this view.')
        return
    st.plotly_chart(
        offense_bar_chart(stats, session.content.breakdown_rows, stats.label),
        config=PLOTLY_CONFIG,
    )


def render_dashboard(session: DrilldownSession) -> None:
    content = session.content
    st.caption(content.breadcrumb_text)
    st.info(content.status_text)
    st.markdown(f'### {content.snapshot_label}')
    if content.total_offenses is None:
        return

    st.metric('Total offenses', f'{content.total_offenses:,.0f}')
    if content.share_of_parent is not None:
        st.metric(content.share_label, f'{content.share_of_parent:.2f}%')

    st.markdown(f'#### {content.breakdown_label}')
    breakdown = pd.DataFrame(
        [(row.name, f'{row.value:,.0f}') for row in content.breakdown_rows],
        columns=['Offense', 'Count'],
    )
    st.dataframe(breakdown, hide_index=True)


def news_settled(session: DrilldownSession) -> bool:
    """Poll headline requests; True when this poll drained the last one in flight."""
    was_pending = bool(session.pending)
    still_pending = session.poll_news()
    return was_pending and not still_pending


def render_news(session: DrilldownSession) -> None:
    # run_every is fixed when the fragment is declared, so a full rerun is needed to stop polling
    @st.fragment(run_every=NEWS_POLL_SECONDS if session.pending else None)
    def news_panel():
        if news_settled(session):
            st.rerun(scope='app')
        st.markdown('### Crime headlines')
        st.caption(session.news.status)
        for item in session.news.headlines:
            st.markdown(f'**• [{item.title}]({item.url})**  \n{item.meta}')

    news_panel()


def main():
    st.set_page_config(page_title='Crime Drill-down Console', layout='wide')
    st.markdown('## Crime Drill-down Console')
    st.caption('USA ➜ California ➜ Alameda County offense roll-ups with live crime headlines.')

    st.sidebar.header('Map frame')
    width = st.sidebar.slider('Width (px)', 480, 1600, FRAME_WIDTH, step=20)
    height = st.sidebar.slider('Height (px)', 320, 1000, FRAME_HEIGHT, step=20)

    session = get_session((width, height))
    session.resize(width, height)

    map_col, panel_col = st.columns([1.8, 1], gap='large')
    with map_col:
        render_map(session)
    with panel_col:
        render_dashboard(session)
        st.markdown('---')
        render_news(session)


if __name__ == '__main__':
    main()
