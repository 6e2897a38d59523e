"""
Streamlit entry point — Price List Viewer UI.

Wires the catalog pipeline to an interactive page:
  1. Sidebar: refresh button, facet toggles, customer discount
  2. Search box and last-updated caption
  3. Catalog grouped by category, prices shown with the applied discount
  4. Download of the currently filtered list as Excel

Contains NO business logic — only calls processing/analysis modules and
displays results.
"""

import io
import logging

import pandas as pd
import streamlit as st

from analysis.catalog_view import ViewFilter, filter_items, group_by_category
from config.feed_layout import get_layout
from config.feed_source import DEFAULT_LAYOUT_NAME, FEED_URL
from config.schema import ITEM_COLUMNS
from processing.feed_fetcher import load_catalog
from processing.price_calculator import apply_discount, format_price, is_displayable_url
from processing.record_assembler import Item
from utils.excel_formatter import build_export_rows, export_filename, write_price_list

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Page configuration
# ═══════════════════════════════════════════════════════════════════════════

st.set_page_config(
    page_title="Динамический прайс",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded",
)


# ═══════════════════════════════════════════════════════════════════════════
# Settings from Streamlit secrets
# ═══════════════════════════════════════════════════════════════════════════

def _secret(key: str, default: str) -> str:
    """Read an optional secret; a missing secrets.toml means "use the default"."""
    try:
        return st.secrets.get(key, default)
    except FileNotFoundError:
        return default


feed_url = _secret("PRICE_FEED_URL", FEED_URL)
feed_layout = get_layout(_secret("FEED_LAYOUT", DEFAULT_LAYOUT_NAME))


# ═══════════════════════════════════════════════════════════════════════════
# Session state initialisation
# ═══════════════════════════════════════════════════════════════════════════

def _init_session_state() -> None:
    """Ensure all required session state keys exist with sensible defaults."""
    defaults: dict = {
        "items": [],
        "loaded_at": None,
        "load_error": None,
        "skipped_rows": [],
        "applied_discount": 0,
        "initial_load_done": False,
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _load(is_manual: bool) -> None:
    """
    Fetch and parse the feed, replacing the displayed catalog.

    A failed manual refresh keeps the catalog already on screen; a failed
    first load leaves it empty.
    """
    spinner_text = (
        "Обновление данных..." if is_manual
        else "Загрузка актуальных цен из Google Таблиц..."
    )
    with st.spinner(spinner_text):
        result = load_catalog(feed_url, feed_layout)

    st.session_state["loaded_at"] = result.loaded_at
    st.session_state["load_error"] = result.error

    if result.ok or not is_manual:
        st.session_state["items"] = result.items
        st.session_state["skipped_rows"] = result.skipped_rows


_init_session_state()

if not st.session_state["initial_load_done"]:
    _load(is_manual=False)
    st.session_state["initial_load_done"] = True


# ═══════════════════════════════════════════════════════════════════════════
# Sidebar — Refresh, filters, discount
# ═══════════════════════════════════════════════════════════════════════════

st.sidebar.title("⚙️ Фильтры")

if st.sidebar.button("🔄 Обновить данные", use_container_width=True):
    _load(is_manual=True)

st.sidebar.divider()

new_only = st.sidebar.checkbox("НОВИНКИ")
distributor_only = st.sidebar.checkbox("ДИСТРИБЬЮТОР")
promo_only = st.sidebar.checkbox("АКЦИИ")

st.sidebar.divider()

with st.sidebar.form("discount_form"):
    discount_input = st.number_input(
        "Ваша скидка, %",
        min_value=0,
        max_value=99,
        value=int(st.session_state["applied_discount"]),
        step=1,
    )
    if st.form_submit_button("Применить"):
        st.session_state["applied_discount"] = discount_input

applied_discount = st.session_state["applied_discount"]
if applied_discount > 0:
    st.sidebar.success(f"Скидка {applied_discount}% применена к ценам")


# ═══════════════════════════════════════════════════════════════════════════
# Main area — Title, search, status
# ═══════════════════════════════════════════════════════════════════════════

st.title("ГЕЙЗЕР ДИНАМИЧЕСКИЙ ПРАЙС")

search_query = st.text_input(
    "Поиск",
    placeholder="Поиск товара или категории...",
    label_visibility="collapsed",
)

if st.session_state["load_error"]:
    st.error(f"⚠️ {st.session_state['load_error']}")

loaded_at = st.session_state["loaded_at"]
if loaded_at is not None:
    st.caption(
        f"🟢 Данные актуальны на: {loaded_at.strftime('%H:%M:%S')} "
        "(Google Sheets Sync Active)"
    )

if st.session_state["skipped_rows"]:
    with st.expander(f"Пропущенные строки прайса ({len(st.session_state['skipped_rows'])})"):
        st.dataframe(
            pd.DataFrame(st.session_state["skipped_rows"]),
            use_container_width=True,
            hide_index=True,
        )


# ═══════════════════════════════════════════════════════════════════════════
# Catalog
# ═══════════════════════════════════════════════════════════════════════════

view_filter = ViewFilter(
    query=search_query,
    new_only=new_only,
    distributor_only=distributor_only,
    promo_only=promo_only,
)
items: list[Item] = st.session_state["items"]
filtered_items = filter_items(items, view_filter)
groups = group_by_category(filtered_items)


def _display_price(value: float | None) -> str:
    if value is None or value <= 0:
        return "-"
    return format_price(apply_discount(value, applied_discount))


def _group_dataframe(group_items: tuple[Item, ...]) -> pd.DataFrame:
    """Build the display table for one category group."""
    rows = []
    for item in group_items:
        rows.append({
            "article": f"🆕 {item.article}" if item.is_new else item.article,
            "name": item.name,
            "description": item.description,
            "pack": item.pack,
            "price": _display_price(item.price),
            "promo_price": _display_price(item.promo_price),
            "image_url": item.image_url if is_displayable_url(item.image_url) else None,
            "product_url": item.product_url if is_displayable_url(item.product_url) else None,
        })
    return pd.DataFrame(rows, columns=list(ITEM_COLUMNS)).rename(columns=ITEM_COLUMNS)


if not groups:
    st.info("Ничего не найдено по вашему запросу...")
else:
    for group in groups:
        st.subheader(f"{group.name} · {len(group.items)} поз.")
        st.dataframe(
            _group_dataframe(group.items),
            use_container_width=True,
            hide_index=True,
            column_config={
                ITEM_COLUMNS["image_url"]: st.column_config.ImageColumn(width="small"),
                ITEM_COLUMNS["product_url"]: st.column_config.LinkColumn(display_text="🔗"),
            },
        )


# ═══════════════════════════════════════════════════════════════════════════
# Download
# ═══════════════════════════════════════════════════════════════════════════

st.divider()

excel_buffer = io.BytesIO()
write_price_list(build_export_rows(filtered_items), excel_buffer)

st.download_button(
    label="📥 Экспорт",
    data=excel_buffer.getvalue(),
    file_name=export_filename(),
    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    type="primary",
    disabled=not filtered_items,
)
