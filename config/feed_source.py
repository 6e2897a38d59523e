"""
Where the price feed comes from and how it is requested.

The UI can override FEED_URL and DEFAULT_LAYOUT_NAME through Streamlit
secrets (PRICE_FEED_URL, FEED_LAYOUT).
"""

# Published-to-web CSV export of the price sheet.
FEED_URL: str = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vS2G6BGYc08F8C3AG3gOP4ap13flDtjagG5oxbgjwgYn8srzldiuZJt_vFnLMbW9uG0X6GSTdGgYcJU"
    "/pub?gid=264825056&single=true&output=csv"
)

# Query parameter carrying a millisecond timestamp so every refresh bypasses
# intermediate caches.
CACHE_BUSTER_PARAM: str = "cache_tick"

FEED_TIMEOUT_SECONDS: float = 15.0

FEED_ENCODING: str = "utf-8"

DEFAULT_LAYOUT_NAME: str = "segment"
