"""MetaForge response key names and endpoints."""

# Endpoints relative to the configured base URL
ITEMS_ENDPOINT = "/items"
QUESTS_ENDPOINT = "/quests"
ARCS_ENDPOINT = "/arcs"
TRADERS_ENDPOINT = "/traders"

# Record arrays: tried after the entity's own key, top level then under "data"
GENERIC_LIST_KEYS = (
    "data",
    "results",
    "content",
    "items",
    "quests",
    "recipes",
    "arcs",
    "traders",
    "maps",
)

# Pagination object locations, first object wins
PAGINATION_PATHS = (
    ("pagination",),
    ("meta", "pagination"),
    ("meta", "page"),
    ("pageInfo",),
    ("page",),
)

# Inside the pagination object
NEXT_PAGE_KEYS = ("next", "nextPage")
HAS_NEXT_PAGE_KEY = "hasNextPage"
TOTAL_PAGES_KEYS = ("totalPages", "pageCount", "total_pages", "pages")
CURRENT_PAGE_KEYS = ("page", "currentPage", "current_page")
TOTAL_ITEMS_KEYS = ("total", "totalItems", "totalCount", "count", "total_records")

PAGE_PARAM = "page"
