from typing import List, NamedTuple


class NavItem(NamedTuple):
    label: str
    link: str


NAV_ITEMS = [
    NavItem("Dashboard", "/dashboard"),
    NavItem("Transactions", "/transactions"),
    NavItem("Manage", "/manage"),
]


def is_active(item: NavItem, pathname: str) -> bool:
    return pathname == item.link


def build_navbar(pathname: str) -> List[dict]:
    """Navigation entries for the given path, with the current one marked active."""
    return [
        {"label": item.label, "link": item.link, "is_active": is_active(item, pathname)}
        for item in NAV_ITEMS
    ]
