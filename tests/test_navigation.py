"""Tests for the navigation bar entries."""

from app.navigation import NAV_ITEMS, build_navbar


class TestBuildNavbar:

    def test_exactly_the_current_path_is_active(self):
        navbar = build_navbar("/transactions")
        assert [item["is_active"] for item in navbar] == [False, True, False]

    def test_sub_paths_are_not_highlighted(self):
        assert not any(item["is_active"] for item in build_navbar("/manage/categories"))

    def test_items_keep_their_order(self):
        assert [item["link"] for item in build_navbar("/")] == [item.link for item in NAV_ITEMS]

    def test_navbar_endpoint(self, client):
        response = client.get("/api/navbar", params={"path": "/manage"})
        assert response.status_code == 200
        active = [item["label"] for item in response.json()["data"] if item["is_active"]]
        assert active == ["Manage"]
