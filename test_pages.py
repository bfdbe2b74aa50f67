import pytest
from bs4 import BeautifulSoup

from portal.pages import PAGES, DEFAULT_TITLE, DEFAULT_DESCRIPTION


ROUTE_TABLE = [
    ("/languages", "Languages - Healthcare Professional Registration", "Select languages you speak", "LanguagesPage"),
    ("/my-shifts", "My Shifts - Healthcare Professional Portal", "View and manage your pharmacy shifts", "MyShiftsPage"),
    ("/profile/bank-account", "Bank Account - Profile", "Manage your bank account information", "BankAccountForm"),
    ("/profile", "Profile - Healthcare Professional Portal", "View and manage your healthcare professional profile", "ProfileView"),
    ("/profile/settings", "Account Settings - Healthcare Professional Portal", "Manage your account settings and preferences", "SettingsForm"),
    ("/software", "Software - Healthcare Professional Registration", "Select software you are experienced with", "SoftwarePage"),
]


def _parse(response):
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    return BeautifulSoup(response.text, "html.parser")


def _description(soup):
    tag = soup.find("meta", attrs={"name": "description"})
    return tag["content"] if tag else None


@pytest.mark.parametrize("path,title,description,component", ROUTE_TABLE)
def test_route_renders_exact_metadata(client, path, title, description, component):
    soup = _parse(client.get(path))

    assert soup.title.string == title
    assert _description(soup) == description


@pytest.mark.parametrize("path,title,description,component", ROUTE_TABLE)
def test_route_renders_single_component(client, path, title, description, component):
    soup = _parse(client.get(path))

    components = soup.select("[data-component]")
    assert len(components) == 1
    assert components[0]["data-component"] == component


def test_metadata_does_not_depend_on_request(client, auth_headers):
    anonymous = _parse(client.get("/profile?tab=details"))
    signed_in = _parse(client.get("/profile", headers=auth_headers))

    assert anonymous.title.string == signed_in.title.string
    assert _description(anonymous) == _description(signed_in)


def test_profile_pages_include_navigation_outside_component(client):
    soup = _parse(client.get("/profile/settings"))

    nav = soup.select_one("[data-layout='ProfileNav']")
    assert nav is not None
    assert nav.find_parent(attrs={"data-component": True}) is None
    assert nav.select_one("[aria-current='page']")["href"] == "/profile/settings"


def test_non_profile_pages_have_no_navigation(client):
    soup = _parse(client.get("/languages"))
    assert soup.select_one("[data-layout='ProfileNav']") is None


@pytest.mark.parametrize("page", [p for p in PAGES if "{" not in p.path], ids=lambda p: p.path)
def test_every_registered_page_renders(client, page):
    soup = _parse(client.get(page.path))

    assert soup.title.string == page.title
    assert _description(soup) == page.description
    assert [c["data-component"] for c in soup.select("[data-component]")] == [page.component]


def test_pages_without_own_metadata_use_site_default(client):
    soup = _parse(client.get("/account-review"))

    assert soup.title.string == DEFAULT_TITLE
    assert _description(soup) == DEFAULT_DESCRIPTION


def test_shift_details_page_receives_shift_id(client):
    soup = _parse(client.get("/shifts/42"))

    component = soup.select_one("[data-component]")
    assert component["data-component"] == "ShiftDetailsPage"
    assert component["data-shift-id"] == "42"
    assert soup.title.string == "Shift Details - Healthcare Professional Portal"


@pytest.mark.parametrize("path", ["/not-a-page", "/shifts/abc", "/profile/unknown"])
def test_unknown_path_is_not_found(client, path):
    assert client.get(path).status_code == 404


def test_page_paths_are_unique():
    paths = [p.path for p in PAGES]
    assert len(paths) == len(set(paths))


def test_list_pages_exposes_route_table(client):
    response = client.get("/api/pages")

    assert response.status_code == 200
    by_path = {p["path"]: p for p in response.json()["data"]}
    for path, title, description, component in ROUTE_TABLE:
        assert by_path[path]["title"] == title
        assert by_path[path]["description"] == description
        assert by_path[path]["component"] == component
