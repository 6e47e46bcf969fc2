from directory.models import HealthUnit
from locator.page import LocatorPage
from mapping.models import MarkerKind, UserLocation
from search.presentation import PanelKind
from search.session import Session, User, welcome_message


def test_trace_route_flows_to_panel_and_clear_flows_back(mock_api, mock_provider, mock_geolocator, sample_payload):
    mock_api.units_responses[("Hospital", "todos")] = sample_payload
    page = LocatorPage(mock_api, mock_provider, geolocator=mock_geolocator)
    page.start()
    mock_geolocator.succeed(UserLocation(-2.5, -44.3, 8))

    page.search.set_category("Hospital")
    assert page.results().kind == PanelKind.RESULTS

    unit = page.search.state.results["São Luís"][0]
    page.search.trace_route(unit)

    assert mock_provider.route_calls[0][1] == "ChIJ-slz-1"
    assert page.panel.marker(MarkerKind.DESTINATION) is not None

    page.panel.clear_route()

    assert page.search.state.destination is None
    assert page.panel.marker(MarkerKind.DESTINATION) is None


def test_picking_same_unit_again_reroutes(mock_api, mock_provider, mock_geolocator):
    page = LocatorPage(mock_api, mock_provider, geolocator=mock_geolocator)
    page.start()
    mock_geolocator.succeed(UserLocation(-2.5, -44.3, 8))

    unit = HealthUnit("p1", "UPA")
    page.search.trace_route(unit)
    page.search.trace_route(unit)

    assert len(mock_provider.route_calls) == 2


def test_start_loads_municipios(mock_api, mock_provider):
    mock_api.municipios = ["Timon", "Caxias"]
    page = LocatorPage(mock_api, mock_provider)

    page.start()

    assert page.search.state.municipalities == ("Caxias", "Timon")


def test_welcome_falls_back_to_email():
    assert welcome_message(User("maria", "m@x.br", "t")) == "Bem-vindo, maria!"
    assert welcome_message(User("", "m@x.br", "t")) == "Bem-vindo, m@x.br!"


def test_logout_failure_is_ignored(mock_api):
    logged_out = []
    mock_api.fail_logout = True
    session = Session(mock_api, User("maria", "m@x.br", "tok"), on_logout=lambda: logged_out.append(True))

    session.logout()

    assert mock_api.logout_calls == ["tok"]
    assert logged_out == [True]


def test_new_search_removes_drawn_route(mock_api, mock_provider, mock_geolocator, sample_payload):
    mock_api.units_responses[("Hospital", "todos")] = sample_payload
    page = LocatorPage(mock_api, mock_provider, geolocator=mock_geolocator)
    page.start()
    mock_geolocator.succeed(UserLocation(-2.5, -44.3, 8))
    page.search.set_category("Hospital")
    page.search.trace_route(page.search.state.results["São Luís"][0])
    assert page.panel.canvas.directions is not None

    page.search.set_municipio("Caxias")

    assert page.search.state.destination is None
    assert page.panel.state.destination is None
    assert page.panel.state.route is None
    assert page.panel.canvas.directions is None
    assert page.panel.canvas.markers_of(MarkerKind.DESTINATION) == []
    assert len(page.panel.canvas.markers_of(MarkerKind.USER_LOCATION)) == 1
