from directory.models import HealthUnit
from notifications.modal import MessageModal
from search.controller import SearchController
from search.state import SearchStatus


def test_no_category_means_no_network_call(mock_api):
    controller = SearchController(mock_api, notifier=MessageModal())

    assert controller.set_category("") is None
    assert controller.set_municipio("Caxias") is None
    assert controller.search() is None

    assert mock_api.unit_calls == []
    assert controller.state.results == {}


def test_successful_query_counts_and_notifies(mock_api, sample_payload):
    modal = MessageModal()
    mock_api.units_responses[("Hospital", "todos")] = sample_payload
    controller = SearchController(mock_api, notifier=modal)

    controller.set_category("Hospital")

    assert mock_api.unit_calls == [("Hospital", "todos")]
    assert controller.state.status == SearchStatus.READY
    assert controller.state.total == 3
    assert modal.is_open
    assert modal.message == "Encontradas 3 unidades de saúde!"


def test_empty_result_does_not_notify(mock_api):
    modal = MessageModal()
    controller = SearchController(mock_api, notifier=modal)

    controller.set_category("Laboratório")

    assert controller.state.status == SearchStatus.READY
    assert controller.state.total == 0
    assert not modal.is_open


def test_failure_notifies_and_clears(mock_api, sample_payload):
    modal = MessageModal()
    mock_api.units_responses[("Hospital", "todos")] = sample_payload
    controller = SearchController(mock_api, notifier=modal)
    controller.set_category("Hospital")

    mock_api.fail_units = True
    controller.search()

    assert controller.state.status == SearchStatus.ERROR
    assert controller.state.results == {}
    assert modal.message == "Ocorreu um erro ao buscar os dados. Tente novamente mais tarde."


def test_malformed_body_is_a_failure(mock_api):
    mock_api.units_responses[("Hospital", "todos")] = {"São Luís": [{"no_id": True}]}
    controller = SearchController(mock_api, notifier=MessageModal())

    controller.set_category("Hospital")

    assert controller.state.status == SearchStatus.ERROR


def test_latest_request_wins_when_responses_arrive_out_of_order(mock_api, deferred_executor, sample_payload):
    mock_api.units_responses[("Hospital", "todos")] = sample_payload
    mock_api.units_responses[("Hospital", "Caxias")] = {"Caxias": [{"id": "c1"}]}
    modal = MessageModal()
    controller = SearchController(mock_api, notifier=modal, executor=deferred_executor)

    controller.set_category("Hospital")
    controller.set_municipio("Caxias")
    assert controller.state.status == SearchStatus.LOADING

    # newest first, then the stale one
    deferred_executor.run(1)
    deferred_executor.run(0)

    assert list(controller.state.results) == ["Caxias"]
    assert controller.state.total == 1
    assert modal.message == "Encontradas 1 unidades de saúde!"


def test_load_municipalities(mock_api):
    mock_api.municipios = ["Timon", "Bacabal"]
    controller = SearchController(mock_api)

    controller.load_municipalities()

    assert controller.state.municipalities == ("Bacabal", "Timon")


def test_load_municipalities_failure_notifies(mock_api):
    modal = MessageModal()
    mock_api.fail_municipios = True
    controller = SearchController(mock_api, notifier=modal)

    controller.load_municipalities()

    assert modal.message == "Erro ao carregar lista de municípios."
    assert controller.state.municipalities == ()


def test_trace_route_publishes_destination(mock_api):
    seen = []
    controller = SearchController(mock_api)
    controller.subscribe(lambda state: seen.append(state.destination))

    destination = controller.trace_route(HealthUnit("p1", "UPA", "Rua A"))
    controller.clear_destination()

    assert destination.external_id == "p1"
    assert seen == [destination, None]


def test_categories_come_from_policy(mock_api):
    controller = SearchController(mock_api)
    assert controller.categories == ["Clínica Geral", "Hospital", "Farmácia", "Posto de Saúde", "Laboratório"]


def test_listener_may_call_back_and_sees_commit_order(mock_api):
    seen = []
    controller = SearchController(mock_api)

    def listener(state):
        seen.append(state.destination)
        if state.destination is not None:
            controller.clear_destination()

    controller.subscribe(listener)
    destination = controller.trace_route(HealthUnit("p1", "UPA"))

    assert seen == [destination, None]
    assert controller.state.destination is None
