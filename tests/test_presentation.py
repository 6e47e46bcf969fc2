from directory.models import parse_result_set
from search.presentation import PanelKind, build_results_view, section_heading, total_banner
from search.state import SearchState, SearchStatus


def test_loading_and_no_category_panels():
    assert build_results_view(SearchState(category="Hospital", status=SearchStatus.LOADING)).kind == PanelKind.LOADING
    assert build_results_view(SearchState()).kind == PanelKind.NO_CATEGORY


def test_error_looks_like_empty_ready():
    error_view = build_results_view(SearchState(category="Hospital", status=SearchStatus.ERROR))
    empty_view = build_results_view(SearchState(category="Hospital", status=SearchStatus.READY))

    assert error_view == empty_view
    assert error_view.kind == PanelKind.EMPTY


def test_sections_sorted_and_empty_municipalities_kept(sample_payload):
    results = parse_result_set(sample_payload)
    state = SearchState(category="Hospital", status=SearchStatus.READY, results=results, total=3)

    view = build_results_view(state)

    assert view.kind == PanelKind.RESULTS
    assert [s.name for s in view.sections] == ["Caxias", "Imperatriz", "São Luís"]
    assert view.sections[1].heading == "Imperatriz (0 unidades)"
    assert view.total_banner == "Total de 3 unidades encontradas"


def test_unit_order_and_fallbacks(sample_payload):
    results = parse_result_set(sample_payload)
    view = build_results_view(SearchState(category="Hospital", status=SearchStatus.READY, results=results, total=3))

    cards = view.sections[2].cards
    assert [c.unit.id for c in cards] == ["ChIJ-slz-1", "ChIJ-slz-2"]
    assert cards[0].phone == "(98) 3212-0000"
    assert cards[1].name == "Nome não disponível"
    assert cards[1].address == "Endereço não informado"
    assert cards[1].phone == "Telefone não informado"


def test_singular_labels():
    assert total_banner(1) == "Total de 1 unidade encontrada"
    assert section_heading("Caxias", 1) == "Caxias (1 unidade)"
