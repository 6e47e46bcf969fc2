"""
Purpose: Turns a SearchState into what the results panel shows.
What it does:
- Picks which panel to show (loading / no category / nothing found / results)
- Sorts municipality sections by name, keeps upstream order inside a section
- Builds headings and the total banner with Portuguese plurals
- Fills in fallbacks for missing unit fields

Empty municipalities are kept and rendered with a zero count.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from directory.models import HealthUnit
from mapping.models import UNKNOWN_NAME

from .state import SearchState, SearchStatus

LOADING_MESSAGE = "Buscando todas as unidades disponíveis..."
NO_CATEGORY_MESSAGE = "Selecione uma categoria para começar a busca."
NO_RESULTS_MESSAGE = "Nenhuma unidade encontrada para os critérios selecionados."
MISSING_ADDRESS = "Endereço não informado"
MISSING_PHONE = "Telefone não informado"


class PanelKind(str, Enum):
    LOADING = "loading"
    NO_CATEGORY = "no_category"
    EMPTY = "empty"
    RESULTS = "results"


@dataclass(frozen=True)
class UnitCard:
    unit: HealthUnit
    name: str
    address: str
    phone: str


@dataclass(frozen=True)
class MunicipalitySection:
    name: str
    count: int
    heading: str
    cards: Tuple[UnitCard, ...]


@dataclass(frozen=True)
class ResultsView:
    kind: PanelKind
    message: str = ""
    total_banner: str = ""
    sections: Tuple[MunicipalitySection, ...] = ()


def plural(count: int, word: str) -> str:
    return word if count == 1 else f"{word}s"


def total_banner(total: int) -> str:
    return f"Total de {total} {plural(total, 'unidade')} {plural(total, 'encontrada')}"


def section_heading(name: str, count: int) -> str:
    return f"{name} ({count} {plural(count, 'unidade')})"


def unit_card(unit: HealthUnit) -> UnitCard:
    return UnitCard(
        unit=unit,
        name=unit.display_name or UNKNOWN_NAME,
        address=unit.formatted_address or MISSING_ADDRESS,
        phone=unit.phone_number or MISSING_PHONE,
    )


def build_sections(state: SearchState) -> Tuple[MunicipalitySection, ...]:
    sections = []
    for name in sorted(state.results):
        units = state.results[name]
        sections.append(
            MunicipalitySection(
                name=name,
                count=len(units),
                heading=section_heading(name, len(units)),
                cards=tuple(unit_card(unit) for unit in units),
            )
        )
    return tuple(sections)


def build_results_view(state: SearchState) -> ResultsView:
    if state.status == SearchStatus.LOADING:
        return ResultsView(kind=PanelKind.LOADING, message=LOADING_MESSAGE)

    if not state.category:
        return ResultsView(kind=PanelKind.NO_CATEGORY, message=NO_CATEGORY_MESSAGE)

    # ERROR is shown exactly like an empty READY
    if not state.results:
        return ResultsView(kind=PanelKind.EMPTY, message=NO_RESULTS_MESSAGE)

    return ResultsView(
        kind=PanelKind.RESULTS,
        total_banner=total_banner(state.total),
        sections=build_sections(state),
    )
