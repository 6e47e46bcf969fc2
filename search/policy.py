"""
Purpose: Central configuration for the search screen.
What it does:

Stores the filter options and the user-facing texts of the search flow:

CATEGORIES = Clínica Geral, Hospital, Farmácia, Posto de Saúde, Laboratório
DEFAULT_MUNICIPIO = "todos"

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from directory.client import ALL_MUNICIPALITIES


@dataclass(frozen=True)
class SearchPolicy:
    """
    Filter options and messages for the Search State Controller.
    """

    # --- Filters ---
    categories: List[str] = field(default_factory=lambda: [
        "Clínica Geral",
        "Hospital",
        "Farmácia",
        "Posto de Saúde",
        "Laboratório",
    ])
    default_municipio: str = ALL_MUNICIPALITIES

    # --- Notifications ---
    found_message: str = "Encontradas {total} unidades de saúde!"
    fetch_error_message: str = "Ocorreu um erro ao buscar os dados. Tente novamente mais tarde."
    municipios_error_message: str = "Erro ao carregar lista de municípios."

    def validate(self) -> None:
        """
        Basic sanity checks.
        """
        if not self.categories:
            raise ValueError("At least one category must be configured.")

        if any(not category for category in self.categories):
            raise ValueError("Categories must be non-empty strings.")

        if "{total}" not in self.found_message:
            raise ValueError("found_message must contain a {total} placeholder.")


def default_search_policy() -> SearchPolicy:
    """
    Convenience factory for the default policy.
    """
    p = SearchPolicy()
    p.validate()
    return p
