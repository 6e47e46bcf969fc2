import argparse
import logging

from directory.client import ALL_MUNICIPALITIES
from notifications.modal import MessageModal
from search.api import LocatorApiClient
from search.controller import SearchController
from search.policy import default_search_policy
from search.presentation import PanelKind, build_results_view


def main():
    parser = argparse.ArgumentParser(description="Search health units through the locator proxy.")
    parser.add_argument("category", choices=default_search_policy().categories)
    parser.add_argument("--municipio", default=ALL_MUNICIPALITIES)
    parser.add_argument("--api-url", default=None, help="proxy base URL (defaults to LOCATOR_API_URL)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    modal = MessageModal()
    controller = SearchController(LocatorApiClient(base_url=args.api_url), notifier=modal)
    # no category yet, so this only stores the filter
    controller.set_municipio(args.municipio)
    controller.set_category(args.category)

    if modal.is_open:
        print(f"\n{modal.message}")

    view = build_results_view(controller.state)
    if view.kind != PanelKind.RESULTS:
        print(view.message)
        return

    print(f"\n{view.total_banner}\n")
    for section in view.sections:
        print(section.heading)
        for card in section.cards:
            print(f"  {card.name} | {card.address} | {card.phone}")


if __name__ == "__main__":
    main()
