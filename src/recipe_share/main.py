"""Batch entry point that recomputes category recipe counts."""

import logging

from recipe_share.app_logging import configure_logging
from recipe_share.containers import AppContainer, build_container


def main(container: AppContainer | None = None) -> None:
    """Recount recipes per category and print the results."""
    configure_logging()
    logger = logging.getLogger(__name__)
    resolved = container or build_container()
    counts = resolved.category_service.recount_all()
    for name, count in sorted(counts.items()):
        print(f"{name}: {count}")
    logger.info("Category recount finished")


if __name__ == "__main__":
    main()
