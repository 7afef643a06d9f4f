"""Groups repositories into products using their declared leading repository."""

from __future__ import annotations

from typing import Dict, List, Mapping

from .logging import get_logger
from .models import Product, RepoInfo, Repository

logger = get_logger("products")


def build_products(repo_info_by_url: Mapping[str, RepoInfo]) -> List[Product]:
    """Merge per-repository metadata into products keyed by leading repository.

    Every entry joins the product of the leading repository it declares. Only the
    leading repository's own declaration (its URL equals the declared leading
    repository, compared case-insensitively) sets the product name and leading repo.

    Entries are processed in mapping order. Repositories inside a product are sorted
    by name, then URL; products are sorted by name with a stable sort.
    """
    logger.info("Forming products from metadata of %d repositories", len(repo_info_by_url))

    products_by_leading_repo: Dict[str, Product] = {}
    for url, info in repo_info_by_url.items():
        leading_repo = info.metadata.leading_repository
        product = products_by_leading_repo.get(leading_repo)
        if product is None:
            logger.debug("No product for leading repo %s yet, adding an empty one", leading_repo)
            product = Product()
            products_by_leading_repo[leading_repo] = product

        logger.debug(
            "Adding repository %s (%s) to product of leading repo %s",
            info.repo_name,
            info.repo_url,
            leading_repo,
        )
        product.repositories.append(Repository(name=info.repo_name, url=info.repo_url))

        if url.lower() == leading_repo.lower():
            logger.debug(
                "Repository %s is leading, naming product %r", url, info.metadata.product_name
            )
            product.name = info.metadata.product_name
            product.leading_repo = leading_repo
            product.declared_repositories = list(info.metadata.repositories)
            product.openapi_specs = list(info.metadata.openapi_specs)

    for leading_repo, product in products_by_leading_repo.items():
        product.repositories.sort(key=lambda repo: (repo.name.lower(), repo.url))
        if not product.leading_repo:
            logger.warning(
                "No repository declares itself as leading repository %r; product left unnamed (members: %s)",
                leading_repo,
                ", ".join(repo.name for repo in product.repositories),
            )

    return sorted(products_by_leading_repo.values(), key=lambda product: product.name)


__all__ = ["build_products"]
