"""RecordRatingSummary — write a recomputed rating summary onto a product."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, Integer
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class RecordRatingSummary:
    product_id: Identifier(required=True)
    average_rating: Float(required=True, min_value=0.0, max_value=5.0)
    review_count: Integer(required=True, min_value=0)


@storefront.command_handler(part_of=Product)
class RecordRatingSummaryHandler:
    @handle(RecordRatingSummary)
    def record_rating_summary(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            logger.warning("rating_summary_for_unknown_product", product_id=str(command.product_id))
            return False

        product.record_rating(command.average_rating, command.review_count)
        repo.add(product)
        return True
