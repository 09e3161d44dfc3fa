"""AddProduct — seed a product into the catalog."""

from protean import handle
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=200)
    price: Float(required=True, min_value=0.0)
    image: String(max_length=500)
    category: String(max_length=100)
    description: Text()


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.add(
            name=command.name,
            price=command.price,
            image=command.image,
            category=command.category,
            description=command.description,
        )
        current_domain.repository_for(Product).add(product)
        return str(product.id)
