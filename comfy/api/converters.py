"""Converters from catalog models to API schemas."""

from comfy.api.schemas import (
    BrandSchema,
    CategorySchema,
    ImageSchema,
    ProductDetailSchema,
    ProductSchema,
)
from comfy.catalog.models import BrandModel, CategoryModel, ProductModel


def brand_to_response(brand: BrandModel) -> BrandSchema:
    """Convert BrandModel to BrandSchema."""
    return BrandSchema(id=brand.id, name=brand.name, products=list(brand.products or []))


def category_to_response(category: CategoryModel) -> CategorySchema:
    """Convert CategoryModel to CategorySchema."""
    return CategorySchema(
        id=category.id,
        name=category.name,
        products_id=list(category.products_id or []),
    )


def _images(product: ProductModel) -> list[ImageSchema]:
    return [ImageSchema(src=image["src"]) for image in product.images or []]


def product_to_response(product: ProductModel) -> ProductSchema:
    """Convert ProductModel to ProductSchema with reference ids."""
    return ProductSchema(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        images=_images(product),
        colors=list(product.colors or []),
        discount=product.discount,
        stock=product.stock,
        brand=product.brand_id,
        category=product.category_id,
    )


def product_to_detail(product: ProductModel) -> ProductDetailSchema:
    """Convert ProductModel with loaded references to ProductDetailSchema.

    The brand and category relationships must already be loaded.
    """
    return ProductDetailSchema(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        images=_images(product),
        colors=list(product.colors or []),
        discount=product.discount,
        stock=product.stock,
        brand=brand_to_response(product.brand) if product.brand else None,
        category=category_to_response(product.category) if product.category else None,
    )
