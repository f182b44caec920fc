"""Sample catalog generator with deterministic seeding.

Generates brands, categories and products whose brand/category product
lists are consistent with the products' assignments. Uses seeded random
for reproducibility.
"""

import random
import uuid
from dataclasses import dataclass, field

from comfy.catalog.models import BrandModel, CategoryModel, ProductModel


# ============================================================================
# Constants
# ============================================================================

# Synthetic brand names (fictional companies)
BRANDS = [
    "Acme",
    "Contoso",
    "Northwind",
    "Fabrikam",
    "Tailwind",
    "Globex",
]

# Category names with price ranges
CATEGORIES: dict[str, tuple[int, int]] = {
    "Chairs": (40, 450),
    "Sofas": (300, 2500),
    "Tables": (80, 1200),
    "Beds": (200, 1800),
    "Lighting": (15, 300),
    "Storage": (30, 600),
}

COLORS = ["Black", "White", "Red", "Blue", "Green", "Gray", "Oak", "Walnut"]

ADJECTIVES = [
    "Classic",
    "Modern",
    "Compact",
    "Deluxe",
    "Rustic",
    "Nordic",
    "Urban",
    "Cozy",
]

# Namespace for deterministic ids
ID_NAMESPACE = uuid.UUID("6f1b5a0e-3c5d-4c1e-9a55-0c6d2f1d7e21")


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        products_per_category: Number of products per category.
        max_colors: Max colors per product.
    """

    seed: int = 42
    products_per_category: int = 10
    max_colors: int = 3

    @classmethod
    def small(cls) -> "GeneratorConfig":
        """Create config for small catalog (~30 products)."""
        return cls(seed=42, products_per_category=5, max_colors=2)

    @classmethod
    def full(cls) -> "GeneratorConfig":
        """Create config for full catalog (~120 products)."""
        return cls(seed=42, products_per_category=20, max_colors=4)


@dataclass
class GeneratedCatalog:
    """Generated records, ready to be saved together."""

    brands: list[BrandModel] = field(default_factory=list)
    categories: list[CategoryModel] = field(default_factory=list)
    products: list[ProductModel] = field(default_factory=list)


# ============================================================================
# Catalog Generator
# ============================================================================


class CatalogGenerator:
    """Generates a consistent sample catalog.

    Example usage:
        catalog = CatalogGenerator(GeneratorConfig.small()).generate()
        session.add_all([*catalog.brands, *catalog.categories, *catalog.products])
    """

    def __init__(self, config: GeneratorConfig) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config
        self.rng = random.Random(config.seed)

    def _id(self, *parts: str | int) -> str:
        """Create a deterministic id from the seed and parts."""
        name = "|".join(str(p) for p in (self.config.seed, *parts))
        return str(uuid.uuid5(ID_NAMESPACE, name))

    def _generate_product(
        self,
        category: CategoryModel,
        price_range: tuple[int, int],
        brand: BrandModel,
        index: int,
    ) -> ProductModel:
        """Generate a single product assigned to a brand and category."""
        adj = self.rng.choice(ADJECTIVES)
        low, high = price_range
        colors = self.rng.sample(COLORS, self.rng.randint(1, self.config.max_colors))

        return ProductModel(
            id=self._id("product", category.name, index),
            name=f"{brand.name} {adj} {category.name[:-1]}",
            description=f"{adj} {category.name.lower()} piece from {brand.name}.",
            price=float(self.rng.randint(low, high)),
            images=[],
            colors=colors,
            discount=float(self.rng.choice([0, 0, 0, 5, 10, 15])),
            stock=self.rng.randint(0, 120),
            brand_id=brand.id,
            category_id=category.id,
        )

    def generate(self) -> GeneratedCatalog:
        """Generate brands, categories and products.

        Returns:
            Catalog whose brand/category lists match product assignments.
        """
        catalog = GeneratedCatalog()
        catalog.brands = [
            BrandModel(id=self._id("brand", name), name=name, products=[])
            for name in BRANDS
        ]

        for name, price_range in CATEGORIES.items():
            category = CategoryModel(id=self._id("category", name), name=name, products_id=[])
            catalog.categories.append(category)

            for i in range(self.config.products_per_category):
                brand = self.rng.choice(catalog.brands)
                product = self._generate_product(category, price_range, brand, i)
                brand.products = [*brand.products, product.id]
                category.products_id = [*category.products_id, product.id]
                catalog.products.append(product)

        return catalog

    @property
    def expected_count(self) -> int:
        """Get expected number of products."""
        return len(CATEGORIES) * self.config.products_per_category
