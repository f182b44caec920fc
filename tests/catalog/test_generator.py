"""Tests for sample catalog generator."""

import pytest

from comfy.catalog.generator import (
    BRANDS,
    CATEGORIES,
    CatalogGenerator,
    GeneratorConfig,
)


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_small_config(self) -> None:
        """Small config creates reasonable defaults."""
        assert GeneratorConfig.small().products_per_category == 5

    def test_full_config(self) -> None:
        """Full config creates larger catalog."""
        config = GeneratorConfig.full()
        assert config.products_per_category > GeneratorConfig.small().products_per_category


class TestCatalogGenerator:
    """Tests for CatalogGenerator."""

    @pytest.fixture
    def generator(self) -> CatalogGenerator:
        """Create generator with small config."""
        return CatalogGenerator(GeneratorConfig.small())

    def test_generates_expected_count(self, generator: CatalogGenerator) -> None:
        """All brands, categories and products are produced."""
        catalog = generator.generate()

        assert len(catalog.products) == generator.expected_count
        assert [b.name for b in catalog.brands] == BRANDS
        assert [c.name for c in catalog.categories] == list(CATEGORIES)

    def test_deterministic_generation(self) -> None:
        """Same seed produces same catalog."""
        first = CatalogGenerator(GeneratorConfig(seed=42, products_per_category=2)).generate()
        second = CatalogGenerator(GeneratorConfig(seed=42, products_per_category=2)).generate()

        for p1, p2 in zip(first.products, second.products):
            assert p1.id == p2.id
            assert p1.name == p2.name
            assert p1.price == p2.price
            assert p1.brand_id == p2.brand_id

    def test_different_seeds_produce_different_products(self) -> None:
        """Different seeds produce different products."""
        first = CatalogGenerator(GeneratorConfig(seed=42, products_per_category=3)).generate()
        second = CatalogGenerator(GeneratorConfig(seed=99, products_per_category=3)).generate()

        assert [p.price for p in first.products] != [p.price for p in second.products]

    def test_reference_lists_match_assignments(self, generator: CatalogGenerator) -> None:
        """Every product appears exactly in its own brand and category lists."""
        catalog = generator.generate()

        for brand in catalog.brands:
            assigned = [p.id for p in catalog.products if p.brand_id == brand.id]
            assert brand.products == assigned

        for category in catalog.categories:
            assigned = [p.id for p in catalog.products if p.category_id == category.id]
            assert category.products_id == assigned

    def test_prices_within_category_range(self, generator: CatalogGenerator) -> None:
        """Prices fall in their category's range."""
        catalog = generator.generate()
        names = {c.id: c.name for c in catalog.categories}

        for product in catalog.products:
            low, high = CATEGORIES[names[product.category_id]]
            assert low <= product.price <= high

    def test_colors_are_unique(self, generator: CatalogGenerator) -> None:
        """Products carry distinct colors."""
        for product in generator.generate().products:
            assert 1 <= len(product.colors) <= generator.config.max_colors
            assert len(set(product.colors)) == len(product.colors)
