"""Tests for the Category aggregate and slug rules."""

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.category import Category, slugify


class TestSlugify:
    def test_lowercases_and_hyphenates(self):
        assert slugify("Botas de Cuero") == "botas-de-cuero"

    def test_strips_accents(self):
        assert slugify("Clásicos Marrón") == "clasicos-marron"

    def test_trims_edge_hyphens(self):
        assert slugify("  ¡Ofertas!  ") == "ofertas"


class TestCategory:
    def test_slug_defaults_from_name(self):
        category = Category.create(name="Casuales Urbanos")
        assert category.slug == "casuales-urbanos"

    def test_explicit_slug_is_kept(self):
        category = Category.create(name="Botas", slug="botas-invierno")
        assert category.slug == "botas-invierno"

    @pytest.mark.parametrize("slug", ["Botas", "botas_invierno", "-botas", "botas-", "botas--invierno"])
    def test_unsafe_slugs_are_rejected(self, slug):
        with pytest.raises(ValidationError) as exc_info:
            Category.create(name="Botas", slug=slug)
        assert "slug" in exc_info.value.messages
