"""Category aggregate root for grouping products on the storefront."""

import re
import unicodedata
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.domain import storefront


def slugify(value):
    """Turn a display name into a URL-safe slug ("Botas de Cuero" -> "botas-de-cuero")."""
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "-", ascii_value.lower()).strip("-")


@storefront.aggregate
class Category:
    """A named grouping of products, addressed publicly by its unique slug."""

    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=120, unique=True)
    description: Text()
    created_at: DateTime()

    @invariant.post
    def slug_must_be_url_safe(self):
        slug = self.slug
        if not slug:
            return

        if not re.match(r"^[a-z0-9-]+$", slug):
            raise ValidationError({"slug": ["Slug must contain only lowercase alphanumeric characters and hyphens"]})

        if slug.startswith("-") or slug.endswith("-"):
            raise ValidationError({"slug": ["Slug must not start or end with a hyphen"]})

        if "--" in slug:
            raise ValidationError({"slug": ["Slug must not contain consecutive hyphens"]})

    @classmethod
    def create(cls, name, slug=None, description=None):
        from storefront.catalogue.events import CategoryCreated

        category = cls(
            name=name,
            slug=slug or slugify(name),
            description=description,
            created_at=datetime.now(UTC),
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=name,
                slug=category.slug,
            )
        )
        return category
