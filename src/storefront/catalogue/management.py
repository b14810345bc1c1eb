"""Category management: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.domain import storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(max_length=120)
    description: Text()


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
        )
        if repo.find_by_slug(category.slug) is not None:
            raise ValidationError({"slug": [f"Category slug '{category.slug}' is already in use"]})

        repo.add(category)
        return str(category.id)
