from typing import Any, Optional

import pytest

from content_columns.columns.registry import ColumnRegistry


class FakeAttributeStore:
    def __init__(self, values: dict[tuple[Any, str], Any]):
        self.values = dict(values)
        self.calls: list[tuple[Any, str]] = []

    def get(self, row_id: Any, key: str) -> Any:
        self.calls.append((row_id, key))
        return self.values.get((row_id, key), "")


class FakeFieldProvider:
    def __init__(self, values: dict[tuple[Any, str], Any]):
        self.values = dict(values)

    def get(self, row_id: Any, key: str) -> Any:
        return self.values.get((row_id, key))


class FakeImageResolver:
    def __init__(
        self,
        thumbnails: Optional[dict[Any, str]] = None,
        attachments: Optional[dict[int, str]] = None,
    ):
        self.thumbnails = thumbnails or {}
        self.attachments = attachments or {}
        self.requested_sizes: list[str] = []

    def thumbnail_url(self, row_id: Any, size: str) -> Optional[str]:
        self.requested_sizes.append(size)
        return self.thumbnails.get(row_id)

    def attachment_url(self, attachment_id: int, size: str) -> Optional[str]:
        self.requested_sizes.append(size)
        return self.attachments.get(attachment_id)


@pytest.fixture()
def product_declarations() -> dict[str, Any]:
    return {
        "thumbnail": {},
        "sku": {"title": "SKU", "sortable": True, "searchable": True},
        "price": {
            "title": "Price",
            "sortable": True,
            "orderable_key": "meta_value_num",
        },
        "supplier": {"title": "Supplier", "type": "external-field", "sortable": True},
        "photo": {"title": "Photo", "type": "image", "image_size": "medium", "width": 120},
        "date": False,
    }


@pytest.fixture()
def product_registry(product_declarations) -> ColumnRegistry:
    return ColumnRegistry.build("product", product_declarations)
