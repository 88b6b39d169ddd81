"""Column registry - normalized column declarations for one content type.

Raw declarations are a mapping of column key -> partial config (or the
disabled marker). build() fills in defaults, picks the column variant for
the declared type and freezes the result. A malformed declaration fails
the whole build; no partial registry is ever returned.

ColumnCatalog follows the same pattern as the other definition registries:
- YAML-per-file in definitions/ directory (one file per content type)
- Lazy loading with _loaded guard
- In-memory dict keyed by content_type
- Global singleton via get_column_catalog()
"""

import importlib
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Optional

import yaml
from pydantic import ValidationError

from content_columns.columns.schemas import (
    COLUMN_VARIANTS,
    REMOVED,
    THUMBNAIL_KEY,
    TYPE_ALIASES,
    AnyColumn,
    ColumnEntry,
    ColumnSummary,
    ColumnType,
    ContentTypeSummary,
    ImageColumn,
    Removed,
    ThumbnailColumn,
)

logger = logging.getLogger(__name__)

DEFINITIONS_DIR_ENV = "CONTENT_COLUMNS_DEFINITIONS_DIR"

THUMBNAIL_DEFAULTS: dict[str, Any] = {
    "title": "Featured Image",
    "type": ColumnType.THUMBNAIL.value,
    "width": 80,
    "height": 80,
    "sortable": False,
}

COLUMN_DEFAULTS: dict[str, Any] = {
    "title": "",
    "type": ColumnType.ATTRIBUTE.value,
    "transform": None,
    "sortable": False,
    "orderable_key": "attribute_value",
    "searchable": False,
}


class ConfigurationError(ValueError):
    """Raised when a column declaration cannot be normalized."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Column '{key}': {message}")


def is_disabled(raw: Any) -> bool:
    """True for the values that switch a column off."""
    return raw is False or raw is REMOVED or (isinstance(raw, str) and raw == "removed")


def parse_args(args: Mapping, defaults: Mapping) -> dict[str, Any]:
    """Merge defaults under args. Keys already present in args always win."""
    merged = dict(defaults)
    merged.update(args)
    return merged


def resolve_transform(key: str, transform: Any) -> Any:
    """Import a transform given as 'package.module:function'.

    Anything that is not a string is returned as-is; whether it can be
    called is checked when a cell is rendered.
    """
    if not isinstance(transform, str):
        return transform

    module_path, sep, attr = transform.partition(":")
    if not sep:
        module_path, _, attr = transform.rpartition(".")
    if not module_path or not attr:
        raise ConfigurationError(key, f"invalid transform path '{transform}'")

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise ConfigurationError(key, f"cannot import transform '{transform}': {e}") from e

    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ConfigurationError(key, f"transform '{transform}' not found") from e


def normalize_column(key: str, raw: Any) -> ColumnEntry:
    """Normalize one raw declaration into a column variant or REMOVED."""
    if is_disabled(raw):
        return REMOVED

    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            key,
            f"declaration must be a mapping or false, got {type(raw).__name__}",
        )

    column = dict(raw)
    if key == THUMBNAIL_KEY:
        column = parse_args(column, THUMBNAIL_DEFAULTS)
    column = parse_args(column, COLUMN_DEFAULTS)

    raw_type = column["type"]
    if isinstance(raw_type, ColumnType):
        raw_type = raw_type.value
    if not isinstance(raw_type, str):
        raise ConfigurationError(key, f"type must be a string, got {type(raw_type).__name__}")
    raw_type = TYPE_ALIASES.get(raw_type, raw_type)
    try:
        column_type = ColumnType(raw_type)
    except ValueError:
        valid = [t.value for t in ColumnType]
        raise ConfigurationError(
            key, f"unknown type '{column['type']}' (expected one of {valid})"
        ) from None
    # The reserved key always renders the featured image, whatever type it declares
    if key == THUMBNAIL_KEY:
        column_type = ColumnType.THUMBNAIL
    column["type"] = column_type
    column["transform"] = resolve_transform(key, column["transform"])
    column["key"] = key

    variant = COLUMN_VARIANTS[column_type]
    try:
        return variant.model_validate(column)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(key, errors) from e


class ColumnRegistry:
    """Immutable mapping of column key -> normalized declaration.

    Built once per content type and shared read-only by every request.
    Iteration follows declaration order.
    """

    def __init__(self, content_type: str, columns: Mapping[str, ColumnEntry]):
        self.content_type = content_type
        self._columns = MappingProxyType(dict(columns))

    @classmethod
    def build(cls, content_type: str, declarations: Optional[Mapping[str, Any]]) -> "ColumnRegistry":
        """Normalize raw declarations and freeze them.

        Raises ConfigurationError naming the first malformed column.
        """
        if declarations is None:
            declarations = {}
        if not isinstance(declarations, Mapping):
            raise ConfigurationError(
                content_type,
                f"declarations must be a mapping, got {type(declarations).__name__}",
            )

        columns: dict[str, ColumnEntry] = {}
        for key, raw in declarations.items():
            columns[str(key)] = normalize_column(str(key), raw)

        registry = cls(content_type, columns)
        logger.debug(
            f"Built column registry for '{content_type}': "
            f"{len(registry.active())} active, {len(registry.removed_keys())} removed"
        )
        return registry

    # ── Lookup ────────────────────────────────────────────

    def __contains__(self, key: object) -> bool:
        return key in self._columns

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def get(self, key: str) -> Optional[ColumnEntry]:
        """Get a column (or REMOVED) by key."""
        return self._columns.get(key)

    def get_active(self, key: str) -> Optional[AnyColumn]:
        """Get a column by key, None when unregistered or removed."""
        column = self._columns.get(key)
        if column is None or isinstance(column, Removed):
            return None
        return column

    def items(self):
        return self._columns.items()

    def keys(self) -> list[str]:
        return list(self._columns.keys())

    def is_removed(self, key: str) -> bool:
        return isinstance(self._columns.get(key), Removed)

    def active(self) -> dict[str, AnyColumn]:
        """All columns that are not removed, in declaration order."""
        return {
            key: column
            for key, column in self._columns.items()
            if not isinstance(column, Removed)
        }

    def removed_keys(self) -> list[str]:
        return [key for key, column in self._columns.items() if isinstance(column, Removed)]

    def searchable_attribute_columns(self) -> dict[str, AnyColumn]:
        """Attribute columns flagged searchable."""
        return {
            key: column
            for key, column in self.active().items()
            if column.type == ColumnType.ATTRIBUTE and column.searchable
        }

    # ── Summaries ─────────────────────────────────────────

    def summarize(self, key: str) -> Optional[ColumnSummary]:
        """Build a ColumnSummary for one key."""
        column = self._columns.get(key)
        if column is None:
            return None
        if isinstance(column, Removed):
            return ColumnSummary(key=key, removed=True)

        sized = isinstance(column, (ImageColumn, ThumbnailColumn))
        return ColumnSummary(
            key=key,
            title=column.title,
            type=column.type,
            sortable=column.sortable,
            orderable_key=column.orderable_key,
            searchable=column.searchable,
            has_transform=column.transform is not None,
            width=column.width if sized else None,
            height=column.height if sized else None,
            image_size=column.image_size if sized else None,
        )

    def list_summaries(self) -> list[ColumnSummary]:
        return [self.summarize(key) for key in self._columns]

    def content_type_summary(self) -> ContentTypeSummary:
        active = self.active()
        return ContentTypeSummary(
            content_type=self.content_type,
            column_count=len(active),
            removed_count=len(self.removed_keys()),
            sortable=[key for key, column in active.items() if column.sortable],
            searchable=list(self.searchable_attribute_columns().keys()),
        )


def default_definitions_dir() -> Path:
    """Definitions directory, overridable through the environment."""
    override = os.environ.get(DEFINITIONS_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent / "definitions"


class ColumnCatalog:
    """Column registries for every content type, loaded from YAML files.

    Each file holds one content type:

        content_type: product
        columns:
          sku: {title: SKU, sortable: true, searchable: true}
          date: false
    """

    def __init__(self, definitions_dir: Optional[Path] = None):
        if definitions_dir is None:
            definitions_dir = default_definitions_dir()
        self.definitions_dir = Path(definitions_dir)
        self._registries: dict[str, ColumnRegistry] = {}
        self._file_map: dict[str, Path] = {}
        self._loaded = False

    def load(self) -> None:
        """Load all column definition files.

        Unlike a missing directory, a malformed file fails the load.
        """
        if self._loaded:
            return

        if not self.definitions_dir.exists():
            logger.warning(f"Column definitions directory not found: {self.definitions_dir}")
            self._loaded = True
            return

        files = sorted(
            list(self.definitions_dir.glob("*.yaml"))
            + list(self.definitions_dir.glob("*.yml"))
        )
        registries: dict[str, ColumnRegistry] = {}
        file_map: dict[str, Path] = {}
        for yaml_file in files:
            try:
                registry = self._load_file(yaml_file)
            except (ConfigurationError, yaml.YAMLError) as e:
                logger.error(f"Failed to load column definitions from {yaml_file}: {e}")
                raise
            registries[registry.content_type] = registry
            file_map[registry.content_type] = yaml_file
            logger.debug(f"Loaded columns for: {registry.content_type}")

        self._registries = registries
        self._file_map = file_map
        self._loaded = True
        logger.info(f"Loaded column definitions for {len(self._registries)} content types")

    @staticmethod
    def _load_file(yaml_file: Path) -> ColumnRegistry:
        with open(yaml_file, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ConfigurationError(yaml_file.stem, "definition file must be a mapping")

        content_type = data.get("content_type") or yaml_file.stem
        return ColumnRegistry.build(content_type, data.get("columns") or {})

    def register(self, registry: ColumnRegistry) -> None:
        """Add or replace a registry built in code."""
        self.load()
        self._registries[registry.content_type] = registry

    def get(self, content_type: str) -> Optional[ColumnRegistry]:
        """Get the registry for a content type."""
        self.load()
        return self._registries.get(content_type)

    def list_content_types(self) -> list[str]:
        self.load()
        return sorted(self._registries.keys())

    def list_summaries(self) -> list[ContentTypeSummary]:
        self.load()
        return [
            self._registries[content_type].content_type_summary()
            for content_type in sorted(self._registries)
        ]

    def count(self) -> int:
        self.load()
        return len(self._registries)

    def reload(self) -> None:
        """Force reload all definitions."""
        self._loaded = False
        self._registries.clear()
        self._file_map.clear()
        self.load()


# Global catalog instance
_catalog: Optional[ColumnCatalog] = None


def get_column_catalog() -> ColumnCatalog:
    """Get the global column catalog instance."""
    global _catalog
    if _catalog is None:
        _catalog = ColumnCatalog()
        _catalog.load()
    return _catalog


def reset_column_catalog() -> None:
    """Drop the global catalog so the next access reloads from disk."""
    global _catalog
    _catalog = None
