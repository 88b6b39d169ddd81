import pytest

from conftest import FakeAttributeStore, FakeFieldProvider, FakeImageResolver
from content_columns.columns.registry import ColumnRegistry
from content_columns.listing.table import ListTable
from content_columns.rendering.renderer import CellRenderer, as_attachment_id


def make_renderer(declarations, attributes=None, fields=None, thumbnails=None, attachments=None):
    registry = ColumnRegistry.build("product", declarations)
    images = FakeImageResolver(thumbnails, attachments)
    renderer = CellRenderer(
        registry,
        attributes=FakeAttributeStore(attributes or {}),
        fields=FakeFieldProvider(fields or {}),
        images=images,
    )
    return renderer, images


def test_unregistered_and_removed_keys_render_nothing():
    renderer, _ = make_renderer({"date": False}, attributes={(1, "title"): "Hat"})

    assert renderer.render("title", 1) is None
    assert renderer.render("date", 1) is None


def test_attribute_value():
    renderer, _ = make_renderer({"sku": {}}, attributes={(7, "sku"): "AB12"})
    assert renderer.render("sku", 7) == "AB12"


def test_attribute_values_are_read_on_every_call():
    renderer, _ = make_renderer({"sku": {}}, attributes={(7, "sku"): "AB12"})
    renderer.render("sku", 7)
    renderer.render("sku", 7)
    assert renderer.attributes.calls == [(7, "sku"), (7, "sku")]


def test_external_field_value():
    renderer, _ = make_renderer(
        {"supplier": {"type": "external-field"}},
        attributes={(7, "supplier"): "wrong source"},
        fields={(7, "supplier"): "ACME"},
    )
    assert renderer.render("supplier", 7) == "ACME"


def test_transform_receives_value_and_row_id():
    calls = []

    def transform(value, row_id):
        calls.append((value, row_id))
        return f"{value}!"

    renderer, _ = make_renderer(
        {"sku": {"type": "meta", "transform": transform}},
        attributes={(7, "sku"): "AB12"},
    )

    assert renderer.render("sku", 7) == "AB12!"
    assert calls == [("AB12", 7)]


def test_non_callable_transform_is_ignored():
    renderer, _ = make_renderer(
        {"sku": {"transform": 42}},
        attributes={(7, "sku"): "AB12"},
    )
    assert renderer.render("sku", 7) == "AB12"


def test_computed_column_uses_transform():
    renderer, _ = make_renderer(
        {"link": {"type": "computed", "transform": lambda value, row_id: f"/edit/{row_id}"}}
    )
    assert renderer.render("link", 3) == "/edit/3"


def test_thumbnail_markup():
    renderer, images = make_renderer(
        {"thumbnail": {"height": 40}},
        thumbnails={5: "https://cdn.example/5.jpg"},
    )

    assert renderer.render("thumbnail", 5) == (
        '<img src="https://cdn.example/5.jpg" style="width:80px;height:40px;">'
    )
    assert images.requested_sizes == ["thumbnail"]


def test_thumbnail_only_declared_sizes():
    renderer, _ = make_renderer(
        {"thumbnail": {"width": None, "height": None}},
        thumbnails={5: "a.jpg"},
    )
    assert renderer.render("thumbnail", 5) == '<img src="a.jpg">'


def test_thumbnail_missing_renders_nothing():
    renderer, _ = make_renderer({"thumbnail": {}})
    assert renderer.render("thumbnail", 5) is None


def test_thumbnail_skips_transform():
    renderer, _ = make_renderer(
        {"thumbnail": {"transform": lambda value, row_id: "transformed"}},
        thumbnails={5: "a.jpg"},
    )
    assert renderer.render("thumbnail", 5).startswith("<img")


def test_thumbnail_src_is_escaped():
    renderer, _ = make_renderer({"thumbnail": {}}, thumbnails={5: 'a.jpg" onerror="x'})
    output = renderer.render("thumbnail", 5)

    assert 'onerror="x' not in output
    assert "a.jpg&quot; onerror=&quot;x" in output


def test_image_with_attachment_id():
    renderer, images = make_renderer(
        {"photo": {"type": "image", "image_size": "medium", "width": 120}},
        attributes={(9, "photo"): "31"},
        attachments={31: "https://cdn.example/31-medium.jpg"},
    )

    assert renderer.render("photo", 9) == (
        '<img src="https://cdn.example/31-medium.jpg" style="max-width:100%;width:120px;">'
    )
    assert images.requested_sizes == ["medium"]


def test_image_default_size_is_thumbnail():
    renderer, images = make_renderer(
        {"photo": {"type": "image"}},
        attributes={(9, "photo"): 31},
        attachments={31: "x.jpg"},
    )

    assert renderer.render("photo", 9) == '<img src="x.jpg" style="max-width:100%;">'
    assert images.requested_sizes == ["thumbnail"]


def test_image_non_numeric_value_falls_back_to_raw_value():
    renderer, images = make_renderer(
        {"photo": {"type": "image"}},
        attributes={(9, "photo"): "no image yet"},
    )

    assert renderer.render("photo", 9) == "no image yet"
    assert images.requested_sizes == []


def test_image_unresolved_attachment_falls_back_and_transforms():
    renderer, _ = make_renderer(
        {"photo": {"type": "image", "transform": lambda value, row_id: f"#{value}"}},
        attributes={(9, "photo"): "404"},
    )
    assert renderer.render("photo", 9) == "#404"


def test_resolved_image_skips_transform():
    renderer, _ = make_renderer(
        {"photo": {"type": "image", "transform": lambda value, row_id: "transformed"}},
        attributes={(9, "photo"): "31"},
        attachments={31: "x.jpg"},
    )
    assert renderer.render("photo", 9).startswith("<img")


@pytest.mark.parametrize(
    "value, expected",
    [
        (31, 31),
        ("31", 31),
        (" 31 ", 31),
        ("31.0", 31),
        (31.0, 31),
        ("", None),
        (None, None),
        (True, None),
        ("abc", None),
        (["31"], None),
    ],
)
def test_as_attachment_id(value, expected):
    assert as_attachment_id(value) == expected


def test_renderer_without_collaborators():
    registry = ColumnRegistry.build("product", {"sku": {}, "thumbnail": {}})
    renderer = CellRenderer(registry)

    assert renderer.render("sku", 1) == ""
    assert renderer.render("thumbnail", 1) is None


def test_rendering_is_independent_of_unrelated_columns():
    alone, _ = make_renderer({"sku": {}}, attributes={(1, "sku"): "AB12"})
    crowded, _ = make_renderer(
        {"thumbnail": {}, "colour": {"searchable": True}, "sku": {}, "date": False},
        attributes={(1, "sku"): "AB12", (1, "colour"): "red"},
    )
    assert alone.render("sku", 1) == crowded.render("sku", 1)


def test_list_table_renders_through_renderer():
    renderer, _ = make_renderer({"sku": {}}, attributes={(1, "sku"): "AB12"})
    table = ListTable(renderer.registry, renderer)
    assert table.render("sku", 1) == "AB12"
    assert table.render("other", 1) is None


def test_thumbnail_declared_as_meta_renders_featured_image():
    renderer, _ = make_renderer(
        {"thumbnail": {"type": "meta", "width": 50}},
        attributes={(5, "thumbnail"): "attribute value"},
        thumbnails={5: "a.jpg"},
    )
    assert renderer.render("thumbnail", 5) == '<img src="a.jpg" style="width:50px;height:80px;">'


def test_list_table_builds_renderer_from_value_sources():
    registry = ColumnRegistry.build(
        "product",
        {"sku": {}, "supplier": {"type": "acf"}, "thumbnail": {}},
    )
    table = ListTable(
        registry,
        attributes=FakeAttributeStore({(1, "sku"): "AB12"}),
        fields=FakeFieldProvider({(1, "supplier"): "ACME"}),
        images=FakeImageResolver(thumbnails={1: "a.jpg"}),
    )

    assert table.render("sku", 1) == "AB12"
    assert table.render("supplier", 1) == "ACME"
    assert table.render("thumbnail", 1).startswith('<img src="a.jpg"')


def test_list_table_rejects_renderer_and_value_sources():
    renderer, _ = make_renderer({"sku": {}})
    with pytest.raises(ValueError):
        ListTable(renderer.registry, renderer, attributes=FakeAttributeStore({}))
