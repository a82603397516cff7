import pytest

from html_localizer.core.models import DirectField, FileOptions, ReferenceField
from html_localizer.core.options import ProjectOptions
from html_localizer.document import HtmlDocument
from html_localizer.extractors.field_extractor import FieldExtractor
from html_localizer.parsers.html_parser import parse_html


def test_extract_inner_text(make_document):
    """Element without child elements yields innerText."""
    document = make_document("sample.html", "<span loc:name='Sample'>Cancel</span>")

    field = document.fields["Sample"]
    assert field.get_value("", "innerText") == "Cancel"
    assert field.values == {"innerText": {"": "Cancel"}}


def test_extract_inner_html(make_document):
    """Element with child elements yields innerHtml."""
    document = make_document("sample.html", "<span loc:name='Sample'>Sample <strong>test</strong></span>")

    field = document.fields["Sample"]
    assert field.get_value("", "innerHtml") == "Sample <strong>test</strong>"
    assert "innerText" not in field.values


def test_explicit_attribute_list_overrides_defaults():
    document = HtmlDocument()
    document.load_html("<i class='fa fa-cog' loc:name='Icon' loc:attributes='class'></i>")

    document.extract_fields()

    assert len(document.fields) == 1
    assert len(document.fields["Icon"].values) == 1
    assert document.fields["Icon"].values["class"][""] == "fa fa-cog"


def test_void_element_only_extracts_attributes(make_document):
    document = make_document(
        "index.html",
        "<html><head><meta loc:name='Meta - Description' name='Description' content='test'></head> <body></body></html>"
    )

    assert len(document.fields) == 1
    field = document.fields["Meta - Description"]
    assert "innerHtml" not in field.values
    assert "innerText" not in field.values
    assert field.values["content"][""] == "test"


def test_void_element_with_default_attributes(make_document):
    document = make_document("form.html", "<input loc:name='Search' type='text' placeholder='Find'><br loc:name='Break'>")

    assert document.fields["Search"].values == {"placeholder": {"": "Find"}}
    assert document.fields["Break"].values == {}


def test_absent_attributes_contribute_nothing(make_document):
    document = make_document("index.html", "<a loc:name='Home' href='/en/'>Home</a>")

    assert document.fields["Home"].values == {"innerText": {"": "Home"}, "href": {"": "/en/"}}


def test_elements_without_name_marker_are_skipped_but_children_visited(make_document):
    document = make_document("index.html", "<div class='x'><p><b loc:name='Deep'>bold</b></p></div>")

    assert [f.name for f in document.fields] == ["Deep"]


def test_blank_name_marker_is_ignored(make_document):
    document = make_document("index.html", "<p loc:name='  '>text</p>")

    assert len(document.fields) == 0


def test_top_level_nodes_are_walked_one_after_another(make_document):
    document = make_document(
        "index.html",
        "<div loc:name='A'><span loc:name='B'>x</span></div><p loc:name='C'>y</p>"
    )

    assert [(f.name, f.sort_order) for f in document.fields] == [("A", 0), ("B", 1), ("C", 2)]


def test_sort_order_is_breadth_first_within_a_top_level_node(make_document):
    document = make_document(
        "index.html",
        "<div loc:name='A'><p><b loc:name='D'>deep</b></p><span loc:name='B'>x</span>"
        "<span loc:name='C'>y</span></div><footer loc:name='E'>z</footer>"
    )

    assert [(f.name, f.sort_order) for f in document.fields] == [
        ("A", 0), ("B", 1), ("C", 2), ("D", 3), ("E", 4),
    ]


def test_inner_content_is_trimmed_by_default(make_document):
    document = make_document("index.html", "<p loc:name='P'>\n   spaced out   \n</p>")

    assert document.fields["P"].get_value("", "innerText") == "spaced out"


def test_trim_can_be_disabled(make_document):
    document = make_document("index.html", "<p loc:name='P' loc:options='None'>  spaced  </p>")

    assert document.fields["P"].get_value("", "innerText") == "  spaced  "


def test_unknown_extract_option_falls_back_to_default(make_document):
    document = make_document("index.html", "<p loc:name='P' loc:options='Shiny'>  spaced  </p>")

    assert document.fields["P"].get_value("", "innerText") == "spaced"


def test_source_html_has_markers_removed(make_document):
    document = make_document("index.html", "<span loc:name='Sample' loc:options='Default' class='c'>Cancel</span>")

    assert document.fields["Sample"].source_html == '<span class="c">Cancel</span>'


def test_file_options_marker_sets_document_options(make_document):
    document = make_document(
        "SR.html",
        "<div loc:fileOptions='ReferencesOnly'><span loc:name='Cancel'>Cancel</span></div>"
    )

    assert document.options == FileOptions.REFERENCES_ONLY
    assert not document.can_localize()


def test_last_file_options_marker_wins(make_document):
    document = make_document(
        "index.html",
        "<div loc:fileOptions='ReferencesOnly'><p loc:fileOptions='None' loc:name='P'>x</p></div>"
    )

    assert document.options == FileOptions.NONE


def test_file_options_on_last_top_level_sibling_win(make_document):
    document = make_document(
        "SR.html",
        "<div loc:fileOptions='None'><p loc:fileOptions='None' loc:name='P'>x</p></div>"
        "<span loc:fileOptions='ReferencesOnly' loc:name='Cancel'>Cancel</span>"
    )

    assert document.options == FileOptions.REFERENCES_ONLY
    assert document.localize("fr") is None


def test_reference_names_produce_reference_fields(make_document):
    document = make_document("index.html", "<span loc:name='SR.html#Cancel'>Cancel</span>")

    field = document.fields["SR.html#Cancel"]
    assert isinstance(field, ReferenceField)
    assert field.target_path == "SR.html"
    assert field.target_name == "Cancel"
    assert field.document_path == "index.html"


def test_tag_override_list_replaces_default_attributes():
    options = ProjectOptions()
    options.set_attributes_for_tag("A", ["href"])
    extractor = FieldExtractor(options)
    soup = parse_html("<a loc:name='Link' href='/en' title='Go'>Home</a>")

    result = extractor.extract(list(soup.contents), "index.html")

    field = result.fields[0]
    assert isinstance(field, DirectField)
    assert field.values == {"innerText": {"": "Home"}, "href": {"": "/en"}}


def test_explicit_list_may_request_inner_content(make_document):
    document = make_document("index.html", "<p loc:name='P' loc:attributes='innerHtml, title' title='t'>Hi</p>")

    assert document.fields["P"].values == {"innerHtml": {"": "Hi"}, "title": {"": "t"}}


def test_extraction_is_idempotent_for_unchanged_markup():
    html = "<h1 loc:name='Title' title='Welcome'>Hello <em>you</em></h1><p loc:name='Body'>Text</p>"
    first = HtmlDocument("index.html")
    first.load_html(html)
    first.extract_fields()
    second = HtmlDocument("index.html")
    second.load_html(html)
    second.extract_fields()

    assert list(first.fields) == list(second.fields)

    before = [(f.name, f.sort_order, dict(f.values)) for f in first.fields]
    first.extract_fields()
    assert [(f.name, f.sort_order, dict(f.values)) for f in first.fields] == before


def test_extract_field_requires_element():
    with pytest.raises(ValueError):
        FieldExtractor().extract_field(None)
