"""Tests for DocumentRenderer — DocNode trees to MDX."""

from types import SimpleNamespace

import pytest

from apimdx.cache.manager import CacheManager
from apimdx.config.schema import RendererOptions
from apimdx.errors.exceptions import ConfigurationError, UnsupportedNodeError
from apimdx.nodes import (
    CodeReference,
    CodeSpan,
    EmphasisSpan,
    Expandable,
    FencedCode,
    Heading,
    LinkReference,
    NodeKind,
    NoteBox,
    Paragraph,
    PlainText,
    Section,
    SoftBreak,
    Table,
    TableCell,
    TableRow,
)
from apimdx.render.context import RenderContext
from apimdx.render.renderer import DocumentRenderer

TYPE_TREE_IMPORT = 'import { TypeTree } from "/snippets/tsdocs/TypeTree.jsx"'


def _para(*nodes) -> Paragraph:
    return Paragraph(nodes=list(nodes))


def _text(text: str) -> PlainText:
    return PlainText(text=text)


def _property_table(*rows: list[str]) -> Table:
    return Table.from_texts(["Property", "Modifiers", "Type", "Description"], *rows)


def _method_table(*rows: list[str]) -> Table:
    return Table.from_texts(["Method", "Modifiers", "Description"], *rows)


@pytest.fixture
def cache_manager():
    return CacheManager()


@pytest.fixture
def renderer(resolver, filenames, cache_manager):
    return DocumentRenderer(resolver, filenames, cache_manager=cache_manager)


class TestDispatch:
    def test_every_kind_has_a_handler(self, renderer):
        assert renderer.supported_kinds == frozenset(NodeKind)

    def test_unknown_kind_raises(self, renderer):
        with pytest.raises(UnsupportedNodeError) as exc_info:
            renderer.render(SimpleNamespace(kind="BlockTag"))
        assert exc_info.value.node_kind == "BlockTag"
        assert "BlockTag" in str(exc_info.value)

    def test_object_without_kind_raises(self, renderer):
        with pytest.raises(UnsupportedNodeError) as exc_info:
            renderer.render(object())
        assert exc_info.value.node_kind == "object"

    def test_unsupported_node_is_configuration_error(self, renderer):
        doc = Section.model_construct(nodes=[_para(_text("ok")), SimpleNamespace(kind="Custom")])
        with pytest.raises(ConfigurationError):
            renderer.render(doc)

    def test_emphasis_popped_on_error(self, renderer):
        span = EmphasisSpan.model_construct(bold=True, nodes=[SimpleNamespace(kind="Custom")])
        context = RenderContext()
        with pytest.raises(UnsupportedNodeError):
            renderer.write_node(span, context)
        assert context.emphasis_stack == []

    def test_default_cache_manager(self, resolver, filenames):
        renderer = DocumentRenderer(resolver, filenames)
        assert isinstance(renderer.cache_manager, CacheManager)
        assert renderer.options == RendererOptions()


class TestProse:
    def test_paragraph(self, renderer):
        assert renderer.render(_para(_text("Hello world"))) == "Hello world\n"

    def test_paragraphs_separated_by_blank_line(self, renderer):
        doc = Section(nodes=[_para(_text("One")), _para(_text("Two"))])
        assert renderer.render(doc) == "One\n\nTwo\n"

    def test_text_escaped(self, renderer):
        output = renderer.render(_para(_text("a <b> & {c}")))
        assert output == "a &lt;b&gt; &amp; \\{c\\}\n"

    def test_soft_break(self, renderer):
        assert renderer.render(_para(_text("a"), SoftBreak(), _text("b"))) == "a b\n"

    def test_soft_break_after_space(self, renderer):
        assert renderer.render(_para(_text("a "), SoftBreak(), _text("b"))) == "a b\n"

    def test_heading(self, renderer):
        doc = Section(nodes=[_para(_text("Intro")), Heading(title="Usage_notes", level=2)])
        assert renderer.render(doc) == "Intro\n\n## Usage\\_notes\n"

    def test_code_span(self, renderer):
        output = renderer.render(_para(_text("Call "), CodeSpan(code="render()")))
        assert output == "Call `render()`\n"

    def test_code_span_containing_backtick(self, renderer):
        assert renderer.render(_para(CodeSpan(code="a`b"))) == "`` a`b ``\n"

    def test_fenced_code(self, renderer):
        output = renderer.render(FencedCode(code="const x = 1;", language="ts"))
        assert output == "```ts\nconst x = 1;\n```\n"

    def test_note_box(self, renderer):
        output = renderer.render(NoteBox(nodes=[_para(_text("Careful"))]))
        assert output.startswith("> Careful\n")
        assert all(line.startswith(">") for line in output.splitlines())

    def test_expandable(self, renderer):
        output = renderer.render(Expandable(title='Say "hi"', nodes=[_para(_text("Body"))]))
        assert output == (
            '<Expandable title="Say &quot;hi&quot;" defaultOpen={true}>\n'
            "  Body\n"
            "\n"
            "</Expandable>\n"
        )

    def test_empty_document(self, renderer):
        assert renderer.render(Section()) == ""


class TestEmphasis:
    def test_bold(self, renderer):
        doc = _para(EmphasisSpan(bold=True, nodes=[_text("bold")]))
        assert renderer.render(doc) == "**bold**\n"

    def test_italic(self, renderer):
        doc = _para(EmphasisSpan(italic=True, nodes=[_text("it")]))
        assert renderer.render(doc) == "_it_\n"

    def test_whitespace_outside_markers(self, renderer):
        doc = _para(_text("a"), EmphasisSpan(bold=True, nodes=[_text(" bold ")]), _text("b"))
        assert renderer.render(doc) == "a **bold** b\n"

    def test_adjacent_spans_get_separator(self, renderer):
        doc = _para(
            EmphasisSpan(bold=True, nodes=[_text("one")]),
            EmphasisSpan(italic=True, nodes=[_text("two")]),
        )
        assert renderer.render(doc) == "**one**{/* */}_two_\n"

    def test_separator_after_word(self, renderer):
        doc = _para(_text("pre"), EmphasisSpan(bold=True, nodes=[_text("fix")]))
        assert renderer.render(doc) == "pre{/* */}**fix**\n"

    def test_nested_spans_accumulate(self, renderer):
        doc = _para(EmphasisSpan(bold=True, nodes=[EmphasisSpan(italic=True, nodes=[_text("both")])]))
        assert renderer.render(doc) == "**_both_**\n"

    def test_emphasis_ends_with_span(self, renderer):
        doc = _para(EmphasisSpan(bold=True, nodes=[_text("b")]), _text(" plain"))
        assert renderer.render(doc) == "**b** plain\n"


class TestLinks:
    def test_url_link(self, renderer):
        doc = _para(LinkReference(link_text="docs", url_destination="https://example.com"))
        assert renderer.render(doc) == "[docs](https://example.com)\n"

    def test_url_link_without_text(self, renderer):
        doc = _para(LinkReference(url_destination="https://example.com"))
        assert renderer.render(doc) == "[https://example.com](https://example.com)\n"

    def test_code_link_resolved(self, renderer):
        ref = CodeReference.parse("my-lib!Widget.render")
        output = renderer.render(_para(LinkReference(code_destination=ref)))
        assert output == "[Widget.render](./widget.render)\n"

    def test_code_link_uses_link_text(self, renderer):
        ref = CodeReference.parse("my-lib!Widget")
        output = renderer.render(_para(LinkReference(link_text="the widget", code_destination=ref)))
        assert output == "[the widget](./widget)\n"

    def test_code_link_prefers_display_text(self, renderer):
        ref = CodeReference.parse("my-lib!Widget")
        output = renderer.render(
            _para(LinkReference(code="widget()", link_text="ignored", code_destination=ref))
        )
        assert output == "[widget()](./widget)\n"

    def test_url_with_spaces_and_parens_is_encoded(self, renderer):
        doc = _para(LinkReference(link_text="x", url_destination="https://e.com/a b(c)"))
        assert renderer.render(doc) == "[x](https://e.com/a%20b%28c%29)\n"

    def test_page_destination_is_encoded(self, resolver, cache_manager):
        renderer = DocumentRenderer(resolver, lambda item: "./my page", cache_manager=cache_manager)
        ref = CodeReference.parse("my-lib!Widget")
        assert renderer.render(_para(LinkReference(code_destination=ref))) == "[Widget](./my%20page)\n"

    def test_unresolved_code_link_is_plain_text(self, renderer):
        ref = CodeReference.parse("my-lib!Missing")
        assert renderer.render(_para(LinkReference(code_destination=ref))) == "my-lib!Missing\n"

    def test_unresolved_code_link_prefers_display_text(self, renderer):
        ref = CodeReference.parse("my-lib!Missing")
        output = renderer.render(_para(LinkReference(code="Missing", code_destination=ref)))
        assert output == "Missing\n"

    def test_resolved_item_without_page(self, resolver, cache_manager):
        renderer = DocumentRenderer(resolver, lambda item: None, cache_manager=cache_manager)
        ref = CodeReference.parse("my-lib!Widget")
        assert renderer.render(_para(LinkReference(code_destination=ref))) == "my-lib!Widget\n"

    def test_link_text_only(self, renderer):
        assert renderer.render(_para(LinkReference(link_text="just text"))) == "just text\n"

    def test_resolution_cached_across_documents(self, renderer, resolver, cache_manager):
        doc = _para(LinkReference(code_destination=CodeReference.parse("my-lib!Widget")))
        renderer.render(doc)
        renderer.render(doc)
        assert len(resolver.calls) == 1
        stats = cache_manager.reference_resolution.stats()
        assert stats.hits == 1
        assert stats.misses == 1

    def test_context_item_passed_to_resolver(self, renderer, resolver, widget_item):
        doc = _para(LinkReference(code_destination=CodeReference.parse("my-lib!Widget")))
        renderer.render(doc, context_item=widget_item)
        assert resolver.calls == [("my-lib!Widget", widget_item)]


class TestPropertyTable:
    def test_four_column_row(self, renderer):
        output = renderer.render(_property_table(["name", "required", "string", "The name property"]))
        assert output == (
            f"{TYPE_TREE_IMPORT}\n"
            "\n"
            "## Properties\n"
            "\n"
            "<TypeTree\n"
            '  name="name"\n'
            '  type="string"\n'
            '  description="The name property"\n'
            "  required={true}\n"
            "/>\n"
        )

    def test_optional_name(self, renderer):
        output = renderer.render(_property_table(["optionalProp?", "", "number", "Maybe"]))
        assert 'name="optionalProp"' in output
        assert "required={true}" not in output

    def test_deprecated(self, renderer):
        output = renderer.render(_property_table(["old", "", "string", "Deprecated: use new"]))
        assert "deprecated={true}" in output
        assert 'description="use new"' in output

    def test_attributes_escaped(self, renderer):
        output = renderer.render(
            _property_table(["items", "", "Array<string>", 'The "items"\nlist'])
        )
        assert 'type="Array&lt;string&gt;"' in output
        assert 'description="The &quot;items&quot; list"' in output

    def test_object_literal_expands_to_properties(self, renderer):
        output = renderer.render(
            _property_table(["options", "", "{ id: string; tags?: string[] }", "Options"])
        )
        assert 'type="object"' in output
        assert (
            'properties={[{"name": "id", "type": "string", "required": true}, '
            '{"name": "tags", "type": "string[]", "required": false}]}'
        ) in output

    def test_nested_properties_json_is_jsx_safe(self, renderer):
        output = renderer.render(
            _property_table(["options", "", "{ items: Array<string> }", "Options"])
        )
        properties_line = next(line for line in output.splitlines() if "properties=" in line)
        assert "<" not in properties_line
        assert "\\u003cstring\\u003e" in properties_line

    def test_import_emitted_once_per_document(self, renderer):
        doc = Section(
            nodes=[
                _property_table(["a", "", "string", "A"]),
                _property_table(["b", "", "number", "B"]),
            ]
        )
        output = renderer.render(doc)
        assert output.startswith(f"{TYPE_TREE_IMPORT}\n\n")
        assert output.count(TYPE_TREE_IMPORT) == 1
        assert output.count("## Properties") == 2
        assert output.count("<TypeTree") == 2

    def test_import_emitted_again_for_next_document(self, renderer):
        table = _property_table(["a", "", "string", "A"])
        assert renderer.render(table).startswith(TYPE_TREE_IMPORT)
        assert renderer.render(table).startswith(TYPE_TREE_IMPORT)

    def test_no_rows_no_import(self, renderer):
        assert renderer.render(_property_table()) == "## Properties\n"

    def test_blank_names_skipped(self, renderer):
        output = renderer.render(_property_table(["", "", "string", "nothing"]))
        assert output == "## Properties\n"

    def test_parameter_header(self, renderer):
        table = Table.from_texts(["Parameter", "Type", "Description"], ["x", "number", "The x"])
        output = renderer.render(table)
        assert 'name="x"' in output
        assert 'type="number"' in output

    def test_name_cell_resolves_code_links(self, renderer):
        name_cell = TableCell(
            nodes=[_para(LinkReference(code_destination=CodeReference.parse("my-lib!Widget")))]
        )
        row = TableRow(cells=[name_cell, TableCell.from_text("Widget"), TableCell.from_text("W")])
        table = Table(header=TableRow.from_texts("Property", "Type", "Description"), rows=[row])
        assert 'name="Widget"' in renderer.render(table)

    def test_type_analysis_goes_through_cache(self, renderer, cache_manager):
        table = _property_table(["a", "", "string", "A"], ["b", "", "string", "B"])
        renderer.render(table)
        stats = cache_manager.type_analysis.stats()
        assert stats.misses == 1
        assert stats.hits == 1

    def test_custom_options(self, resolver, filenames):
        options = RendererOptions(
            type_tree_import='import { TypeTree } from "/components/TypeTree.jsx"',
            property_section_title="Fields",
        )
        renderer = DocumentRenderer(resolver, filenames, options=options)
        output = renderer.render(_property_table(["a", "", "", "A"]))
        assert output.startswith('import { TypeTree } from "/components/TypeTree.jsx"\n\n')
        assert "## Fields" in output
        assert 'type="object"' in output


class TestMethodTable:
    def test_rows(self, renderer):
        table = _method_table(
            ["create()", "static", "Creates a widget"],
            ["oldMethod()", "", "Deprecated: Use newMethod() instead"],
        )
        assert renderer.render(table) == (
            "## Methods\n"
            "\n"
            '<ResponseField name="create()" pre={["static"]}>\n'
            "  Creates a widget\n"
            "</ResponseField>\n"
            '<ResponseField name="oldMethod()" deprecated={true}>\n'
            "  Use newMethod() instead\n"
            "</ResponseField>\n"
        )

    def test_no_import_line(self, renderer):
        output = renderer.render(_method_table(["run()", "", "Runs"]))
        assert not output.startswith("import")

    def test_description_escaped(self, renderer):
        output = renderer.render(_method_table(["run()", "", "Returns <T> & {x}"]))
        assert "  Returns &lt;T&gt; &amp; \\{x\\}\n" in output

    def test_without_description(self, renderer):
        output = renderer.render(_method_table(["run()"]))
        assert '<ResponseField name="run()">\n</ResponseField>' in output

    def test_property_precedence_over_method(self, renderer):
        table = Table.from_texts(["Method", "Property", "Description"], ["a", "string", "A"])
        assert "<TypeTree" in renderer.render(table)


class TestGenericTable:
    def test_html_table(self, renderer):
        output = renderer.render(Table.from_texts(["Name", "Value"], ["a", "1"]))
        assert output.startswith("<table><thead><tr><th>")
        assert output.rstrip().endswith("</tbody></table>")
        assert output.count("<th>") == 2
        assert output.count("<td>") == 2
        assert "\n\nName\n\n</th>" in output

    def test_ragged_rows_padded(self, renderer):
        table = Table.from_texts(["A", "B"], ["1", "2"], ["1", "2", "3"], ["1"])
        output = renderer.render(table)
        head, body = output.split("<tbody>")
        assert head.count("<th>") == 3
        assert "<th></th>" in head
        rows = body.split("</tr>")[:-1]
        assert [row.count("<td>") for row in rows] == [3, 3, 3]

    def test_no_header(self, renderer):
        output = renderer.render(Table.from_texts(None, ["x"]))
        assert "<thead>" not in output
        assert output.count("<td>") == 1

    def test_empty_table(self, renderer):
        assert renderer.render(Table()) == "<table>\n<tbody></tbody></table>\n"

    def test_cell_content_escaped(self, renderer):
        output = renderer.render(Table.from_texts(["Key"], ["a|b"]))
        assert "a\\|b" in output

    def test_standalone_row_renders_as_table(self, renderer):
        output = renderer.render(TableRow.from_texts("x", "y"))
        assert output.startswith("<table>\n<tbody><tr>")
        assert output.count("<td>") == 2

    def test_standalone_cell_renders_content(self, renderer):
        assert renderer.render(TableCell.from_text("cell")) == "cell\n"

    def test_table_after_paragraph(self, renderer):
        doc = Section(nodes=[_para(_text("Intro")), Table()])
        assert renderer.render(doc) == "Intro\n\n<table>\n<tbody></tbody></table>\n"


class TestIdempotence:
    def test_same_input_same_output(self, renderer, widget_item):
        doc = Section(
            nodes=[
                Heading(title="Widget"),
                _para(
                    _text("See "),
                    LinkReference(code_destination=CodeReference.parse("my-lib!Widget.render")),
                ),
                _property_table(["name", "", "{ a: string }", "The name"]),
                _method_table(["render()", "", "Renders"]),
                Table.from_texts(["K", "V"], ["1"]),
            ]
        )
        first = renderer.render(doc, context_item=widget_item)
        second = renderer.render(doc, context_item=widget_item)
        assert first == second

    def test_cache_state_does_not_change_output(self, resolver, filenames):
        doc = Section(
            nodes=[
                _para(LinkReference(code_destination=CodeReference.parse("my-lib!Widget"))),
                _property_table(["name", "", "{ a: string }", "The name"]),
            ]
        )
        cached = DocumentRenderer(resolver, filenames, cache_manager=CacheManager())
        uncached = DocumentRenderer(resolver, filenames, cache_manager=CacheManager(enabled=False))
        assert cached.render(doc) == uncached.render(doc)
        assert cached.render(doc) == uncached.render(doc)
