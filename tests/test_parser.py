"""Tests for the recursive outline parser."""

from pathlib import Path

from conftest import RecordingContext
from seqvault.adapters.outline_parser import OutlineParser, split_aliases
from seqvault.core.model import Ref
from seqvault.core.utils import content_hash


def test_parse_page_properties_and_blocks(ctx):
    """Page properties give title and aliases; bullets become blocks."""
    text = (
        "title:: Target Page\n"
        "alias:: One, [[Two]]\n"
        "\n"
        "- first\n"
        "  continued\n"
        "- second\n"
    )
    page = OutlineParser().parse_page(Path("pages/whatever.md"), text, ctx)

    assert page.title == "Target Page"
    assert page.aliases == ["One", "Two"]
    assert ctx.current_title() == "Target Page"
    assert [b.text for b in page.blocks] == ["first\ncontinued", "second"]
    assert all(b.is_list_item for b in page.blocks)


def test_parse_page_title_from_filename(ctx):
    """Without a title:: property the file name is the title."""
    page = OutlineParser().parse_page(Path("pages/proj___notes.md"), "- a\n", ctx)
    assert page.title == "proj/notes"
    assert ctx.current_title() == "proj/notes"


def test_parse_page_yaml_front_matter(ctx):
    """YAML front matter is read like page properties."""
    text = "---\ntitle: FM Title\nalias: [X, Y]\n---\n- a\n"
    page = OutlineParser().parse_page(Path("p.md"), text, ctx)
    assert page.title == "FM Title"
    assert page.aliases == ["X", "Y"]
    assert [b.text for b in page.blocks] == ["a"]


def test_parse_page_leading_text_is_a_block(ctx):
    """Text before the first bullet is kept as a plain block."""
    page = OutlineParser().parse_page(Path("p.md"), "Intro line\n- a\n", ctx)
    assert [b.text for b in page.blocks] == ["Intro line", "a"]
    assert page.blocks[0].is_list_item is False
    assert page.blocks[1].is_list_item is True


def test_parse_page_other_properties_dropped(ctx):
    """Page properties such as tags:: never reach the note body."""
    text = "title:: T\ntags:: foo, bar\npublic:: true\n\n- a\n"
    page = OutlineParser().parse_page(Path("p.md"), text, ctx)
    assert page.title == "T"
    assert [b.text for b in page.blocks] == ["a"]


def test_parse_page_leading_prose_kept_beside_properties(ctx):
    text = "type:: note\nIntro line\n- a\n"
    page = OutlineParser().parse_page(Path("p.md"), text, ctx)
    assert [b.text for b in page.blocks] == ["Intro line", "a"]


def test_parse_page_without_blocks(ctx):
    page = OutlineParser().parse_page(Path("p.md"), "title:: Empty\n", ctx)
    assert page.title == "Empty"
    assert page.blocks == []


def test_parse_nested_children_and_id(ctx):
    """Children are split off by indentation; id:: is consumed and registered."""
    span = (
        "- parent\n"
        "  id:: 6500-aaaa\n"
        "  - child one\n"
        "    more\n"
        "  - child two\n"
        "    - grandchild"
    )
    block = OutlineParser().parse_block(span, ctx)

    assert block.text == "parent"
    assert block.id is not None
    assert block.id.source_id == "6500-aaaa"
    assert block.id.target_anchor == "^" + content_hash("parent")
    assert [c.text for c in block.children] == ["child one\nmore", "child two"]
    assert [c.text for c in block.children[1].children] == ["grandchild"]
    assert ctx.query_id("6500-aaaa") == Ref(
        title="Current Page", anchor="^" + content_hash("parent")
    )


def test_parse_heading_anchor(ctx):
    """A heading block gets a sanitized # anchor and is not a list item."""
    block = OutlineParser().parse_block("- ## Hello, World! 2024\n  id:: abc", ctx)

    assert block.header == "Hello, World! 2024"
    assert block.id.target_anchor == "#Hello World 2024"
    assert block.text == "## Hello, World! 2024"
    assert block.is_list_item is False
    assert block.raw_list_item is True


def test_parse_hash_anchor_deterministic(ctx):
    """Parsing the same body twice yields the same ^ anchor."""
    parser = OutlineParser()
    a = parser.parse_block("- same body\n  id:: one", ctx)
    b = parser.parse_block("- same body\n  id:: two", ctx)
    assert a.id.target_anchor == b.id.target_anchor
    assert a.id.target_anchor.startswith("^")
    assert a.header is None


def test_parse_hash_bytes_configurable(ctx):
    block = OutlineParser(hash_bytes=4).parse_block("- body\n  id:: x", ctx)
    assert block.id.target_anchor == "^" + content_hash("body", nbytes=4)


def test_parse_bold_is_not_list_item(ctx):
    block = OutlineParser().parse_block("- **Term** definition\n  second line", ctx)
    assert block.is_list_item is False
    assert block.text == "**Term** definition\nsecond line"


def test_parse_self_border(ctx):
    """The self-border tag is removed and flagged."""
    block = OutlineParser().parse_block(
        "- A definition #.v-self-border\n  id:: d1", ctx
    )
    assert block.self_border is True
    assert block.text == "A definition"
    assert block.id.target_anchor == "^" + content_hash("A definition")


def test_parse_collapsed_property_consumed(ctx):
    block = OutlineParser().parse_block("- a\n  collapsed:: true\n  - b", ctx)
    assert block.text == "a"
    assert [c.text for c in block.children] == ["b"]


def test_parse_indent_strip_is_capped(ctx):
    """A shallower sibling is only stripped to its own indentation."""
    block = OutlineParser().parse_block("- a\n    - b\n  - c", ctx)
    assert [c.text for c in block.children] == ["b", "c"]


def test_parse_tab_indented_children(ctx):
    block = OutlineParser().parse_block("- a\n\t- b\n\t\t- c", ctx)
    assert block.children[0].text == "b"
    assert block.children[0].children[0].text == "c"


def test_parse_fenced_code_has_no_children(ctx):
    """Bullets inside a code fence stay body text."""
    block = OutlineParser().parse_block("- ```\n  - not a child\n  ```", ctx)
    assert block.children == []
    assert block.text == "```\n- not a child\n```"


def test_parse_plain_text_block(ctx):
    """Input without a list marker is a childless paragraph."""
    block = OutlineParser().parse_block("just text\nmore", ctx)
    assert block.is_list_item is False
    assert block.text == "just text\nmore"
    assert block.children == []


def test_register_skipped_without_title():
    """Blocks on an untitled page are not registered."""
    ctx = RecordingContext(title="")
    block = OutlineParser().parse_block("- a\n  id:: lost", ctx)
    assert block.id is not None
    assert len(ctx.registry) == 0


def test_split_aliases():
    assert split_aliases("A, [[B]], A,  ") == ["A", "B"]
