import pytest

from SBlock.block_renderer import InvalidNodeType, render_block, to_html
from SBlock.model import BlockNode, Param, RenderedBlock


def test_class_and_flag_attributes():
    block = render_block(BlockNode("info", [Param("bordered")]), "")
    assert block == RenderedBlock(tag="div", attrs={"class": "s-block s-info", "data-bordered": ""}, inner="")


def test_param_order_and_positional_indexes():
    node = BlockNode(
        "card",
        [Param(key="k", value="x"), Param("a b"), Param("flag"), Param("c d")],
    )
    attrs = render_block(node, "").attrs
    assert list(attrs.items()) == [
        ("class", "s-block s-card"),
        ("data-k", "x"),
        ("data-arg-0", "a b"),
        ("data-flag", ""),
        ("data-arg-2", "c d"),
    ]


def test_grid_columns():
    assert render_block(BlockNode("grid", [Param("3")]), "").attrs["style"] == "--cols: 3"
    assert render_block(BlockNode("grid", [Param(key="gap", value="4")]), "").attrs["style"] == "--cols: 2"
    assert "style" not in render_block(BlockNode("grid"), "").attrs


def test_btn_link_param_becomes_anchor():
    block = render_block(BlockNode("btn", [Param("[Go](/start)")]), "")
    assert block.tag == "a"
    assert block.attrs == {"class": "s-block s-btn", "href": "/start"}
    assert block.inner == "Go"


def test_btn_body_content_wins_over_link_text():
    block = render_block(BlockNode("btn", [Param("[Go](/start)")]), "<p>Body</p>\n")
    assert block.tag == "a"
    assert block.inner == "<p>Body</p>\n"


def test_btn_only_first_link_is_used():
    node = BlockNode("btn", [Param("[One](/1)"), Param("[Two](/2)")])
    block = render_block(node, "")
    assert block.attrs["href"] == "/1"
    assert block.attrs["data-arg-1"] == "[Two](/2)"
    assert "data-arg-0" not in block.attrs


def test_btn_falls_back_to_body_link():
    block = render_block(BlockNode("btn"), "<p>ignored</p>\n", body_link=("https://example.com", "Click"))
    assert (block.tag, block.attrs["href"], block.inner) == ("a", "https://example.com", "Click")


def test_btn_without_link_stays_div():
    block = render_block(BlockNode("btn", [Param("primary")]), "<p>x</p>\n")
    assert block.tag == "div"
    assert "href" not in block.attrs


def test_invalid_node_type():
    with pytest.raises(InvalidNodeType, match="Incompatible node type: str"):
        render_block("not a node", "")
    assert issubclass(InvalidNodeType, TypeError)


def test_to_html_escapes_attribute_values():
    html = to_html(RenderedBlock("div", {"class": "s-block s-card", "data-title": 'a "b" <c>'}, "<p>x</p>\n"))
    assert html == '<div class="s-block s-card" data-title="a &quot;b&quot; &lt;c&gt;">\n<p>x</p>\n</div>\n'
    assert to_html(RenderedBlock("a", {"href": "/x"}, "Go")) == '<a href="/x">Go</a>\n'
