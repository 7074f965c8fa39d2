"""Tests arrangement — slots par layout, index original, dégradation < 2 blocs."""
import pytest

from page_composer import Block, arrange


def _blocks(*titles):
    return [Block(title=t, body=f"{t} body") for t in titles]


def _titles(slot):
    return [it.block.title for it in slot.items]


# ── Sidebars ─────────────────────────────────────────────────────────────────

class TestSidebars:
    def test_left_sidebar_example(self):
        a = arrange("left-sidebar", _blocks("A", "B", "C"))
        assert a.slot_names() == ["sidebar", "main"]
        assert _titles(a.slot("sidebar")) == ["A"]
        assert _titles(a.slot("main")) == ["B", "C"]
        assert a.slot("sidebar").indices == [0]
        assert a.slot("main").indices == [1, 2]
        assert [it.presentation for it in a.items()] == ["column", "block", "block"]

    def test_right_sidebar(self):
        a = arrange("right-sidebar", _blocks("A", "B", "C", "D"))
        assert a.slot_names() == ["main", "sidebar"]
        assert _titles(a.slot("main")) == ["A", "B", "C"]
        assert _titles(a.slot("sidebar")) == ["D"]
        assert [it.presentation for it in a.slot("main").items] == ["column", "block", "block"]
        assert a.slot("sidebar").items[0].presentation == "column"

    @pytest.mark.parametrize("layout", ["left-sidebar", "right-sidebar"])
    @pytest.mark.parametrize("n", [0, 1])
    def test_sidebar_degrades_below_two_blocks(self, layout, n):
        blocks = _blocks(*"AB"[:n])
        a = arrange(layout, blocks)
        assert a.slot_names() == ["main"]
        assert len(a.slot("main")) == n

    def test_sidebar_keeps_block_identity(self):
        blocks = _blocks("A", "B")
        a = arrange("left-sidebar", blocks)
        assert a.slot("sidebar").items[0].block is blocks[0]


# ── Hero ─────────────────────────────────────────────────────────────────────

class TestHero:
    def test_featured_and_grid(self):
        a = arrange("hero", _blocks("F", "X", "Y"))
        assert a.slot_names() == ["featured", "grid"]
        assert _titles(a.slot("featured")) == ["F"]
        assert a.slot("featured").items[0].presentation == "block"
        assert _titles(a.slot("grid")) == ["X", "Y"]
        assert a.slot("grid").style == "responsive-grid"
        assert [it.presentation for it in a.slot("grid").items] == ["card", "card"]

    def test_single_block_has_empty_grid(self):
        a = arrange("hero", _blocks("F"))
        assert _titles(a.slot("featured")) == ["F"]
        assert len(a.slot("grid")) == 0

    def test_no_blocks_single_main(self):
        a = arrange("hero", [])
        assert a.slot_names() == ["main"]


# ── Masonry ──────────────────────────────────────────────────────────────────

class TestMasonry:
    def test_single_flow_slot(self):
        a = arrange("masonry", _blocks("A", "B", "C", "D", "E"))
        assert a.slot_names() == ["flow"]
        flow = a.slot("flow")
        assert flow.avoid_break is True
        assert flow.indices == [0, 1, 2, 3, 4]
        assert [it.presentation for it in flow.items] == ["column", "card", "card", "column", "card"]

    def test_explicit_type_overrides_parity(self):
        blocks = _blocks("A", "B")
        blocks[0].explicit_type = "card"
        a = arrange("masonry", blocks)
        assert [it.presentation for it in a.items()] == ["card", "card"]


# ── Layouts à slot unique ────────────────────────────────────────────────────

class TestSingleMain:
    @pytest.mark.parametrize("layout,style", [
        ("grid", "multi-column-grid"),
        ("list", "flex-column"),
        ("columns-2", "grid-2"),
        ("columns-3", "grid-3"),
        ("standard", "vertical-stack"),
        ("no-such-layout", "vertical-stack"),
    ])
    def test_container_style(self, layout, style):
        a = arrange(layout, _blocks("A", "B", "C"))
        assert a.slot_names() == ["main"]
        assert a.slot("main").style == style
        assert _titles(a.slot("main")) == ["A", "B", "C"]

    def test_unknown_layout_kept_in_arrangement(self):
        a = arrange("no-such-layout", _blocks("A"))
        assert a.layout == "no-such-layout"
        assert a.items()[0].presentation == "block"

    def test_missing_slot_raises(self):
        with pytest.raises(KeyError):
            arrange("grid", []).slot("sidebar")


def test_items_are_in_original_order():
    a = arrange("right-sidebar", _blocks("A", "B", "C"))
    assert [it.index for it in a.items()] == [0, 1, 2]
