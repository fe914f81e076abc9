"""Tests for segment grouping and squashing."""

from promptline.core.evaluator import render
from promptline.core.fragments import ColorReset, ColorStart, Text, Value
from promptline.core.squash import group_segments, keep_segment, squash

START = ColorStart("<c>")
RESET = ColorReset("</c>")


class TestGroupSegments:
    """Tests for partitioning fragments into segments."""

    def test_no_markers_single_segment(self):
        """Test fragments without color markers form one segment."""
        slots = [Value("/home/alice"), Text(" "), None, Text(" $ ")]

        assert group_segments(slots) == [slots]

    def test_leading_start_does_not_open_empty_segment(self):
        """Test a color start at the beginning joins the first segment."""
        slots = [START, Value("main"), RESET]

        assert group_segments(slots) == [[START, Value("main"), RESET]]

    def test_start_closes_current_segment(self):
        """Test a color start after content opens a new segment."""
        slots = [Text("a"), START, Value("b")]

        assert group_segments(slots) == [[Text("a")], [START, Value("b")]]

    def test_reset_closes_segment(self):
        """Test a reset ends its segment."""
        slots = [START, Value("a"), RESET, Text(" $ ")]

        assert group_segments(slots) == [[START, Value("a"), RESET], [Text(" $ ")]]

    def test_trailing_reset_leaves_no_empty_segment(self):
        """Test nothing is emitted after a final reset."""
        assert group_segments([Text("x"), RESET]) == [[Text("x"), RESET]]

    def test_absent_slots_are_kept_in_place(self):
        """Test absent slots stay in their segment."""
        slots = [START, None, RESET, None]

        assert group_segments(slots) == [[START, None, RESET], [None]]

    def test_empty_input(self):
        assert group_segments([]) == []


class TestKeepSegment:
    """Tests for the per-segment retention rule."""

    def test_pure_decoration_kept(self):
        assert keep_segment([START, Text(" > "), RESET])

    def test_value_kept(self):
        assert keep_segment([START, Value("main"), RESET])

    def test_absent_without_value_dropped(self):
        assert not keep_segment([START, None, RESET])

    def test_value_offsets_absent(self):
        assert keep_segment([START, Value("3+"), None, RESET])

    def test_lone_absent_dropped(self):
        assert not keep_segment([None])


class TestSquash:
    """Tests for squashing whole fragment sequences."""

    def test_absent_component_in_plain_segment(self):
        """Test an absent branch next to a present cwd."""
        slots = [Value("/home/alice"), Text(" "), None, Text(" $ ")]

        fragments = squash(slots)

        assert fragments == [Value("/home/alice"), Text(" "), Text(" $ ")]
        assert render(fragments) == "/home/alice  $ "

    def test_colored_absent_component_vanishes(self):
        """Test color codes around an absent branch are dropped."""
        assert squash([START, None, RESET]) == []

    def test_colored_present_component_kept(self):
        """Test a present branch keeps its color codes."""
        fragments = squash([START, Value("main"), RESET])

        assert render(fragments) == "<c>main</c>"

    def test_one_of_two_components_present(self):
        """Test an absent neighbor is elided and the block survives."""
        fragments = squash([START, Value("3+"), None, RESET])

        assert fragments == [START, Value("3+"), RESET]
        assert render(fragments) == "<c>3+</c>"

    def test_segments_decided_independently(self):
        """Test each segment is kept or dropped on its own."""
        slots = [
            START, None, RESET,
            Text(" "),
            START, Value("main"), RESET,
            Text(" $ "),
        ]

        assert render(squash(slots)) == " <c>main</c> $ "

    def test_text_sharing_segment_with_absent_is_dropped(self):
        """Test literal text in a failed segment disappears with it."""
        slots = [Text("on "), START, Text("branch "), None, RESET, Text(" $")]

        assert render(squash(slots)) == "on  $"

    def test_idempotent(self):
        """Test squashing already squashed output changes nothing."""
        slots = [
            Text("["), START, None, RESET, START, Value("x"), None, RESET,
            Text("]"), None, START, Text("!"),
        ]

        once = squash(slots)

        assert squash(once) == once
