import unittest

from text_view import TextView


def _numbered(n):
    return "\n".join(f"row {i}" for i in range(n))


class TextViewLayoutTests(unittest.TestCase):
    def test_character_wrap_when_word_wrap_off(self):
        view = TextView("abcdefghij", width=4)
        self.assertEqual(view.display_rows(), [(0, 0, 4), (0, 4, 8), (0, 8, 10)])

    def test_word_wrap_breaks_after_spaces(self):
        view = TextView("aaa bbb ccc", width=5)
        view.set_word_wrap(True)
        texts = [view.row_text(i) for i in range(len(view.display_rows()))]
        self.assertEqual(texts, ["aaa ", "bbb ", "ccc"])

    def test_word_wrap_never_overflows_the_text_column(self):
        view = TextView("aaaa bbbb", width=4)
        view.set_word_wrap(True)
        texts = [view.row_text(i) for i in range(len(view.display_rows()))]
        self.assertEqual(texts, ["aaaa", "bbbb"])
        for text in texts:
            self.assertLessEqual(len(text), view.text_width())

    def test_long_word_without_spaces_is_split(self):
        view = TextView("abcdefgh", width=3)
        view.set_word_wrap(True)
        self.assertEqual(len(view.display_rows()), 3)

    def test_empty_lines_take_one_row(self):
        view = TextView("a\n\nb", width=10)
        self.assertEqual(len(view.display_rows()), 3)

    def test_margins_and_font_scale_narrow_text(self):
        view = TextView("x", width=80)
        view.set_margins(10, 10)
        self.assertEqual(view.text_width(), 60)
        view.set_font_scale(1)
        self.assertEqual(view.text_width(), 50)
        view.set_font_scale(-1)
        # smaller glyphs cannot use more than the space between margins
        self.assertEqual(view.text_width(), 60)

    def test_margins_wider_than_view_leave_one_column(self):
        view = TextView("x", width=10)
        view.set_margins(8, 8)
        self.assertEqual(view.text_width(), 1)

    def test_visible_rows_account_for_line_spacing(self):
        view = TextView("", height=10)
        self.assertEqual(view.visible_rows(), 10)
        view.set_line_spacing(1)
        self.assertEqual(view.visible_rows(), 5)
        view.set_line_spacing(2)
        self.assertEqual(view.visible_rows(), 4)

    def test_rows_recomputed_after_edit(self):
        view = TextView("abc", width=10)
        self.assertEqual(len(view.display_rows()), 1)
        view.point = 3
        view.newline()
        self.assertEqual(len(view.display_rows()), 2)


class TextViewScrollTests(unittest.TestCase):
    def test_scroll_is_clamped_to_document(self):
        view = TextView(_numbered(20), height=5, width=40)
        view.scroll_lines(100)
        self.assertEqual(view.top_row, 15)
        view.scroll_lines(-100)
        self.assertEqual(view.top_row, 0)

    def test_page_scroll_keeps_two_rows_of_context(self):
        view = TextView(_numbered(50), height=10, width=40)
        view.scroll_pages(1)
        self.assertEqual(view.top_row, 8)
        view.scroll_pages(-1)
        self.assertEqual(view.top_row, 0)

    def test_scroll_drags_point_onto_screen(self):
        view = TextView(_numbered(20), height=5, width=40)
        view.scroll_lines(3)
        self.assertEqual(view.point, view.top_offset)
        self.assertEqual(view.current_offset(), view.top_offset + 1)

    def test_top_offset_survives_relayout(self):
        view = TextView("word " * 100, height=5, width=20)
        view.scroll_lines(4)
        offset = view.top_offset
        view.set_margins(3, 3)
        # the same text stays at the top, only the row index changes
        self.assertLessEqual(view._row_offsets()[view.top_row], offset)

    def test_ensure_point_visible_scrolls(self):
        view = TextView(_numbered(30), height=5, width=40)
        view.jump_to(len(view.text))
        top, last = view.visible_range()
        self.assertEqual(last, 29)
        self.assertEqual(top, 25)


class TextViewEditingTests(unittest.TestCase):
    def test_insert_and_backspace(self):
        view = TextView("ac", width=10)
        view.point = 1
        self.assertTrue(view.insert_char("b"))
        self.assertEqual(view.text, "abc")
        self.assertEqual(view.point, 2)
        self.assertTrue(view.modified)
        self.assertTrue(view.backspace())
        self.assertEqual(view.text, "ac")

    def test_delete_forward_at_end_is_no_op(self):
        view = TextView("ab", width=10)
        view.point = 2
        self.assertFalse(view.delete_forward())
        self.assertEqual(view.text, "ab")

    def test_input_disabled_refuses_edits(self):
        view = TextView("ab", width=10)
        view.set_text_input_enabled(False)
        self.assertFalse(view.insert_char("x"))
        self.assertFalse(view.newline())
        view.point = 1
        self.assertFalse(view.backspace())
        self.assertEqual(view.text, "ab")
        self.assertFalse(view.modified)

    def test_read_only_refuses_edits(self):
        view = TextView("ab", width=10, read_only=True)
        self.assertFalse(view.insert_char("x"))
        self.assertEqual(view.text, "ab")

    def test_vertical_motion_keeps_column(self):
        view = TextView("abcdef\nxy\n123456", width=20)
        view.point = 4
        view.move_down()
        self.assertEqual(view.point, 7 + 2)
        view.move_down()
        self.assertEqual(view.point, 10 + 2)
        view.move_up()
        view.move_up()
        self.assertEqual(view.point, 2)

    def test_line_start_and_end(self):
        view = TextView("abc\ndefg", width=20)
        view.point = 5
        view.move_line_end()
        self.assertEqual(view.point, 8)
        view.move_line_start()
        self.assertEqual(view.point, 4)
        self.assertEqual(view.current_line_number(), 2)


class TextViewHostTests(unittest.TestCase):
    def test_invert_flips_default_and_fringe(self):
        view = TextView("x")
        view.invert_colors()
        self.assertEqual(view.inverted, {"default": True, "fringe": True})
        view.invert_colors()
        self.assertEqual(view.inverted, {"default": False, "fringe": False})

    def test_messages_and_help_are_popped_once(self):
        view = TextView("x")
        view.message("42%")
        view.show_help(["a", "b"])
        self.assertEqual(view.pop_message(), "42%")
        self.assertIsNone(view.pop_message())
        self.assertEqual(view.pop_help(), ["a", "b"])
        self.assertIsNone(view.pop_help())

    def test_outline_lists_headings(self):
        view = TextView("# Title\ntext\n## Sub\n* org heading\n#nospace")
        self.assertEqual(
            view.outline(),
            [(0, "Title"), (13, "  Sub"), (20, "org heading")],
        )

    def test_delete_other_panes_hides_outline(self):
        view = TextView("x")
        view.toggle_outline()
        self.assertTrue(view.outline_visible)
        view.delete_other_panes()
        self.assertFalse(view.outline_visible)

    def test_scroll_step_and_spacing_floor(self):
        view = TextView("x")
        view.set_scroll_step(0)
        view.set_line_spacing(-2)
        self.assertEqual(view.scroll_step, 1)
        self.assertEqual(view.line_spacing, 0)


if __name__ == "__main__":
    unittest.main()
