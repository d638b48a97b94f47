"""Tests for shellqa.analysis.annotations."""

from conftest import extract
from shellqa.analysis import AnnotationChecker
from shellqa.config import DEFAULT_ANNOTATION_MARKERS

PUBLIC = "@@PUBLIC_API@@"


def _record(text):
    records, _ = extract(text)
    return records[-1]


class TestAnnotationChecker:
    def test_marker_in_comment_directly_above(self):
        record = _record(
            """
            # @@PUBLIC_API@@
            str_len() {
                echo "${#1}"
            }
            """
        )
        checker = AnnotationChecker(DEFAULT_ANNOTATION_MARKERS)
        assert checker.is_exempt(record)
        assert checker.find_marker(record) == PUBLIC

    def test_marker_within_window(self):
        padding = "\n".join(f"# doc line {i}" for i in range(9))
        record = _record(f"# @@PUBLIC_API@@\n{padding}\nf() {{\n  echo\n}}\n")
        assert record.start_line == 11
        assert AnnotationChecker([PUBLIC], window=10).is_exempt(record)

    def test_marker_outside_window(self):
        padding = "\n".join(f"# doc line {i}" for i in range(10))
        record = _record(f"# @@PUBLIC_API@@\n{padding}\nf() {{\n  echo\n}}\n")
        assert record.start_line == 12
        assert not AnnotationChecker([PUBLIC], window=10).is_exempt(record)

    def test_smaller_window(self):
        record = _record(
            """
            # @@PUBLIC_API@@
            # more docs
            # and more
            f() {
                echo
            }
            """
        )
        assert AnnotationChecker([PUBLIC], window=3).is_exempt(record)
        assert not AnnotationChecker([PUBLIC], window=2).is_exempt(record)

    def test_window_is_capped_at_ten(self):
        assert AnnotationChecker([PUBLIC], window=50).window == 10

    def test_marker_outside_comment_is_ignored(self):
        record = _record(
            """
            MSG="@@PUBLIC_API@@"
            f() {
                echo "$MSG"
            }
            """
        )
        assert not AnnotationChecker([PUBLIC]).is_exempt(record)

    def test_trailing_comment_counts(self):
        record = _record(
            """
            readonly X=1  # @@ALLOW_TRIVIAL_WRAPPER_FOR_ERGONOMICS@@
            f() {
                echo
            }
            """
        )
        assert AnnotationChecker(DEFAULT_ANNOTATION_MARKERS).is_exempt(record)

    def test_marker_inside_body_does_not_count(self):
        record = _record(
            """
            f() {
                # @@PUBLIC_API@@
                echo
            }
            """
        )
        assert not AnnotationChecker([PUBLIC]).is_exempt(record)

    def test_function_on_first_line(self):
        record = _record("f() {\n  echo\n}\n")
        assert not AnnotationChecker([PUBLIC]).is_exempt(record)

    def test_custom_markers(self):
        record = _record(
            """
            # keep: shellqa-ok
            f() {
                echo
            }
            """
        )
        assert AnnotationChecker(["shellqa-ok"]).is_exempt(record)
        assert not AnnotationChecker(DEFAULT_ANNOTATION_MARKERS).is_exempt(record)

    def test_no_markers(self):
        record = _record("# @@PUBLIC_API@@\nf() {\n  echo\n}\n")
        assert not AnnotationChecker([]).is_exempt(record)

    def test_parameter_length_hash_is_not_a_comment(self):
        record = _record(
            """
            echo "${#items[@]} @@PUBLIC_API@@"
            f() {
                echo
            }
            """
        )
        assert not AnnotationChecker([PUBLIC]).is_exempt(record)

    def test_argument_count_hash_is_not_a_comment(self):
        record = _record(
            """
            [ $# -gt 0 ] && echo "@@PUBLIC_API@@"
            f() {
                echo
            }
            """
        )
        assert not AnnotationChecker([PUBLIC]).is_exempt(record)

    def test_comment_after_argument_count(self):
        record = _record(
            """
            [ $# -gt 0 ] || exit 1  # @@PUBLIC_API@@
            f() {
                echo
            }
            """
        )
        assert AnnotationChecker([PUBLIC]).is_exempt(record)
