"""Tests for shellqa.scanning.extractor."""

import pytest

from conftest import extract
from shellqa.exceptions import ErrorCode
from shellqa.scanning import is_meaningful, meaningful_lines


class TestIsMeaningful:
    @pytest.mark.parametrize(
        "line",
        [
            "",
            "    ",
            "# comment",
            "   # indented comment",
            "local x",
            'local name="$1"',
            "readonly MAX=3",
            "export PATH",
            "return",
            "return 0",
            "return 1;",
            "return $?",
            "}",
            "   }  ",
        ],
    )
    def test_filtered_lines(self, line):
        assert not is_meaningful(line)

    @pytest.mark.parametrize(
        "line",
        [
            'echo "$1"',
            "return $status",
            "localize_strings",
            "exported=1",
            "} || true",
            "if [ -n \"$x\" ]; then",
        ],
    )
    def test_logic_lines(self, line):
        assert is_meaningful(line)

    def test_meaningful_lines_keeps_order(self):
        body = ("  # hi", "  echo a", "", "  local b", "  echo c")
        assert meaningful_lines(body) == ("  echo a", "  echo c")


class TestOpeners:
    def test_posix_style(self):
        records, _ = extract(
            """
            greet() {
                echo hello
            }
            """
        )
        assert [r.name for r in records] == ["greet"]
        assert records[0].start_line == 1
        assert records[0].end_line == 3

    def test_function_keyword(self):
        records, _ = extract(
            """
            function greet {
                echo no parens is not an opener
            }
            function greet_two () {
                echo two
            }
            """
        )
        assert [r.name for r in records] == ["greet_two"]

    def test_brace_on_next_line(self):
        records, diagnostics = extract(
            """
            setup_env()
            {
                export FOO=1
                echo ready
            }
            """
        )
        assert not diagnostics
        assert len(records) == 1
        assert records[0].start_line == 1
        assert records[0].end_line == 5
        assert records[0].meaningful_body == ("    echo ready",)

    def test_comment_between_opener_and_brace(self):
        records, _ = extract(
            """
            setup_env()
            # opening brace below
            {
                echo ready
            }
            """
        )
        assert [r.name for r in records] == ["setup_env"]

    def test_subshell_body_is_skipped(self):
        records, diagnostics = extract(
            """
            in_subshell() (
                cd /tmp && ls
            )
            after() {
                echo after
            }
            """
        )
        assert [r.name for r in records] == ["after"]
        assert diagnostics == []

    def test_call_is_not_an_opener(self):
        records, _ = extract(
            """
            main "$@"
            echo "done()"
            """
        )
        assert records == []


class TestBody:
    def test_one_line_function(self):
        records, _ = extract('say() { echo "$1"; }\n')
        record = records[0]
        assert record.start_line == record.end_line == 1
        assert [line.strip() for line in record.body] == ['echo "$1";']
        assert len(record.meaningful_body) == 1

    def test_body_excludes_outer_braces(self):
        records, _ = extract(
            """
            wrap() {
                run_it "$@"
            }
            """
        )
        assert records[0].body == ('    run_it "$@"',)

    def test_text_after_opening_brace_is_kept(self):
        records, _ = extract(
            """
            wrap() { run_it
                more
            }
            """
        )
        assert [line.strip() for line in records[0].body] == ["run_it", "more"]

    def test_text_before_closing_brace_is_kept(self):
        records, _ = extract(
            """
            wrap() {
                first
                last; }
            """
        )
        assert [line.strip() for line in records[0].body] == ["first", "last;"]

    def test_nested_braces_stay_in_body(self):
        records, _ = extract(
            """
            outer() {
                if true; then
                    inner() {
                        echo nested
                    }
                fi
                echo "${HOME}"
            }
            after() {
                echo after
            }
            """
        )
        assert [r.name for r in records] == ["outer", "after"]
        assert records[0].end_line == 8
        assert any("inner()" in line for line in records[0].body)

    def test_empty_function_is_retained(self):
        records, _ = extract(
            """
            noop() {
                # nothing here
                return 0
            }
            """
        )
        assert len(records) == 1
        assert records[0].meaningful_body == ()

    def test_preview_is_first_meaningful_line(self):
        records, _ = extract(
            """
            wrap() {
                local x="$1"
                   git status --short
                echo done
            }
            """
        )
        assert records[0].preview == "git status --short"

    def test_record_keeps_file_reference(self):
        records, _ = extract("a_fn() {\n  echo a\n}\n", path="dir/x.sh")
        assert records[0].path == "dir/x.sh"
        assert records[0].file.path == "dir/x.sh"
        assert records[0].key == ("dir/x.sh", "a_fn")


class TestMalformed:
    def test_unterminated_function_is_discarded(self):
        records, diagnostics = extract(
            """
            broken() {
                echo never closed
            """
        )
        assert records == []
        assert len(diagnostics) == 1
        diag = diagnostics[0]
        assert diag.code is ErrorCode.SQ200
        assert diag.line == 1
        assert diag.path == "lib.sh"
        assert diag.context["function"] == "broken"

    def test_scan_resumes_after_failed_opener(self):
        # The unbalanced opener swallows everything to EOF; scanning restarts
        # on the next line, where the later function is found on its own.
        records, diagnostics = extract(
            """
            broken() {
                echo "{"
            good() {
                echo ok
            }
            """
        )
        assert len(diagnostics) >= 1
        assert "good" in [r.name for r in records]

    def test_records_in_file_order(self):
        records, _ = extract(
            """
            zeta() {
                echo z
            }
            alpha() {
                echo a
            }
            """
        )
        assert [r.name for r in records] == ["zeta", "alpha"]
