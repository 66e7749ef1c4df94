"""Tests for document-level read and write flows."""

from unittest.mock import patch

import pytest

from frontvars.config import Settings
from frontvars.exceptions import (
    DocumentChangedError,
    FrontmatterParseError,
    FrontmatterSerializationError,
)
from frontvars.frontmatter.codec import parse
from frontvars.frontmatter.document import (
    apply_variable_changes,
    replace_in_body,
    replace_in_lines,
    update_frontmatter,
)


DOC = "---\nname: Ann\ntitle: '{{name}}'\n---\nHello {{name}}, {{role:guest}} {{x}}\n"


class TestReplaceInBody:
    """Test body-only replacement."""

    def test_frontmatter_kept_verbatim(self):
        new_text, result = replace_in_body(DOC)

        assert new_text == "---\nname: Ann\ntitle: '{{name}}'\n---\nHello Ann, guest [MISSING]\n"
        assert (result.replaced_count, result.missing_count) == (2, 1)

    def test_document_without_frontmatter(self):
        new_text, result = replace_in_body("{{a:1}} {{b}}")
        assert new_text == "1 [MISSING]"
        assert result.replaced_count == 1

    def test_nothing_to_replace(self):
        new_text, result = replace_in_body("---\na: 1\n---\nplain\n")
        assert new_text == "---\na: 1\n---\nplain\n"
        assert not result.found_any


class TestReplaceInLines:
    """Test replacement limited to a line range."""

    LINES = "---\na: 1\n---\nL4 {{a}}\nL5 {{a}}\r\nL6 {{b}}\n"

    def test_only_selected_lines_change(self):
        new_text, result = replace_in_lines(self.LINES, 5, 6)

        assert new_text == "---\na: 1\n---\nL4 {{a}}\nL5 1\r\nL6 [MISSING]\n"
        assert (result.replaced_count, result.missing_count) == (1, 1)

    def test_single_line(self):
        new_text, result = replace_in_lines(self.LINES, 4, 4)
        assert new_text == "---\na: 1\n---\nL4 1\nL5 {{a}}\r\nL6 {{b}}\n"
        assert result.replaced_count == 1

    def test_range_without_placeholders(self):
        new_text, result = replace_in_lines(self.LINES, 1, 3)
        assert new_text == self.LINES
        assert not result.found_any

    def test_range_past_end(self):
        new_text, result = replace_in_lines(self.LINES, 50, 60)
        assert new_text == self.LINES
        assert not result.found_any


class TestUpdateFrontmatter:
    """Test writing values back into the frontmatter block."""

    def test_updates_existing_block_and_keeps_body(self):
        new_text = update_frontmatter(DOC, {'role': 'admin', 'server.ip': '10.0.0.1'})

        assert new_text.endswith("---\nHello {{name}}, {{role:guest}} {{x}}\n")
        assert parse(new_text) == {
            'name': 'Ann',
            'title': '{{name}}',
            'role': 'admin',
            'server': {'ip': '10.0.0.1'},
        }

    def test_inserts_block_when_missing(self):
        new_text = update_frontmatter("Body {{a}}\n", {'a': 'x'})
        assert new_text == "---\na: x\n---\nBody {{a}}\n"

    def test_replaces_empty_block(self):
        new_text = update_frontmatter("---\n---\nBody", {'a': 1})
        assert new_text == "---\na: 1\n---\nBody"

    def test_crlf_block_replaced_whole(self):
        new_text = update_frontmatter("---\r\na: 1\r\n---\r\nBody\r\n", {'a': 2})
        assert new_text == "---\na: 2\n---\nBody\r\n"

    def test_refused_paths_leave_text_unchanged(self):
        """Comments and formatting survive when nothing is written."""
        text = "---\n# owner notes\na:   1   # keep\nflag: 'yes'\n---\nBody\n"
        new_text = update_frontmatter(text, {'__proto__.x': 1, 'items[5000]': 'x', 'a..b': 2})
        assert new_text == text

    def test_partly_refused_updates_write_the_rest(self):
        new_text = update_frontmatter("---\na: 1\n---\nBody", {'__proto__': 1, 'b': 2})
        assert parse(new_text) == {'a': 1, 'b': 2}

    @pytest.mark.parametrize("text", [
        "---\ntitle: A\nauthor: [unclosed\n---\nBody\n",
        "---\n- a\n- b\n---\nBody\n",
    ])
    def test_unreadable_block_is_not_overwritten(self, text):
        with pytest.raises(FrontmatterParseError):
            update_frontmatter(text, {'x': 'v'})

    def test_case_insensitive_settings(self):
        text = "---\nName: Ann\n---\n"
        new_text = update_frontmatter(text, {'name': 'Bob'}, Settings(case_insensitive=True))
        assert parse(new_text) == {'Name': 'Bob'}

    def test_serialization_failure_propagates(self):
        with pytest.raises(FrontmatterSerializationError):
            update_frontmatter(DOC, {'bad': object()})

    def test_serialization_failure_is_not_partial(self):
        text = "---\na: 1\n---\nBody"
        with patch('frontvars.frontmatter.document.serialize_block',
                   side_effect=FrontmatterSerializationError("boom")):
            with pytest.raises(FrontmatterSerializationError):
                update_frontmatter(text, {'a': 2})


class TestApplyVariableChanges:
    """Test the stale-snapshot check before write-back."""

    def test_matching_snapshot_writes(self):
        snapshot = parse(DOC)
        new_text = apply_variable_changes(DOC, snapshot, {'name': 'Bob'})
        assert parse(new_text)['name'] == 'Bob'

    def test_value_change_alone_is_not_stale(self):
        """Only the key set is compared."""
        snapshot = {'name': 'Someone else', 'title': 'x'}
        new_text = apply_variable_changes(DOC, snapshot, {'name': 'Bob'})
        assert parse(new_text)['name'] == 'Bob'

    def test_key_change_aborts(self):
        snapshot = parse(DOC)
        changed = DOC.replace("title:", "heading:")

        with pytest.raises(DocumentChangedError) as exc_info:
            apply_variable_changes(changed, snapshot, {'name': 'Bob'})

        assert exc_info.value.expected_keys == ['name', 'title']
        assert exc_info.value.current_keys == ['heading', 'name']

    def test_removed_frontmatter_aborts(self):
        with pytest.raises(DocumentChangedError):
            apply_variable_changes("Body only", {'a': 1}, {'a': 2})
