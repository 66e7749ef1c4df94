"""Tests for document variable scanning."""

from frontvars.config import Settings
from frontvars.variables.scanner import (
    DocumentScanner,
    Position,
    Variable,
    VariableStatus,
    scan,
)


def by_name(variables):
    return {v.name: v for v in variables}


class TestScan:
    """Test placeholder enumeration and classification."""

    def test_statuses(self):
        body = "{{name}} {{title:Untitled}} {{missing}} {{blank}}"
        data = {'name': 'Ann', 'blank': ''}
        variables = scan(body, data, settings=Settings(show_data_only=False))
        found = by_name(variables)

        assert [v.name for v in variables] == ['name', 'title', 'missing', 'blank']
        assert found['name'].status is VariableStatus.EXISTS
        assert found['name'].value == 'Ann'
        assert found['title'].status is VariableStatus.HAS_DEFAULT
        assert found['title'].default_value == 'Untitled'
        assert found['missing'].status is VariableStatus.MISSING
        assert found['blank'].status is VariableStatus.MISSING

    def test_deduplicates_first_occurrence_wins(self):
        body = "first {{a}}\nsecond {{a:fallback}}"
        variables = scan(body, {}, settings=Settings(show_data_only=False))

        assert len(variables) == 1
        assert variables[0].status is VariableStatus.MISSING
        assert variables[0].position == Position(line=0, start=6, end=11)

    def test_positions_with_line_offset(self):
        body = "intro\n  {{a}} and {{b}}\n\n{{c}}"
        variables = scan(body, {}, line_offset=3, settings=Settings(show_data_only=False))
        found = by_name(variables)

        assert found['a'].position == Position(line=4, start=2, end=7)
        assert found['b'].position == Position(line=4, start=12, end=17)
        assert found['c'].position == Position(line=6, start=0, end=5)

    def test_positions_after_multiline_placeholder(self):
        """Newlines inside a placeholder's whitespace still advance the line count."""
        body = "{{\na\n}} {{b}}"
        found = by_name(scan(body, {}, settings=Settings(show_data_only=False)))

        assert found['a'].position.line == 0
        assert found['b'].position == Position(line=2, start=3, end=8)

    def test_full_match_recorded(self):
        variables = scan("x {{ a : d }}", {}, settings=Settings(show_data_only=False))
        assert variables[0].full_match == "{{ a : d }}"


class TestDataOnly:
    """Test listing of frontmatter values without placeholders."""

    def test_data_only_leaves(self):
        data = {
            'name': 'Ann',
            'server': {'ip': '10.0.0.1', 'port': 22},
            'ports': [1, 2],
            'empty': None,
        }
        variables = DocumentScanner(Settings()).scan("{{name}} {{server.ip}}", data)
        found = by_name(variables)

        assert [v.name for v in variables[:2]] == ['name', 'server.ip']
        data_only = [v for v in variables if v.status is VariableStatus.DATA_ONLY]
        assert [v.name for v in data_only] == ['server.port', 'ports', 'empty']
        assert found['ports'].value == [1, 2]
        assert found['server.port'].position is None

    def test_data_only_disabled(self):
        scanner = DocumentScanner(Settings(show_data_only=False))
        assert scanner.scan("", {'a': 1}) == []
        assert len(scanner.scan("", {'a': 1}, include_data_only=True)) == 1

    def test_reserved_and_forbidden_keys_skipped(self):
        data = {
            'tags': ['x'],
            'aliases': ['y'],
            'cssclasses': ['z'],
            'position': {'start': 1},
            '__proto__': 'p',
            'Constructor': {'x': 1},
            'kept': 1,
        }
        variables = DocumentScanner().scan("", data)
        assert [v.name for v in variables] == ['kept']

    def test_cycles_terminate(self):
        data = {'a': 1}
        data['self'] = data
        data['nested'] = {'back': data, 'leaf': 2}

        variables = DocumentScanner().scan("", data)
        assert sorted(v.name for v in variables) == ['a', 'nested.leaf']

    def test_shared_reference_visited_once(self):
        shared = {'x': 1}
        data = {'first': shared, 'second': shared}
        variables = DocumentScanner().scan("", data)
        assert [v.name for v in variables] == ['first.x']

    def test_non_string_keys(self):
        variables = DocumentScanner().scan("", {2024: 'year'})
        assert variables == [Variable(name='2024', status=VariableStatus.DATA_ONLY, value='year')]


class TestScanDocument:
    """Test scanning of full documents."""

    def test_line_offset_from_frontmatter(self):
        text = "---\nname: Ann\nage: 30\n---\nHello {{name}}\n{{other}}\n"
        variables = DocumentScanner(Settings(show_data_only=False)).scan_document(text)
        found = by_name(variables)

        assert found['name'].status is VariableStatus.EXISTS
        assert found['name'].position == Position(line=4, start=6, end=14)
        assert found['other'].position.line == 5

    def test_placeholders_in_frontmatter_ignored(self):
        text = "---\ntitle: '{{name}}'\n---\nbody"
        assert DocumentScanner(Settings(show_data_only=False)).scan_document(text) == []

    def test_no_frontmatter(self):
        variables = DocumentScanner().scan_document("{{a}}")
        assert variables[0].position == Position(line=0, start=0, end=5)
        assert variables[0].status is VariableStatus.MISSING

    def test_to_dict(self):
        text = "---\na: 1\n---\n{{a}} {{b:x}}"
        result = [v.to_dict() for v in DocumentScanner().scan_document(text)]
        assert result == [
            {'name': 'a', 'status': 'exists', 'value': 1, 'position': {'line': 3, 'start': 0, 'end': 5}},
            {'name': 'b', 'status': 'has-default', 'default_value': 'x', 'position': {'line': 3, 'start': 6, 'end': 13}},
        ]


class TestVariableAt:
    """Test finding the placeholder under a cursor."""

    def test_inside_placeholder(self):
        scanner = DocumentScanner()
        line = "Hi {{name}} and {{x:y}}"

        assert scanner.variable_at(line, 3).name == 'name'
        assert scanner.variable_at(line, 10).name == 'name'
        variable = scanner.variable_at(line, 18)
        assert variable.name == 'x'
        assert variable.status is VariableStatus.HAS_DEFAULT
        assert variable.position == Position(line=0, start=16, end=23)

    def test_outside_placeholder(self):
        scanner = DocumentScanner()
        assert scanner.variable_at("Hi {{name}}", 11) is None
        assert scanner.variable_at("Hi {{name}}", 0) is None
