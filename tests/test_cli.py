"""Tests for the command-line interface."""

import json
import pytest
from click.testing import CliRunner
from json_utility import __version__
from json_utility.cli import main


class TestCLI:
    """Tests for the json-utility command group."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_version(self):
        """Test the version option."""
        result = self.runner.invoke(main, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_pretty(self, write_file, sample_person_json):
        """Test pretty-printing a file."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['pretty', str(path)])

        assert result.exit_code == 0
        assert result.output == '{\n  "name" : "Aashish",\n  "age" : 24\n}\n'

    def test_pretty_indent(self, write_file):
        """Test the indent option."""
        path = write_file("list.json", "[1]")

        result = self.runner.invoke(main, ['--indent', '4', 'pretty', str(path)])

        assert result.exit_code == 0
        assert result.output == "[\n    1\n]\n"

    def test_pretty_invalid_json(self, write_file):
        """Test pretty-printing a malformed file."""
        path = write_file("bad.json", '{"name": ')

        result = self.runner.invoke(main, ['pretty', str(path)])

        assert result.exit_code == 1
        assert "is not valid JSON" in result.output

    def test_pretty_missing_file(self, temp_dir):
        """Test that missing files are usage errors."""
        result = self.runner.invoke(main, ['pretty', str(temp_dir / "missing.json")])

        assert result.exit_code == 2

    def test_validate_syntax(self, write_file, sample_person_json):
        """Test syntax-only validation."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['validate', str(path)])

        assert result.exit_code == 0
        assert "✅" in result.output

    def test_validate_syntax_error(self, write_file):
        """Test reporting of syntax errors with their location."""
        path = write_file("bad.json", '{"name": }')

        result = self.runner.invoke(main, ['validate', str(path)])

        assert result.exit_code == 1
        assert "line 1, column 10" in result.output

    def test_validate_schema(self, write_file, person_schema, sample_person_json):
        """Test validation against a schema."""
        path = write_file("person.json", sample_person_json)
        schema = write_file("schema.json", person_schema)

        result = self.runner.invoke(main, ['validate', str(path), '--schema', str(schema)])

        assert result.exit_code == 0
        assert "matches" in result.output

    def test_validate_schema_violation(self, write_file, person_schema):
        """Test listing schema violations."""
        path = write_file("person.json", '{"name": "Aashish", "age": "24"}')
        schema = write_file("schema.json", person_schema)

        result = self.runner.invoke(main, ['validate', str(path), '-s', str(schema)])

        assert result.exit_code == 1
        assert "$.age: '24' is not of type 'integer'" in result.output

    def test_validate_malformed_schema(self, write_file, sample_person_json):
        """Test that a malformed schema is reported."""
        path = write_file("person.json", sample_person_json)
        schema = write_file("schema.json", '{"type": 12}')

        result = self.runner.invoke(main, ['validate', str(path), '-s', str(schema)])

        assert result.exit_code == 1
        assert "Invalid schema" in result.output

    def test_get(self, write_file, sample_person_json):
        """Test reading a field."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['get', str(path), 'age'])

        assert result.exit_code == 0
        assert result.output == "24\n"

    def test_get_missing_field(self, write_file, sample_person_json):
        """Test reading an absent field."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['get', str(path), 'email'])

        assert result.exit_code == 1
        assert "Field 'email' not found" in result.output

    def test_to_xml(self, write_file, sample_person_json):
        """Test JSON to XML conversion."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['to-xml', str(path)])

        assert result.exit_code == 0
        assert result.output == "<name>Aashish</name><age>24</age>\n"

    def test_to_xml_root(self, write_file, sample_person_json):
        """Test wrapping converted XML in a root element."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['to-xml', str(path), '--root', 'person'])

        assert result.exit_code == 0
        assert result.output == "<person><name>Aashish</name><age>24</age></person>\n"

    def test_to_xml_invalid_root(self, write_file, sample_person_json):
        """Test rejecting an invalid root element name."""
        path = write_file("person.json", sample_person_json)

        result = self.runner.invoke(main, ['to-xml', str(path), '--root', '1st'])

        assert result.exit_code == 2

    def test_to_xml_not_an_object(self, write_file):
        """Test that array documents cannot be converted."""
        path = write_file("list.json", "[1, 2]")

        result = self.runner.invoke(main, ['to-xml', str(path)])

        assert result.exit_code == 1
        assert "Could not convert" in result.output

    @pytest.mark.parametrize("args", [[], ['--pretty']])
    def test_to_json(self, write_file, args):
        """Test XML to JSON conversion."""
        path = write_file("person.xml", "<person><name>Aashish</name><age>24</age></person>")

        result = self.runner.invoke(main, ['to-json', str(path), *args])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"person": {"name": "Aashish", "age": 24}}

    def test_to_json_malformed(self, write_file):
        """Test converting malformed XML."""
        path = write_file("bad.xml", "<person><name>Aashish</person>")

        result = self.runner.invoke(main, ['to-json', str(path)])

        assert result.exit_code == 1
        assert "Could not convert" in result.output
