"""Integration tests for the CLI."""

import json

import pytest
from click.testing import CliRunner

from blockmark.cli import cli


@pytest.fixture
def document(tmp_path):
    """A small document with properties, a heading and a list."""
    path = tmp_path / "doc.json"
    path.write_text(json.dumps({
        "properties": {"Title": "Notes"},
        "blocks": [
            {"type": "heading_1", "text_runs": [{"text": "Intro"}]},
            {"type": "bulleted_list_item", "text_runs": [{"text": "one", "styles": {"bold": True}}]},
            {"type": "bulleted_list_item", "text_runs": [{"text": "two"}]},
        ],
    }))
    return path


class TestRenderCommand:
    """Integration tests for the render command."""

    def test_render_html_by_default(self, document, fake_home):
        """Test rendering with no configuration."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document)])

        assert result.exit_code == 0
        assert result.output == "<h2>Intro</h2><ul><li><strong>one</strong></li><li>two</li></ul>"

    def test_render_markdown(self, document, fake_home):
        """Test the --flavor option."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "--flavor", "markdown"])

        assert result.exit_code == 0
        assert result.output == "\n## Intro\n\n- **one**\n- two\n"

    def test_render_with_config(self, document, tmp_path, fake_home):
        """Test properties from the config become front matter."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "flavor: markdown\n"
            "properties:\n"
            "  - name: Title\n"
            "    rename: title\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "--config", str(config_file)])

        assert result.exit_code == 0
        assert result.output.startswith("---\ntitle: Notes\n---\n\n## Intro\n")

    def test_front_matter_option(self, document, tmp_path, fake_home):
        """Test --front-matter overrides the configured format."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("properties:\n  - name: Title\n")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["render", str(document), "--config", str(config_file), "--front-matter", "none"]
        )

        assert result.exit_code == 0
        assert result.output.startswith("<h2>Intro</h2>")

    def test_render_to_file(self, document, tmp_path, fake_home):
        """Test --output writes the result to a file."""
        output = tmp_path / "out" / "doc.html"

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "-o", str(output)])

        assert result.exit_code == 0
        assert result.output == ""
        assert output.read_text().startswith("<h2>Intro</h2>")

    def test_yaml_document(self, tmp_path, fake_home):
        """Test YAML documents are accepted."""
        path = tmp_path / "doc.yaml"
        path.write_text("- type: divider\n- type: paragraph\n  text_runs: [{text: end}]\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(path)])

        assert result.exit_code == 0
        assert result.output == "<hr><p>end</p>"

    def test_unsupported_block_fails(self, tmp_path, fake_home):
        """Test unsupported blocks exit with an error message."""
        path = tmp_path / "doc.json"
        path.write_text('[{"type": "custom_widget"}]')

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(path)])

        assert result.exit_code == 1
        assert "No block renderer configured for 'custom_widget'" in result.output

    def test_skip_unsupported(self, tmp_path, fake_home):
        """Test --skip-unsupported omits unsupported blocks."""
        path = tmp_path / "doc.json"
        path.write_text('[{"type": "custom_widget"}, {"type": "divider"}]')

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(path), "--skip-unsupported"])

        assert result.exit_code == 0
        assert result.output == "<hr>"

    def test_missing_document(self, tmp_path, fake_home):
        """Test a missing document is a usage error."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(tmp_path / "missing.json")])

        assert result.exit_code == 2

    def test_log_file_written(self, document, fake_home):
        """Test rendering logs JSON events to the cache directory."""
        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document)])

        assert result.exit_code == 0
        log_file = fake_home / ".cache" / "blockmark" / "logs" / "blockmark.log"
        events = [json.loads(line)["event"] for line in log_file.read_text().splitlines()]
        assert "document_rendered" in events
        assert "renderer_built" in events

    def test_json_front_matter_with_date(self, tmp_path, fake_home):
        """Test YAML dates are written to JSON front matter."""
        path = tmp_path / "doc.yaml"
        path.write_text("properties:\n  Date: 2024-01-01\nblocks:\n  - type: divider\n")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("front_matter: json\nproperties:\n  - name: Date\n    rename: date\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(path), "--config", str(config_file)])

        assert result.exit_code == 0
        assert result.output == '---json\n{\n  "date": "2024-01-01"\n}\n---\n<hr>'

    def test_config_not_a_mapping(self, document, tmp_path, fake_home):
        """Test a config file holding a list exits with an error message."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["render", str(document), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestTypesCommand:
    """Integration tests for the types command."""

    def test_lists_html_types(self, fake_home):
        """Test the HTML flavor lists its block types and style kinds."""
        runner = CliRunner()
        result = runner.invoke(cli, ["types"])

        assert result.exit_code == 0
        assert "  toggle\n" in result.output
        assert "  bold\n" in result.output

    def test_lists_markdown_types(self, fake_home):
        """Test the Markdown flavor omits toggles."""
        runner = CliRunner()
        result = runner.invoke(cli, ["types", "--flavor", "markdown"])

        assert result.exit_code == 0
        assert "Block types (markdown):" in result.output
        assert "  toggle\n" not in result.output
