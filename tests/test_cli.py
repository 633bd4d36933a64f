"""Tests for the command line entry point."""

import argparse
import io
from unittest.mock import MagicMock, patch

import pytest

from xmlshaper.main import main, normalize_bool_flags, parse_bool
from xmlshaper.models.options import CliConfig
from xmlshaper.utils.errors import FetchError

PROLOG = '<?xml version="1.0" encoding="UTF-8" ?>'


@pytest.fixture(autouse=True)
def default_config():
    with patch("xmlshaper.main.load_config", return_value=CliConfig()) as mock_load:
        yield mock_load


class TestParseBool:
    """Test boolean flag values."""

    @pytest.mark.parametrize("value", ["1", "true", "True", "yes", "on", "t"])
    def test_true_values(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "false", "FALSE", "no", "off", "f"])
    def test_false_values(self, value):
        assert parse_bool(value) is False

    def test_invalid_value(self):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_bool("maybe")


class TestNormalizeBoolFlags:
    """Test rewriting of flag=value booleans."""

    def test_short_flag_false(self):
        assert normalize_bool_flags(["-p=false", "data.json"]) == ["--no-pretty", "data.json"]

    def test_long_flag_true(self):
        assert normalize_bool_flags(["--pretty=yes", "-t=0"]) == ["--pretty", "--no-type"]

    def test_plain_flags_untouched(self):
        assert normalize_bool_flags(["-x", "--no-root", "in.json"]) == ["-x", "--no-root", "in.json"]

    def test_option_values_untouched(self):
        assert normalize_bool_flags(["-w", "-p=false"]) == ["-w", "-p=false"]
        assert normalize_bool_flags(["-s", "-x=1"]) == ["-s", "-x=1"]

    def test_stops_at_double_dash(self):
        assert normalize_bool_flags(["-r=false", "--", "-p=false"]) == ["--no-root", "--", "-p=false"]

    def test_invalid_value(self):
        with pytest.raises(argparse.ArgumentTypeError):
            normalize_bool_flags(["-c=maybe"])


class TestMainInputs:
    """Test the input sources and their priority."""

    def test_string_input(self, capsys):
        assert main(["-s", '{"a": 1}', "--no-pretty"]) == 0
        assert capsys.readouterr().out == f'{PROLOG}<all><a type="int">1</a></all>\n'

    def test_file_input(self, tmp_path, capsys):
        path = tmp_path / "data.json"
        path.write_text('{"login": "mojombo"}', encoding="utf-8")
        assert main([str(path), "-p=false", "-t=false"]) == 0
        assert capsys.readouterr().out == f"{PROLOG}<all><login>mojombo</login></all>\n"

    def test_stdin_dash(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('["x"]'))
        assert main(["-", "--no-pretty", "--no-type"]) == 0
        assert capsys.readouterr().out == f"{PROLOG}<all><item>x</item></all>\n"

    def test_piped_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a": true}'))
        assert main(["--no-pretty", "--no-type"]) == 0
        assert capsys.readouterr().out == f"{PROLOG}<all><a>true</a></all>\n"

    def test_empty_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("  \n"))
        assert main(["-"]) == 1
        assert capsys.readouterr().err == "Error reading input: empty input\n"

    def test_stdin_not_utf8(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b'{"a": "\xff\xfe"}'), encoding="utf-8"))
        assert main(["-"]) == 1
        assert capsys.readouterr().err.startswith("Error reading input: input is not valid UTF-8")

    def test_no_input(self, monkeypatch, capsys):
        stdin = MagicMock()
        stdin.isatty.return_value = True
        monkeypatch.setattr("sys.stdin", stdin)
        assert main([]) == 1
        assert "no input provided" in capsys.readouterr().err

    def test_string_wins_over_file(self, tmp_path, capsys):
        path = tmp_path / "data.json"
        path.write_text('{"from": "file"}', encoding="utf-8")
        assert main([str(path), "-s", '{"from": "string"}', "--no-pretty", "--no-type"]) == 0
        assert "<from>string</from>" in capsys.readouterr().out

    @patch("xmlshaper.main.read_from_url")
    def test_url_input(self, mock_read, capsys):
        mock_read.return_value = {"ok": True}
        assert main(["-u", "https://api.example.com/data.json", "-s", "[]", "--no-pretty", "--no-type"]) == 0
        mock_read.assert_called_once_with("https://api.example.com/data.json")
        assert "<ok>true</ok>" in capsys.readouterr().out

    @patch("xmlshaper.main.read_from_url")
    def test_url_failure(self, mock_read, capsys):
        mock_read.side_effect = FetchError("https://api.example.com", "status 500", status_code=500)
        assert main(["-u", "https://api.example.com"]) == 1
        assert capsys.readouterr().err.startswith("Error reading input: URL https://api.example.com")

    def test_malformed_json(self, capsys):
        assert main(["-s", "{bad"]) == 1
        assert capsys.readouterr().err.startswith("Error reading input:")

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.json")]) == 1
        assert "Invalid JSON file" in capsys.readouterr().err


class TestMainOutput:
    """Test conversion flags and output handling."""

    def test_pretty_by_default(self, capsys):
        assert main(["-s", '{"a": {"b": 1}}', "--no-type"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            PROLOG,
            "<all>",
            "  <a>",
            "    <b>1</b>",
            "  </a>",
            "</all>",
        ]

    def test_wrapper_and_no_root(self, capsys):
        assert main(["-s", '{"a": 1}', "-w", "data", "--no-pretty", "--no-type"]) == 0
        assert capsys.readouterr().out == f"{PROLOG}<data><a>1</a></data>\n"
        assert main(["-s", '{"a": 1}', "-r=false", "--no-pretty", "--no-type"]) == 0
        assert capsys.readouterr().out == "<a>1</a>\n"

    def test_xpath(self, capsys):
        assert main(["-s", '{"a": 1}', "-x", "--no-pretty"]) == 0
        assert capsys.readouterr().out == (
            f'{PROLOG}<map xmlns="http://www.w3.org/2005/xpath-functions"><number key="a">1</number></map>\n'
        )

    def test_cdata_and_item_wrap_flags(self, capsys):
        assert main(["-s", '{"k": ["v"]}', "-c", "-i=false", "--no-pretty", "--no-type"]) == 0
        assert capsys.readouterr().out == f"{PROLOG}<all><k><![CDATA[v]]></k></all>\n"

    def test_output_file(self, tmp_path, capsys):
        output = tmp_path / "out.xml"
        assert main(["-s", '{"a": 1}', "-o", str(output), "--no-pretty", "--no-type"]) == 0
        assert output.read_text(encoding="utf-8") == f"{PROLOG}<all><a>1</a></all>"
        assert capsys.readouterr().out == ""

    def test_unwritable_output(self, tmp_path, capsys):
        output = tmp_path / "missing" / "out.xml"
        assert main(["-s", '{"a": 1}', "-o", str(output)]) == 1
        assert capsys.readouterr().err.startswith("Error writing output:")

    def test_invalid_wrapper(self, capsys):
        assert main(["-s", '{"a": 1}', "-w", "not valid"]) == 1
        assert capsys.readouterr().err.startswith("Error converting to XML:")

    def test_config_defaults_applied(self, default_config, capsys):
        default_config.return_value = CliConfig(wrapper="doc", pretty=False, attr_type=False)
        assert main(["-s", '{"a": 1}']) == 0
        assert capsys.readouterr().out == f"{PROLOG}<doc><a>1</a></doc>\n"

    def test_config_namespaces_applied(self, default_config, capsys):
        default_config.return_value = CliConfig(pretty=False, attr_type=False, xml_namespaces={"xmlns": "http://x"})
        assert main(["-s", '{"a": 1}']) == 0
        assert capsys.readouterr().out == f'{PROLOG}<all xmlns="http://x"><a>1</a></all>\n'

    def test_invalid_bool_value(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-p=maybe"])
        assert exc_info.value.code == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-v"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out == "xmlshaper version 1.0.0\n"
