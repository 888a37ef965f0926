"""
CLI Command Integration Tests.

Tests for CLI command operations including:
- Argument parsing for the convert and classify commands
- Convert command output files, formats and model properties
- Configuration file handling
- Exit codes for invalid inputs
"""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rdflib import Graph, Literal
from rdflib.namespace import DCTERMS, SKOS

from app.cli.commands import ClassifyCommand, ConvertCommand
from app.cli.commands.convert import default_output_path
from app.cli.helpers import (
    load_config,
    load_model_properties,
    parse_property_assignments,
    setup_logging,
)
from app.cli.parsers import create_argument_parser
from constants import ExitCode
from core.errors import InputValidationError, SerializationFailed
from fixtures import (
    CATALOG_LABEL,
    CATALOG_NS,
    DEFAULT_NS,
    INVALID_TTL,
    JSON_LOGGING_CONFIG,
    MODEL_NAME,
    MODEL_TTL,
    SAMPLE_CONFIG,
    term,
)
from main import main


def load_output(path: Path, rdf_format: str = "turtle") -> Graph:
    graph = Graph()
    graph.parse(path, format=rdf_format)
    return graph


# =============================================================================
# ARGUMENT PARSING
# =============================================================================

class TestArgumentParser:

    def test_convert_arguments(self):
        parser = create_argument_parser()
        args = parser.parse_args([
            "convert", "model.ttl",
            "--name", "Registr",
            "--properties", "props.json",
            "--property", "popis=Slovník",
            "--property", "verze=1",
            "--output-format", "JSON",
            "--output", "out.jsonld",
        ])

        assert args.command == "convert"
        assert args.path == "model.ttl"
        assert args.model_name == "Registr"
        assert args.properties_file == "props.json"
        assert args.properties == ["popis=Slovník", "verze=1"]
        assert args.output_format == "json"
        assert args.output == "out.jsonld"

    def test_convert_defaults(self):
        args = create_argument_parser().parse_args(["convert", "model.ttl"])

        assert args.model_name is None
        assert args.properties == []
        assert args.output_format is None
        assert args.input_format is None

    def test_unsupported_output_format_exits(self):
        with pytest.raises(SystemExit):
            create_argument_parser().parse_args(["convert", "model.ttl", "-f", "xml"])

    def test_classify_arguments(self):
        args = create_argument_parser().parse_args(["classify", "42", "--property", "počet-kol"])

        assert args.value == "42"
        assert args.property_name == "počet-kol"

    def test_no_command_prints_help(self, capsys):
        assert main([]) == ExitCode.ERROR
        assert "usage:" in capsys.readouterr().out


# =============================================================================
# CONVERT COMMAND
# =============================================================================

class TestConvertCommand:

    def test_convert_writes_default_output(self, temp_model_file, capsys):
        exit_code = main(["convert", str(temp_model_file), "--name", MODEL_NAME])

        output_file = temp_model_file.with_name("model_skos.ttl")
        assert exit_code == ExitCode.SUCCESS
        assert output_file.exists()

        graph = load_output(output_file)
        assert (term("model"), SKOS.prefLabel, Literal(MODEL_NAME, lang="cs")) in graph

        out = capsys.readouterr().out
        assert "✓ Converting model graph" in out
        assert "CONVERSION SUMMARY" in out
        assert f"Saved to: {output_file}" in out

    def test_convert_to_json_ld(self, temp_model_file, tmp_path):
        output_file = tmp_path / "vocabulary.jsonld"

        exit_code = main([
            "convert", str(temp_model_file),
            "--output-format", "json",
            "--output", str(output_file),
        ])

        assert exit_code == ExitCode.SUCCESS
        document = json.loads(output_file.read_text(encoding="utf-8"))
        assert "@context" in document

    def test_properties_file_and_overrides(self, temp_model_file, temp_properties_file, tmp_path):
        output_file = tmp_path / "out.ttl"

        exit_code = main([
            "convert", str(temp_model_file),
            "--properties", str(temp_properties_file),
            "--property", "popis=Přepsaný popis",
            "--output", str(output_file),
        ])

        assert exit_code == ExitCode.SUCCESS
        graph = load_output(output_file)
        assert set(graph.objects(term("model"), DCTERMS.description)) == {
            Literal("Přepsaný popis", lang="cs"),
        }

    def test_config_defaults(self, temp_model_file, temp_config_file, tmp_path):
        output_file = tmp_path / "out.ttl"

        exit_code = main([
            "convert", str(temp_model_file),
            "--config", str(temp_config_file),
            "--output", str(output_file),
        ])

        assert exit_code == ExitCode.SUCCESS
        graph = load_output(output_file)
        assert (term("model"), SKOS.prefLabel, Literal(SAMPLE_CONFIG["conversion"]["model_name"], lang="cs")) in graph
        assert (term("model"), DCTERMS.description, Literal("Slovník z konfigurace", lang="cs")) in graph

    def test_missing_input_file(self, tmp_path, capsys):
        exit_code = main(["convert", str(tmp_path / "missing.ttl")])

        assert exit_code == ExitCode.FILE_NOT_FOUND
        assert "✗ File not found" in capsys.readouterr().out

    def test_invalid_turtle(self, tmp_path, capsys):
        bad_file = tmp_path / "bad.ttl"
        bad_file.write_text(INVALID_TTL, encoding="utf-8")

        exit_code = main(["convert", str(bad_file)])

        assert exit_code == ExitCode.VALIDATION_ERROR
        assert "✗ Invalid RDF content" in capsys.readouterr().out
        assert not bad_file.with_name("bad_skos.ttl").exists()

    def test_wrong_extension(self, tmp_path):
        bad_file = tmp_path / "model.txt"
        bad_file.write_text("", encoding="utf-8")

        assert main(["convert", str(bad_file)]) == ExitCode.VALIDATION_ERROR

    def test_invalid_property_assignment(self, temp_model_file):
        exit_code = main(["convert", str(temp_model_file), "--property", "no-separator"])
        assert exit_code == ExitCode.VALIDATION_ERROR

    def test_missing_config_file(self, temp_model_file, tmp_path, capsys):
        exit_code = main(["convert", str(temp_model_file), "--config", str(tmp_path / "missing.json")])

        assert exit_code == ExitCode.CONFIG_ERROR
        assert "✗ Configuration error" in capsys.readouterr().out

    def test_invalid_config_json(self, temp_model_file, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")

        assert main(["convert", str(temp_model_file), "--config", str(config_file)]) == ExitCode.CONFIG_ERROR

    def test_missing_output_directory(self, temp_model_file, tmp_path):
        exit_code = main(["convert", str(temp_model_file), "--output", str(tmp_path / "nope" / "out.ttl")])
        assert exit_code == ExitCode.VALIDATION_ERROR

    def test_engine_failure_maps_to_error(self, temp_model_file, tmp_path):
        engine = MagicMock()
        engine.convert.side_effect = SerializationFailed("ttl", RuntimeError("disk full"))
        command = ConvertCommand(engine=engine)
        args = create_argument_parser().parse_args([
            "convert", str(temp_model_file), "--output", str(tmp_path / "out.ttl"),
        ])

        assert command.execute(args) == ExitCode.ERROR

    def test_catalog_address_property(self, tmp_path):
        model_file = tmp_path / "catalog.ttl"
        model_file.write_text(MODEL_TTL.replace(DEFAULT_NS, CATALOG_NS), encoding="utf-8")
        output_file = tmp_path / "out.ttl"

        exit_code = main([
            "convert", str(model_file),
            "--property", f"{CATALOG_LABEL}=https://data.example.org/slovnik",
            "--output", str(output_file),
        ])

        assert exit_code == ExitCode.SUCCESS
        assert "@prefix data: <https://data.example.org/slovnik/>" in output_file.read_text(encoding="utf-8")

    @pytest.mark.parametrize("fmt,expected", [
        ("ttl", "model_skos.ttl"),
        ("json", "model_skos.jsonld"),
    ])
    def test_default_output_path(self, fmt, expected):
        assert default_output_path(Path("/data/model.ttl"), fmt) == Path("/data") / expected


# =============================================================================
# CLASSIFY COMMAND
# =============================================================================

class TestClassifyCommand:

    @pytest.mark.parametrize("value,datatype,literal", [
        ("42", "xsd:integer", '"42"^^<http://www.w3.org/2001/XMLSchema#integer>'),
        ("ano", "xsd:boolean", '"true"^^<http://www.w3.org/2001/XMLSchema#boolean>'),
        ("Praha", "xsd:string", '"Praha"^^<http://www.w3.org/2001/XMLSchema#string>'),
    ])
    def test_classify_output(self, value, datatype, literal, capsys):
        assert main(["classify", value]) == ExitCode.SUCCESS

        out = capsys.readouterr().out
        assert f"Value:    {value}" in out
        assert f"Datatype: {datatype}" in out
        assert f"Literal:  {literal}" in out

    def test_classify_with_property_hint(self, capsys):
        args = create_argument_parser().parse_args(["classify", "12", "--property", "počet-kol"])

        assert ClassifyCommand().execute(args) == ExitCode.SUCCESS
        assert "Datatype: xsd:integer" in capsys.readouterr().out


# =============================================================================
# HELPERS
# =============================================================================

class TestHelpers:

    def test_parse_property_assignments(self):
        assert parse_property_assignments(["a=1", "b=x=y", " c =  "]) == {"a": "1", "b": "x=y", "c": "  "}

    @pytest.mark.parametrize("assignment", ["novalue", "=value"])
    def test_invalid_assignments(self, assignment):
        with pytest.raises(InputValidationError):
            parse_property_assignments([assignment])

    def test_model_properties_precedence(self, temp_properties_file):
        properties = load_model_properties(
            str(temp_properties_file),
            ["verze=2"],
            defaults={"popis": "výchozí", "autor": "MV"},
        )

        assert properties == {
            "popis": "Slovník registru silničních vozidel",
            "autor": "MV",
            "verze": "2",
        }

    def test_properties_file_must_be_object(self, tmp_path):
        properties_file = tmp_path / "props.json"
        properties_file.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(InputValidationError, match="JSON object"):
            load_model_properties(str(properties_file))

    def test_load_config(self, temp_config_file):
        assert load_config(str(temp_config_file)) == SAMPLE_CONFIG

    def test_load_config_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            load_config(str(tmp_path / "config.json"))

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "converter.log"

        actual = setup_logging("DEBUG", str(log_file), config=JSON_LOGGING_CONFIG["logging"])
        logging.getLogger("tests.cli").debug("hello")

        assert actual == str(log_file)
        record = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert record["message"] == "hello"
        assert record["level"] == "DEBUG"

    def test_setup_logging_console_only(self):
        assert setup_logging("WARNING") is None
        assert logging.getLogger().level == logging.WARNING
