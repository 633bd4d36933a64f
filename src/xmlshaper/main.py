"""Command line entry point: convert JSON from a file, string, URL or stdin to XML."""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from xmlshaper import __version__
from xmlshaper.models.options import CliConfig
from xmlshaper.services.json2xml import Json2xml
from xmlshaper.services.reader import read_from_json, read_from_string, read_from_url
from xmlshaper.utils.errors import ParseError, XmlShaperError
from xmlshaper.utils.storage import load_config

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "n", "no", "off"}

# Boolean flags accept Go-style "-p=false" besides "--no-pretty"
_BOOL_FLAGS = {
    "-r": "root",
    "--root": "root",
    "-p": "pretty",
    "--pretty": "pretty",
    "-t": "type",
    "--type": "type",
    "-i": "item-wrap",
    "--item-wrap": "item-wrap",
    "-x": "xpath",
    "--xpath": "xpath",
    "-c": "cdata",
    "--cdata": "cdata",
    "-l": "list-headers",
    "--list-headers": "list-headers",
}
_VALUE_FLAGS = {"-w", "--wrapper", "-o", "--output", "-u", "--url", "-s", "--string"}

EPILOG = """\
examples:
  xmlshaper data.json
  xmlshaper -w root data.json
  xmlshaper -u https://api.example.com/data.json
  xmlshaper -s '{"name": "John", "age": 30}'
  cat data.json | xmlshaper -
  xmlshaper -o output.xml data.json
  xmlshaper -x data.json
  xmlshaper -p=false -t=false data.json
"""


def parse_bool(value: str) -> bool:
    text = value.strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean value, got {value!r}")


def normalize_bool_flags(argv: list[str]) -> list[str]:
    """Rewrite ``-p=false`` / ``--pretty=yes`` into ``--no-pretty`` / ``--pretty``."""
    normalized: list[str] = []
    takes_value = False
    for arg in argv:
        if takes_value:
            normalized.append(arg)
            takes_value = False
            continue
        if arg == "--":
            normalized.extend(argv[len(normalized) :])
            break
        flag, sep, value = arg.partition("=")
        if sep and flag in _BOOL_FLAGS:
            name = _BOOL_FLAGS[flag]
            normalized.append(f"--{name}" if parse_bool(value) else f"--no-{name}")
        else:
            normalized.append(arg)
            takes_value = arg in _VALUE_FLAGS
    return normalized


def build_parser(config: CliConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xmlshaper",
        description="Convert JSON to XML",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="?", help="Read JSON from file (use - for stdin)")

    inputs = parser.add_argument_group("input options")
    inputs.add_argument("-u", "--url", help="Read JSON from URL")
    inputs.add_argument("-s", "--string", help="Read JSON from string")

    outputs = parser.add_argument_group("output options")
    outputs.add_argument("-o", "--output", help="Output file (default: stdout)")

    conversion = parser.add_argument_group("conversion options")
    conversion.add_argument("-w", "--wrapper", default=config.wrapper, help="Wrapper element name (default: %(default)s)")
    conversion.add_argument(
        "-r", "--root", action=argparse.BooleanOptionalAction, default=config.root, help="Include root element"
    )
    conversion.add_argument(
        "-p", "--pretty", action=argparse.BooleanOptionalAction, default=config.pretty, help="Pretty print output"
    )
    conversion.add_argument(
        "-t",
        "--type",
        dest="attr_type",
        action=argparse.BooleanOptionalAction,
        default=config.attr_type,
        help="Include type attributes",
    )
    conversion.add_argument(
        "-i",
        "--item-wrap",
        action=argparse.BooleanOptionalAction,
        default=config.item_wrap,
        help="Wrap list items in <item> elements",
    )
    conversion.add_argument(
        "-x",
        "--xpath",
        dest="xpath_format",
        action=argparse.BooleanOptionalAction,
        default=config.xpath_format,
        help="Use XPath 3.1 json-to-xml format",
    )
    conversion.add_argument(
        "-c", "--cdata", action=argparse.BooleanOptionalAction, default=config.cdata, help="Wrap string values in CDATA"
    )
    conversion.add_argument(
        "-l",
        "--list-headers",
        action=argparse.BooleanOptionalAction,
        default=config.list_headers,
        help="Repeat headers for each list item",
    )

    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s version {__version__}")
    return parser


def read_stdin() -> Any:
    try:
        text = sys.stdin.read().strip()
    except UnicodeDecodeError as e:
        raise ParseError(f"input is not valid UTF-8: {e}") from e
    if not text:
        raise ParseError("empty input")
    return read_from_string(text)


def read_input(args: argparse.Namespace) -> Any:
    """Read JSON in priority order: URL, string, file argument, stdin."""
    if args.url:
        logger.debug("Reading input from URL")
        return read_from_url(args.url)
    if args.string:
        logger.debug("Reading input from string argument")
        return read_from_string(args.string)
    if args.input:
        if args.input == "-":
            return read_stdin()
        logger.debug("Reading input from file %s", args.input)
        return read_from_json(args.input)
    if not sys.stdin.isatty():
        return read_stdin()
    raise XmlShaperError("no input provided. Use -h for help")


def write_output(xml: str, output: str | None) -> None:
    if output:
        Path(output).write_text(xml, encoding="utf-8")
    else:
        print(xml)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("XMLSHAPER_DEBUG") else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = load_config()
    parser = build_parser(config)
    try:
        raw_args = normalize_bool_flags(sys.argv[1:] if argv is None else argv)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    args = parser.parse_args(raw_args)

    try:
        data = read_input(args)
    except XmlShaperError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    try:
        xml = Json2xml(
            data,
            wrapper=args.wrapper,
            root=args.root,
            pretty=args.pretty,
            attr_type=args.attr_type,
            item_wrap=args.item_wrap,
            xpath_format=args.xpath_format,
            cdata=args.cdata,
            list_headers=args.list_headers,
            xml_namespaces=config.xml_namespaces,
        ).to_xml()
    except (XmlShaperError, ValidationError) as e:
        print(f"Error converting to XML: {e}", file=sys.stderr)
        return 1

    try:
        write_output(xml or "", args.output)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return 1
    return 0


def run() -> None:
    """CLI entry point for the xmlshaper command."""
    sys.exit(main())


if __name__ == "__main__":
    run()
