import argparse
import sys
from typing import List, Optional

from custom_amsthm.cli import DEFAULT_FORMAT, FilterParams, filter_json
from custom_amsthm import DEFAULT_META_KEY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        "custom-amsthm",
        description="A pandoc JSON filter adding theorem-like environments declared in document metadata. "
        "Reads the document from stdin and writes it to stdout, e.g. `pandoc --filter custom-amsthm`.",
    )
    parser.add_argument(
        "format",
        type=str,
        nargs="?",
        default=DEFAULT_FORMAT,
        help="The output format pandoc is targeting. pandoc passes this automatically. Formats containing 'latex' get amsthm environments, everything else gets HTML-style theorem blocks.",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=str,
        default=None,
        help="Read the pandoc JSON document from this file instead of stdin.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Write the filtered pandoc JSON document to this file instead of stdout.",
    )
    parser.add_argument(
        "--meta-key",
        type=str,
        default=DEFAULT_META_KEY,
        help="The metadata field holding the list of environment declarations.",
    )
    return parser


def run_cli(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    params = FilterParams(fmt=args.format, meta_key=args.meta_key)

    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            json_text = f.read()
    else:
        json_text = sys.stdin.read()

    output = filter_json(json_text, params)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
    else:
        sys.stdout.write(output)


if __name__ == "__main__":
    run_cli()
