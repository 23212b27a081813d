import argparse
import sys
from pathlib import Path

from docparser.text_extractor import ExtractionError, extract_text, normalize_extension


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract plain text from a resume document (PDF or DOCX)"
    )
    parser.add_argument("path", help="Path to resume file")
    parser.add_argument("--out", default=None, help="Write text to this file instead of stdout")
    parser.add_argument("--type", dest="file_type", default=None, help="File type when the name has no extension")
    return parser


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    path = Path(args.path)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 2

    extension = normalize_extension(path.name, args.file_type)
    try:
        text = extract_text(path.read_bytes(), extension)
    except ExtractionError as e:
        print(f"Extraction failed: {e}", file=sys.stderr)
        return 1

    if args.out:
        Path(args.out).write_text(text, encoding="utf-8")
        print(f"Extracted {len(text)} characters to: {args.out}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
