"""Command line for browsing and extracting PK3 archives."""

import argparse
import logging
import sys

from pk3fs.config import Settings
from pk3fs.context import ReaderContext
from pk3fs.errors import Pk3Error
from pk3fs.reader import Pk3Reader


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _cmd_ls(reader: Pk3Reader, args: argparse.Namespace) -> int:
    if args.ext:
        files = reader.get_files_with_ext(args.path, args.ext, args.recursive)
    else:
        files = reader.get_all_files(args.path, args.recursive)
    for name in files:
        print(name)
    return 0


def _cmd_exists(reader: Pk3Reader, args: argparse.Namespace) -> int:
    return 0 if reader.file_exists(args.name) else 1


def _cmd_find(reader: Pk3Reader, args: argparse.Namespace) -> int:
    found = reader.find_first_file(args.title, args.recursive, args.path)
    if found is None:
        print(f"Not found: {args.title}", file=sys.stderr)
        return 1
    print(found)
    return 0


def _cmd_cat(reader: Pk3Reader, args: argparse.Namespace) -> int:
    sys.stdout.buffer.write(reader.extract_file(args.name))
    sys.stdout.buffer.flush()
    return 0


def _cmd_extract(reader: Pk3Reader, args: argparse.Namespace) -> int:
    print(reader.create_temp_file(args.name))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pk3fs", description="Browse PK3 resource archives")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("ls", help="List files in a directory")
    ls.add_argument("archive")
    ls.add_argument("path", nargs="?", default="")
    ls.add_argument("-r", "--recursive", action="store_true")
    ls.add_argument("-e", "--ext", help="Only files with this extension")
    ls.set_defaults(func=_cmd_ls)

    exists = sub.add_parser("exists", help="Exit 0 if the file exists")
    exists.add_argument("archive")
    exists.add_argument("name")
    exists.set_defaults(func=_cmd_exists)

    find = sub.add_parser("find", help="Find the first file with a name, any extension")
    find.add_argument("archive")
    find.add_argument("title")
    find.add_argument("-p", "--path", default="")
    find.add_argument("-r", "--recursive", action="store_true")
    find.set_defaults(func=_cmd_find)

    cat = sub.add_parser("cat", help="Write a file's bytes to stdout")
    cat.add_argument("archive")
    cat.add_argument("name")
    cat.set_defaults(func=_cmd_cat)

    extract = sub.add_parser("extract", help="Extract a file to a temp file and print its path")
    extract.add_argument("archive")
    extract.add_argument("name")
    extract.set_defaults(func=_cmd_extract)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    _configure_logging("DEBUG" if args.verbose else settings.log_level)

    try:
        with Pk3Reader(args.archive, ReaderContext.from_settings(settings)) as reader:
            return args.func(reader, args)
    except Pk3Error as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
