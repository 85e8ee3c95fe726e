import argparse
import sys
from typing import List, Optional

from pymongo.errors import PyMongoError

from .config import Config
from .errors import IngestError
from .extractors import ExtractionStatus
from .log import setup_logging
from .pipeline import DocumentKind, process_batch, resolve_kind
from .storage import RecordStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="instsys-ingest",
        description="Extract institutional records from spreadsheets and PDFs into MongoDB",
    )
    parser.add_argument("kind", choices=[k.value for k in DocumentKind], help="Document kind of every FILE")
    parser.add_argument("files", nargs="+", metavar="FILE", help="Spreadsheet or PDF files")
    parser.add_argument("-c", "--config", dest="config", help="Path to config.json (default: config/config.json)")
    parser.add_argument("--dry-run", action="store_true", help="Extract and print reports without storing")
    parser.add_argument("--show", action="store_true", help="Print each formatted report")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # 1) Configuration and logging
    config = Config(args.config)
    setup_logging(config.log_level)

    # 2) Storage (skipped on --dry-run)
    store = None
    if not args.dry_run:
        try:
            store = RecordStore(config)
        except PyMongoError as e:
            print(f"❌ MongoDB Connection Error: {e}")
            return 2

    # 3) Extract
    try:
        report = process_batch(args.files, resolve_kind(args.kind), store=store)
    except IngestError as e:
        print(f"❌ {e}")
        return 2
    finally:
        if store is not None:
            store.close()

    for result in report.results:
        icon = "✅" if result.ok else ("⚠️" if result.status == ExtractionStatus.SKIPPED else "❌")
        line = f"{icon} {result.source_file}: {result.status.value}"
        print(f"{line} ({result.message})" if result.message else line)
        if args.show and result.record:
            print(result.record["formatted_text"])

    print(f"\n📋 {report.summary()}")
    return 1 if report.count(ExtractionStatus.FAILED) else 0


if __name__ == "__main__":
    sys.exit(main())
