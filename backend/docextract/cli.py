import argparse
import json
import sys
import time
from pathlib import Path

from docextract.config import settings
from docextract.core.exceptions import DocExtractError, ExtractionError
from docextract.core.logging import get_logger, setup_logging
from docextract.services.extraction.factory import guess_mime_type
from docextract.services.extraction_service import ExtractionService, build_result

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("docextract.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.is_file():
        print(f"File not found: {path}", file=sys.stderr)
        return 1

    mime_type = args.mime_type or guess_mime_type(path.name)
    start = time.perf_counter()
    try:
        pages = ExtractionService.extract_file(path, mime_type)
    except ExtractionError as e:
        print(f"{e.message}\n{e.details}", file=sys.stderr)
        return 1
    except DocExtractError as e:
        print(e.message, file=sys.stderr)
        return 1

    result = build_result(pages, mime_type, int((time.perf_counter() - start) * 1000))
    print(json.dumps(result.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docextract", description=settings.app_name)
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API and frontend")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--reload", action="store_true")
    serve.set_defaults(func=cmd_serve)

    extract = sub.add_parser("extract", help="Extract text from a local file and print JSON")
    extract.add_argument("file")
    extract.add_argument("--mime-type", default=None, help="Override the type guessed from the extension")
    extract.set_defaults(func=cmd_extract)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    return args.func(args)
