# ==============================================
# CLI — Command Line Entry Point
# ==============================================
#
# PURPOSE:
#   Provides command-line interface to run the pipeline.
#
# COMMANDS:
# ---------
# 1. Run one extraction against the configured (or given) feed:
#    python -m metadata_extractor.cli run
#    python -m metadata_extractor.cli run --feed-url https://.../rdf-files.tar.zip
#
# 2. Serve the HTTP trigger (GET / runs an extraction):
#    python -m metadata_extractor.cli serve --port 3000
#
# ==============================================

import argparse
import logging
import sys
from typing import Optional

from metadata_extractor.config import get_config, normalize_port
from metadata_extractor.errors import MetadataExtractorError
from metadata_extractor.pipeline import PipelineOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metadata-extractor",
        description="Extract catalog RDF metadata into MongoDB."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one extraction")
    run_parser.add_argument("--feed-url", default=None, help="Catalog archive URL")

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP trigger")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", default=None)

    return parser


def run_command(orchestrator: PipelineOrchestrator, feed_url: Optional[str]) -> int:
    try:
        orchestrator.store.connect()
        result = orchestrator.run(feed_url)
    except MetadataExtractorError as e:
        print(f"✗ Extraction failed: {e}")
        return 1
    finally:
        orchestrator.store.disconnect()

    print(f"✓ Extraction completed: {result['n']} files processed")
    return 0


def serve_command(orchestrator: PipelineOrchestrator, host: str, port) -> int:
    import uvicorn

    from metadata_extractor.api import create_app

    if port is None:
        print("✗ Invalid port")
        return 1

    try:
        orchestrator.store.connect()
    except MetadataExtractorError as e:
        print(f"✗ Could not start server: {e}")
        return 1

    try:
        app = create_app(orchestrator)
        if isinstance(port, int):
            uvicorn.run(app, host=host, port=port)
        else:
            # named pipe
            uvicorn.run(app, uds=port)
    finally:
        orchestrator.store.disconnect()
    return 0


def main(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    orchestrator = PipelineOrchestrator.from_config(config)

    if args.command == "run":
        return run_command(orchestrator, args.feed_url)

    host = args.host or config.server.host
    port = normalize_port(args.port) if args.port is not None else config.server.port
    return serve_command(orchestrator, host, port)


if __name__ == "__main__":
    sys.exit(main())
