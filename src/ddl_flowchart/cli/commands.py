from __future__ import annotations
import argparse
import json
import logging
import sys
from pathlib import Path
from dotenv import load_dotenv

from ddl_flowchart.config import AppConfig, load_app_config
from ddl_flowchart.flow import build_flow_graph
from ddl_flowchart.parser import parse_ddl

logger = logging.getLogger(__name__)


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    # Load environment variables first
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="ddl-flowchart",
        description="Convert SQL CREATE TABLE statements into diagram schemas"
    )
    parser.add_argument("--config", default=None,
                        help="Path to YAML configuration file")
    sub = parser.add_subparsers(dest="cmd", required=True)

    # Parse command
    parse = sub.add_parser("parse", help="Parse a DDL file and print the schema")
    parse.add_argument("path", help="Path to SQL file, or - for stdin")
    parse.add_argument("--format", choices=["json", "mermaid", "flow"], default="json",
                       help="Output format (default: json)")

    # Serve command
    serve = sub.add_parser("serve", help="Run the web API")
    serve.add_argument("--host", default=None, help="Bind address (default: from config)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: from config)")

    args = parser.parse_args(argv)

    try:
        config = load_app_config(args.config)
        config.configure_logging()

        if args.cmd == "parse":
            print(parse_cmd(args.path, args.format, config))
        elif args.cmd == "serve":
            serve_cmd(config, args.host, args.port)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def read_sql(path: str) -> str:
    """Read SQL from a file path, or stdin for `-`."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def parse_cmd(path: str, output_format: str, config: AppConfig) -> str:
    """Parse a DDL file and render it in the requested format."""
    result = parse_ddl(read_sql(path))

    if output_format == "mermaid":
        return result.diagram_text.rstrip("\n")
    if output_format == "flow":
        return json.dumps(build_flow_graph(result, config.layout).to_dict(), indent=2)
    return json.dumps(result.to_dict(), indent=2)


def serve_cmd(config: AppConfig, host: str | None = None, port: int | None = None) -> None:
    """Run the web API under uvicorn."""
    import uvicorn
    from ddl_flowchart.web.app import create_app

    host = host or config.web.host
    port = port or config.web.port
    logger.info(f"Serving ddl-flowchart API on {host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port)


if __name__ == "__main__":
    run()
