#!/usr/bin/env python
"""
Start the Comment Search MCP server from a source checkout.

Command line flags are turned into COMMENT_SEARCH_* environment variables
before the server reads its configuration:

    python run.py --executor process --concurrency 8 --log-level INFO
"""
import argparse
import os
import sys

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")

# flag -> 环境变量
FLAG_ENV = {
    "concurrency": "COMMENT_SEARCH_MAX_CONCURRENCY",
    "page_size": "COMMENT_SEARCH_PAGE_SIZE",
    "max_file_size_mb": "COMMENT_SEARCH_MAX_FILE_SIZE_MB",
    "executor": "COMMENT_SEARCH_EXECUTOR",
    "log_level": "COMMENT_SEARCH_LOG_LEVEL",
}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Comment Search MCP server (stdio)")
    parser.add_argument("--concurrency", type=int, help="Files scanned in parallel")
    parser.add_argument("--page-size", type=int, help="Matches per page")
    parser.add_argument("--max-file-size-mb", type=float, help="Skip files larger than this")
    parser.add_argument("--executor", choices=["inline", "thread", "process"])
    parser.add_argument("--log-level", help="Logging level written to stderr")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    for name, env_key in FLAG_ENV.items():
        value = getattr(args, name)
        if value is not None:
            os.environ[env_key] = str(value)

    if SRC_DIR not in sys.path:
        sys.path.insert(0, SRC_DIR)
    try:
        from comment_search_mcp.server import main as server_main
    except ModuleNotFoundError as exc:
        sys.exit(f"Missing dependency {exc.name!r}; run `pip install -e .` first")
    server_main()


if __name__ == "__main__":
    main()
