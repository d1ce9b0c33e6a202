"""
Blog API — Server Entry Point
===============================

Usage:
    python -m blog_api                 # DATABASE_URL / PORT from the environment
    blog-api --port 9000 --database-url mongodb://db/blogs-api

uvicorn owns the start/stop lifecycle: startup opens the store connection
(see main.lifespan), SIGINT/SIGTERM runs the shutdown half, which closes it.
"""

import argparse
from typing import List, Optional

import uvicorn

from blog_api.config import settings
from blog_api.main import create_app


def run_server(database_url: Optional[str] = None, port: Optional[int] = None) -> None:
    """Serve the API bound to `database_url` until interrupted."""
    app = create_app(database_url=database_url)
    uvicorn.run(
        app,
        host=settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="blog-api", description="Run the Blog API server.")
    parser.add_argument("--database-url", default=None, help="MongoDB connection string")
    parser.add_argument("--port", type=int, default=None, help="HTTP listen port")
    args = parser.parse_args(argv)
    run_server(database_url=args.database_url, port=args.port)


if __name__ == "__main__":
    main()
