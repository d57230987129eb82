"""HTTP interface for the quote store."""

from __future__ import annotations

import argparse
import html
import logging
import os
from dataclasses import dataclass
from typing import Any

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from .database import Database
from .errors import AppError
from .models import QuoteInput, QuoteWithTags

DEFAULT_DATABASE_URL = "sqlite://db/quotes.db"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

log = logging.getLogger("quotekeeper")


class CreateQuoteRequest(BaseModel):
    """Body of a create or update request: the quote fields and optional tags."""

    text: str
    author: str
    source: str
    tags: list[str] | None = None

    def to_input(self) -> QuoteInput:
        return QuoteInput(text=self.text, author=self.author, source=self.source)


@dataclass
class SearchParams:
    """Query parameters accepted by the search endpoint."""

    author: str | None = None
    tag: str | None = None
    search: str | None = None


def database_path_from_url(url: str) -> str:
    """Turn a sqlite URL such as ``sqlite://db/quotes.db`` into a file path."""
    if url.startswith("sqlite://"):
        rest = url[len("sqlite://"):]
    elif url.startswith("sqlite:"):
        rest = url[len("sqlite:"):]
    else:
        raise ValueError(f"unsupported database URL: {url}")
    path = rest.split("?", 1)[0]
    if path in ("", ":memory:"):
        return ":memory:"
    return path


def _render_index(quotes: list[QuoteWithTags]) -> str:
    items = []
    for item in quotes:
        quote = item.quote
        tags = "".join(
            f'<span class="tag">{html.escape(tag)}</span>' for tag in item.tags
        )
        items.append(
            f'<li class="quote" id="quote-{html.escape(quote.id)}">'
            f"<blockquote>{html.escape(quote.text)}</blockquote>"
            f'<p class="author">{html.escape(quote.author)}</p>'
            f'<p class="source">{html.escape(quote.source)}</p>'
            f'<div class="tags">{tags}</div>'
            "</li>"
        )
    body = "\n".join(items)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        "<title>Quotes</title>\n"
        '<link rel="stylesheet" href="/assets/style.css">\n'
        "</head>\n<body>\n<h1>Quotes</h1>\n"
        f'<ul class="quotes">\n{body}\n</ul>\n'
        "</body>\n</html>\n"
    )


def create_app(database: Database) -> FastAPI:
    """Build the web application serving the given database."""
    app = FastAPI(
        title="Quote server",
        docs_url="/swagger-ui",
        openapi_url="/api-docs/openapi.json",
        redoc_url=None,
        openapi_tags=[{"name": "quotes", "description": "Quote management API"}],
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        status, body = exc.to_response()
        return JSONResponse(status_code=status, content=body)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    def index() -> HTMLResponse:
        return HTMLResponse(_render_index(database.get_all_quotes()))

    @app.get("/quotes", tags=["quotes"], summary="Get all quotes")
    def get_quotes() -> list[dict[str, Any]]:
        return [item.to_dict() for item in database.get_all_quotes()]

    @app.post("/quotes", status_code=201, tags=["quotes"], summary="Create a new quote")
    def create_quote(payload: CreateQuoteRequest) -> dict[str, Any]:
        created = database.create_quote(payload.to_input(), payload.tags or [])
        return created.to_dict()

    @app.get("/quotes/search", tags=["quotes"], summary="Search quotes")
    def search_quotes(params: SearchParams = Depends()) -> list[dict[str, Any]]:
        found = database.search_quotes(params.author, params.tag, params.search)
        return [item.to_dict() for item in found]

    @app.get("/quotes/{id}", tags=["quotes"], summary="Get a quote by ID")
    def get_quote_by_id(id: str) -> dict[str, Any]:
        return database.get_quote_by_id(id).to_dict()

    @app.put("/quotes/{id}", tags=["quotes"], summary="Update a quote")
    def update_quote(id: str, payload: CreateQuoteRequest) -> dict[str, Any]:
        updated = database.update_quote(id, payload.to_input(), payload.tags or [])
        return updated.to_dict()

    @app.delete(
        "/quotes/{id}",
        status_code=204,
        response_class=Response,
        tags=["quotes"],
        summary="Delete a quote",
    )
    def delete_quote(id: str) -> Response:
        database.delete_quote(id)
        return Response(status_code=204)

    app.mount("/assets", StaticFiles(directory="assets", check_dir=False), name="assets")
    return app


def main(argv: list[str] | None = None) -> int:
    """Run the quote server."""
    parser = argparse.ArgumentParser(description="Serve a collection of quotes over HTTP.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to bind")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG)
    url = os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL)
    path = database_path_from_url(url)

    with Database(path) as database:
        database.migrate()
        app = create_app(database)
        log.info("Starting server on %s:%d", args.host, args.port)
        uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())