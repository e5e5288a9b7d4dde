"""FastAPI integration.

Example:
    from fastapi import FastAPI, Request
    from stacheview.views import MustacheTemplates

    app = FastAPI()
    templates = MustacheTemplates("app", prefix="views/", suffix=".mustache")

    @app.get("/")
    async def index(request: Request):
        return templates.TemplateResponse(request, "index", {"title": "Home"})
"""

from ._templates import ContextProcessor, MustacheTemplateResponse, MustacheTemplates

__all__ = [
    "ContextProcessor",
    "MustacheTemplateResponse",
    "MustacheTemplates",
]
