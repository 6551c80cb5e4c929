"""Presentation sink: named views rendered as JSON, and post-write redirects."""

from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel


def render(view: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=view.model_dump(mode="json"), status_code=status_code)


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)
