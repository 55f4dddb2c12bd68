"""
Static pages: home and the add-entity forms.
"""

from fastapi import APIRouter, Request

from app.rendering import templates


router = APIRouter(tags=["Pages"])


@router.get("/")
def home(request: Request):
    """Render the home page."""
    return templates.TemplateResponse(request, "index.html")


@router.get("/add")
def add_form(request: Request):
    """Render the forms for adding routes and stations."""
    return templates.TemplateResponse(request, "add.html")
