# routes.py
from fastapi import FastAPI
from controller.document_controller import document_router
from controller.issue_controller import issue_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(document_router)
    app.include_router(issue_router)
