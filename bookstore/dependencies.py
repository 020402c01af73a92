"""
FastAPI Dependencies Module

Annotated aliases for the objects route handlers receive through
``Depends``. Instead of writing:

    def get_books(db: Session = Depends(get_db)):

routes write:

    def get_books(db: DbSession):
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from bookstore.config import Settings
from bookstore.database import get_db


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


DbSession = Annotated[Session, Depends(get_db)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
