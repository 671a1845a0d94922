"""Minimal FastAPI application for the template clause editor.

This module exposes the markup transforms, the markdown-lite renderer and
the template repository over HTTP so that a browser front end can keep its
own editing state while delegating text transforms and persistence.

Usage (from project root, after installing the package):

    uvicorn clause_editor.api.app:app --reload

Then POST ``{"text": "Hello", "selection_start": 0, "selection_end": 5,
"action": "bold"}`` to /api/transforms.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..editor.exceptions import TemplatePersistenceError, TemplateValidationError
from ..editor.transforms import apply_toolbar_action
from ..interfaces.repository import ITemplateRepository
from ..models.clause import Clause
from ..models.enums import MemberRole, ToolbarAction, Visibility
from ..persistence.database import DatabaseManager
from ..persistence.template_repository import TemplateRepository
from ..rendering.markdown_lite import render
from ..session import TemplateEditorSession


logger = logging.getLogger(__name__)


class TransformRequest(BaseModel):
    text: str
    selection_start: int = Field(ge=0)
    selection_end: int = Field(ge=0)
    action: ToolbarAction


class TransformResponse(BaseModel):
    text: str
    selection_start: int
    selection_end: int


class RenderRequest(BaseModel):
    text: str


class ClausePayload(BaseModel):
    id: str
    title: str = ""
    required: bool = False
    content: str = ""


class TemplateSaveRequest(BaseModel):
    id: Optional[str] = None
    organization_id: Optional[str] = None
    branch_office_id: Optional[str] = None
    name: str = ""
    description: str = ""
    visibility: Visibility = Visibility.ORGANIZATION
    sections: List[ClausePayload] = Field(default_factory=list)
    # No authentication; the caller's role is taken from the request body.
    member_role: MemberRole = MemberRole.ORG_ADMIN
    user_id: Optional[str] = None


def create_app(repository: Optional[ITemplateRepository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        repository: Template repository. Defaults to a TemplateRepository
                    over a DatabaseManager configured from the environment.
    """
    app = FastAPI(title="Template Clause Editor API", version="0.1.0")
    app.state.repository = repository

    def get_repository(request: Request) -> ITemplateRepository:
        if request.app.state.repository is None:
            request.app.state.repository = TemplateRepository(db_manager=DatabaseManager())
        return request.app.state.repository

    @app.get("/api/health")
    def health(request: Request) -> JSONResponse:
        """Report whether the template database is reachable."""
        repo = get_repository(request)
        db_manager = getattr(repo, "_db_manager", None)
        healthy = db_manager.health_check() if db_manager is not None else True
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={"status": "healthy" if healthy else "unavailable"},
        )

    @app.post("/api/transforms", response_model=TransformResponse)
    async def transform(payload: TransformRequest) -> TransformResponse:
        """Apply a toolbar markup action to a text buffer and selection."""
        try:
            result = apply_toolbar_action(
                payload.action,
                payload.text,
                payload.selection_start,
                payload.selection_end,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc

        return TransformResponse(
            text=result.text,
            selection_start=result.selection_start,
            selection_end=result.selection_end,
        )

    @app.post("/api/render")
    async def render_text(payload: RenderRequest) -> JSONResponse:
        """Render marked-up clause text to HTML."""
        return JSONResponse(status_code=200, content={"html": str(render(payload.text))})

    @app.get("/api/templates")
    def list_templates(
        request: Request,
        organization_id: str = Query(...),
        branch_office_id: Optional[str] = Query(None),
    ) -> JSONResponse:
        """List templates visible to a member of an organization or branch."""
        try:
            templates = get_repository(request).fetch_templates(
                organization_id=organization_id,
                branch_office_id=branch_office_id,
            )
        except TemplatePersistenceError as exc:
            raise HTTPException(status_code=500, detail=exc.message) from exc

        return JSONResponse(
            status_code=200,
            content=[template.to_dict() for template in templates],
        )

    @app.get("/api/templates/{template_id}")
    def get_template(request: Request, template_id: str) -> JSONResponse:
        """Retrieve one template."""
        try:
            template = get_repository(request).get_template(template_id)
        except TemplatePersistenceError as exc:
            raise HTTPException(status_code=500, detail=exc.message) from exc

        if template is None:
            raise HTTPException(status_code=404, detail="Template not found")
        return JSONResponse(status_code=200, content=template.to_dict())

    @app.post("/api/templates")
    def save_template(request: Request, payload: TemplateSaveRequest) -> JSONResponse:
        """Validate and save a complete template draft."""
        repo = get_repository(request)
        session = TemplateEditorSession(
            repository=repo,
            member_role=payload.member_role,
            organization_id=payload.organization_id,
            branch_office_id=payload.branch_office_id,
            user_id=payload.user_id,
        )

        if payload.id:
            try:
                existing = repo.get_template(payload.id)
            except TemplatePersistenceError as exc:
                raise HTTPException(status_code=500, detail=exc.message) from exc
            if existing is not None:
                session.load_template(existing)
            else:
                session.active_template_id = payload.id

        session.store.replace_all(
            [Clause(**section.model_dump()) for section in payload.sections]
        )
        session.set_metadata(
            name=payload.name,
            description=payload.description,
            visibility=payload.visibility,
        )

        result = session.save()
        if not result.success:
            status_code = 400 if isinstance(result.error, TemplateValidationError) else 500
            raise HTTPException(status_code=status_code, detail=result.errors[0])

        return JSONResponse(status_code=200, content=result.template.to_dict())

    return app


app = create_app()
