"""Schema parsing API routes."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ddl_flowchart.config import AppConfig
from ddl_flowchart.flow import build_flow_graph
from ddl_flowchart.parser import parse_ddl

logger = logging.getLogger(__name__)

router = APIRouter()


class ParseRequest(BaseModel):
    """Raw DDL submitted from the editor."""
    sql: str = Field(..., description="SQL text containing CREATE TABLE statements")


def _checked_sql(request: Request, body: ParseRequest) -> str:
    config: AppConfig = request.app.state.config
    if len(body.sql) > config.web.max_input_chars:
        raise HTTPException(
            status_code=413,
            detail=f"SQL input exceeds {config.web.max_input_chars} characters"
        )
    return body.sql


@router.post("/parse")
def parse_schema(request: Request, body: ParseRequest) -> dict[str, Any]:
    """Parse DDL into tables, relationships, diagram text and flow graph."""
    sql = _checked_sql(request, body)
    config: AppConfig = request.app.state.config

    result = parse_ddl(sql)
    logger.info(
        f"Parsed {len(result.tables)} tables, {len(result.relationships)} relationships"
    )

    payload = result.to_dict()
    payload["flow"] = build_flow_graph(result, config.layout).to_dict()
    return payload


@router.post("/diagram")
def diagram_text(request: Request, body: ParseRequest) -> dict[str, Any]:
    """Return only the erDiagram text for the submitted DDL."""
    sql = _checked_sql(request, body)
    return {"diagramText": parse_ddl(sql).diagram_text}
