# routers/portfolio_router.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas.portfolio_schemas import (
    AboutResponse,
    ContactRequest,
    ContactResponse,
    ProjectsResponse,
    ResumeResponse,
    Skill,
    ToolCategory,
)
from ..services.portfolio_service import PortfolioService
from ..utils.dependencies import get_portfolio_service
from ..utils.exceptions import PortfolioServiceError
from ..utils.http_errors import to_http_exception

router = APIRouter(prefix="/portfolio", tags=["portfolio"])
tools_router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("/about", response_model=AboutResponse)
async def get_about(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> AboutResponse:
    return portfolio_service.get_about()


@router.get("/resume", response_model=ResumeResponse)
async def get_resume(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> ResumeResponse:
    return portfolio_service.get_resume()


@router.get("/projects", response_model=ProjectsResponse)
async def get_projects(
    category: Optional[str] = Query(None, description="Project category, e.g. react"),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> ProjectsResponse:
    return portfolio_service.get_projects(category)


@router.get("/skills", response_model=List[Skill])
async def get_skills(
    group: Optional[str] = Query(None, description="Skill group, e.g. Databases"),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> List[Skill]:
    return portfolio_service.get_skills(group)


@router.post("/contact", response_model=ContactResponse, status_code=201)
async def submit_contact(
    request: ContactRequest,
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> ContactResponse:
    return await portfolio_service.submit_contact(request)


@tools_router.get("", response_model=List[ToolCategory])
async def list_tools(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> List[ToolCategory]:
    """Tool categories, featured first"""
    return portfolio_service.list_tools()


@tools_router.get("/{slug}", response_model=ToolCategory)
async def get_tool(
    slug: str,
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> ToolCategory:
    try:
        return portfolio_service.get_tool(slug)
    except PortfolioServiceError as e:
        raise to_http_exception(e)
