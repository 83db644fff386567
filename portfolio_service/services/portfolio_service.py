# services/portfolio_service.py

import json
import uuid
from pathlib import Path
from typing import List, Optional, Union

from ..core.config import settings
from ..core import tool_catalog
from ..interfaces.private_item_repository_interface import ContactRepositoryInterface
from ..schemas.portfolio_schemas import (
    AboutResponse,
    ContactMessage,
    ContactRequest,
    ContactResponse,
    PortfolioContent,
    ProjectsResponse,
    ResumeResponse,
    Skill,
    ToolCategory,
)
from ..utils.exceptions import ItemNotFoundError
from common.logger import LoggerFactory, LoggerType, LogLevel

DEFAULT_CONTENT_PATH = Path(__file__).resolve().parent.parent / "data" / "portfolio.json"


class PortfolioService:
    """
    Static portfolio content, tool catalog and the contact form.
    """

    def __init__(
        self,
        contact_repository: ContactRepositoryInterface,
        content_path: Union[str, Path, None] = None,
    ):
        """
        Initialize portfolio service

        Args:
            contact_repository: Store for contact form submissions
            content_path: Portfolio JSON, defaults to the bundled file
        """
        self.contact_repository = contact_repository
        self.logger = LoggerFactory.get_logger(
            name="portfolio-service",
            logger_type=LoggerType.STANDARD,
            level=LogLevel.INFO,
            file_level=LogLevel.DEBUG,
            log_file=f"{settings.log_file_path}portfolio_service.log",
        )
        path = Path(content_path) if content_path else DEFAULT_CONTENT_PATH
        self.content = PortfolioContent(**json.loads(path.read_text(encoding="utf-8")))
        self.logger.info(
            f"Loaded portfolio content: {len(self.content.portfolio)} projects, "
            f"{len(self.content.skills)} skills"
        )

    def get_about(self) -> AboutResponse:
        return AboutResponse(
            summary=self.content.summary,
            services=self.content.services,
            languages=self.content.languages,
        )

    def get_resume(self) -> ResumeResponse:
        return ResumeResponse(
            summary=self.content.summary,
            experience=self.content.experience,
            education=self.content.education,
            projects=self.content.projects,
            languages=self.content.languages,
            skills=self.content.skills,
        )

    def get_projects(self, category: Optional[str] = None) -> ProjectsResponse:
        """
        Showcased projects, optionally filtered by category

        Args:
            category: Project category, ``all`` or None for everything
        """
        items = self.content.portfolio
        categories = sorted({p.category for p in items})
        if category and category.lower() != "all":
            items = [p for p in items if p.category.lower() == category.lower()]
        return ProjectsResponse(
            category=category or "all", categories=categories, items=items
        )

    def get_skills(self, group: Optional[str] = None) -> List[Skill]:
        skills = self.content.skills
        if group:
            skills = [s for s in skills if (s.group or "").lower() == group.lower()]
        return skills

    def list_tools(self) -> List[ToolCategory]:
        return tool_catalog.list_categories()

    def get_tool(self, slug: str) -> ToolCategory:
        category = tool_catalog.get_category(slug)
        if category is None:
            raise ItemNotFoundError(f"Tool category '{slug}' not found")
        return category

    async def submit_contact(self, request: ContactRequest) -> ContactResponse:
        message = ContactMessage(id=uuid.uuid4().hex, **request.model_dump())
        await self.contact_repository.save_message(message)
        self.logger.info(f"Contact message {message.id} received from {message.email}")
        return ContactResponse(id=message.id)
