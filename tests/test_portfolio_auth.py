# tests/test_portfolio_auth.py

"""
Tests for passwords, token auth, private items and portfolio content.
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from common.cache import InMemoryCache
from portfolio_service.core import tool_catalog
from portfolio_service.core.passwords import hash_password, verify_password
from portfolio_service.repositories.in_memory_repository import (
    InMemoryContactRepository,
    InMemoryPrivateItemRepository,
)
from portfolio_service.schemas.auth_schemas import PrivateItemCreate, PrivateItemUpdate
from portfolio_service.schemas.portfolio_schemas import ContactRequest
from portfolio_service.services.auth_service import AuthService
from portfolio_service.services.portfolio_service import PortfolioService
from portfolio_service.services.private_item_service import PrivateItemService
from portfolio_service.utils.exceptions import (
    AuthenticationError,
    ItemNotFoundError,
    ValidationFailure,
)

ITERATIONS = 10000


class TestPasswords:
    """Test cases for PBKDF2 password hashes."""

    def test_hash_format(self):
        encoded = hash_password("secret", ITERATIONS)
        algorithm, iterations, salt, digest = encoded.split("$")

        assert algorithm == "pbkdf2_sha256"
        assert iterations == str(ITERATIONS)
        assert len(bytes.fromhex(salt)) == 16
        assert len(bytes.fromhex(digest)) == 32

    def test_verify(self):
        encoded = hash_password("secret", ITERATIONS)

        assert verify_password("secret", encoded)
        assert not verify_password("Secret", encoded)

    def test_malformed_hash(self):
        assert not verify_password("secret", "plain-text")
        assert not verify_password("secret", "md5$1$00$00")


class TestAuthService:
    """Test cases for login, token verification and logout."""

    def make_service(self, **kwargs) -> AuthService:
        options = {"password": "s3cret", "iterations": ITERATIONS}
        options.update(kwargs)
        return AuthService(InMemoryCache(), "admin", **options)

    @pytest.mark.asyncio
    async def test_login_and_verify(self):
        service = self.make_service()

        response = await service.login("admin", "s3cret")

        assert response.token_type == "bearer"
        assert response.expires_in == 3600
        assert await service.verify_token(response.token) == "admin"

    @pytest.mark.asyncio
    async def test_login_with_configured_hash(self):
        service = self.make_service(password=None, password_hash=hash_password("pw", ITERATIONS))
        response = await service.login("admin", "pw")
        assert response.token

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,password", [("admin", "wrong"), ("root", "s3cret"), ("", ""), ("ädmin", "x")]
    )
    async def test_invalid_credentials(self, username, password):
        service = self.make_service()
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            await service.login(username, password)

    @pytest.mark.asyncio
    async def test_login_disabled_without_password(self):
        service = self.make_service(password=None)
        with pytest.raises(AuthenticationError):
            await service.login("admin", "")

    @pytest.mark.asyncio
    async def test_unknown_and_revoked_tokens(self):
        service = self.make_service()
        response = await service.login("admin", "s3cret")

        with pytest.raises(AuthenticationError, match="Not authenticated"):
            await service.verify_token("made-up")

        assert await service.logout(response.token) is True
        with pytest.raises(AuthenticationError):
            await service.verify_token(response.token)

    @pytest.mark.asyncio
    async def test_token_expiry(self):
        service = self.make_service(token_ttl=60)
        response = await service.login("admin", "s3cret")

        with patch.object(InMemoryCache, "_is_expired", return_value=True):
            with pytest.raises(AuthenticationError):
                await service.verify_token(response.token)


class TestPrivateItemService:
    """Test cases for owner-scoped private items."""

    def setup_method(self):
        self.service = PrivateItemService(InMemoryPrivateItemRepository())

    @pytest.mark.asyncio
    async def test_create_list_get(self):
        item = await self.service.create_item(
            "admin", PrivateItemCreate(type="note", title="Groceries", content="milk")
        )

        assert len(item.id) == 32
        assert await self.service.list_items("admin") == [item]
        assert await self.service.list_items("someone-else") == []
        assert (await self.service.get_item("admin", item.id)).title == "Groceries"

    @pytest.mark.asyncio
    async def test_update(self):
        item = await self.service.create_item("admin", PrivateItemCreate(type="link", title="Docs"))

        updated = await self.service.update_item(
            "admin", item.id, PrivateItemUpdate(content="https://example.com")
        )

        assert updated.title == "Docs"
        assert updated.content == "https://example.com"
        assert updated.updated_at >= item.updated_at

    @pytest.mark.asyncio
    async def test_empty_update(self):
        item = await self.service.create_item("admin", PrivateItemCreate(type="note", title="x"))
        with pytest.raises(ValidationFailure, match="Nothing to update"):
            await self.service.update_item("admin", item.id, PrivateItemUpdate())

    @pytest.mark.asyncio
    async def test_other_owner_cannot_touch(self):
        item = await self.service.create_item("admin", PrivateItemCreate(type="note", title="x"))

        with pytest.raises(ItemNotFoundError):
            await self.service.get_item("intruder", item.id)
        with pytest.raises(ItemNotFoundError):
            await self.service.delete_item("intruder", item.id)

    @pytest.mark.asyncio
    async def test_delete(self):
        item = await self.service.create_item("admin", PrivateItemCreate(type="note", title="x"))

        await self.service.delete_item("admin", item.id)

        with pytest.raises(ItemNotFoundError):
            await self.service.get_item("admin", item.id)
        assert await self.service.health_check() is True


class TestPortfolioService:
    """Test cases for portfolio content, tools and the contact form."""

    def setup_method(self):
        self.contacts = InMemoryContactRepository()
        self.service = PortfolioService(self.contacts)

    def test_projects_filter(self):
        everything = self.service.get_projects()
        react = self.service.get_projects("React")

        assert everything.category == "all"
        assert everything.categories == ["javascript", "react"]
        assert len(react.items) == 8
        assert all(p.category == "react" for p in react.items)

    def test_skills_by_group(self):
        databases = self.service.get_skills("databases")
        assert len(databases) == 2
        assert len(self.service.get_skills()) > len(databases)

    def test_resume_and_about(self):
        resume = self.service.get_resume()
        about = self.service.get_about()

        assert resume.experience
        assert resume.education
        assert about.summary == resume.summary

    def test_tools_featured_first(self):
        tools = self.service.list_tools()

        assert {t.slug for t in tools[:3]} == set(tool_catalog.FEATURED_SLUGS)
        assert not any(t.featured for t in tools[3:])
        pdf = self.service.get_tool("pdf-converter")
        assert pdf.preview == pdf.subtools[:3]
        assert pdf.has_more is True

    def test_unknown_tool(self):
        with pytest.raises(ItemNotFoundError):
            self.service.get_tool("teleporter")

    @pytest.mark.asyncio
    async def test_submit_contact(self):
        response = await self.service.submit_contact(
            ContactRequest(name=" Sita ", email="sita@example.com", message="Hello!")
        )

        messages = await self.contacts.list_messages()
        assert messages[0].id == response.id
        assert messages[0].name == "Sita"

    def test_contact_validation(self):
        with pytest.raises(ValidationError):
            ContactRequest(name="A", email="not-an-email", message="hi")
        with pytest.raises(ValidationError):
            ContactRequest(name="   ", email="a@b.co", message="hi")
