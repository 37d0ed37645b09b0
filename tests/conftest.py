"""Shared test fixtures."""

import pytest
from factories import ALICE_CLAIMS, VALID_TOKEN
from fastapi import FastAPI

from movieapp.auth import IdentityClaims
from movieapp.main import register_routes


async def fake_token_verifier(token: str) -> IdentityClaims | None:
    return ALICE_CLAIMS if token == VALID_TOKEN else None


@pytest.fixture
def test_app() -> FastAPI:
    """API routes and error handling without the admin panel or lifespan."""
    app = FastAPI()
    app.state.token_verifier = fake_token_verifier
    register_routes(app)
    return app
