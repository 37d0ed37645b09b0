"""FastAPI dependencies wiring services to the request session."""

from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from movieapp.auth import IdentityClaims, TokenVerifier, reject_all_tokens
from movieapp.database import get_db
from movieapp.errors import UnauthorizedError
from movieapp.models.user import User
from movieapp.repositories import MovieRepository, ReviewRepository, UserRepository
from movieapp.services.identity import IdentityResolver
from movieapp.services.movie_sync import MovieSyncEngine
from movieapp.services.review_service import ReviewService
from movieapp.services.tmdb_client import TMDbClient

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_tmdb_client() -> TMDbClient:
    return TMDbClient()


def get_movie_sync(
    db: AsyncSession = Depends(get_db),
    tmdb_client: TMDbClient = Depends(get_tmdb_client),
) -> MovieSyncEngine:
    return MovieSyncEngine(MovieRepository(db), tmdb_client)


def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    return ReviewService(ReviewRepository(db))


def get_identity_resolver(db: AsyncSession = Depends(get_db)) -> IdentityResolver:
    return IdentityResolver(UserRepository(db))


async def get_identity_claims(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> IdentityClaims:
    """Verify the bearer token, raising UnauthorizedError if missing or invalid."""
    if credentials is None:
        raise UnauthorizedError("Authentication required")

    verifier: TokenVerifier = getattr(request.app.state, "token_verifier", reject_all_tokens)
    claims = await verifier(credentials.credentials)
    if claims is None:
        raise UnauthorizedError("Invalid or expired token")
    return claims


async def get_current_user(
    claims: IdentityClaims = Depends(get_identity_claims),
    resolver: IdentityResolver = Depends(get_identity_resolver),
) -> User:
    return await resolver.find_or_create_user(claims.sub, claims.email)
