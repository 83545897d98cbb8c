from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.app.services.audit_recorder import Actor

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

ADMIN_ROLES = ("admin", "superadmin")


def new_unit_of_work() -> SqlAlchemyUnitOfWork:
    """Unit of work on its own session, for work outside a request (cron jobs)"""
    return SqlAlchemyUnitOfWork(AsyncSessionLocal())


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Decoded JWT payload containing user_id, user_name, role

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    token = credentials.credentials
    payload = verify_jwt(token)

    if payload is None or "user_id" not in payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return payload


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if current_user.get("role") not in ADMIN_ROLES:
        raise ClientError(
            Error("INSUFFICIENT_ROLE", "You do not have permission to access audit data"),
            status_code=status.HTTP_403_FORBIDDEN,
        )
    return current_user


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop, else the socket peer, else 0.0.0.0"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "0.0.0.0"


async def get_actor(request: Request, current_user: dict = Depends(get_current_user)) -> Actor:
    """Audit actor of the current request"""
    return Actor(
        id=UUID(current_user["user_id"]),
        name=current_user.get("user_name") or "Usuario desconocido",
        ip=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
