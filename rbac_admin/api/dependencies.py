"""
Service Dependencies

FastAPI dependency factory that builds a service per request. Each request
gets its own session, its own repositories and its own service instance,
so nothing is shared between concurrent requests.

Usage:
    @router.get("/users/{user_id}")
    async def read_user(
        user_id: int,
        service: UserService = Depends(provide_service(UserService))
    ):
        return await service.get_by_id(user_id)
"""

from typing import Callable, TypeVar

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rbac_admin.db.session import get_session
from rbac_admin.services.base import ServiceBase

ServiceT = TypeVar("ServiceT", bound=ServiceBase)


def provide_service(service_class: type[ServiceT]) -> Callable[..., ServiceT]:
    """
    Build a dependency returning `service_class` wired to the request session.

    Args:
        service_class: Concrete service, e.g. UserService

    Returns:
        A FastAPI dependency callable
    """
    async def _provide(session: AsyncSession = Depends(get_session)) -> ServiceT:
        return service_class.from_session(session)

    _provide.__name__ = f"provide_{service_class.__name__}"
    return _provide
