"""User REST API endpoints"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.postgres import get_db
from app.db.models import User, UserRole
from app.users.service import UserService
from app.users.schemas import (
    RegisterUserRequest,
    UpdateRoleRequest,
    UserListResponse,
    UserResponse,
)
from app.auth.models import Identity, Principal
from app.auth.middleware import (
    check_permission,
    ensure_self_or_permission,
    get_principal,
    optional_identity,
    permissions_manager,
    verify_token,
)
from app.utils.exceptions import AuthorizationException
from app.utils.pagination import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, coerce_positive_int, total_pages
from app.utils.responses import ApiResponse, success_response
from app.utils.timezone import to_display_tz

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


def to_response(user: User) -> UserResponse:
    return UserResponse(
        user_id=user.user_id,
        full_name=user.full_name,
        email=user.email,
        role=user.role,
        created_at=to_display_tz(user.created_at),
    )


@router.post("/register", response_model=ApiResponse[UserResponse], status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterUserRequest,
    db: AsyncSession = Depends(get_db),
    identity: Optional[Identity] = Depends(optional_identity),
):
    """
    Register an account.

    No token is required. When a token is sent it must belong to the
    registered user_id. Roles other than Customer, or registering someone
    else, require user:register:any (Admin).
    """
    service = UserService(db)

    registering_self = identity is not None and identity.user_id == request.user_id
    elevated = request.role != UserRole.CUSTOMER
    if (identity is not None and not registering_self) or elevated:
        caller = await service.repository.get_by_id(identity.user_id) if identity else None
        if caller is None or not permissions_manager.role_has(caller.role, "user:register:any"):
            raise AuthorizationException("Only an administrator can register this account")

    user = await service.register_user(
        user_id=request.user_id,
        full_name=request.full_name,
        email=request.email,
        role=request.role,
    )
    return success_response(to_response(user), "User created successfully")


@router.get("/me", response_model=ApiResponse[UserResponse])
async def get_current_user(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(verify_token),
):
    """Caller's own profile"""
    service = UserService(db)
    user = await service.get_user(identity.user_id)
    return success_response(to_response(user), "Current user fetched successfully")


@router.get("/staff", response_model=ApiResponse[List[UserResponse]])
async def list_staff_members(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Staff, Manager and Admin accounts (assignment candidates).

    Required permission: user:list-staff
    """
    check_permission(principal, "user:list-staff")

    service = UserService(db)
    staff = await service.list_staff()
    return success_response([to_response(user) for user in staff], "Staff members fetched successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserResponse])
async def get_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """Self, or user:read:any (Admin)"""
    ensure_self_or_permission(principal, user_id, "user:read:any")

    service = UserService(db)
    user = await service.get_user(user_id)
    return success_response(to_response(user), "User fetched successfully")


@router.get("", response_model=ApiResponse[UserListResponse])
async def list_users(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    role: Optional[UserRole] = Query(None),
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    List all users (Admins only).

    Required permission: user:list
    """
    check_permission(principal, "user:list")

    page_number = coerce_positive_int(page, DEFAULT_PAGE)
    size = coerce_positive_int(page_size, DEFAULT_PAGE_SIZE)

    service = UserService(db)
    users, total = await service.list_users(
        page=page_number,
        page_size=size,
        filters={"role": role.value if role else None},
    )

    return success_response(
        UserListResponse(
            users=[to_response(user) for user in users],
            total=total,
            page=page_number,
            page_size=size,
            total_pages=total_pages(total, size),
        ),
        "Users fetched successfully",
    )


@router.api_route("/{user_id}/role", methods=["PUT", "PATCH"], response_model=ApiResponse[UserResponse])
async def update_user_role(
    user_id: str,
    request: UpdateRoleRequest,
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(get_principal),
):
    """
    Change a user's role. Admins cannot change their own role.

    Required permission: user:update-role
    """
    check_permission(principal, "user:update-role")

    service = UserService(db)
    user = await service.update_role(user_id, request.role, acting_user_id=principal.user_id)
    return success_response(to_response(user), "User role updated successfully")
