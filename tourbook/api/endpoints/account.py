"""
로그인/회원가입 및 내 프로필 엔드포인트.
"""
from fastapi import APIRouter, Depends, HTTPException
from supabase import AsyncClient

from tourbook.api.deps import get_current_user
from tourbook.schemas.profile import AuthCredentials, AuthSession, Profile, ProfileUpdate
from tourbook.services.auth_service import AuthService, AuthUser
from tourbook.services.profile_service import ProfileService
from tourbook.supabase_client import get_client

auth_router = APIRouter()
profile_router = APIRouter()


@auth_router.post("/sign-in", response_model=AuthSession)
async def sign_in(payload: AuthCredentials, client: AsyncClient = Depends(get_client)):
    try:
        return await AuthService(client).sign_in(payload.email, payload.password)
    except Exception as e:
        raise HTTPException(status_code=401, detail=f"로그인 실패: {e}")


@auth_router.post("/sign-up", response_model=AuthSession, status_code=201)
async def sign_up(payload: AuthCredentials, client: AsyncClient = Depends(get_client)):
    try:
        return await AuthService(client).sign_up(payload.email, payload.password)
    except Exception as e:
        raise HTTPException(status_code=400, detail=f"회원가입 실패: {e}")


@auth_router.post("/sign-out")
async def sign_out(client: AsyncClient = Depends(get_client)) -> dict:
    await AuthService(client).sign_out()
    return {"ok": True}


@profile_router.get("/me", response_model=Profile)
async def get_my_profile(user: AuthUser = Depends(get_current_user), client: AsyncClient = Depends(get_client)):
    return await ProfileService(client).get_or_create_profile(user.id, user.email)


@profile_router.put("/me", response_model=Profile)
async def update_my_profile(
    patch: ProfileUpdate,
    user: AuthUser = Depends(get_current_user),
    client: AsyncClient = Depends(get_client),
):
    profile = await ProfileService(client).update_my_profile(user.id, patch)
    if profile is None:
        raise HTTPException(status_code=404, detail="프로필을 찾을 수 없습니다")
    return profile
