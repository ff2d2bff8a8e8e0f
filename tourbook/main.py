import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

from tourbook.api.endpoints import account, admin_users, bookings, engagement, products, site, themes
from tourbook.settings import settings
from tourbook.supabase_client import create_supabase_client

# 로그 설정
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="tourbook")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products.router, prefix="/api/products", tags=["Products"])
app.include_router(themes.router, prefix="/api/themes", tags=["Themes"])
app.include_router(themes.areas_router, prefix="/api/areas", tags=["Areas"])
app.include_router(bookings.router, prefix="/api/bookings", tags=["Bookings"])
app.include_router(engagement.favorites_router, prefix="/api/favorites", tags=["Favorites"])
app.include_router(engagement.notices_router, prefix="/api/notices", tags=["Notices"])
app.include_router(engagement.inquiries_router, prefix="/api/inquiries", tags=["Inquiries"])
app.include_router(admin_users.router, prefix="/api/admin/users", tags=["AdminUsers"])
app.include_router(account.auth_router, prefix="/api/auth", tags=["Auth"])
app.include_router(account.profile_router, prefix="/api/profile", tags=["Profile"])
app.include_router(site.router, prefix="/api/site", tags=["Site"])


@app.on_event("startup")
async def on_startup() -> None:
    app.state.supabase = await create_supabase_client()
    logger.info(f"Supabase 클라이언트 초기화 완료: {settings.supabase_url}")


@app.exception_handler(APIError)
async def postgrest_error_handler(request: Request, exc: APIError) -> JSONResponse:
    # 백엔드 메시지는 그대로 전달
    logger.warning(f"Supabase 요청 실패 ({request.method} {request.url.path}): {exc.message}")
    return JSONResponse(status_code=400, content={"detail": exc.message or str(exc), "code": exc.code})


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
