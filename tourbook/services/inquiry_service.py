from typing import Optional

from supabase import AsyncClient

from tourbook.schemas.engagement import InquiryCreate, InquiryPatch, InquiryRow
from tourbook.services.query_utils import rows_of, utc_now_iso
from tourbook.settings import settings

INQUIRY_TABLE = "inquiries"


class InquiryService:
    def __init__(self, client: AsyncClient):
        self.client = client

    async def create_inquiry(self, payload: InquiryCreate, user_id: Optional[str] = None) -> None:
        # 비로그인 문의는 user_id = null
        data = {
            "user_id": user_id,
            "contact_name": payload.contact_name.strip(),
            "contact_phone": payload.contact_phone.strip(),
            "contact_email": (payload.contact_email or "").strip() or None,
            "title": payload.title.strip(),
            "content": payload.content.strip(),
        }
        await self.client.table(INQUIRY_TABLE).insert(data).execute()

    async def admin_list_inquiries(self, limit: Optional[int] = None) -> list[InquiryRow]:
        response = await (
            self.client.table(INQUIRY_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit or settings.admin_inquiry_limit)
            .execute()
        )
        return [InquiryRow(**{**r, "id": str(r["id"])}) for r in rows_of(response)]

    async def admin_update_inquiry(self, inquiry_id: str, patch: InquiryPatch) -> bool:
        data = patch.model_dump(exclude_unset=True)
        data["updated_at"] = utc_now_iso()
        response = await self.client.table(INQUIRY_TABLE).update(data).eq("id", inquiry_id).execute()
        return bool(rows_of(response))
