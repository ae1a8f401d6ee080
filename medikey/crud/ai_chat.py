from typing import Any, List
from sqlalchemy.orm import Session

from medikey.crud.base import CRUDBase
from medikey.models.ai_chat import AiChatHistory


class CRUDAiChat(CRUDBase[AiChatHistory, Any, Any]):
    def create_entry(self, db: Session, *, user_id: int, message: str, response: str) -> AiChatHistory:
        db_obj = AiChatHistory(user_id=user_id, message=message, response=response)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_history(self, db: Session, *, user_id: int) -> List[AiChatHistory]:
        return (
            db.query(AiChatHistory)
            .filter(AiChatHistory.user_id == user_id)
            .order_by(AiChatHistory.created_at.asc(), AiChatHistory.id.asc())
            .all()
        )


ai_chat = CRUDAiChat(AiChatHistory)
