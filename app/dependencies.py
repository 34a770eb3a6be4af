from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import SessionLocal
from app.websocket.announcements import AnnouncementBroadcaster, get_broadcaster


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


db_dependency = Annotated[Session, Depends(get_db)]
broadcaster_dependency = Annotated[AnnouncementBroadcaster, Depends(get_broadcaster)]
