from fastapi import Request
from sqlalchemy.orm import Session

def get_db(request: Request):
    db: Session = request.app.state.session_factory()
    try: yield db
    finally: db.close()
