from fastapi import Request

from assignments_api.db.session import SessionLocal


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# raw body, so validation can run after auth and ownership checks
async def get_request_body(request: Request) -> bytes:
    return await request.body()
