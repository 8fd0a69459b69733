def get_db(SessionLocal):
    """
    Yield a database session and close it once the request is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
