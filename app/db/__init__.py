"""Database engine, session factory and declarative base live in ``app.db.session``."""
