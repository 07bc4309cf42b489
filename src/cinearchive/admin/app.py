"""Mounts the SQLAdmin back-office on the main application."""

from fastapi import FastAPI
from sqladmin import Admin

from cinearchive.admin.auth import AdminAuth
from cinearchive.admin.views import ADMIN_VIEWS
from cinearchive.config import settings
from cinearchive.database import engine


def mount_admin(app: FastAPI) -> Admin:
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="Cinearchive Admin")
    for view in ADMIN_VIEWS:
        admin.add_view(view)
    return admin
