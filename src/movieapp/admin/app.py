"""Admin panel mounted on the API application."""

from fastapi import FastAPI
from sqladmin import Admin

from movieapp.admin.auth import AdminAuth
from movieapp.admin.views import MovieAdmin, ReviewAdmin, UserAdmin
from movieapp.config import settings
from movieapp.database import engine


def setup_admin(app: FastAPI) -> Admin:
    auth = AdminAuth(secret_key=settings.admin_secret_key)
    admin = Admin(app, engine, authentication_backend=auth, title="Movie App Admin")
    for view in [MovieAdmin, ReviewAdmin, UserAdmin]:
        admin.add_view(view)
    return admin
