from __future__ import annotations

import logging

from dataclasses import replace

from flask import Flask, jsonify, session

from ..common.casing import to_view
from ..common.web import (
    admin_required,
    app_store,
    auth_store,
    commit,
    current_role,
    current_user,
    json_body,
    login_required,
)
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container
from ..state.app_state import AddUser, DeleteUser, UpdateUser
from ..state.auth_state import LoginFailure, LoginStart, LoginSuccess, Logout, UpdateProfile
from .model import User
from .session_cache import clear_profile, save_profile

logger = logging.getLogger(__name__)


def user_view(user: User) -> dict:
    view = to_view(user)
    view.pop("passwordHash", None)
    return view


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        store = auth_store()
        store.dispatch(LoginStart())
        try:
            s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except AuthenticationError:
            store.dispatch(LoginFailure())
            logger.info("failed login for %r", data.get("username", ""))
            raise

        session.permanent = bool(data.get("remember_me"))
        save_profile(session, s_user)
        state = store.dispatch(LoginSuccess(s_user))
        return jsonify({"isAuthenticated": state.is_authenticated, "user": to_view(state.user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        store = auth_store()
        clear_profile(session)
        session.clear()
        state = store.dispatch(Logout())
        return jsonify({"isAuthenticated": state.is_authenticated})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    def me():
        state = auth_store().state
        return jsonify(
            {
                "isAuthenticated": state.is_authenticated,
                "user": to_view(state.user) if state.user else None,
            }
        )

    @app.route("/api/auth/me", methods=["PATCH"], endpoint="update_me")
    @login_required
    def update_me():
        s_user = current_user()
        if s_user.demo:
            raise ValidationError("Demo profiles cannot be edited")
        data = json_body()
        user = container.user_service.update_profile(
            user_id=s_user.id,
            full_name=data.get("full_name", s_user.full_name),
            email=data.get("email", s_user.email),
        )
        commit(container, UpdateUser(user))

        store = auth_store()
        state = store.dispatch(UpdateProfile(replace(s_user, full_name=user.full_name, email=user.email)))
        save_profile(session, state.user)
        return jsonify({"isAuthenticated": state.is_authenticated, "user": to_view(state.user)})

    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @login_required
    def list_users():
        return jsonify([user_view(u) for u in app_store(container).state.users])

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_required
    def add_user():
        data = json_body()
        try:
            role = Role(data.get("role", Role.VIEWER.value))
        except ValueError:
            raise ValidationError("Unknown role")

        user = container.user_service.create_account(
            current_role=current_role(),
            username=data.get("username", ""),
            email=data.get("email", ""),
            full_name=data.get("full_name", ""),
            password=data.get("password", ""),
            role=role,
        )
        commit(container, AddUser(user))
        logger.info("%s created user %s (%s)", current_user().username, user.username, user.role.value)
        return jsonify(user_view(user)), 201

    @app.route("/api/users/<int:user_id>/active", methods=["POST"], endpoint="set_user_active")
    @admin_required
    def set_user_active(user_id: int):
        data = json_body()
        user = container.user_service.set_active(
            current_role=current_role(),
            user_id=user_id,
            active=bool(data.get("active", True)),
        )
        commit(container, UpdateUser(user))
        return jsonify(user_view(user))

    @app.route("/api/users/<int:user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    def delete_user(user_id: int):
        container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        commit(container, DeleteUser(user_id))
        return jsonify({"deleted": user_id})
