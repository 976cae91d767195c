"""Request helpers shared by the feature controllers."""
from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.constants import SELECTED_CONTRACT_KEY
from ..core.enums import Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataSourceError,
    ValidationError,
)
from ..state.app_state import AppState
from ..state.auth_state import AuthState, LoadUser, reduce_auth
from ..state.loader import load_app_state, new_app_store
from ..state.store import Store
from ..users.session_cache import SessionUser, load_profile
from .casing import snake_keys

logger = logging.getLogger(__name__)


def json_error(message: str, status: int):
    return jsonify({"error": message}), status


def current_user() -> Optional[SessionUser]:
    if "current_user" not in g:
        g.current_user = load_profile(session)
    return g.current_user


def current_role() -> Role:
    user = current_user()
    return user.role if user else Role.VIEWER


def auth_store() -> Store:
    store = Store(reduce_auth, AuthState())
    store.dispatch(LoadUser(current_user()))
    return store


def app_store(container) -> Store:
    """Per-request store, filled from the backend on first use."""
    if "app_store" not in g:
        store = new_app_store()
        load_app_state(
            store,
            contracts=container.contract_service,
            crews=container.crew_service,
            time_entries=container.time_entry_service,
            exceptions=container.exception_service,
            users=container.user_service,
            selected_contract_id=session.get(SELECTED_CONTRACT_KEY),
        )
        g.app_store = store
    return g.app_store


def commit(container, action) -> AppState:
    """Apply the result of a backend write to this request's store."""
    return app_store(container).dispatch(action)


def json_body() -> dict:
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        raise ValidationError("Expected a JSON object")
    return snake_keys(payload)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_user() is None:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        user = current_user()
        if user is None:
            return json_error("Please log in to continue", 401)
        if not user.role.can_edit:
            return json_error("You do not have permission to do this", 403)
        return view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e):
        return json_error(str(e), 400)

    @app.errorhandler(AuthorizationError)
    def _authorization(e):
        return json_error(str(e), 403)

    @app.errorhandler(AuthenticationError)
    def _authentication(e):
        return json_error(str(e), 401)

    @app.errorhandler(DataSourceError)
    def _data_source(e):
        logger.exception("backend failure on %s %s", request.method, request.path)
        return json_error("Could not load data from the backend", 502)

    @app.errorhandler(Exception)
    def _unexpected(e):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, e.code or 500)
        logger.exception("unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return json_error(f"Internal error: {e}", 500)
        return json_error("Internal error", 500)
