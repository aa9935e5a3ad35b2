"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from crossfire.auth.service import AuthService
from crossfire.container import Services
from crossfire.players.service import PlayerService
from crossfire.static_data.service import StaticDataService


def get_services(request: Request) -> Services:
    """Service container built during startup."""
    return request.app.state.services


def get_auth_service(request: Request) -> AuthService:
    return get_services(request).auth


def get_player_service(request: Request) -> PlayerService:
    return get_services(request).players


def get_static_data_service(request: Request) -> StaticDataService:
    return get_services(request).static_data
