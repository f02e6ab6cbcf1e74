from fastapi import Request

from restadmin.services.admin_state import AdminState
from restadmin.services.host_directory import HostDirectory


def get_admin_state(request: Request) -> AdminState:
    """État posé sur `app.state.admin` par `create_app()`."""
    return request.app.state.admin


def get_directory(request: Request) -> HostDirectory:
    return get_admin_state(request).directory
