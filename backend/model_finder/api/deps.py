from fastapi import Request

from model_finder.services.hub_client import HubClient
from model_finder.services.session import FinderSession


def get_session(request: Request) -> FinderSession:
    return request.app.state.finder


def get_hub_client(request: Request) -> HubClient:
    return request.app.state.hub_client
