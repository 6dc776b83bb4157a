from fastapi import Request

from catalog.server.config import Config
from catalog.server.item_store import ItemStore


def get_item_store(request: Request) -> ItemStore:
    return request.app.state.item_store


def get_config(request: Request) -> Config:
    return request.app.state.config
