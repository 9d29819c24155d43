from typing import Annotated

from fastapi import Depends, Request

from .database import DataStore


def get_store(request: Request) -> DataStore:
    """The DataStore connected by the application lifespan."""
    return request.app.state.store


StoreDep = Annotated[DataStore, Depends(get_store)]
