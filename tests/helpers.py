from typing import Any
from starlette.testclient import TestClient
from quickdata_lib.services.container import ServiceContainer


def register_service_on_client(client: TestClient, name: str, instance: Any) -> None:
    """Register a service instance into the app's DI container for tests.

    Usage in tests:
        from tests.helpers import register_service_on_client
        register_service_on_client(client, 'quickdata_store', fake_store)
    """
    container = getattr(client.app.state, 'container', None)
    if container is None:
        container = ServiceContainer()
        client.app.state.container = container

    container.register_singleton(name, instance)


def store_file(data_dir, name: str = "DataInfo"):
    """Path of the QuickData file for `name` under `data_dir`."""
    return data_dir / "QuickData" / name
