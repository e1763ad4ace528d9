"""Test fixtures — path resolver mounts and FastAPI test client."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from servantfs.api.deps import get_file_system
from servantfs.main import create_app
from servantfs.services import FileSystemService
from servantfs.services.path_resolver import PathResolver


@pytest.fixture
def resolver(tmp_path):
    """Resolver with drive T: and share \\\\fileserver\\data mounted on tmp_path."""
    return PathResolver(
        drive_mounts={"T": str(tmp_path)},
        share_mounts={"\\\\fileserver\\data": str(tmp_path)},
        local_host_aliases=["servant-host"],
    )


@pytest.fixture
def fs_service(resolver):
    return FileSystemService(resolver=resolver, chunk_size=4)


@pytest_asyncio.fixture
async def client(fs_service: FileSystemService):
    """Provide an async test client with the file system service overridden."""
    app = create_app()
    app.dependency_overrides[get_file_system] = lambda: fs_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
