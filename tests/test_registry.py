import httpx
import pytest

from resource_api.errors import ConfigurationError, TransportError, log_error, raise_error
from resource_api.registry import ApiRegistry, build_registry
from resource_api.resources import AlbumsService, PostsService, UsersService
from resource_api.services import ReadableResource, WritableResource
from resource_api.settings import DEFAULT_API_BASE_URL, Settings


def _build_registry(handler, *, error_hook=None) -> ApiRegistry:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    options = {"base_url": "http://mock.local", "error_hook": error_hook}
    return ApiRegistry(
        users=UsersService(client, **options),
        posts=PostsService(client, **options),
        albums=AlbumsService(client, **options),
        client=client,
    )


def test_registry_exposes_fixed_resource_names() -> None:
    registry = _build_registry(lambda req: httpx.Response(200))
    assert sorted(registry) == ["albums", "posts", "users"]
    assert len(registry) == 3
    assert registry["users"] is registry.users
    assert registry.posts.build_url() == "http://mock.local/posts/"
    assert registry.albums.build_url(2) == "http://mock.local/albums/2"
    with pytest.raises(KeyError):
        registry["comments"]


def test_registry_is_immutable() -> None:
    registry = _build_registry(lambda req: httpx.Response(200))
    with pytest.raises(AttributeError):
        registry.users = registry.posts  # type: ignore[misc]
    with pytest.raises(TypeError):
        registry["users"] = registry.posts  # type: ignore[index]


def test_capabilities_per_resource() -> None:
    registry = _build_registry(lambda req: httpx.Response(200))
    assert isinstance(registry.users, ReadableResource)
    assert not isinstance(registry.users, WritableResource)
    assert isinstance(registry.posts, WritableResource)
    assert isinstance(registry.albums, WritableResource)


@pytest.mark.anyio
async def test_users_get_by_id_through_registry() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "http://mock.local/users/1"
        return httpx.Response(200, json={"id": 1, "name": "Leanne Graham"})

    async with _build_registry(handler) as registry:
        user = await registry.users.get_by_id(1)
    assert user["name"] == "Leanne Graham"


@pytest.mark.anyio
async def test_albums_upload_image_sends_nothing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("upload_image must not hit the network")

    registry = _build_registry(handler)
    assert await registry.albums.upload_image() is True
    await registry.aclose()


@pytest.mark.anyio
async def test_albums_trigger_error_invokes_hook() -> None:
    seen: list[Exception] = []
    registry = _build_registry(lambda req: httpx.Response(200), error_hook=seen.append)

    assert await registry.albums.trigger_error() is None
    assert len(seen) == 1
    assert isinstance(seen[0], TransportError)
    assert "triggered and handled by api module" in str(seen[0])
    await registry.aclose()


@pytest.mark.anyio
async def test_albums_trigger_error_with_raise_policy() -> None:
    registry = _build_registry(lambda req: httpx.Response(200), error_hook=raise_error)
    with pytest.raises(TransportError):
        await registry.albums.trigger_error()
    await registry.aclose()


@pytest.mark.anyio
async def test_from_settings_wires_base_url_and_policy() -> None:
    settings = Settings(api_base_url="http://api.example", api_timeout=5.0, error_policy="raise")
    registry = ApiRegistry.from_settings(settings)
    try:
        assert registry.users.build_url() == "http://api.example/users/"
        assert registry.posts.config.base_url == "http://api.example"
        assert registry.albums.config.resource_path == "albums"
        assert settings.error_hook is raise_error
    finally:
        await registry.aclose()


@pytest.mark.anyio
async def test_build_registry_loads_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("API_BASE_URL", raising=False)
    monkeypatch.delenv("API_TIMEOUT", raising=False)
    monkeypatch.delenv("API_ERROR_POLICY", raising=False)
    monkeypatch.setattr("resource_api.settings.load_dotenv", lambda: False)

    registry = build_registry()
    try:
        assert registry.users.build_url() == f"{DEFAULT_API_BASE_URL}/users/"
        assert Settings.load().error_hook is log_error
    finally:
        await registry.aclose()


def test_invalid_settings_fail_before_any_client_is_opened(monkeypatch: pytest.MonkeyPatch) -> None:
    opened: list[Settings] = []
    monkeypatch.setattr("resource_api.registry.create_api_client", opened.append)

    with pytest.raises(ConfigurationError):
        ApiRegistry.from_settings(Settings(api_base_url="", error_policy="RAISE"))
    assert opened == []
