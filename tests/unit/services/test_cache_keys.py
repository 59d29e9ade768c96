from uuid import UUID

from src.app.services.cache_keys import generate_cache_key, session_cache_key


def test_generate_cache_key_sorts_and_drops_none():
    key = generate_cache_key("users", {"limit": 20, "cursor": None, "b": "x"})
    assert key == "users:b=x&limit=20"


def test_generate_cache_key_is_order_independent():
    assert generate_cache_key("p", {"a": 1, "b": 2}) == generate_cache_key("p", {"b": 2, "a": 1})


def test_generate_cache_key_formats_collections():
    key = generate_cache_key("p", {"ids": [1, 2, 3], "filter": {"z": 1, "a": 2}})
    assert key == 'p:filter={"a": 2, "z": 1}&ids=1,2,3'


def test_generate_cache_key_without_params():
    assert generate_cache_key("users", {}) == "users"


def test_session_cache_key():
    user_id = UUID("00000000-0000-0000-0000-000000000001")
    key = session_cache_key(user_id, "UA1", "deviceA")
    assert key == (
        "auth:device=deviceA&userAgent=UA1"
        "&userId=00000000-0000-0000-0000-000000000001"
    )
