from app.cache import create_redis_client
from app.config import Settings


def test_set_then_get(client, fake_redis):
    r = client.post("/redis/set", data={"key": "greeting", "value": "hello"})
    assert r.status_code == 200
    assert r.text == "set value"
    assert fake_redis.data == {"greeting": "hello"}

    r = client.get("/redis/get/greeting")
    assert r.status_code == 200
    assert r.text == "greeting : hello"


def test_get_missing_key(client):
    r = client.get("/redis/get/absent")
    assert r.status_code == 200
    assert r.text == "key not found."


def test_set_overwrites(client):
    client.post("/redis/set", data={"key": "k", "value": "1"})
    client.post("/redis/set", data={"key": "k", "value": "2"})
    assert client.get("/redis/get/k").text == "k : 2"


def test_cache_failure_is_500(client, broken_redis):
    assert client.get("/redis/get/k").status_code == 500
    assert client.post("/redis/set", data={"key": "k", "value": "v"}).status_code == 500


def test_create_redis_client_uses_settings():
    client = create_redis_client(Settings(redis_url="redis://cache.local:6380/2", redis_password="pw"))
    kwargs = client.connection_pool.connection_kwargs
    assert kwargs["host"] == "cache.local"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 2
    assert kwargs["password"] == "pw"
    assert kwargs["decode_responses"] is True


def test_set_keeps_first_repeated_field(client, fake_redis):
    client.post("/redis/set", data={"key": ["k", "other"], "value": ["1", "2"]})
    assert fake_redis.data == {"k": "1"}
