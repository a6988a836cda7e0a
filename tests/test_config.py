import uuid

import pytest

from mqclient import BrokerConfig, ConfigurationError, MQClient, load_config


def write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_load_full_config(tmp_path):
    path = write(tmp_path, """
broker:
  host: 127.0.0.1
  port: 5000
  app_id: 3f2504e0-4f89-11d3-9a0c-0305e82c3301
  timeout: 2
logging:
  level: debug
  file: mq.log
""")
    config = load_config(path)
    assert config.host == "127.0.0.1"
    assert config.port == 5000
    assert config.app_id == uuid.UUID("3f2504e0-4f89-11d3-9a0c-0305e82c3301")
    assert config.timeout == 2.0
    assert config.log_level == "DEBUG"
    assert config.log_file == "mq.log"


def test_minimal_config_defaults(tmp_path):
    config = load_config(write(tmp_path, "broker:\n  host: broker.local\n  port: 7000\n"))
    assert config.app_id is None
    assert config.timeout is None
    assert config.log_level == "INFO"
    assert config.log_file is None


def test_create_client_generates_app_id():
    client = BrokerConfig(host="127.0.0.1", port=5000).create_client()
    assert isinstance(client, MQClient)
    assert isinstance(client.app_id, uuid.UUID)


def test_create_client_uses_configured_values():
    app_id = uuid.uuid4()
    client = BrokerConfig(host="127.0.0.1", port=5000, app_id=app_id, timeout=1.5).create_client()
    assert client.app_id == app_id
    assert client.timeout == 1.5


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize("text", [
    "",
    "- just\n- a list\n",
    "broker: nope\n",
    "broker:\n  host: 127.0.0.1\n",
    "broker:\n  host: ''\n  port: 5000\n",
    "broker:\n  host: 127.0.0.1\n  port: '5000'\n",
    "broker:\n  host: 127.0.0.1\n  port: 0\n",
    "broker:\n  host: 127.0.0.1\n  port: 5000\n  app_id: not-a-uuid\n",
    "broker:\n  host: 127.0.0.1\n  port: 5000\n  timeout: -1\n",
    "broker:\n  host: 127.0.0.1\n  port: 5000\nlogging:\n  level: LOUD\n",
    "broker: {host: [unclosed\n",
])
def test_invalid_config(tmp_path, text):
    with pytest.raises(ConfigurationError):
        load_config(write(tmp_path, text))


def test_directory_is_not_a_config(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path))


def test_non_utf8_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_bytes(b"broker:\n  host: \xff\xfe\n  port: 5000\n")
    with pytest.raises(ConfigurationError):
        load_config(str(path))
