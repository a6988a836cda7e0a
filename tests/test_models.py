import pytest

from mqclient import Topic, Message, ValidationError


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_topic_rejects_blank_names(name):
    with pytest.raises(ValidationError):
        Topic(name)


def test_topic_keeps_name_unchanged():
    assert Topic("orders").name == "orders"
    assert Topic(" orders ").name == " orders "
    assert str(Topic("orders")) == "orders"


def test_topic_rejects_non_string():
    with pytest.raises(ValidationError):
        Topic(None)
    with pytest.raises(ValidationError):
        Topic(42)


@pytest.mark.parametrize("content", ["", "    "])
def test_message_rejects_blank_content(content):
    with pytest.raises(ValidationError):
        Message(content)


def test_message_keeps_content_unchanged():
    assert Message("hello").content == "hello"
    assert Message("  two  words ").content == "  two  words "


def test_value_types_are_immutable():
    topic = Topic("orders")
    with pytest.raises(AttributeError):
        topic.name = "other"
    message = Message("hello")
    with pytest.raises(AttributeError):
        message.content = "bye"


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        Topic("")
