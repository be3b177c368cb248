from hermes.gateway_session import GatewayMessage, GatewaySession


def test_create_returns_fixed_id():
    assert GatewaySession().create("user-1") == "session_id"


def test_create_independent_of_user():
    session = GatewaySession()
    assert session.create("a") == session.create("b")


def test_get_messages_empty():
    session = GatewaySession()
    assert session.get_messages(session.create("u")) == []


def test_gateway_message_fields():
    msg = GatewayMessage(role="user", content="hi")
    assert msg.role == "user"
    assert msg.content == "hi"
    assert msg == GatewayMessage("user", "hi")