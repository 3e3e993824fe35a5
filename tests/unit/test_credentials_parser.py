from imgpub.PARSERS.credentials_parser import CredentialsParser


def test_parse_from_string():
    content = """
    [
        {"repository": "docker.io/estafette", "username": "user1", "password": "pass1"},
        {"repository": "extensions", "username": "user2", "password": "pass2", "type": "container-registry"}
    ]
    """
    credentials = CredentialsParser.parse_from_string(content)
    assert [c.repository for c in credentials] == ["docker.io/estafette", "extensions"]
    assert credentials[0].username == "user1"
    assert credentials[1].password.get_secret_value() == "pass2"

def test_missing_fields_default_to_empty():
    credentials = CredentialsParser.parse_from_string('[{"repository": "extensions"}]')
    assert credentials[0].username == ""
    assert credentials[0].password.get_secret_value() == ""

def test_unset_or_empty():
    assert CredentialsParser.parse_from_string(None) == []
    assert CredentialsParser.parse_from_string("") == []
    assert CredentialsParser.parse_from_string("[]") == []

def test_malformed_json_is_no_credentials():
    assert CredentialsParser.parse_from_string("[{not json") == []

def test_wrong_shape_is_no_credentials():
    assert CredentialsParser.parse_from_string('{"repository": "extensions"}') == []
    assert CredentialsParser.parse_from_string('[{"repository": ["a"]}]') == []

def test_deeply_nested_json_is_no_credentials():
    assert CredentialsParser.parse_from_string("[" * 100000) == []
    assert CredentialsParser.parse_from_string("[" * 100000 + "]" * 100000) == []
