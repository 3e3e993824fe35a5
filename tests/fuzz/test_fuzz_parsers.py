import json
import random
import string
import pytest
from imgpub.PARSERS.credentials_parser import CredentialsParser
from imgpub.PARSERS.list_parser import split_list
from imgpub.UTILS.tag_sanitizer import INVALID_TAG_CHARACTERS, sanitize

def random_string(length):
    return ''.join(random.choice(string.printable + "éü/€") for _ in range(length))

def test_fuzz_sanitizer():
    for _ in range(200):
        value = random_string(random.randint(0, 200))
        tag = sanitize(value)
        # Always a legal tag character set, and stable when applied again
        assert not INVALID_TAG_CHARACTERS.search(tag)
        assert sanitize(tag) == tag

def test_fuzz_credentials_parser():
    for _ in range(100):
        content = random_string(random.randint(0, 500))
        assert isinstance(CredentialsParser.parse_from_string(content), list)

def test_fuzz_credentials_shapes():
    shapes = [None, 1, "x", [], {}, [None], [1], [{"repository": 1}], [{"password": None}]]
    for shape in shapes:
        assert CredentialsParser.parse_from_string(json.dumps(shape)) == []

def test_fuzz_split_list():
    for _ in range(100):
        value = random_string(random.randint(1, 100))
        assert ",".join(split_list(value)) == value
