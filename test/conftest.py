from __future__ import annotations

import logging

import pytest
import tomli_w
from click.testing import CliRunner
from hypothesis import settings

import schemaview.cli
from schemaview.core import json
from schemaview.jsonschema import InternalLookup
from schemaview.loaders import Document, DocumentLoader, parse_document

# Register Hypothesis profile. Could be used as
# `pytest test --hypothesis-profile <profile-name>`
settings.register_profile("CI", max_examples=1000)


@pytest.fixture(autouse=True)
def debug_logging(caplog):
    caplog.set_level(logging.DEBUG, logger="schemaview")


@pytest.fixture
def petstore():
    return {
        "$id": "https://example.com/pet.schema.json",
        "title": "Pet",
        "type": "object",
        "properties": {
            "id": {"type": "integer", "readOnly": True},
            "name": {"type": "string"},
            "password": {"type": "string", "writeOnly": True},
            "owner": {"$ref": "#/definitions/Owner"},
            "tags": {"type": "array", "items": {"$ref": "#/definitions/Tag"}},
        },
        "definitions": {
            "Owner": {
                "title": "Owner",
                "type": "object",
                "properties": {"name": {"type": "string"}, "verified": {"type": "boolean"}},
            },
            "Tag": {"title": "Tag", "type": "string"},
            "a/b": {"title": "Slash", "type": "number"},
            "m~n": {"title": "Tilde", "type": "null"},
        },
    }


@pytest.fixture
def lookup(petstore):
    return InternalLookup(petstore)


@pytest.fixture
def make_document():
    def inner(raw, location="https://example.com/schema.json") -> Document:
        return parse_document(json.dumps(raw), location)

    return inner


class ManualExecutor:
    """Holds loader tasks until the test decides in which order they complete."""

    def __init__(self) -> None:
        self.tasks = []

    def __call__(self, task) -> None:
        self.tasks.append(task)

    def run(self, index: int) -> None:
        self.tasks[index]()


@pytest.fixture
def executor():
    return ManualExecutor()


@pytest.fixture
def documents():
    return {
        "a.json": '{"title": "A", "type": "string"}',
        "b.yaml": "title: B\ntype: integer\n",
        "broken.json": "{: [",
    }


@pytest.fixture
def fake_fetch(documents):
    def fetch(location: str) -> str:
        return documents[location]

    return fetch


@pytest.fixture
def loader(fake_fetch, executor):
    return DocumentLoader(fake_fetch, executor=executor)


@pytest.fixture
def cli(tmp_path):
    """CLI runner helper.

    Provides in-process execution via `click.CliRunner`. Recently viewed links are kept inside `tmp_path`.
    """
    cli_runner = CliRunner()

    class Runner:
        @staticmethod
        def main(*args, config=None, **kwargs):
            config = dict(config or {})
            config.setdefault("recently-viewed", {"path": str(tmp_path / "recent.json")})
            path = tmp_path / "config.toml"
            path.write_text(tomli_w.dumps(config), encoding="utf-8")
            args = ["--config-file", str(path), *args]
            result = cli_runner.invoke(schemaview.cli.schemaview, args, **kwargs)
            if result.exception and not isinstance(result.exception, SystemExit):
                raise result.exception
            return result

    return Runner()


@pytest.fixture
def schema_file(tmp_path, petstore):
    path = tmp_path / "pet.json"
    path.write_text(json.dumps(petstore), encoding="utf-8")
    return str(path)
