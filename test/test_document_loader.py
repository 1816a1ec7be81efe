import re
import sys
import threading
import time

import pytest

from schemaview.core.errors import LoaderError, LoaderErrorKind
from schemaview.core.result import Err, Ok
from schemaview.loaders import DocumentLoader, load_document, parse_document


def test_parse_json(make_document):
    document = make_document({"title": "User", "$id": "https://example.com/user"})
    assert document.title == "User"
    assert document.id == "https://example.com/user"


def test_title_falls_back_to_location():
    document = parse_document("true", "https://example.com/any.json")
    assert document.title == "https://example.com/any.json"
    assert document.id is None


def test_parse_yaml():
    document = parse_document("title: B\ntype: integer\n", "b.yaml")
    assert document.raw == {"title": "B", "type": "integer"}


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("[1, 2]", "Expected JSON Schema (object or boolean), got array"),
        ("42", "Expected JSON Schema (object or boolean), got number"),
        ("null", "Expected JSON Schema (object or boolean), got null"),
    ],
)
def test_unexpected_content(text, expected):
    with pytest.raises(LoaderError, match=re.escape(expected)) as exc:
        parse_document(text, "schema.json")
    assert exc.value.kind == LoaderErrorKind.UNEXPECTED_CONTENT
    assert exc.value.url == "schema.json"


def test_load_document(fake_fetch):
    assert load_document("a.json", fake_fetch).root.title == "A"


def test_latest_request_wins(loader, executor):
    loader.request("a.json")
    loader.request("b.yaml")
    assert loader.pending == "b.yaml"
    # The newer request completes first
    executor.run(1)
    assert loader.pending is None
    assert loader.current.ok().root.title == "B"
    # The stale completion arrives later and must not replace the visible document
    executor.run(0)
    assert loader.current.ok().root.title == "B"


def test_stale_completion_before_latest(loader, executor):
    loader.request("a.json")
    loader.request("b.yaml")
    executor.run(0)
    assert loader.current is None
    assert loader.pending == "b.yaml"
    executor.run(1)
    assert loader.current.ok().root.title == "B"


def test_complete_returns_whether_committed(loader):
    first = loader.request("a.json")
    second = loader.request("b.yaml")
    assert not loader.complete(first, "a.json", Ok(parse_document("{}", "a.json")))
    assert loader.complete(second, "b.yaml", Ok(parse_document("{}", "b.yaml")))


def test_discarded_result_is_logged(loader, executor, caplog):
    loader.request("a.json")
    loader.request("b.yaml")
    executor.run(0)
    assert "Discarding superseded result for a.json" in caplog.text


def test_syntax_error(loader, executor):
    loader.request("broken.json")
    executor.run(0)
    result = loader.current
    assert isinstance(result, Err)
    assert result.err().kind == LoaderErrorKind.SYNTAX_ERROR
    assert result.err().message.startswith("Unable to parse the document as JSON or YAML")


def test_unexpected_exception(loader, executor):
    loader.request("missing.json")
    executor.run(0)
    result = loader.current
    assert isinstance(result, Err)
    assert result.err().kind == LoaderErrorKind.UNCLASSIFIED
    assert result.err().message == "KeyError: 'missing.json'"


def test_failure_replaces_document(loader, executor):
    loader.request("a.json")
    executor.run(0)
    loader.request("broken.json")
    # The previous document stays visible until the new request completes
    assert isinstance(loader.current, Ok)
    executor.run(1)
    assert isinstance(loader.current, Err)


def test_on_commit(fake_fetch, executor):
    committed = []
    loader = DocumentLoader(fake_fetch, on_commit=lambda location, result: committed.append(location), executor=executor)
    loader.request("a.json")
    loader.request("b.yaml")
    executor.run(0)
    executor.run(1)
    assert committed == ["b.yaml"]


def test_on_commit_follows_commit_order(documents):
    announced = []
    first_announcing = threading.Event()
    second_announced = threading.Event()

    def on_commit(location, result):
        if location == "a.json":
            first_announcing.set()
            # A newer request completes while this notification is still running
            time.sleep(0.2)
        announced.append(location)
        if location == "b.yaml":
            second_announced.set()

    loader = DocumentLoader(lambda location: documents[location], on_commit=on_commit)
    loader.request("a.json")
    assert first_announcing.wait(5)
    loader.request("b.yaml")
    assert second_announced.wait(5)
    assert announced == ["a.json", "b.yaml"]
    assert loader.current.ok().root.title == "B"


def test_wait_with_threads(documents):
    released = threading.Event()

    def fetch(location):
        if location == "a.json":
            released.wait(5)
        return documents[location]

    loader = DocumentLoader(fetch)
    loader.request("a.json")
    loader.request("b.yaml")
    result = loader.wait(5)
    released.set()
    assert result.ok().root.title == "B"


def test_wait_timeout(executor, fake_fetch):
    loader = DocumentLoader(fake_fetch, executor=executor)
    loader.request("a.json")
    assert loader.wait(0.01) is None


def test_deeply_nested_document():
    depth = 400
    text = '{"properties": {"a": ' * depth + "{}" + "}}" * depth
    limit = sys.getrecursionlimit()
    sys.setrecursionlimit(500)
    try:
        with pytest.raises(LoaderError, match="Schema is nested too deeply to be processed") as exc:
            parse_document(text, "deep.json")
    finally:
        sys.setrecursionlimit(limit)
    assert exc.value.kind == LoaderErrorKind.UNEXPECTED_CONTENT
