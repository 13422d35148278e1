import pytest

from docport.test_utils import CorpusFactory


@pytest.fixture
def corpus_factory(tmp_path, monkeypatch):
    # Each test gets its own project root and runs from inside it.
    factory = CorpusFactory(tmp_path)
    monkeypatch.chdir(tmp_path)
    return factory
