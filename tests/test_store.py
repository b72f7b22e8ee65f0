import shutil

import pytest

from md_blog_server.content.indexer import ContentIndexer, ContentRootError
from md_blog_server.content.store import IndexNotReadyError, IndexStore

from conftest import write_post


@pytest.fixture
def store(content_root):
    return IndexStore(ContentIndexer(content_root))


def test_indexer_exposed(store, content_root):
    assert store.indexer.root == content_root

def test_current_before_build(store):
    assert store.ready is False
    with pytest.raises(IndexNotReadyError):
        store.current

def test_load_builds_once(store, content_root):
    first = store.load()
    write_post(content_root, "2023-09-01", "Gamma post", "2023-09-01 08:00:00+0000")

    assert store.load() is first
    assert store.current is first
    assert len(store.current) == 2

def test_rebuild_swaps_in_new_index(store, content_root):
    old = store.load()
    write_post(content_root, "2023-09-01", "Gamma post", "2023-09-01 08:00:00+0000")

    new = store.rebuild()

    assert store.current is new
    assert len(new) == 3
    # A reader still holding the old snapshot sees it unchanged
    assert len(old) == 2
    assert "/blog/2023-09-01" not in old.path_index

def test_failed_rebuild_keeps_previous_index(store, content_root):
    old = store.load()
    shutil.rmtree(content_root)

    with pytest.raises(ContentRootError):
        store.rebuild()

    assert store.current is old

def test_failed_first_build_leaves_store_empty(tmp_path):
    store = IndexStore(ContentIndexer(tmp_path / "missing"))

    with pytest.raises(ContentRootError):
        store.load()

    assert store.ready is False
